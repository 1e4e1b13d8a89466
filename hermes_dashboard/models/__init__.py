"""
Package initialization file for dashboard models.

Re-exports all Pydantic schemas and enumerations from schemas.py and enums.py so
other modules can import them from hermes_dashboard.models directly.

Usage:
    from hermes_dashboard.models import (
        SourceName,
        TimeSeriesPoint,
        LoaderState,
        ViewModel,
    )
"""

# =============================================================================
# Enums
# =============================================================================

from hermes_dashboard.models.enums import (
    SourceName,
    CampaignStatus,
    InsightType,
    InsightImpact,
    InsightRanking,
)

# =============================================================================
# Schemas
# =============================================================================

from hermes_dashboard.models.schemas import (
    # Record types
    TimeSeriesPoint,
    Demographics,
    SegmentBehavior,
    Segment,
    Campaign,
    Insight,
    # Loader state
    LoaderState,
    SourceStatus,
    # View model
    RevenuePoint,
    SegmentShare,
    MetricCard,
    ViewModel,
)


__all__ = [
    # Enums
    'SourceName',
    'CampaignStatus',
    'InsightType',
    'InsightImpact',
    'InsightRanking',
    # Record types
    'TimeSeriesPoint',
    'Demographics',
    'SegmentBehavior',
    'Segment',
    'Campaign',
    'Insight',
    # Loader state
    'LoaderState',
    'SourceStatus',
    # View model
    'RevenuePoint',
    'SegmentShare',
    'MetricCard',
    'ViewModel',
]
