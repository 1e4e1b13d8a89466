"""
Dashboard Services Module

This module contains the aggregation layer of the HERMES insights dashboard.
Everything below the session is stateless and testable in isolation.

Services:
- sources: DataSource contract, LoadFailure, static and synthetic sources
- catalog: Reference segment, campaign and insight records
- loaders: Per-source loading state machine (loading -> settled)
- readiness: Combines loader states into ready + errors
- metrics: Derived-Metrics Engine (totals, averages, windows, shares)
- assembler: Builds the ViewModel from loader states
- session: Owns one load cycle of all four sources

Data flows strictly upward:
    sources -> loaders -> {readiness, metrics} -> assembler -> session -> api
"""

# =============================================================================
# Source Exports
# =============================================================================

from hermes_dashboard.services.sources import (
    LoadFailure,
    DataSource,
    StaticSource,
    SyntheticTimeSeriesSource,
    DashboardSources,
    default_sources,
)

# =============================================================================
# Loader Exports
# =============================================================================

from hermes_dashboard.services.loaders import (
    SourceLoader,
    validate_records,
    DEFAULT_FAILURE_MESSAGES,
)

# =============================================================================
# Readiness Coordinator Exports
# =============================================================================

from hermes_dashboard.services.readiness import (
    SourceStates,
    Readiness,
    coordinate,
)

# =============================================================================
# Derived-Metrics Engine Exports
# =============================================================================

from hermes_dashboard.services.metrics import (
    total_revenue,
    total_conversions,
    avg_engagement,
    trailing_revenue_series,
    segment_shares,
    segment_percentages,
    active_campaign_count,
    top_insights,
)

# =============================================================================
# Assembler and Session Exports
# =============================================================================

from hermes_dashboard.services.assembler import (
    assemble_view_model,
    build_cards,
)

from hermes_dashboard.services.session import (
    DashboardSession,
    load_dashboard,
)


__all__ = [
    # ----- Sources -----
    'LoadFailure',
    'DataSource',
    'StaticSource',
    'SyntheticTimeSeriesSource',
    'DashboardSources',
    'default_sources',
    # ----- Loaders -----
    'SourceLoader',
    'validate_records',
    'DEFAULT_FAILURE_MESSAGES',
    # ----- Readiness -----
    'SourceStates',
    'Readiness',
    'coordinate',
    # ----- Metrics -----
    'total_revenue',
    'total_conversions',
    'avg_engagement',
    'trailing_revenue_series',
    'segment_shares',
    'segment_percentages',
    'active_campaign_count',
    'top_insights',
    # ----- Assembler / Session -----
    'assemble_view_model',
    'build_cards',
    'DashboardSession',
    'load_dashboard',
]
