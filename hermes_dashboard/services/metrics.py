"""
Derived-Metrics Engine for the HERMES insights dashboard.

Pure, stateless reductions over already-loaded collections. Every function is
total over well-formed input: empty collections yield zero or empty results,
never an exception and never NaN.

Metrics:
1. TOTALS - total revenue and total conversions over the full time series
2. AVERAGES - mean engagement, 0 for an empty series
3. WINDOWED SLICE - trailing N days projected to {label, revenue, conversions}
4. CATEGORICAL SHARES - one {name, size, color} entry per segment; the
   percentage itself is computed at render time (segment_percentages)
5. COUNTS - campaigns whose status is exactly 'active'
6. INSIGHT FEED - first N insights, optionally ranked by an explicit policy
"""

from datetime import date
from typing import List, Sequence

from hermes_dashboard.models.enums import CampaignStatus, InsightImpact, InsightRanking
from hermes_dashboard.models.schemas import (
    Campaign,
    Insight,
    RevenuePoint,
    Segment,
    SegmentShare,
    TimeSeriesPoint,
)


# =============================================================================
# Constants
# =============================================================================

TRAILING_WINDOW_DAYS = 7
TOP_INSIGHTS_LIMIT = 3

# Indexed by date.weekday(); independent of the process locale
WEEKDAY_LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

IMPACT_WEIGHTS = {
    InsightImpact.HIGH: 3,
    InsightImpact.MEDIUM: 2,
    InsightImpact.LOW: 1,
}


# =============================================================================
# Time Series Metrics
# =============================================================================


def total_revenue(points: Sequence[TimeSeriesPoint]) -> float:
    """
    Sum revenue over the full time series.

    Args:
        points: Loaded time series

    Returns:
        Total revenue, 0.0 for an empty series
    """
    return float(sum(point.revenue for point in points))


def total_conversions(points: Sequence[TimeSeriesPoint]) -> int:
    """Sum conversions over the full time series."""
    return sum(point.conversions for point in points)


def avg_engagement(points: Sequence[TimeSeriesPoint]) -> float:
    """
    Arithmetic mean of engagement over the full time series.

    Args:
        points: Loaded time series

    Returns:
        Mean engagement percentage, or exactly 0.0 if the series is empty
    """
    if not points:
        return 0.0
    return sum(point.engagement for point in points) / len(points)


def weekday_label(day: date) -> str:
    """Short English weekday name, e.g. 'Mon'."""
    return WEEKDAY_LABELS[day.weekday()]


def trailing_revenue_series(
    points: Sequence[TimeSeriesPoint],
    days: int = TRAILING_WINDOW_DAYS,
) -> List[RevenuePoint]:
    """
    Project the trailing `days` points of the series for the revenue chart.

    The result is a contiguous suffix of the input in its original order. When
    fewer than `days` points exist all of them are used; nothing is padded.

    Args:
        points: Date-ascending time series
        days: Window length

    Returns:
        List of RevenuePoint with min(days, len(points)) entries

    Example:
        >>> series = trailing_revenue_series(points, days=7)
        >>> [p.label for p in series]
        ['Tue', 'Wed', 'Thu', 'Fri', 'Sat', 'Sun', 'Mon']
    """
    if days <= 0:
        return []
    return [
        RevenuePoint(
            label=weekday_label(point.date),
            revenue=point.revenue,
            conversions=point.conversions,
        )
        for point in list(points)[-days:]
    ]


# =============================================================================
# Segment Metrics
# =============================================================================


def segment_shares(segments: Sequence[Segment]) -> List[SegmentShare]:
    """Project each segment to its pie slice, unchanged and in order."""
    return [
        SegmentShare(name=segment.name, size=segment.size, color=segment.color)
        for segment in segments
    ]


def segment_percentages(shares: Sequence[SegmentShare]) -> List[float]:
    """
    Render-time percentages for the segment pie chart.

    Args:
        shares: Output of segment_shares

    Returns:
        size / sum(size) * 100 per share, all 0.0 when the total size is 0
    """
    total = sum(share.size for share in shares)
    if total == 0:
        return [0.0 for _ in shares]
    return [share.size / total * 100.0 for share in shares]


# =============================================================================
# Campaign Metrics
# =============================================================================


def active_campaign_count(campaigns: Sequence[Campaign]) -> int:
    """Count campaigns whose status is exactly 'active'."""
    return sum(1 for campaign in campaigns if campaign.status == CampaignStatus.ACTIVE)


# =============================================================================
# Insight Feed
# =============================================================================


def top_insights(
    insights: Sequence[Insight],
    limit: int = TOP_INSIGHTS_LIMIT,
    ranking: InsightRanking = InsightRanking.RECEIVED,
) -> List[Insight]:
    """
    Select the insights shown in the feed.

    The default policy keeps the order the source delivered and takes the
    first `limit`. The other policies sort stably (ties keep received order)
    before truncating:
    - confidence: highest confidence first
    - impact: high, then medium, then low

    Args:
        insights: Insights in received order
        limit: Maximum number of insights returned
        ranking: Ordering policy

    Returns:
        At most `limit` insights; all of them when fewer are available
    """
    if limit <= 0:
        return []

    ordered = list(insights)
    if ranking == InsightRanking.CONFIDENCE:
        ordered.sort(key=lambda insight: insight.confidence, reverse=True)
    elif ranking == InsightRanking.IMPACT:
        ordered.sort(key=lambda insight: IMPACT_WEIGHTS[insight.impact], reverse=True)
    return ordered[:limit]
