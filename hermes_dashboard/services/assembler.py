"""
View Model Assembler for the HERMES insights dashboard.

Combines the readiness coordinator and the derived-metrics engine into the one
object the presentation layer renders. The assembler has no side effects and
keeps no state; every call recomputes from the loader states it is given.

Behavior:
- Not ready: ready=False, errors as collected so far, every derived field at
  its zero/empty default.
- Ready: derived fields computed from whatever data each source delivered.
  A failed source contributes an empty collection, so its metrics are zero
  while the other sources render normally.
"""

import logging
from typing import List

from hermes_dashboard.models.enums import InsightRanking
from hermes_dashboard.models.schemas import MetricCard, ViewModel
from hermes_dashboard.services.metrics import (
    TOP_INSIGHTS_LIMIT,
    TRAILING_WINDOW_DAYS,
    active_campaign_count,
    avg_engagement,
    segment_shares,
    top_insights,
    total_conversions,
    total_revenue,
    trailing_revenue_series,
)
from hermes_dashboard.services.readiness import SourceStates, coordinate

# Configure logging
logger = logging.getLogger(__name__)


# Month-over-month deltas shown on the summary cards, in percent. The sources
# carry no previous-period data, so these are reference values.
CARD_CHANGES = {
    "total_revenue": 12.5,
    "total_conversions": 8.2,
    "avg_engagement": -2.1,
    "active_campaigns": 15.8,
}


def build_cards(
    revenue: float,
    conversions: int,
    engagement: float,
    active_campaigns: int,
) -> List[MetricCard]:
    """
    Format the four summary cards.

    Args:
        revenue: Total revenue
        conversions: Total conversions
        engagement: Average engagement percentage
        active_campaigns: Number of active campaigns

    Returns:
        Cards in display order: revenue, conversions, engagement, campaigns
    """
    return [
        MetricCard(
            key="total_revenue",
            title="Total Revenue",
            value=f"${revenue / 1000:.0f}K",
            change=CARD_CHANGES["total_revenue"],
        ),
        MetricCard(
            key="total_conversions",
            title="Total Conversions",
            value=f"{conversions:,}",
            change=CARD_CHANGES["total_conversions"],
        ),
        MetricCard(
            key="avg_engagement",
            title="Avg Engagement",
            value=f"{engagement:.1f}%",
            change=CARD_CHANGES["avg_engagement"],
        ),
        MetricCard(
            key="active_campaigns",
            title="Active Campaigns",
            value=str(active_campaigns),
            change=CARD_CHANGES["active_campaigns"],
        ),
    ]


def assemble_view_model(
    states: SourceStates,
    trailing_days: int = TRAILING_WINDOW_DAYS,
    insights_limit: int = TOP_INSIGHTS_LIMIT,
    insight_ranking: InsightRanking = InsightRanking.RECEIVED,
) -> ViewModel:
    """
    Build the ViewModel for the current loader states.

    Args:
        states: Snapshot of all four loader states
        trailing_days: Window of the trailing revenue series
        insights_limit: Number of insights in the feed
        insight_ranking: Ordering applied before truncating the feed

    Returns:
        ViewModel; derived fields are defaults unless every source has settled
    """
    readiness = coordinate(states)
    if not readiness.ready:
        return ViewModel(ready=False, errors=readiness.errors)

    points = states.timeseries.data
    revenue = total_revenue(points)
    conversions = total_conversions(points)
    engagement = avg_engagement(points)
    active = active_campaign_count(states.campaigns.data)

    if readiness.errors:
        logger.debug(f"Assembling partial view model; failed sources: {readiness.errors}")

    return ViewModel(
        ready=True,
        errors=readiness.errors,
        totalRevenue=revenue,
        totalConversions=conversions,
        avgEngagement=engagement,
        activeCampaignCount=active,
        last7DaysSeries=trailing_revenue_series(points, trailing_days),
        segmentShares=segment_shares(states.segments.data),
        topInsights=top_insights(states.insights.data, insights_limit, insight_ranking),
        cards=build_cards(revenue, conversions, engagement, active),
    )
