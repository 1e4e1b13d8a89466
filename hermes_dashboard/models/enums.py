"""
Enumeration definitions for the HERMES insights dashboard.

All enums inherit from both `str` and `Enum` so they serialize as plain strings
in Pydantic models and JSON responses.

Source references:
- CampaignMetrics.status: 'active' | 'completed' | 'draft' | 'paused'
- CustomerInsight.type: 'trend' | 'opportunity' | 'risk' | 'recommendation'
- CustomerInsight.impact: 'high' | 'medium' | 'low'
"""

from enum import Enum


class SourceName(str, Enum):
    """
    The four independent data sources feeding the dashboard.

    Declaration order is the canonical order used when collecting errors:
    timeseries, segments, campaigns, insights.
    """
    TIMESERIES = "timeseries"
    SEGMENTS = "segments"
    CAMPAIGNS = "campaigns"
    INSIGHTS = "insights"


class CampaignStatus(str, Enum):
    """
    Lifecycle status of a marketing campaign.

    Only ACTIVE campaigns count towards the "Active Campaigns" card.
    """
    ACTIVE = "active"
    COMPLETED = "completed"
    DRAFT = "draft"
    PAUSED = "paused"


class InsightType(str, Enum):
    """Kind of generated insight shown in the insight feed."""
    TREND = "trend"
    OPPORTUNITY = "opportunity"
    RISK = "risk"
    RECOMMENDATION = "recommendation"


class InsightImpact(str, Enum):
    """
    Estimated business impact of an insight.

    - high: Worth acting on this week
    - medium: Worth scheduling
    - low: Informational
    """
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class InsightRanking(str, Enum):
    """
    Ordering policy applied before the insight feed is truncated.

    - received: Keep the order the source delivered (default)
    - confidence: Highest confidence first
    - impact: High impact first, then medium, then low
    """
    RECEIVED = "received"
    CONFIDENCE = "confidence"
    IMPACT = "impact"
