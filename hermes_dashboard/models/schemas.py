"""
Pydantic record and view models for the HERMES insights dashboard.

This module defines the four record shapes delivered by the data sources, the
per-source loader state, and the consolidated view model handed to the
presentation layer.

Source references:
- AnalyticsData: daily visitors / engagement / conversions / revenue
- CustomerSegment: segment catalog with demographics and behavior
- CampaignMetrics: marketing campaign performance
- CustomerInsight: generated insight feed entries

Field names follow the camelCase contract consumed by the frontend, matching
the JSON produced by the API layer. All models use Pydantic v2 syntax.
"""

from datetime import datetime, date as DateType
from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

from hermes_dashboard.models.enums import (
    CampaignStatus,
    InsightImpact,
    InsightType,
    SourceName,
)


# =============================================================================
# Record Types
# =============================================================================


class TimeSeriesPoint(BaseModel):
    """
    One day of site analytics.

    Source: AnalyticsData interface

    A loaded sequence is sorted ascending by date with one point per day.
    """
    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "date": "2024-07-15",
                "visitors": 1240,
                "engagement": 48,
                "conversions": 87,
                "revenue": 11250,
                "segmentCounts": {
                    "luxury-enthusiasts": 180,
                    "occasional-buyers": 320,
                    "high-value-customers": 140
                }
            }
        }
    )

    date: DateType = Field(..., description="Calendar day of the measurement")
    visitors: int = Field(..., ge=0, description="Unique visitors")
    engagement: float = Field(
        ...,
        ge=0.0,
        le=100.0,
        description="Engagement rate as a percentage (0-100)"
    )
    conversions: int = Field(..., ge=0, description="Completed conversions")
    revenue: float = Field(..., ge=0.0, description="Revenue for the day")
    segmentCounts: Dict[str, int] = Field(
        default_factory=dict,
        description="Visitors per segment key"
    )


class Demographics(BaseModel):
    """Demographic profile of a customer segment."""
    model_config = ConfigDict(frozen=True)

    ageRange: str
    income: str
    location: str
    interests: List[str] = Field(default_factory=list)


class SegmentBehavior(BaseModel):
    """Purchasing behavior of a customer segment."""
    model_config = ConfigDict(frozen=True)

    purchaseFrequency: str
    preferredChannels: List[str] = Field(default_factory=list)
    avgOrderValue: float = Field(..., ge=0.0)


class Segment(BaseModel):
    """
    Customer segment.

    Source: CustomerSegment interface

    Created once at load time and never edited afterwards.
    """
    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "id": "1",
                "name": "Luxury Enthusiasts",
                "description": "High-income customers with strong preference for premium brands",
                "size": 2547,
                "avgLifetimeValue": 12500,
                "engagementRate": 78,
                "demographics": {
                    "ageRange": "35-55",
                    "income": "$150K+",
                    "location": "Urban Metro Areas",
                    "interests": ["Fashion", "Travel"]
                },
                "behavior": {
                    "purchaseFrequency": "Monthly",
                    "preferredChannels": ["Email", "Instagram"],
                    "avgOrderValue": 850
                },
                "color": "#8B5CF6"
            }
        }
    )

    id: str = Field(..., min_length=1, description="Unique segment identifier")
    name: str = Field(..., description="Display name")
    description: str = Field(default="", description="Short description")
    size: int = Field(..., ge=0, description="Number of customers in the segment")
    avgLifetimeValue: float = Field(..., ge=0.0, description="Average customer lifetime value")
    engagementRate: float = Field(
        ...,
        ge=0.0,
        le=100.0,
        description="Engagement rate as a percentage (0-100)"
    )
    demographics: Demographics
    behavior: SegmentBehavior
    color: str = Field(..., description="Display color token, e.g. '#8B5CF6'")


class Campaign(BaseModel):
    """
    Marketing campaign performance.

    Source: CampaignMetrics interface

    targetSegments holds segment keys; unknown keys are tolerated.
    """
    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "id": "1",
                "name": "Spring Luxury Collection Launch",
                "status": "active",
                "startDate": "2024-03-01",
                "endDate": "2024-04-30",
                "budget": 150000,
                "spent": 89000,
                "reach": 245000,
                "engagement": 18500,
                "conversions": 1250,
                "roi": 3.2,
                "channels": ["Instagram", "Email", "Influencer"],
                "targetSegments": ["luxury-enthusiasts", "high-value-customers"]
            }
        }
    )

    id: str = Field(..., min_length=1, description="Unique campaign identifier")
    name: str
    status: CampaignStatus
    startDate: DateType
    endDate: DateType
    budget: float = Field(..., ge=0.0)
    spent: float = Field(..., ge=0.0)
    reach: int = Field(..., ge=0)
    engagement: int = Field(..., ge=0)
    conversions: int = Field(..., ge=0)
    roi: float = Field(..., ge=0.0, description="Return on investment ratio")
    channels: List[str] = Field(default_factory=list)
    targetSegments: List[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_ranges(self) -> "Campaign":
        if self.startDate > self.endDate:
            raise ValueError("startDate must not be after endDate")
        if self.spent > self.budget:
            raise ValueError("spent must not exceed budget")
        return self


class Insight(BaseModel):
    """
    Generated insight shown in the insight feed.

    Source: CustomerInsight interface
    """
    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "id": "1",
                "type": "opportunity",
                "title": "Emerging Trend: Sustainable Luxury",
                "description": "Customer sentiment shows increased interest in sustainable luxury.",
                "impact": "high",
                "confidence": 92,
                "category": "Market Trends",
                "actionable": True,
                "createdAt": "2024-07-15T10:30:00Z",
                "metadata": {"trend_growth": "45%"}
            }
        }
    )

    id: str = Field(..., min_length=1, description="Unique insight identifier")
    type: InsightType
    title: str
    description: str
    impact: InsightImpact
    confidence: float = Field(..., ge=0.0, le=100.0, description="Confidence percentage")
    category: str
    actionable: bool = False
    createdAt: datetime
    metadata: Dict[str, Any] = Field(default_factory=dict)


# =============================================================================
# Loader State
# =============================================================================


RecordT = TypeVar("RecordT")


class LoaderState(BaseModel, Generic[RecordT]):
    """
    Readiness state of a single data source.

    A loader moves through exactly two states per load cycle:
    loading (isLoading=True, data empty, error None) and settled
    (isLoading=False, with either data or an error message).
    Instances are immutable; a transition replaces the whole state.
    """
    model_config = ConfigDict(frozen=True)

    source: SourceName
    data: List[RecordT] = Field(default_factory=list)
    isLoading: bool = True
    error: Optional[str] = None

    @classmethod
    def loading(cls, source: SourceName) -> "LoaderState[RecordT]":
        return cls(source=source, data=[], isLoading=True, error=None)

    @classmethod
    def loaded(cls, source: SourceName, data: List[RecordT]) -> "LoaderState[RecordT]":
        return cls(source=source, data=list(data), isLoading=False, error=None)

    @classmethod
    def failed(cls, source: SourceName, message: str) -> "LoaderState[RecordT]":
        return cls(source=source, data=[], isLoading=False, error=message)

    @property
    def settled(self) -> bool:
        return not self.isLoading


class SourceStatus(BaseModel):
    """Summary of one loader for the sources endpoint."""
    source: SourceName
    isLoading: bool
    error: Optional[str] = None
    recordCount: int = Field(default=0, ge=0)


# =============================================================================
# View Model
# =============================================================================


class RevenuePoint(BaseModel):
    """One bar/area of the trailing revenue chart."""
    model_config = ConfigDict(frozen=True)

    label: str = Field(..., description="Short weekday name, e.g. 'Mon'")
    revenue: float
    conversions: int


class SegmentShare(BaseModel):
    """
    One slice of the segment pie chart.

    The percentage is not stored; it is computed at render time from
    size / sum(size).
    """
    model_config = ConfigDict(frozen=True)

    name: str
    size: int
    color: str


class MetricCard(BaseModel):
    """Summary card shown above the charts."""
    model_config = ConfigDict(frozen=True)

    key: str
    title: str
    value: str = Field(..., description="Pre-formatted display value")
    change: float = Field(..., description="Month-over-month change in percent")


class ViewModel(BaseModel):
    """
    Consolidated render-ready dashboard state.

    When ready is False every derived field carries its zero/empty default and
    the presentation layer shows a loading placeholder instead.
    """
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "ready": True,
                "errors": [],
                "totalRevenue": 301245.0,
                "totalConversions": 2104,
                "avgEngagement": 49.3,
                "activeCampaignCount": 2,
                "last7DaysSeries": [{"label": "Mon", "revenue": 11250, "conversions": 87}],
                "segmentShares": [{"name": "Luxury Enthusiasts", "size": 2547, "color": "#8B5CF6"}],
                "topInsights": [],
                "cards": []
            }
        }
    )

    ready: bool = False
    errors: List[str] = Field(default_factory=list)
    totalRevenue: float = 0.0
    totalConversions: int = 0
    avgEngagement: float = 0.0
    activeCampaignCount: int = 0
    last7DaysSeries: List[RevenuePoint] = Field(default_factory=list)
    segmentShares: List[SegmentShare] = Field(default_factory=list)
    topInsights: List[Insight] = Field(default_factory=list)
    cards: List[MetricCard] = Field(default_factory=list)
