"""
Pytest Configuration and Shared Fixtures for HERMES Dashboard Tests.

This module provides fixtures and helpers for all dashboard tests:
- Deterministic record builders (time series, segments, campaigns, insights)
- StaticSource bundles with zero latency for fast, repeatable loads
- Controllable sources (GatedSource, FailingSource) to drive settlement order
  and failure paths from inside async tests
- Settings with zero simulated latency

Async tests run with pytest-asyncio via @pytest.mark.asyncio.
"""

import asyncio
from datetime import date, datetime, timedelta, timezone
from typing import Any, Callable, Dict, List, Sequence

import pytest

from hermes_dashboard.core.config import Settings
from hermes_dashboard.models import (
    Campaign,
    Insight,
    Segment,
    SourceName,
    TimeSeriesPoint,
)
from hermes_dashboard.services.catalog import (
    build_campaigns,
    build_insights,
    build_segments,
)
from hermes_dashboard.services.sources import (
    DashboardSources,
    DataSource,
    LoadFailure,
    StaticSource,
)


# ============================================================
# PYTEST HOOKS
# ============================================================

def pytest_configure(config) -> None:
    """
    Register custom markers.

    - slow: timing-sensitive tests that sleep for real latency
    - api: tests that drive the FastAPI application
    """
    config.addinivalue_line(
        'markers',
        'slow: marks timing-sensitive tests (deselect with -m "not slow")'
    )
    config.addinivalue_line(
        'markers',
        'api: marks tests exercising the HTTP surface'
    )


# ============================================================
# RECORD BUILDERS
# ============================================================

# Monday
SERIES_START = date(2024, 7, 1)


def make_points(count: int, start: date = SERIES_START) -> List[TimeSeriesPoint]:
    """
    Build `count` consecutive daily points starting at `start`.

    Point i has revenue 1000 * (i + 1), conversions 10 + i, engagement 40 + i.
    """
    return [
        TimeSeriesPoint(
            date=start + timedelta(days=i),
            visitors=500 + i,
            engagement=float(40 + i),
            conversions=10 + i,
            revenue=float(1000 * (i + 1)),
            segmentCounts={'luxury-enthusiasts': 100 + i},
        )
        for i in range(count)
    ]


def make_insight(
    insight_id: str,
    confidence: float = 80,
    impact: str = 'medium',
    insight_type: str = 'trend',
) -> Insight:
    return Insight(
        id=insight_id,
        type=insight_type,
        title=f'Insight {insight_id}',
        description=f'Description of insight {insight_id}',
        impact=impact,
        confidence=confidence,
        category='Testing',
        actionable=True,
        createdAt=datetime(2024, 7, 15, 10, 30, tzinfo=timezone.utc),
        metadata={'index': insight_id},
    )


def make_campaign(campaign_id: str, status: str) -> Campaign:
    return Campaign(
        id=campaign_id,
        name=f'Campaign {campaign_id}',
        status=status,
        startDate=date(2024, 3, 1),
        endDate=date(2024, 4, 30),
        budget=1000,
        spent=500,
        reach=100,
        engagement=10,
        conversions=1,
        roi=1.5,
        channels=['Email'],
        targetSegments=['unknown-segment'],
    )


# ============================================================
# CONTROLLABLE SOURCES
# ============================================================

class GatedSource(DataSource):
    """
    Source that returns its records only after `release()` is called.

    Lets a test decide the exact order in which sources settle. Create it
    inside the running test so the gate belongs to the test's event loop.
    """

    def __init__(self, source: SourceName, records: Sequence[Any]) -> None:
        self.source = source
        self.records = list(records)
        self.gate = asyncio.Event()
        self.calls = 0

    def release(self) -> None:
        self.gate.set()

    async def load(self) -> List[Any]:
        self.calls += 1
        await self.gate.wait()
        return list(self.records)


class FailingSource(DataSource):
    """Source that always fails, with a LoadFailure or an arbitrary exception."""

    def __init__(self, source: SourceName, error: Exception) -> None:
        self.source = source
        self.error = error

    async def load(self) -> List[Any]:
        raise self.error


class SyncSource(DataSource):
    """Source whose load() returns the records synchronously."""

    def __init__(self, source: SourceName, records: Any) -> None:
        self.source = source
        self.records = records

    def load(self) -> Any:
        return self.records


async def wait_for_condition(
    predicate: Callable[[], bool],
    timeout: float = 1.0,
) -> None:
    """Poll the event loop until `predicate()` holds or `timeout` expires."""
    async def _poll() -> None:
        while not predicate():
            await asyncio.sleep(0.001)

    await asyncio.wait_for(_poll(), timeout)


def gated_sources(
    points: List[TimeSeriesPoint],
    segments: List[Segment],
    campaigns: List[Campaign],
    insights: List[Insight],
) -> Dict[SourceName, GatedSource]:
    """Build one GatedSource per source name, in canonical order."""
    return {
        SourceName.TIMESERIES: GatedSource(SourceName.TIMESERIES, points),
        SourceName.SEGMENTS: GatedSource(SourceName.SEGMENTS, segments),
        SourceName.CAMPAIGNS: GatedSource(SourceName.CAMPAIGNS, campaigns),
        SourceName.INSIGHTS: GatedSource(SourceName.INSIGHTS, insights),
    }


def bundle(sources: Dict[SourceName, DataSource]) -> DashboardSources:
    return DashboardSources(
        timeseries=sources[SourceName.TIMESERIES],
        segments=sources[SourceName.SEGMENTS],
        campaigns=sources[SourceName.CAMPAIGNS],
        insights=sources[SourceName.INSIGHTS],
    )


# ============================================================
# FIXTURES
# ============================================================

@pytest.fixture
def sample_points() -> List[TimeSeriesPoint]:
    """Thirty consecutive days starting on Monday 2024-07-01."""
    return make_points(30)


@pytest.fixture
def sample_segments() -> List[Segment]:
    """Reference segment catalog (sizes 2547, 8934, 456)."""
    return build_segments()


@pytest.fixture
def sample_campaigns() -> List[Campaign]:
    """Reference campaign catalog (two active, one completed)."""
    return build_campaigns()


@pytest.fixture
def sample_insights() -> List[Insight]:
    """Reference insight catalog in received order."""
    return build_insights()


@pytest.fixture
def static_sources(
    sample_points: List[TimeSeriesPoint],
    sample_segments: List[Segment],
    sample_campaigns: List[Campaign],
    sample_insights: List[Insight],
) -> DashboardSources:
    """Deterministic zero-latency sources over the sample records."""
    return DashboardSources(
        timeseries=StaticSource(SourceName.TIMESERIES, sample_points),
        segments=StaticSource(SourceName.SEGMENTS, sample_segments),
        campaigns=StaticSource(SourceName.CAMPAIGNS, sample_campaigns),
        insights=StaticSource(SourceName.INSIGHTS, sample_insights),
    )


@pytest.fixture
def failing_timeseries_sources(
    sample_segments: List[Segment],
    sample_campaigns: List[Campaign],
    sample_insights: List[Insight],
) -> DashboardSources:
    """Static sources where the time series fails with a LoadFailure."""
    return DashboardSources(
        timeseries=FailingSource(
            SourceName.TIMESERIES, LoadFailure('Failed to fetch analytics data')
        ),
        segments=StaticSource(SourceName.SEGMENTS, sample_segments),
        campaigns=StaticSource(SourceName.CAMPAIGNS, sample_campaigns),
        insights=StaticSource(SourceName.INSIGHTS, sample_insights),
    )


@pytest.fixture
def test_settings() -> Settings:
    """Settings with zero simulated latency and a fixed seed."""
    return Settings(
        timeseries_latency_ms=0,
        segments_latency_ms=0,
        campaigns_latency_ms=0,
        insights_latency_ms=0,
        random_seed=42,
    )
