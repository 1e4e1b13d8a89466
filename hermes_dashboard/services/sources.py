"""
Data source contract and the built-in source implementations.

A data source is anything with a `load()` capability that returns one
collection of records, either directly or as an awaitable. Loaders only depend
on this contract, so the synthetic generators below can be swapped for a real
HTTP backend without touching the aggregation layer.

Implementations:
- StaticSource: Fixed records (or a record factory) behind an optional delay.
  Used for the segment, campaign and insight catalogs and as the
  deterministic fake in tests.
- SyntheticTimeSeriesSource: Randomized daily analytics ending today, generated
  with numpy.

Failure contract:
- A source signals an expected failure by raising LoadFailure with a
  human-readable message. Any other exception is treated as unexpected by the
  loader and replaced with the source's default message.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Awaitable, Callable, Dict, Generic, List, Optional, Sequence, TypeVar, Union

import numpy as np

from hermes_dashboard.core.config import Settings
from hermes_dashboard.models.enums import SourceName
from hermes_dashboard.models.schemas import Campaign, Insight, Segment, TimeSeriesPoint
from hermes_dashboard.services.catalog import (
    SEGMENT_VISITOR_RANGES,
    build_campaigns,
    build_insights,
    build_segments,
)

# Configure logging
logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT")

LoadResult = Union[Sequence[RecordT], Awaitable[Sequence[RecordT]]]


# =============================================================================
# Errors
# =============================================================================


class LoadFailure(Exception):
    """
    Expected failure of a data source.

    Attributes:
        message: Human-readable description surfaced on the loader state.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


# =============================================================================
# Source Contract
# =============================================================================


class DataSource(ABC, Generic[RecordT]):
    """
    Capability producing one collection of records per call to load().

    Attributes:
        source: Which of the four dashboard sources this instance serves.
    """

    source: SourceName

    @abstractmethod
    def load(self) -> LoadResult:
        """
        Fetch the collection.

        Returns:
            A sequence of records, or an awaitable resolving to one.

        Raises:
            LoadFailure: When the collection cannot be produced.
        """


def _delay_seconds(latency_ms: int) -> float:
    return max(latency_ms, 0) / 1000.0


class StaticSource(DataSource[RecordT]):
    """
    Source serving fixed records after an optional simulated delay.

    Args:
        source: Source name served by this instance.
        records: Records to return, or a zero-argument factory producing them.
        latency_ms: Delay before the records are returned.
    """

    def __init__(
        self,
        source: SourceName,
        records: Union[Sequence[RecordT], Callable[[], Sequence[RecordT]]],
        latency_ms: int = 0,
    ) -> None:
        self.source = source
        self._records = records
        self.latency_ms = latency_ms

    async def load(self) -> List[RecordT]:
        await asyncio.sleep(_delay_seconds(self.latency_ms))
        records = self._records() if callable(self._records) else self._records
        return list(records)

    def __repr__(self) -> str:
        return f"StaticSource(source={self.source.value!r}, latency_ms={self.latency_ms})"


class SyntheticTimeSeriesSource(DataSource[TimeSeriesPoint]):
    """
    Randomized daily analytics standing in for the analytics backend.

    Produces `window_days` consecutive points ending on `end_date` (today by
    default), ascending by date. Value ranges:
    - visitors: 500-1499
    - engagement: 25-74 (percent)
    - conversions: 20-119
    - revenue: 5000-14999
    - segmentCounts: per SEGMENT_VISITOR_RANGES

    Args:
        window_days: Number of daily points to generate.
        latency_ms: Simulated fetch latency.
        seed: Seed for numpy's generator; None draws fresh entropy per load.
        end_date: Last day of the series; defaults to today at load time.
    """

    source = SourceName.TIMESERIES

    def __init__(
        self,
        window_days: int = 30,
        latency_ms: int = 1000,
        seed: Optional[int] = None,
        end_date: Optional[date] = None,
    ) -> None:
        self.window_days = window_days
        self.latency_ms = latency_ms
        self.seed = seed
        self.end_date = end_date

    def generate(self) -> List[TimeSeriesPoint]:
        """Build the series synchronously."""
        rng = np.random.default_rng(self.seed)
        end = self.end_date or date.today()
        n = max(self.window_days, 0)

        visitors = rng.integers(500, 1500, size=n)
        engagement = rng.integers(25, 75, size=n)
        conversions = rng.integers(20, 120, size=n)
        revenue = rng.integers(5000, 15000, size=n)
        segment_counts = {
            key: rng.integers(low, high, size=n)
            for key, (low, high) in SEGMENT_VISITOR_RANGES.items()
        }

        points = []
        for i in range(n):
            points.append(TimeSeriesPoint(
                date=end - timedelta(days=n - 1 - i),
                visitors=int(visitors[i]),
                engagement=float(engagement[i]),
                conversions=int(conversions[i]),
                revenue=float(revenue[i]),
                segmentCounts={key: int(values[i]) for key, values in segment_counts.items()},
            ))
        return points

    async def load(self) -> List[TimeSeriesPoint]:
        await asyncio.sleep(_delay_seconds(self.latency_ms))
        points = self.generate()
        logger.debug(f"Generated {len(points)} synthetic time-series points")
        return points

    def __repr__(self) -> str:
        return (
            f"SyntheticTimeSeriesSource(window_days={self.window_days}, "
            f"latency_ms={self.latency_ms}, seed={self.seed})"
        )


# =============================================================================
# Source Bundle
# =============================================================================


@dataclass(frozen=True)
class DashboardSources:
    """The four sources a dashboard session loads from."""

    timeseries: DataSource[TimeSeriesPoint]
    segments: DataSource[Segment]
    campaigns: DataSource[Campaign]
    insights: DataSource[Insight]

    def __post_init__(self) -> None:
        for slot, source in self.as_mapping().items():
            if source.source != slot:
                raise ValueError(
                    f"{slot.value} slot holds a {source.source.value} source"
                )

    def as_mapping(self) -> Dict[SourceName, DataSource]:
        """Sources keyed by name, in canonical order."""
        return {
            SourceName.TIMESERIES: self.timeseries,
            SourceName.SEGMENTS: self.segments,
            SourceName.CAMPAIGNS: self.campaigns,
            SourceName.INSIGHTS: self.insights,
        }


def default_sources(settings: Settings) -> DashboardSources:
    """
    Build the synthetic sources used when no real backend is configured.

    Args:
        settings: Application settings supplying latencies, window and seed.

    Returns:
        DashboardSources backed by the generator and the reference catalogs.
    """
    return DashboardSources(
        timeseries=SyntheticTimeSeriesSource(
            window_days=settings.timeseries_window_days,
            latency_ms=settings.timeseries_latency_ms,
            seed=settings.random_seed,
        ),
        segments=StaticSource(
            SourceName.SEGMENTS, build_segments, latency_ms=settings.segments_latency_ms
        ),
        campaigns=StaticSource(
            SourceName.CAMPAIGNS, build_campaigns, latency_ms=settings.campaigns_latency_ms
        ),
        insights=StaticSource(
            SourceName.INSIGHTS, build_insights, latency_ms=settings.insights_latency_ms
        ),
    )
