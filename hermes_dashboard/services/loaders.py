"""
Source loader service for the HERMES insights dashboard.

A SourceLoader owns the lifecycle of fetching one dataset. It starts in the
loading state and settles exactly once: with validated records, or with an
error message and no data. Failures never escape the loader, so one slow or
broken source cannot block or corrupt the others.

State machine:
    loading --(records)--> settled/loaded
    loading --(failure)--> settled/failed

A loader runs once. Re-loading a source means creating a new loader, which
starts again from the loading state with no cache reuse.
"""

import inspect
import logging
import time
from typing import Dict, Generic, List, Type, TypeVar

from pydantic import TypeAdapter, ValidationError

from hermes_dashboard.models.enums import SourceName
from hermes_dashboard.models.schemas import (
    Campaign,
    Insight,
    LoaderState,
    Segment,
    TimeSeriesPoint,
)
from hermes_dashboard.services.sources import DataSource, LoadFailure

# Configure logging
logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT")


# =============================================================================
# Constants
# =============================================================================

RECORD_TYPES: Dict[SourceName, Type] = {
    SourceName.TIMESERIES: TimeSeriesPoint,
    SourceName.SEGMENTS: Segment,
    SourceName.CAMPAIGNS: Campaign,
    SourceName.INSIGHTS: Insight,
}

# Shown when a source fails without a LoadFailure message of its own
DEFAULT_FAILURE_MESSAGES: Dict[SourceName, str] = {
    SourceName.TIMESERIES: "Failed to fetch analytics data",
    SourceName.SEGMENTS: "Failed to fetch customer segments",
    SourceName.CAMPAIGNS: "Failed to fetch campaign metrics",
    SourceName.INSIGHTS: "Failed to fetch insights",
}


# =============================================================================
# Validation Helpers
# =============================================================================


def _check_time_series_order(points: List[TimeSeriesPoint]) -> None:
    """
    Reject a time series that is not strictly ascending by date.

    Raises:
        LoadFailure: If two consecutive points are out of order or share a date.
    """
    for previous, current in zip(points, points[1:]):
        if current.date <= previous.date:
            raise LoadFailure(
                f"Time series out of order at {current.date.isoformat()}"
            )


def validate_records(source: SourceName, raw: object) -> list:
    """
    Validate a raw collection into the record type of `source`.

    Model instances pass through unchanged; dictionaries (e.g. decoded JSON)
    are parsed into models.

    Args:
        source: Source whose record type applies.
        raw: Collection returned by the data source.

    Returns:
        List of validated records in the received order.

    Raises:
        LoadFailure: If the collection does not match the record shape.
    """
    if raw is None or isinstance(raw, (str, bytes, dict)):
        raise LoadFailure(f"Malformed {source.value} data: expected a list of records")

    adapter = TypeAdapter(List[RECORD_TYPES[source]])
    try:
        records = adapter.validate_python(list(raw))
    except ValidationError as e:
        raise LoadFailure(
            f"Malformed {source.value} data: {e.error_count()} invalid value(s)"
        ) from e

    if source == SourceName.TIMESERIES:
        _check_time_series_order(records)
    return records


# =============================================================================
# Loader
# =============================================================================


class SourceLoader(Generic[RecordT]):
    """
    Loads one data source and exposes its LoaderState.

    Attributes:
        source: The underlying DataSource.
        state: Current LoaderState; replaced, never mutated, on transition.

    Example:
        loader = SourceLoader(StaticSource(SourceName.SEGMENTS, build_segments))
        state = await loader.run()
        if state.error is None:
            print(len(state.data))
    """

    def __init__(self, source: DataSource[RecordT]) -> None:
        self.source = source
        self.state: LoaderState[RecordT] = LoaderState.loading(source.source)
        self._started = False

    @property
    def name(self) -> SourceName:
        return self.source.source

    async def run(self) -> LoaderState[RecordT]:
        """
        Fetch, validate and settle.

        Returns:
            The settled LoaderState.

        Raises:
            RuntimeError: If this loader already ran.
        """
        if self._started:
            raise RuntimeError(
                f"Loader for {self.name.value} already ran; create a new loader to reload"
            )
        self._started = True

        started = time.perf_counter()
        logger.debug(f"Loading {self.name.value} from {self.source!r}")

        try:
            result = self.source.load()
            if inspect.isawaitable(result):
                result = await result
            records = validate_records(self.name, result)
        except LoadFailure as e:
            logger.warning(f"Source {self.name.value} failed: {e.message}")
            self.state = LoaderState.failed(self.name, e.message)
        except Exception:
            logger.exception(f"Unexpected error loading {self.name.value}")
            self.state = LoaderState.failed(self.name, DEFAULT_FAILURE_MESSAGES[self.name])
        else:
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.info(
                f"Loaded {len(records)} {self.name.value} records in {elapsed_ms:.0f} ms"
            )
            self.state = LoaderState.loaded(self.name, records)

        return self.state
