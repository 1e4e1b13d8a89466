"""
Readiness coordination across the four dashboard sources.

The coordinator answers two questions about the current loader states:
- ready: have all four sources settled (loaded or failed)?
- errors: which sources failed, in canonical order
  [timeseries, segments, campaigns, insights]?

It deliberately does not gate on errors. A failed source still counts as
settled, and the dashboard renders whatever the successful sources provide.
"""

from dataclasses import dataclass, field
from typing import List, Tuple

from hermes_dashboard.models.enums import SourceName
from hermes_dashboard.models.schemas import (
    Campaign,
    Insight,
    LoaderState,
    Segment,
    TimeSeriesPoint,
)


@dataclass(frozen=True)
class SourceStates:
    """Snapshot of the four loader states, passed explicitly to consumers."""

    timeseries: LoaderState[TimeSeriesPoint]
    segments: LoaderState[Segment]
    campaigns: LoaderState[Campaign]
    insights: LoaderState[Insight]

    @classmethod
    def initial(cls) -> "SourceStates":
        """All four sources in the loading state."""
        return cls(
            timeseries=LoaderState[TimeSeriesPoint].loading(SourceName.TIMESERIES),
            segments=LoaderState[Segment].loading(SourceName.SEGMENTS),
            campaigns=LoaderState[Campaign].loading(SourceName.CAMPAIGNS),
            insights=LoaderState[Insight].loading(SourceName.INSIGHTS),
        )

    def in_order(self) -> Tuple[LoaderState, ...]:
        return (self.timeseries, self.segments, self.campaigns, self.insights)


@dataclass(frozen=True)
class Readiness:
    """Coordinator output."""

    ready: bool
    errors: List[str] = field(default_factory=list)


def coordinate(states: SourceStates) -> Readiness:
    """
    Combine loader states into one readiness flag and one error list.

    Args:
        states: Current state of every source.

    Returns:
        Readiness with ready = no source still loading, and errors = the
        non-null error of each settled source in canonical order.
    """
    ordered = states.in_order()
    ready = not any(state.isLoading for state in ordered)
    errors = [
        state.error
        for state in ordered
        if not state.isLoading and state.error is not None
    ]
    return Readiness(ready=ready, errors=errors)
