"""
Dashboard session lifecycle.

A DashboardSession is the container that owns the four source loaders for one
dashboard activation. Activation starts all four loads concurrently on the
running event loop; they settle independently and in any order. Once every
loader has settled the session becomes ready, and stays ready for the rest of
its life. Reloading means tearing the session down and activating a new one.

Loads are never cancelled: teardown waits for outstanding loads to finish.

Usage:
    async with DashboardSession(default_sources(settings)) as session:
        view = await session.wait_until_ready()

    # Or, in one call
    view = await load_dashboard(default_sources(settings))
"""

import asyncio
import logging
from typing import Dict, List, Optional

from hermes_dashboard.core.config import Settings
from hermes_dashboard.models.enums import InsightRanking, SourceName
from hermes_dashboard.models.schemas import SourceStatus, ViewModel
from hermes_dashboard.services.assembler import assemble_view_model
from hermes_dashboard.services.loaders import SourceLoader
from hermes_dashboard.services.metrics import TOP_INSIGHTS_LIMIT, TRAILING_WINDOW_DAYS
from hermes_dashboard.services.readiness import SourceStates, coordinate
from hermes_dashboard.services.sources import DashboardSources, default_sources

# Configure logging
logger = logging.getLogger(__name__)


class DashboardSession:
    """
    Owns one load cycle of the four dashboard sources.

    Args:
        sources: The data sources to load.
        trailing_days: Window of the trailing revenue series.
        insights_limit: Number of insights in the feed.
        insight_ranking: Ordering applied before truncating the feed.
    """

    def __init__(
        self,
        sources: DashboardSources,
        trailing_days: int = TRAILING_WINDOW_DAYS,
        insights_limit: int = TOP_INSIGHTS_LIMIT,
        insight_ranking: InsightRanking = InsightRanking.RECEIVED,
    ) -> None:
        self.sources = sources
        self.trailing_days = trailing_days
        self.insights_limit = insights_limit
        self.insight_ranking = insight_ranking

        self._loaders: Dict[SourceName, SourceLoader] = {}
        self._tasks: List[asyncio.Task] = []
        self._ready_event: Optional[asyncio.Event] = None
        self._closed = False

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        sources: Optional[DashboardSources] = None,
    ) -> "DashboardSession":
        """Create a session configured from settings, with synthetic sources by default."""
        return cls(
            sources or default_sources(settings),
            trailing_days=settings.trailing_window_days,
            insights_limit=settings.top_insights_limit,
            insight_ranking=settings.insight_ranking,
        )

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def activated(self) -> bool:
        return self._ready_event is not None

    @property
    def closed(self) -> bool:
        """True once teardown started; a closed session is never reactivated."""
        return self._closed

    @property
    def ready(self) -> bool:
        """True once every source has settled; never reverts."""
        return self._ready_event is not None and self._ready_event.is_set()

    def states(self) -> SourceStates:
        """Snapshot of the current loader states (all loading before activation)."""
        if not self._loaders:
            return SourceStates.initial()
        return SourceStates(
            timeseries=self._loaders[SourceName.TIMESERIES].state,
            segments=self._loaders[SourceName.SEGMENTS].state,
            campaigns=self._loaders[SourceName.CAMPAIGNS].state,
            insights=self._loaders[SourceName.INSIGHTS].state,
        )

    def view(self) -> ViewModel:
        """Assemble the view model from the current loader states."""
        return assemble_view_model(
            self.states(),
            trailing_days=self.trailing_days,
            insights_limit=self.insights_limit,
            insight_ranking=self.insight_ranking,
        )

    def source_statuses(self) -> List[SourceStatus]:
        """Per-source loading summary in canonical order."""
        return [
            SourceStatus(
                source=state.source,
                isLoading=state.isLoading,
                error=state.error,
                recordCount=len(state.data),
            )
            for state in self.states().in_order()
        ]

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    async def activate(self) -> None:
        """
        Start all four loads concurrently.

        Raises:
            RuntimeError: If the session was already activated or torn down.
        """
        if self._closed:
            raise RuntimeError("Dashboard session was torn down; create a new session")
        if self.activated:
            raise RuntimeError("Dashboard session already activated")

        self._ready_event = asyncio.Event()
        self._loaders = {
            name: SourceLoader(source)
            for name, source in self.sources.as_mapping().items()
        }
        logger.info("Dashboard session activated; loading 4 sources")

        self._tasks = [
            asyncio.create_task(self._run_loader(loader), name=f"load-{name.value}")
            for name, loader in self._loaders.items()
        ]

    async def _run_loader(self, loader: SourceLoader) -> None:
        await loader.run()

        readiness = coordinate(self.states())
        if readiness.ready and not self._ready_event.is_set():
            if readiness.errors:
                logger.warning(
                    f"Dashboard ready with {len(readiness.errors)} failed source(s): "
                    f"{readiness.errors}"
                )
            else:
                logger.info("Dashboard ready; all sources loaded")
            self._ready_event.set()

    async def wait_until_ready(self) -> ViewModel:
        """
        Wait for every source to settle.

        Returns:
            The ready ViewModel.

        Raises:
            RuntimeError: If the session was never activated.
        """
        if not self.activated:
            raise RuntimeError("Dashboard session not activated")
        await self._ready_event.wait()
        return self.view()

    async def teardown(self) -> None:
        """Wait for outstanding loads to finish, then close the session."""
        if self._closed:
            return
        self._closed = True
        if self._tasks:
            await asyncio.gather(*self._tasks)
        self._tasks = []
        logger.info("Dashboard session torn down")

    async def __aenter__(self) -> "DashboardSession":
        await self.activate()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.teardown()


async def load_dashboard(
    sources: DashboardSources,
    trailing_days: int = TRAILING_WINDOW_DAYS,
    insights_limit: int = TOP_INSIGHTS_LIMIT,
    insight_ranking: InsightRanking = InsightRanking.RECEIVED,
) -> ViewModel:
    """
    Run one full session and return the ready view model.

    Args:
        sources: The data sources to load.
        trailing_days: Window of the trailing revenue series.
        insights_limit: Number of insights in the feed.
        insight_ranking: Ordering applied before truncating the feed.

    Returns:
        The ViewModel once every source has settled.
    """
    session = DashboardSession(
        sources,
        trailing_days=trailing_days,
        insights_limit=insights_limit,
        insight_ranking=insight_ranking,
    )
    async with session:
        return await session.wait_until_ready()
