"""
Tests for the dashboard session lifecycle and concurrent loading.

Covers:
- Readiness only after all four sources settle, in any settlement order
- Monotonic readiness within a session
- Failure isolation between sources
- Lifecycle guards (activate once, no reuse after teardown)
- Teardown waits for in-flight loads instead of cancelling them
- Concurrent (not sequential) loading
"""

import asyncio
import itertools
import time
from typing import List

import pytest

from hermes_dashboard.core.config import Settings
from hermes_dashboard.models import InsightRanking, SourceName
from hermes_dashboard.services.session import DashboardSession, load_dashboard
from hermes_dashboard.services.sources import DashboardSources, StaticSource
from hermes_dashboard.tests.conftest import (
    FailingSource,
    bundle,
    gated_sources,
    make_points,
    wait_for_condition,
)


ORDERS = list(itertools.permutations(list(SourceName)))


# =============================================================================
# TEST CLASS: Readiness
# =============================================================================


class TestSessionReadiness:
    """Readiness transitions driven by gated sources."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("order", ORDERS, ids=lambda o: "-".join(s.value for s in o))
    async def test_ready_only_after_all_settle(
        self,
        order,
        sample_points,
        sample_segments,
        sample_campaigns,
        sample_insights,
    ) -> None:
        gates = gated_sources(sample_points, sample_segments, sample_campaigns, sample_insights)
        session = DashboardSession(bundle(gates))
        await session.activate()

        for index, name in enumerate(order):
            assert session.ready is False
            assert session.view().ready is False

            gates[name].release()
            await wait_for_condition(
                lambda: getattr(session.states(), name.value).settled
            )

            if index < len(order) - 1:
                assert session.ready is False

        await wait_for_condition(lambda: session.ready)
        view = session.view()
        assert view.ready is True
        assert view.totalRevenue == 465000.0

        await session.teardown()

    @pytest.mark.asyncio
    async def test_ready_is_monotonic(self, static_sources: DashboardSources) -> None:
        async with DashboardSession(static_sources) as session:
            await session.wait_until_ready()
            assert session.ready is True

            for _ in range(5):
                await asyncio.sleep(0)
                assert session.ready is True
                assert session.view().ready is True

    @pytest.mark.asyncio
    async def test_not_ready_before_activation(self, static_sources: DashboardSources) -> None:
        session = DashboardSession(static_sources)

        assert session.activated is False
        assert session.ready is False
        assert all(state.isLoading for state in session.states().in_order())
        assert session.view().ready is False

    @pytest.mark.asyncio
    async def test_each_source_loaded_once(
        self, sample_points, sample_segments, sample_campaigns, sample_insights
    ) -> None:
        gates = gated_sources(sample_points, sample_segments, sample_campaigns, sample_insights)
        session = DashboardSession(bundle(gates))
        await session.activate()
        for gate in gates.values():
            gate.release()

        await session.wait_until_ready()
        session.view()
        session.view()
        await session.teardown()

        assert [gate.calls for gate in gates.values()] == [1, 1, 1, 1]


# =============================================================================
# TEST CLASS: Failure Isolation
# =============================================================================


class TestSessionFailures:
    """A failing source never blocks or corrupts the others."""

    @pytest.mark.asyncio
    async def test_failed_time_series_end_to_end(
        self, failing_timeseries_sources: DashboardSources
    ) -> None:
        view = await load_dashboard(failing_timeseries_sources)

        assert view.ready is True
        assert view.errors == ["Failed to fetch analytics data"]
        assert view.totalRevenue == 0.0
        assert view.totalConversions == 0
        assert [s.size for s in view.segmentShares] == [2547, 8934, 456]
        assert view.activeCampaignCount == 2
        assert len(view.topInsights) == 3

    @pytest.mark.asyncio
    async def test_unexpected_error_in_one_source(
        self, sample_points, sample_segments, sample_insights
    ) -> None:
        sources = DashboardSources(
            timeseries=StaticSource(SourceName.TIMESERIES, sample_points),
            segments=StaticSource(SourceName.SEGMENTS, sample_segments),
            campaigns=FailingSource(SourceName.CAMPAIGNS, ConnectionError("reset")),
            insights=StaticSource(SourceName.INSIGHTS, sample_insights),
        )

        view = await load_dashboard(sources)

        assert view.ready is True
        assert view.errors == ["Failed to fetch campaign metrics"]
        assert view.activeCampaignCount == 0
        assert view.totalRevenue == 465000.0

    @pytest.mark.asyncio
    async def test_slow_source_does_not_block_others(
        self, sample_points, sample_segments, sample_campaigns, sample_insights
    ) -> None:
        gates = gated_sources(sample_points, sample_segments, sample_campaigns, sample_insights)
        session = DashboardSession(bundle(gates))
        await session.activate()

        for name in (SourceName.SEGMENTS, SourceName.CAMPAIGNS, SourceName.INSIGHTS):
            gates[name].release()
        await wait_for_condition(
            lambda: all(s.settled for s in session.states().in_order()[1:])
        )

        statuses = session.source_statuses()
        assert [s.isLoading for s in statuses] == [True, False, False, False]
        assert [s.recordCount for s in statuses] == [0, 3, 3, 3]
        assert session.ready is False

        gates[SourceName.TIMESERIES].release()
        await session.wait_until_ready()
        await session.teardown()


# =============================================================================
# TEST CLASS: Lifecycle
# =============================================================================


class TestSessionLifecycle:
    """Activation, teardown and reload semantics."""

    @pytest.mark.asyncio
    async def test_activate_twice_raises(self, static_sources: DashboardSources) -> None:
        session = DashboardSession(static_sources)
        await session.activate()

        with pytest.raises(RuntimeError):
            await session.activate()

        await session.teardown()

    @pytest.mark.asyncio
    async def test_wait_before_activation_raises(self, static_sources: DashboardSources) -> None:
        with pytest.raises(RuntimeError):
            await DashboardSession(static_sources).wait_until_ready()

    @pytest.mark.asyncio
    async def test_no_reactivation_after_teardown(self, static_sources: DashboardSources) -> None:
        session = DashboardSession(static_sources)
        await session.activate()
        await session.teardown()

        with pytest.raises(RuntimeError):
            await session.activate()

    @pytest.mark.asyncio
    async def test_teardown_waits_for_in_flight_loads(
        self, sample_points, sample_segments, sample_campaigns, sample_insights
    ) -> None:
        gates = gated_sources(sample_points, sample_segments, sample_campaigns, sample_insights)
        session = DashboardSession(bundle(gates))
        await session.activate()

        teardown = asyncio.create_task(session.teardown())
        await asyncio.sleep(0.01)
        assert teardown.done() is False

        for gate in gates.values():
            gate.release()
        await asyncio.wait_for(teardown, 1.0)

        assert session.ready is True
        assert all(state.settled and state.error is None for state in session.states().in_order())

    @pytest.mark.asyncio
    async def test_new_session_starts_from_loading(self, static_sources: DashboardSources) -> None:
        first = await load_dashboard(static_sources)
        assert first.ready is True

        second = DashboardSession(static_sources)
        await second.activate()
        assert all(state.isLoading for state in second.states().in_order())
        assert second.view().ready is False

        view = await second.wait_until_ready()
        assert view.ready is True
        await second.teardown()

    @pytest.mark.asyncio
    async def test_from_settings(self, static_sources: DashboardSources) -> None:
        settings = Settings(
            trailing_window_days=3,
            top_insights_limit=1,
            insight_ranking=InsightRanking.CONFIDENCE,
        )
        session = DashboardSession.from_settings(settings, sources=static_sources)

        assert session.sources is static_sources
        async with session:
            view = await session.wait_until_ready()

        assert len(view.last7DaysSeries) == 3
        assert [i.id for i in view.topInsights] == ["1"]

    @pytest.mark.asyncio
    async def test_from_settings_defaults_to_synthetic_sources(self, test_settings: Settings) -> None:
        session = DashboardSession.from_settings(test_settings)

        async with session:
            view = await session.wait_until_ready()

        assert view.ready is True
        assert view.errors == []
        assert len(view.last7DaysSeries) == 7
        assert len(view.segmentShares) == 3


# =============================================================================
# TEST CLASS: Concurrency
# =============================================================================


class TestConcurrentLoading:
    """Sources load concurrently on one event loop."""

    @pytest.mark.slow
    @pytest.mark.asyncio
    async def test_sources_load_concurrently(
        self, sample_segments, sample_campaigns, sample_insights
    ) -> None:
        sources = DashboardSources(
            timeseries=StaticSource(SourceName.TIMESERIES, make_points(30), latency_ms=200),
            segments=StaticSource(SourceName.SEGMENTS, sample_segments, latency_ms=200),
            campaigns=StaticSource(SourceName.CAMPAIGNS, sample_campaigns, latency_ms=200),
            insights=StaticSource(SourceName.INSIGHTS, sample_insights, latency_ms=200),
        )

        started = time.perf_counter()
        view = await load_dashboard(sources)
        elapsed = time.perf_counter() - started

        assert view.ready is True
        # Sequential loading would take at least 0.8 s
        assert elapsed < 0.6
