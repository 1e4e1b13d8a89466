"""
FastAPI router module for the dashboard view model.

Endpoints:
- GET  /dashboard          Current ViewModel (optionally waiting for readiness)
- GET  /dashboard/sources  Per-source loading status
- POST /dashboard/refresh  Tear down the session and start a new load cycle

The presentation layer treats the ViewModel as read-only and shows a loading
placeholder while `ready` is false.
"""

import logging
from typing import List

from fastapi import APIRouter, HTTPException, Query, Request

from hermes_dashboard.core.dependencies import (
    DashboardSessionDep,
    SettingsDep,
    get_dashboard_session,
)
from hermes_dashboard.models import SourceStatus, ViewModel
from hermes_dashboard.services.session import DashboardSession

# Configure logging
logger = logging.getLogger(__name__)

# Create router with prefix and tags for OpenAPI documentation
router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("", response_model=ViewModel)
async def get_dashboard(
    session: DashboardSessionDep,
    wait: bool = Query(False, description="Wait until every source has settled"),
) -> ViewModel:
    """
    Return the current dashboard view model.

    Args:
        session: Active dashboard session
        wait: When true, respond only after all four sources settled

    Returns:
        ViewModel; `ready` is false while any source is still loading

    Raises:
        HTTPException 500: If assembling the view model fails
    """
    try:
        if wait:
            return await session.wait_until_ready()
        return session.view()
    except Exception as e:
        logger.error(f"Error assembling dashboard view model: {e}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail=f"Failed to assemble dashboard: {str(e)}",
        )


@router.get("/sources", response_model=List[SourceStatus])
async def get_source_statuses(session: DashboardSessionDep) -> List[SourceStatus]:
    """
    Return loading status for each source in canonical order.

    Returns:
        List of SourceStatus: timeseries, segments, campaigns, insights
    """
    return session.source_statuses()


@router.post("/refresh", response_model=ViewModel)
async def refresh_dashboard(request: Request, settings: SettingsDep) -> ViewModel:
    """
    Start a brand-new load cycle.

    The current session is torn down (its outstanding loads run to completion)
    and a new session is activated with the same sources. Nothing is reused
    from the previous cycle. Refreshes are serialized by the application's
    refresh lock, so each one replaces the session the previous one stored.

    Returns:
        The new session's ViewModel, normally not yet ready

    Raises:
        HTTPException 503: If the application has no active session
    """
    async with request.app.state.refresh_lock:
        session = get_dashboard_session(request)
        await session.teardown()

        fresh = DashboardSession.from_settings(settings, sources=session.sources)
        await fresh.activate()
        request.app.state.dashboard_session = fresh
    logger.info("Dashboard refreshed")

    return fresh.view()
