"""
FastAPI dependency injection module for the HERMES insights dashboard.

Provides reusable dependencies so endpoint handlers never reach for globals:
- get_settings_dependency: Returns the application settings
- get_dashboard_session: Returns the session owned by the application
- SettingsDep / DashboardSessionDep: Annotated aliases for endpoint signatures

The dashboard session lives on `app.state.dashboard_session`; it is created by
the application lifespan and replaced by the refresh endpoint.

Usage:
    @router.get("/dashboard")
    async def get_dashboard(session: DashboardSessionDep) -> ViewModel:
        return session.view()

In tests, override either dependency:
    app.dependency_overrides[get_settings_dependency] = lambda: test_settings
"""

from typing import Annotated

from fastapi import Depends, HTTPException, Request

from hermes_dashboard.core.config import Settings, get_settings
from hermes_dashboard.services.session import DashboardSession


# =============================================================================
# Settings Dependency
# =============================================================================

def get_settings_dependency(request: Request) -> Settings:
    """
    Return the settings the application was created with.

    Falls back to the cached environment settings when the application did
    not record its own.
    """
    settings = getattr(request.app.state, "settings", None)
    return settings or get_settings()


# =============================================================================
# Dashboard Session Dependency
# =============================================================================

def get_dashboard_session(request: Request) -> DashboardSession:
    """
    Return the dashboard session owned by the running application.

    Raises:
        HTTPException 503: If the application has no active session (lifespan
            not started or already shut down).
    """
    session = getattr(request.app.state, "dashboard_session", None)
    if session is None:
        raise HTTPException(status_code=503, detail="Dashboard session not available")
    return session


# =============================================================================
# Type Aliases for Dependency Injection
# =============================================================================

SettingsDep = Annotated[Settings, Depends(get_settings_dependency)]

DashboardSessionDep = Annotated[DashboardSession, Depends(get_dashboard_session)]
