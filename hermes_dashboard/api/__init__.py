"""
API package initialization.

This package contains the FastAPI router modules for the HERMES insights
dashboard:
- dashboard: View model, source status and refresh endpoints
"""

from fastapi import APIRouter

# Import router modules
from hermes_dashboard.api.dashboard import router as dashboard_router

# Create main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(dashboard_router)  # dashboard router has its own prefix

# Export all routers for selective imports
__all__ = [
    "api_router",
    "dashboard_router",
]
