"""
Core infrastructure package for the HERMES insights dashboard.

Provides:
- Configuration management via pydantic-settings (config)
- FastAPI dependency injection utilities (dependencies)

The configuration is re-exported here so callers can write:

    from hermes_dashboard.core import get_settings

Dependencies are imported from hermes_dashboard.core.dependencies directly,
since they sit above the service layer.
"""

# =============================================================================
# Re-exports from hermes_dashboard.core.config
# =============================================================================
from hermes_dashboard.core.config import Settings, get_settings


__all__ = [
    'Settings',
    'get_settings',
]
