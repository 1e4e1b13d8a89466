"""
HERMES Insights Dashboard Package.

Asynchronous multi-source aggregation layer behind the HERMES AI Insights
dashboard. Loads time-series analytics, customer segments, campaigns and
generated insights concurrently, tracks each source's readiness, and exposes a
single render-ready view model.

Subpackages:
    - api: FastAPI route handlers
    - core: Configuration and dependencies
    - models: Pydantic schemas and enums
    - services: Sources, loaders, metrics, assembler and session
"""

__version__ = "1.0.0"
