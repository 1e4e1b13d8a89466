"""
Settings and environment management module for the HERMES insights dashboard.

This module provides centralized configuration management using pydantic-settings,
which loads settings from environment variables and an optional .env file.

Key Features:
- Environment variable validation and type coercion
- Sensible defaults for local development
- Singleton pattern via @lru_cache for efficient access

Environment Variables:
- LOG_LEVEL: Root logging level (default: INFO)
- TIMESERIES_LATENCY_MS / SEGMENTS_LATENCY_MS / CAMPAIGNS_LATENCY_MS /
  INSIGHTS_LATENCY_MS: Simulated latency of each synthetic source
- TIMESERIES_WINDOW_DAYS: Days generated by the synthetic time series (default: 30)
- TRAILING_WINDOW_DAYS: Length of the trailing revenue chart (default: 7)
- TOP_INSIGHTS_LIMIT: Number of insights shown in the feed (default: 3)
- INSIGHT_RANKING: received | confidence | impact (default: received)
- RANDOM_SEED: Seed for the synthetic generator (unset = nondeterministic)

Usage:
    from hermes_dashboard.core.config import get_settings

    settings = get_settings()
    latency = settings.timeseries_latency_ms
"""

from functools import lru_cache
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from hermes_dashboard.models.enums import InsightRanking


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        app_name: Title shown by the API.
        log_level: Root logging level name.
        cors_origins: Origins allowed to call the API.
        timeseries_latency_ms: Simulated latency of the time-series source.
        segments_latency_ms: Simulated latency of the segment source.
        campaigns_latency_ms: Simulated latency of the campaign source.
        insights_latency_ms: Simulated latency of the insight source.
        timeseries_window_days: Number of daily points the synthetic series produces.
        trailing_window_days: Number of trailing points in the revenue chart.
        top_insights_limit: Number of insights kept for the feed.
        insight_ranking: Ordering applied before the feed is truncated.
        random_seed: Seed for the synthetic generator.
    """

    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        extra='ignore',
        case_sensitive=False,
    )

    # =========================================================================
    # Application
    # =========================================================================

    app_name: str = 'HERMES AI Insights Platform'
    log_level: str = 'INFO'

    # Next.js dev server by default
    cors_origins: List[str] = ['http://localhost:3000']

    # =========================================================================
    # Synthetic Source Latency (milliseconds)
    # =========================================================================

    timeseries_latency_ms: int = Field(default=1000, ge=0)
    segments_latency_ms: int = Field(default=800, ge=0)
    campaigns_latency_ms: int = Field(default=600, ge=0)
    insights_latency_ms: int = Field(default=900, ge=0)

    # =========================================================================
    # Derived Metric Windows
    # =========================================================================

    timeseries_window_days: int = Field(default=30, ge=0)
    trailing_window_days: int = Field(default=7, ge=0)
    top_insights_limit: int = Field(default=3, ge=0)

    # Received order is the observed feed behavior; ranking is opt-in
    insight_ranking: InsightRanking = InsightRanking.RECEIVED

    random_seed: Optional[int] = None


@lru_cache()
def get_settings() -> Settings:
    """
    Get the application settings singleton.

    Returns:
        Settings: The cached settings instance.

    Note:
        To refresh settings in tests, clear the cache:
        >>> get_settings.cache_clear()
    """
    return Settings()
