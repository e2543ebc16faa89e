"""Application configuration."""

import os
from datetime import time

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    environment: str = _ENVIRONMENT
    log_level: str = "INFO"
    timezone: str = "UTC"
    default_unit: str = "kg"
    default_target_weight: float = 70.0
    default_reminder_time: time = time(hour=9)
    recent_entries_limit: int = 30
    streak_milestone_days: list[int] = [7, 30]
    goal_milestones: list[float] = [0.25, 0.5, 0.75]

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
