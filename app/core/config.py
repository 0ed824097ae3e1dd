# app/core/config.py
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Global application configuration.

    Values are loaded from environment variables at runtime.

    These settings are used for:
    - Application identity (name / environment) reported by /health
    - Log level
    - Overrides of the default meeting scoring thresholds
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    APP_NAME: str = "Meeting Usefulness"
    APP_ENV: str = Field("local", description="Environment name: local/dev/stage/prod")

    LOG_LEVEL: str = Field(
        default="INFO",
        description="Root log level for the application loggers.",
    )

    # --- Scoring overrides (unset => ScoreWeights defaults) ---
    SCORE_LONG_MEETING_MINUTES: int | None = Field(
        default=None,
        description="Duration (minutes) above which the long-meeting penalty applies.",
    )
    SCORE_HIGH_BAND: float | None = Field(
        default=None,
        description="Scores greater than or equal to this value are classified 'high'.",
    )
    SCORE_MEDIUM_BAND: float | None = Field(
        default=None,
        description="Scores greater than or equal to this value are classified 'medium'.",
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Cached accessor for application settings.

    Using LRU cache ensures settings are read and validated only once,
    while still being easily importable across the app.
    """
    return Settings()
