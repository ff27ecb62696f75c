"""Runtime configuration for the Speaker Identity Resolution Engine."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # Timeline correlation
    timeline_tolerance_ms: int = Field(
        default=2000,
        ge=0,
        description="Widening applied to both sides of every speech segment",
    )
    min_timeline_votes: int = Field(
        default=2,
        ge=1,
        description="Votes a timeline match needs before it is accepted",
    )
    high_confidence_votes: int = Field(
        default=5,
        ge=1,
        description="Votes at which a timeline match becomes high confidence",
    )

    # Heuristics
    include_organizer: bool = Field(default=True)

    # Console
    log_level: str = Field(default="WARNING")

    model_config = SettingsConfigDict(
        env_prefix="SPEAKER_RESOLVER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings() -> Settings:
    """Reload settings from environment."""
    global _settings
    _settings = Settings()
    return _settings
