"""
Configuration management for the result ranker.
"""
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="RANKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    environment: str = Field(default="development", description="Environment (development, production)")
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=8000, description="API port")
    log_level: str = Field(default="INFO", description="Logging level")

    # Ranking
    lowercase_query: bool = Field(
        default=False,
        description="Lower-case query terms so matching ignores case in every field",
    )
    max_results_per_request: int = Field(
        default=100, description="Maximum number of results scored per ranking request; the rest keep input order", ge=1
    )
    include_scores: bool = Field(
        default=False, description="Return per-result scores alongside the ordering"
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
