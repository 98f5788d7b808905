"""
Application Configuration

Uses pydantic-settings for environment variable loading with validation.
All builder tunables (canvas geometry, history, persistence) live here.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Builder settings loaded from environment variables.

    Environment variables can be set directly or via .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="UIBUILDER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # Environment
    # ==========================================================================
    environment: Literal["development", "testing", "production"] = Field(
        default="development",
        description="Runtime environment"
    )

    debug: bool = Field(
        default=False,
        description="Enable debug mode"
    )

    log_level: str = Field(
        default="INFO",
        description="Root log level used by the CLI"
    )

    # ==========================================================================
    # Canvas
    # ==========================================================================
    canvas_width: float = Field(
        default=1200,
        gt=0,
        description="Canvas width in pixels"
    )

    canvas_height: float = Field(
        default=800,
        gt=0,
        description="Canvas height in pixels"
    )

    min_widget_width: float = Field(
        default=20,
        ge=0,
        description="Smallest width a resize gesture may produce"
    )

    min_widget_height: float = Field(
        default=2,
        ge=0,
        description="Smallest height a resize gesture may produce (dividers are 2px)"
    )

    paste_offset: float = Field(
        default=20,
        ge=0,
        description="Pixels a pasted widget is shifted from its source"
    )

    # ==========================================================================
    # History
    # ==========================================================================
    history_limit: int = Field(
        default=0,
        ge=0,
        description="Maximum undo snapshots kept (0 = unbounded)"
    )

    # ==========================================================================
    # Persistence
    # ==========================================================================
    persistence_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout applied to every save/load call"
    )

    api_url: str = Field(
        default="http://localhost:3004",
        description="Base URL of the annotation API used by the REST store"
    )

    api_token: str | None = Field(
        default=None,
        description="Bearer token sent to the annotation API"
    )

    @computed_field
    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == "development"

    @computed_field
    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
