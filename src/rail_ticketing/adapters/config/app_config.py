"""12-factor configuration adapter using environment variables and a .env file."""

import logging

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from rail_ticketing.domain.codecs import DateOrder


class AppConfig(BaseSettings):
    """Application configuration following 12-factor principles."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="RAIL_TICKETING_",
        case_sensitive=False,
        extra="ignore",
    )

    # Ticketing API configuration
    api_base_url: str = Field(
        default="http://localhost:5222",
        description="Base URL of the ticketing REST API",
    )
    search_api_base_url: str | None = Field(
        default=None,
        description="Base URL for connection search, if served separately (defaults to api_base_url)",
    )
    api_token: str | None = Field(
        default=None,
        description="Bearer token sent with every API request",
    )
    request_timeout_seconds: float = Field(
        default=15, gt=0, description="Timeout for API requests in seconds"
    )
    search_page_timeout_seconds: float = Field(
        default=30, gt=0, description="Timeout for one page of connection search in seconds"
    )
    tickets_page_size: int = Field(
        default=10, ge=1, description="Number of tickets requested per page"
    )

    # Date handling
    slash_date_order: DateOrder = Field(
        default=DateOrder.MONTH_FIRST,
        description="How to read slash dates like 05/06/2024: 'month_first' or 'day_first'",
    )

    # Local collaborators used by the CLI
    user_id: str | None = Field(default=None, description="Signed-in user id")
    user_email: str | None = Field(default=None, description="Signed-in user's email address")
    latitude: float | None = Field(default=None, description="Current latitude for nearest station")
    longitude: float | None = Field(
        default=None, description="Current longitude for nearest station"
    )

    log_level: str = Field(default="INFO", description="Logging level name")

    @field_validator("slash_date_order", mode="before")
    @classmethod
    def validate_slash_date_order(cls, v: object) -> object:
        """Accept 'month_first'/'day_first' in any case, with dashes or underscores."""
        if isinstance(v, str):
            normalized = v.strip().lower().replace("-", "_")
            if normalized not in ("month_first", "day_first"):
                raise ValueError("slash_date_order must be either 'month_first' or 'day_first'")
            return normalized
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a standard logging level name."""
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"log_level must be a logging level name, got {v!r}")
        return level

    @field_validator("api_base_url", "search_api_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str | None) -> str | None:
        return v.rstrip("/") if v else v

    def search_base_url(self) -> str:
        """Base URL for connection search, falling back to the main API."""
        return self.search_api_base_url or self.api_base_url
