"""
Configuration for the admin dashboard service.

Uses pydantic-settings for environment variable loading. Every setting
can be overridden with an ADMINDASH_-prefixed variable, e.g.
ADMINDASH_PORT=9000 or ADMINDASH_MAX_LIMIT=50.
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Service configuration loaded from environment."""

    # Server
    host: str = Field(default="0.0.0.0", description="Bind host")
    port: int = Field(default=8000, description="Bind port")

    # CORS settings
    cors_origins: list[str] = Field(
        default=["http://localhost:3000"],
        description="Allowed CORS origins",
    )

    # Pagination defaults
    default_page: int = Field(default=1, ge=1, description="Page used when none is given")
    default_limit: int = Field(default=10, ge=1, description="Default items per page")
    max_limit: int = Field(default=100, ge=1, description="Maximum items per page")

    # Dashboard
    dashboard_limit: int = Field(default=100, ge=1, description="Records aggregated per kind")
    recent_limit: int = Field(default=5, ge=0, description="Recent products shown")

    # Load the demo users/products at startup
    seed_data: bool = Field(default=True, description="Seed stores with demo records")

    # Logging
    log_level: str = Field(default="INFO", description="Root log level")
    log_format: Literal["text", "json"] = Field(
        default="text", description="Log format: text or json"
    )

    model_config = {"env_prefix": "ADMINDASH_"}
