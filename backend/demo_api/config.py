"""
SDLC Demo API — Application Configuration
==========================================

What:  Centralized configuration management using Pydantic Settings.
Why:   Type-safe environment variable loading with validation on startup.
       A non-positive rate-limit window or quota fails at construction instead
       of running with undefined semantics.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a module-level `settings` object.
Who:   Imported by the app factory and the CLI launcher.
When:  Loaded once at module import time; tests build their own instances.

Design Decision:
    Every value is supplied at construction time. There is no runtime
    reconfiguration: the app factory copies what it needs into the
    accounting subsystem when the app is created.
"""

from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have sensible defaults for development, so the demo
    runs with no .env file at all.
    """

    # ── Service ───────────────────────────────────────────────────────────
    app_name: str = Field(default="SDLC Automation Demo API")

    # What: Deployment environment name (development, test, staging, production)
    # Effect: "development" adds stack traces to 500 responses;
    #         "production" disables the analytics reset endpoint
    environment: str = Field(default="development")

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=3000, ge=1, le=65535)

    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── CORS ──────────────────────────────────────────────────────────────
    # Format: Comma-separated origins, "*" for any
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Rate Limiting ─────────────────────────────────────────────────────
    # What: Per-client fixed window quota
    # Default: 100 requests per 60 second window
    rate_limit_window_ms: int = Field(default=60_000, gt=0)
    rate_limit_max_requests: int = Field(default=100, gt=0)
    rate_limit_message: str = Field(default="Too many requests, please try again later")

    # ── Request Analytics ─────────────────────────────────────────────────
    # What: How many completed requests the in-memory log keeps (oldest evicted first)
    analytics_capacity: int = Field(default=1000, gt=0)

    # What: Requests slower than this are logged as warnings
    slow_request_threshold_ms: int = Field(default=1000, ge=0)

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


# Module-level instance used by the CLI and by `demo_api.main:app`.
# Tests pass their own Settings to create_app() instead of patching this one.
settings = Settings()
