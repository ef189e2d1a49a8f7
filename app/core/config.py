"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Supabase credentials are optional so the app can start
(e.g. for health checks) before the record store is configured.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env."""

    # App
    app_name: str = "campus-search"
    app_version: str = "1.0.0"
    debug: bool = False

    # Record store (Supabase PostgREST)
    supabase_url: str = ""
    supabase_key: SecretStr = SecretStr("")
    supabase_timeout_seconds: float = 30.0

    # Search
    # Per-adapter timeout; an adapter that exceeds it contributes no results.
    search_adapter_timeout_seconds: float | None = 10.0
    # Max rows per collection per round (None = store default).
    search_result_limit: int | None = None

    # CORS
    allowed_origins: str = "http://localhost:5173,http://localhost:8080"

    # OpenTelemetry
    telemetry_enabled: bool = False
    telemetry_exporter: str = "console"
    telemetry_otlp_endpoint: str | None = None
    telemetry_sample_rate: float = 1.0
    telemetry_environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @property
    def store_configured(self) -> bool:
        return bool(self.supabase_url)

    @model_validator(mode="after")
    def validate_store_and_search(self) -> "Settings":
        """Validate record store credentials and search limits.

        - SUPABASE_URL, when set, must be http(s) and requires SUPABASE_KEY.
        - Timeouts and limits must be positive when set.
        """
        if self.supabase_url:
            if not self.supabase_url.startswith(("http://", "https://")):
                raise ValueError(
                    f"SUPABASE_URL must start with http:// or https://, got: {self.supabase_url!r}"
                )
            if not self.supabase_key.get_secret_value():
                raise ValueError(
                    "SUPABASE_KEY is required when SUPABASE_URL is set. "
                    "Use the project's anon (public) key."
                )
        if (
            self.search_adapter_timeout_seconds is not None
            and self.search_adapter_timeout_seconds <= 0
        ):
            raise ValueError("SEARCH_ADAPTER_TIMEOUT_SECONDS must be positive")
        if self.search_result_limit is not None and self.search_result_limit < 1:
            raise ValueError("SEARCH_RESULT_LIMIT must be at least 1")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
