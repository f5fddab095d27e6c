# src/app/settings.py
from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Compute project root: repo/ (two levels up from this file: repo/src/app/settings.py)
PROJECT_ROOT = Path(__file__).resolve().parents[2]
DATA_DIR = PROJECT_ROOT / "data"
DEFAULT_API_BASE_URL = "http://localhost:5001/api"


class Settings(BaseSettings):
    """
    Central application configuration.

    Sources (highest precedence first):
      1. Environment variables (prefixed with APP_, e.g. APP_API_BASE_URL)
      2. .env file at data/.env
      3. Defaults below
    """

    model_config = SettingsConfigDict(
        env_file=str(DATA_DIR / ".env"),
        env_prefix="APP_",
        extra="ignore",
    )

    # Backend
    api_base_url: str = Field(default=DEFAULT_API_BASE_URL, description="REST backend base URL")
    auth_token: SecretStr | None = Field(default=None, description="Bearer token for the backend")
    request_timeout: float = Field(default=30.0, gt=0, description="Per-request timeout (seconds)")

    # Workbench
    language: str = Field(default="en", description="Language requested for catalog rows")
    catalog_limit: int = Field(default=1000, ge=1, description="Parts requested per catalog load")
    auto_close_delay: float = Field(
        default=1.0, ge=0, description="Seconds the success message stays before the dialog closes"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Root level for app/core/infra loggers")

    # --- Validators / normalizers ---
    @field_validator("api_base_url", mode="before")
    @classmethod
    def _normalize_api_base_url(cls, v):
        """Trim trailing slashes and make sure the URL ends in /api."""
        if isinstance(v, str):
            base = v.strip().rstrip("/")
            if not base:
                return DEFAULT_API_BASE_URL
            return base if base.endswith("/api") else f"{base}/api"
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v

    # --- Helpers ---
    def token(self) -> str | None:
        return self.auth_token.get_secret_value() if self.auth_token else None


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Singleton-style accessor so imports are cheap and consistent system-wide.
    """
    return Settings()


if __name__ == "__main__":
    # Handy for a quick sanity check:
    s = get_settings()
    print("PROJECT_ROOT:", PROJECT_ROOT)
    print("api_base_url:", s.api_base_url)
    print("request_timeout:", s.request_timeout)
    print("language:", s.language, "catalog_limit:", s.catalog_limit)
    print("auth_token set?:", bool(s.auth_token))
