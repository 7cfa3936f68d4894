"""
Larder - Configuration and settings.

Settings are read from the environment and an optional .env file. The
matching engine itself needs no configuration; Supabase credentials are only
required by the data-access layer and the CLI commands that use it.
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class LarderSettings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Supabase
    supabase_url: str | None = None
    supabase_anon_key: str | None = None

    # Application
    larder_env: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Dev user for CLI commands run without --user-id
    dev_user_id: str = "00000000-0000-0000-0000-000000000002"

    # Dietary filtering ships dark until the product turns it on
    dietary_feature_enabled: bool = False

    @property
    def is_development(self) -> bool:
        return self.larder_env == "development"

    @property
    def has_supabase(self) -> bool:
        return bool(self.supabase_url and self.supabase_anon_key)


@lru_cache
def get_settings() -> LarderSettings:
    """Get cached settings instance."""
    return LarderSettings()


class _SettingsProxy:
    """Lazy proxy for settings to avoid loading .env at import time."""

    _instance: LarderSettings | None = None

    def __getattr__(self, name: str):
        if self._instance is None:
            self._instance = get_settings()
        return getattr(self._instance, name)


settings = _SettingsProxy()
