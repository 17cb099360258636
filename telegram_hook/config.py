"""Environment-backed settings for the Telegram hook."""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Union

from pydantic import BaseModel, Field

DEFAULT_API_URL = "https://api.telegram.org"


def _env(name: str, fallback: str = "") -> str:
    return os.getenv(name, fallback).strip().strip("'\"")


class Settings(BaseModel):
    """Credentials and target for the hook, read from environment variables."""

    app_name: str = Field(default_factory=lambda: _env("TELEGRAM_APP_NAME", "app"))
    telegram_token: str = Field(default_factory=lambda: _env("TELEGRAM_TOKEN"))
    telegram_target: str = Field(default_factory=lambda: _env("TELEGRAM_TARGET"))
    telegram_api_url: str = Field(
        default_factory=lambda: _env("TELEGRAM_API_URL", DEFAULT_API_URL)
    )
    log_level: str = Field(default_factory=lambda: _env("LOG_LEVEL", "INFO"))

    @property
    def chat_id(self) -> Union[int, str]:
        """Chat target as an int when numeric, otherwise the raw ``@channel`` name."""
        try:
            return int(self.telegram_target)
        except ValueError:
            return self.telegram_target


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
