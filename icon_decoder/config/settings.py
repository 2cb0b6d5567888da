"""Настройки декодера иконок, загружаемые из переменных окружения."""
from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Параметры по умолчанию для выбора, декодирования и логирования."""

    model_config = SettingsConfigDict(
        env_prefix="ICON_DECODER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # Selection
    default_target_size: int = Field(default=64, gt=0)
    scale_to_target: bool = False

    # decoded image sanity limit (DIB and PNG), px per side
    max_dib_dimension: int = Field(default=4096, gt=0)

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def default_settings() -> Settings:
    """Значения по умолчанию без чтения окружения и `.env`."""
    return Settings.model_construct()
