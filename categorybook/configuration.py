"""Mini README: Centralised configuration for categorybook.

Structure:
    * CategorybookSettings - pydantic-settings model describing runtime options.
    * get_settings - cached accessor for environment-aware settings.

Usage:
    Import ``get_settings`` to find the data directory backing the blob store,
    the storage key the category list lives under, and the interface bind
    address. Values come from ``CATEGORYBOOK_*`` environment variables or a
    local ``.env`` file and are validated once per process.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional, Union

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class CategorybookSettings(BaseSettings):
    """Runtime configuration for the categorybook application."""

    model_config = SettingsConfigDict(
        env_prefix="CATEGORYBOOK_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = Field(
        "development",
        description="Environment label; \"production\" turns off auto-reload in the launcher.",
    )
    data_directory: Path = Field(
        Path("data"),
        description="Directory holding the persisted category blob.",
    )
    storage_key: str = Field(
        "categories",
        min_length=1,
        description="Key the serialised category list is stored under.",
    )
    interface_host: str = Field(
        "127.0.0.1",
        description="Network interface for the web interface to bind to.",
    )
    interface_port: int = Field(
        8000,
        description="Port the web interface exposes.",
        ge=1,
        le=65535,
    )
    log_level: str = Field(
        "INFO",
        description="Root logging level applied by the launcher.",
    )

    @field_validator("data_directory", mode="before")
    @classmethod
    def _expand_path(cls, value: Optional[Union[str, Path]]) -> Path:
        """Ensure configured paths expand user directories and exist."""

        path = Path(value or "data").expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path


@lru_cache()
def get_settings() -> CategorybookSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return CategorybookSettings()
