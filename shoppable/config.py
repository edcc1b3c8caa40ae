"""Configuration management using pydantic-settings."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ShoppableSettings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SHOPPABLE_",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Catalog configuration
    catalog_resource: str = Field(
        default="products",
        description="Name of the catalog resource (without the .json suffix)",
    )

    catalog_dir: str | None = Field(
        default=None,
        description="Directory holding catalog resources. If unset, the bundled catalog is used.",
    )

    strict_catalog: bool = Field(
        default=False,
        description="Raise instead of falling back to an empty catalog when loading fails",
    )

    # Cart configuration
    cart_key: str = Field(
        default="itemsInShoppingCartArray",
        description="Settings key under which the cart entries are stored",
    )

    # Settings storage configuration
    store_backend: Literal["memory", "file", "database"] = Field(
        default="file",
        description="Backend used to persist settings (memory, file, database)",
    )

    settings_file: str = Field(
        default="~/.shoppable/settings.json",
        description="Path of the JSON settings file used by the file backend",
    )

    database_url: str = Field(
        default="sqlite:///shoppable.db",
        description="Database URL used by the database backend",
    )

    db_pool_size: int = Field(
        default=5,
        description="Database connection pool size",
        ge=1,
        le=20,
    )

    db_pool_overflow: int = Field(
        default=10,
        description="Database connection pool overflow",
        ge=0,
        le=50,
    )

    # Logging configuration
    log_level: str = Field(
        default="WARNING",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    log_format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log message format string",
    )


def get_settings() -> ShoppableSettings:
    """Get the application settings instance."""
    return ShoppableSettings()
