"""Configuration management for the user document store."""

import os
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


def _get_env_file_path() -> str:
    """Get the path to the .env file.

    Checks for ENV_FILE environment variable first, then defaults to
    .env in the repository root.

    Returns:
        Path to the .env file
    """
    env_file = os.getenv("ENV_FILE")
    if env_file:
        return env_file

    # This file is in src/users_common/config/store_config.py
    # So we go up 4 levels to get to the repository root
    current_file = Path(__file__)
    root_dir = current_file.parent.parent.parent.parent
    return str(root_dir / ".env")


class StoreConfig(BaseSettings):
    """Document store settings from environment variables."""

    # Backend selection
    user_store_backend: Literal["cosmos", "memory"] = "cosmos"

    # Cosmos DB
    azure_cosmosdb_endpoint: str | None = None
    azure_cosmosdb_key: str | None = None
    database_name: str = "users_crud_api"
    users_container: str = "users"
    users_partition_key: str = "users"

    model_config = SettingsConfigDict(
        env_file=_get_env_file_path(),
        case_sensitive=False,
        env_file_encoding="utf-8",
        env_prefix="",
        extra="ignore",
    )


def get_store_config() -> StoreConfig:
    """Get document store configuration.

    Returns:
        StoreConfig instance
    """
    return StoreConfig()
