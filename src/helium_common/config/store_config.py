"""Configuration management for the document store."""

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


def get_env_file_path() -> str:
    """Get the path to the .env file.

    Checks for ENV_FILE environment variable first, then defaults to
    .env in the project root.

    Returns:
        Path to the .env file
    """
    env_file = os.getenv("ENV_FILE")
    if env_file:
        return env_file

    # This file is in src/helium_common/config/store_config.py
    # So we go up 4 levels to get to the project root
    current_file = Path(__file__)
    project_dir = current_file.parent.parent.parent.parent
    return str(project_dir / ".env")


class StoreConfig(BaseSettings):
    """Cosmos DB connection settings from environment variables."""

    azure_cosmosdb_endpoint: str | None = None
    azure_cosmosdb_key: str | None = None
    cosmos_database: str = "imdb"
    cosmos_collection: str = "movies"

    # Fan-out option passed with every list/count query
    cosmos_cross_partition_query: bool = True

    model_config = SettingsConfigDict(
        env_file=get_env_file_path(),
        case_sensitive=False,
        env_file_encoding="utf-8",
        env_prefix="",
        extra="ignore",
    )

    @property
    def use_managed_identity(self) -> bool:
        """Managed identity is used whenever no access key is configured."""
        return not self.azure_cosmosdb_key


def get_store_config() -> StoreConfig:
    """Get document store configuration.

    Returns:
        StoreConfig instance
    """
    return StoreConfig()
