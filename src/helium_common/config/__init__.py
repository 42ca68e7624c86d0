"""Configuration package."""

from helium_common.config.store_config import StoreConfig, get_env_file_path, get_store_config

__all__ = ["StoreConfig", "get_env_file_path", "get_store_config"]
