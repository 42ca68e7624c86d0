"""Configuration management for the Helium API."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from helium_common.config.store_config import get_env_file_path


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Application
    app_name: str = "helium"
    app_version: str = "1.0.0"
    environment: str = "development"
    log_level: str = "info"

    # API
    api_host: str = "localhost"
    api_port: int = 4120

    # UI
    ui_url: str | None = None

    # Observability
    metrics_enabled: bool = True
    docs_enabled: bool = True

    # 500 responses carry the raw store error text when true
    expose_store_errors: bool = True

    model_config = SettingsConfigDict(
        env_file=get_env_file_path(),
        case_sensitive=False,
        env_file_encoding="utf-8",
        extra="ignore",
    )


def get_settings() -> Settings:
    """Get application settings."""
    return Settings()
