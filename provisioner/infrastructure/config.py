"""Application configuration.

Loads settings from environment variables with sensible defaults.
"""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API
    api_version: str = "0.1.0"
    debug: bool = False

    # Database
    database_url: str = "sqlite+aiosqlite:///./provisioner.db"

    # Shopify Admin GraphQL
    shopify_api_version: str = "2025-07"
    shopify_timeout: float = 20.0
    shopify_connect_timeout: float = 5.0

    # Pipeline
    inventory_strategy: Literal["bulk", "activate"] = "bulk"
    failure_policy: Literal["leave", "delete"] = "leave"

    # Fulfillment location created on first use per shop
    default_location_name: str = "New York Shop"
    default_location_address1: str = "1 Main St"
    default_location_city: str = "New York"
    default_location_province_code: str = "NY"
    default_location_country_code: str = "US"
    default_location_zip: str = "10001"

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
