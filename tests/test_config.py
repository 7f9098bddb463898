"""Tests for application settings."""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from provisioner.infrastructure.config import Settings


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self) -> None:
        """Defaults describe a local SQLite setup."""
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(_env_file=None)

        assert settings.database_url == "sqlite+aiosqlite:///./provisioner.db"
        assert settings.inventory_strategy == "bulk"
        assert settings.failure_policy == "leave"
        assert settings.shopify_timeout == 20.0
        assert settings.default_location_zip == "10001"

    def test_environment_overrides(self) -> None:
        """Settings are read from environment variables."""
        env = {
            "INVENTORY_STRATEGY": "activate",
            "FAILURE_POLICY": "delete",
            "SHOPIFY_API_VERSION": "2025-10",
            "DATABASE_URL": "postgresql+asyncpg://provisioner@localhost/provisioner",
        }
        with patch.dict(os.environ, env, clear=True):
            settings = Settings(_env_file=None)

        assert settings.inventory_strategy == "activate"
        assert settings.failure_policy == "delete"
        assert settings.shopify_api_version == "2025-10"
        assert settings.database_url.startswith("postgresql+asyncpg://")

    def test_unknown_strategy_rejected(self) -> None:
        """Only the two inventory strategies are accepted."""
        with patch.dict(os.environ, {"INVENTORY_STRATEGY": "sometimes"}, clear=True):
            with pytest.raises(ValidationError):
                Settings(_env_file=None)
