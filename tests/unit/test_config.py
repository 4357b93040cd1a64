"""Unit tests for configuration module."""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from src.core.config import Settings, get_settings

REQUIRED_ENV = {
    "SUPABASE_URL": "https://test.supabase.co",
    "SUPABASE_SECRET_KEY": "test-secret",
}


class TestSettings:
    """Tests for Settings class."""

    def test_settings_loads_from_environment(self) -> None:
        """Test that Settings loads values from environment variables."""
        env_vars = {
            **REQUIRED_ENV,
            "APP_NAME": "test-app",
            "APP_ENV": "testing",
            "DEBUG": "true",
            "PORT": "9000",
            "PIX_PROVIDER": "syncpay",
            "PUBLIC_BASE_URL": "https://checkout.example.com",
            "TRIBOPAY_API_KEY": "tp_live",
            "SYNCPAY_CLIENT_ID": "client",
            "SYNCPAY_CLIENT_SECRET": "secret",
            "WEBHOOK_SECRET": "hook",
            "ADMIN_API_KEY": "admin",
        }

        with patch.dict(os.environ, env_vars, clear=False):
            settings = Settings(_env_file=None)

            assert settings.app_name == "test-app"
            assert settings.app_env == "testing"
            assert settings.debug is True
            assert settings.port == 9000
            assert settings.pix_provider == "syncpay"
            assert settings.public_base_url == "https://checkout.example.com"
            assert settings.tribopay_api_key == "tp_live"
            assert settings.syncpay_client_id == "client"
            assert settings.syncpay_client_secret == "secret"
            assert settings.webhook_secret == "hook"
            assert settings.admin_api_key == "admin"

    def test_settings_gateway_defaults(self) -> None:
        """Test default gateway endpoints and channel tuning."""
        with patch.dict(os.environ, REQUIRED_ENV, clear=True):
            settings = Settings(_env_file=None)

            assert settings.pix_provider == "tribopay"
            assert settings.tribopay_base_url == "https://api.tribopay.com.br"
            assert settings.pushinpay_production_url == "https://api.pushinpay.com.br/api"
            assert settings.pushinpay_sandbox_url == "https://api-sandbox.pushinpay.com.br/api"
            assert settings.syncpay_base_url == "https://api.syncpayments.com.br"
            assert settings.webhook_secret == ""
            assert settings.admin_api_key == ""
            assert settings.order_events_keepalive_seconds == 15.0
            assert settings.order_events_buffer_size == 16

    def test_settings_rejects_unknown_provider(self) -> None:
        """Test that PIX_PROVIDER must name a supported gateway."""
        with patch.dict(os.environ, {**REQUIRED_ENV, "PIX_PROVIDER": "stripe"}, clear=True):
            with pytest.raises(ValidationError):
                Settings(_env_file=None)

    def test_settings_cors_origins_list(self) -> None:
        """Test that CORS origins are correctly parsed into a list."""
        env_vars = {
            **REQUIRED_ENV,
            "CORS_ORIGINS": "http://localhost:3000, http://example.com , ,http://test.com",
        }

        with patch.dict(os.environ, env_vars, clear=False):
            origins = Settings(_env_file=None).cors_origins_list

            assert origins == ["http://localhost:3000", "http://example.com", "http://test.com"]

    def test_settings_is_production_property(self) -> None:
        """Test the is_production property."""
        with patch.dict(os.environ, {**REQUIRED_ENV, "APP_ENV": "production"}, clear=False):
            assert Settings(_env_file=None).is_production is True

        with patch.dict(os.environ, {**REQUIRED_ENV, "APP_ENV": "development"}, clear=False):
            assert Settings(_env_file=None).is_production is False

    def test_settings_requires_supabase(self) -> None:
        """Test that Settings raises error when Supabase settings are missing."""
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValidationError):
                Settings(_env_file=None)


class TestGetSettings:
    """Tests for get_settings function."""

    def test_get_settings_returns_cached_instance(self) -> None:
        """Test that get_settings returns the same cached instance."""
        get_settings.cache_clear()

        settings1 = get_settings()
        settings2 = get_settings()

        assert settings1 is settings2

        get_settings.cache_clear()
