"""
Tests for environment configuration and validation
"""

import pytest
from pydantic import ValidationError

from core.config import Settings, get_settings

pytestmark = [pytest.mark.unit, pytest.mark.critical]


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Clear the settings cache before each test"""
    get_settings.cache_clear()


class TestSettings:
    """Test settings defaults and environment overrides"""

    def test_default_settings(self, monkeypatch):
        """Test defaults when no environment is configured"""
        for name in ("ENVIRONMENT", "REPORT_BRAND", "CURRENCY_CODE", "PDF_DEVICE_SCALE_FACTOR"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.environment == "development"
        assert settings.is_development is True
        assert settings.report_brand == "Marketplace"
        assert settings.currency_code == "BDT"
        assert settings.pdf_page_format == "A4"
        assert settings.pdf_margin == "0.5in"
        assert settings.pdf_landscape is False
        assert settings.pdf_device_scale_factor == 1.5

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("REPORT_BRAND", "Haat Bazaar")
        monkeypatch.setenv("PDF_LANDSCAPE", "true")
        monkeypatch.setenv("ENVIRONMENT", "production")

        settings = Settings(_env_file=None)

        assert settings.report_brand == "Haat Bazaar"
        assert settings.pdf_landscape is True
        assert settings.is_production is True

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()


class TestSettingsValidation:
    """Test rejected configuration values"""

    def test_invalid_environment(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, environment="qa")

    def test_invalid_log_format(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_format="xml")

    def test_scale_factor_minimum(self):
        with pytest.raises(ValidationError) as exc_info:
            Settings(_env_file=None, pdf_device_scale_factor=1.0)

        assert "at least 1.5" in str(exc_info.value)

        assert Settings(_env_file=None, pdf_device_scale_factor=2.0).pdf_device_scale_factor == 2.0
