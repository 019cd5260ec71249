# tests/test_config.py
"""Tests for environment settings and the analytics config built from them."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from plancompare.config import Settings
from plancompare.services.analytics import AnalyticsConfig


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self):
        s = Settings(_env_file=None)

        assert s.mfapi_base_url == "https://api.mfapi.in"
        assert s.risk_free_rate == Decimal("0.06")
        assert s.trading_days_per_year == 252

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("RISK_FREE_RATE", "0.07")
        monkeypatch.setenv("LOG_FORMAT", "json")

        s = Settings(_env_file=None)

        assert s.risk_free_rate == Decimal("0.07")
        assert s.log_format == "json"

    def test_trailing_slash_stripped(self):
        assert Settings(_env_file=None, mfapi_base_url="https://example.org/").mfapi_base_url == "https://example.org"

    def test_non_http_url_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, mfapi_base_url="ftp://example.org")

    def test_production_requires_https(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, environment="production", mfapi_base_url="http://example.org")

    def test_environment_flags(self):
        assert Settings(_env_file=None, environment="production").is_production
        assert Settings(_env_file=None, environment="test").is_test

    def test_risk_free_rate_bounds(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, risk_free_rate=Decimal("1.5"))


class TestAnalyticsConfigFromSettings:
    """Tests for AnalyticsConfig.from_settings()."""

    def test_copies_assumptions(self):
        s = Settings(_env_file=None, risk_free_rate=Decimal("0.05"), trading_days_per_year=250)

        config = AnalyticsConfig.from_settings(s)

        assert config.risk_free_rate == Decimal("0.05")
        assert config.trading_days_per_year == 250
        assert config.min_snapshots_for_alpha == 7
