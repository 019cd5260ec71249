# plancompare/config.py
"""
Engine settings, read from the environment (or a .env at the project root).

Groups:
- ENVIRONMENT                           development | test | production
- LOG_LEVEL, LOG_FORMAT                 consumed by utils.logging.setup_logging
- MFAPI_BASE_URL, MFAPI_TIMEOUT_SECONDS NAV history provider
- RISK_FREE_RATE, TRADING_DAYS_PER_YEAR analytics assumptions

Calculators never import this module. The comparison service turns the
analytics group into an AnalyticsConfig (AnalyticsConfig.from_settings)
and hands that down explicitly, so tests can pin assumptions without
touching the environment.

Usage:
    from plancompare.config import settings

    provider = MFApiProvider(base_url=settings.mfapi_base_url)
"""
from decimal import Decimal
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_ENV_FILE = Path(__file__).resolve().parent.parent / ".env"


class Settings(BaseSettings):
    """
    Environment-driven settings for the comparison engine.

    Field names map to upper-case environment variables
    (mfapi_base_url <- MFAPI_BASE_URL). Unknown variables are ignored.
    """

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE) if _ENV_FILE.exists() else None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: Literal["development", "test", "production"] = "development"

    # =========================================================================
    # LOGGING
    # =========================================================================
    log_level: str = Field(default="INFO", description="Root logger level name")
    log_format: Literal["text", "json"] = Field(
        default="text",
        description="'text' for humans, 'json' for log shippers",
    )

    # =========================================================================
    # NAV PROVIDER
    # =========================================================================
    mfapi_base_url: str = Field(
        default="https://api.mfapi.in",
        description="Root of the mfapi.in compatible API (search and /mf/{code})",
    )
    mfapi_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        le=120,
        description="Per-request HTTP timeout",
    )

    # =========================================================================
    # ANALYTICS
    # =========================================================================
    risk_free_rate: Decimal = Field(
        default=Decimal("0.06"),
        ge=Decimal("0"),
        lt=Decimal("1"),
        description="Annual rate, as a fraction, subtracted in Jensen's alpha",
    )
    trading_days_per_year: int = Field(
        default=252,
        ge=1,
        le=366,
        description="Square-root factor that annualizes daily volatility",
    )

    @field_validator("mfapi_base_url")
    @classmethod
    def normalize_base_url(cls, value: str) -> str:
        """Require an http(s) scheme; drop trailing slashes so paths join cleanly."""
        if not value.lower().startswith(("http://", "https://")):
            raise ValueError(f"MFAPI_BASE_URL must be an http(s) URL, got: {value}")
        return value.rstrip("/")

    @model_validator(mode="after")
    def enforce_production_rules(self) -> "Settings":
        """Production traffic to the NAV provider must be encrypted."""
        if self.is_production and not self.mfapi_base_url.lower().startswith("https://"):
            raise ValueError("Production environment requires an https MFAPI_BASE_URL.")
        return self

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_test(self) -> bool:
        return self.environment == "test"


settings = Settings()
