"""Application configuration via Pydantic Settings v2."""

from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = "OfferInsights"
    app_env: Literal["development", "testing", "staging", "production"] = "development"
    debug: bool = False

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "json"

    # API
    api_host: str = "0.0.0.0"  # noqa: S104
    api_port: int = 8123

    # Forecasting
    forecast_default_periods: int = 3
    forecast_max_periods: int = 36
    forecast_smoothing_alpha: float = 0.3
    forecast_confidence_z: float = 1.28  # ~80% two-sided

    # VAT validation (VIES)
    vies_service_url: str = "http://ec.europa.eu/taxation_customs/vies/services/checkVatService"
    vat_timeout_seconds: float = 10.0
    vat_max_retries: int = 3
    vat_retry_delay_seconds: float = 1.0

    @field_validator("forecast_smoothing_alpha")
    @classmethod
    def validate_smoothing_alpha(cls, v: float) -> float:
        """Validate the smoothing factor lies in (0, 1].

        Args:
            v: Smoothing factor.

        Returns:
            Validated smoothing factor.

        Raises:
            ValueError: If outside (0, 1].
        """
        if not 0 < v <= 1:
            raise ValueError(f"forecast_smoothing_alpha must be in (0, 1], got {v}")
        return v

    @field_validator("vat_max_retries")
    @classmethod
    def validate_max_retries(cls, v: int) -> int:
        """Require at least one attempt against VIES."""
        if v < 1:
            raise ValueError(f"vat_max_retries must be >= 1, got {v}")
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env == "development"

    @property
    def is_testing(self) -> bool:
        """Check if running in testing mode."""
        return self.app_env == "testing"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.app_env == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings singleton."""
    return Settings()
