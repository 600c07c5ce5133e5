"""Forecasting service for the dashboard charts.

Applies configured defaults (horizon, smoothing factor, band width) and
logs each computation. The underlying functions are pure and synchronous.
"""

from __future__ import annotations

import time
from collections.abc import Sequence

import structlog

from app.core.config import get_settings
from app.core.exceptions import BadRequestError
from app.features.forecasting.forecaster import analyze_seasonality, generate_forecast
from app.features.forecasting.schemas import (
    ForecastResponse,
    SeasonalityResponse,
    TimeSeriesPoint,
)

logger = structlog.get_logger()


class ForecastingService:
    """Compute forecasts and seasonal indices with application settings."""

    def __init__(self) -> None:
        """Initialize the forecasting service."""
        self.settings = get_settings()

    def forecast(
        self,
        historical_data: Sequence[TimeSeriesPoint],
        periods: int | None = None,
    ) -> ForecastResponse:
        """Forecast the next months of a series.

        Args:
            historical_data: Observations sorted by date, oldest first.
            periods: Months to forecast; falls back to forecast_default_periods.

        Returns:
            ForecastResponse with the forecast and run metadata.

        Raises:
            BadRequestError: If periods exceeds forecast_max_periods.
        """
        horizon = periods if periods is not None else self.settings.forecast_default_periods
        if horizon > self.settings.forecast_max_periods:
            raise BadRequestError(
                message=(
                    f"periods={horizon} exceeds the maximum of "
                    f"{self.settings.forecast_max_periods}"
                ),
                details={"periods": horizon, "max_periods": self.settings.forecast_max_periods},
            )

        start_time = time.perf_counter()

        logger.info(
            "forecasting.forecast_started",
            n_observations=len(historical_data),
            periods=horizon,
        )

        result = generate_forecast(
            historical_data,
            horizon,
            alpha=self.settings.forecast_smoothing_alpha,
            z_score=self.settings.forecast_confidence_z,
        )

        duration_ms = (time.perf_counter() - start_time) * 1000

        if not result.forecast:
            logger.warning(
                "forecasting.insufficient_history",
                n_observations=len(historical_data),
            )

        logger.info(
            "forecasting.forecast_completed",
            n_observations=len(historical_data),
            periods=horizon,
            trend=result.trend,
            reliability=result.reliability,
            duration_ms=duration_ms,
        )

        return ForecastResponse(
            **result.model_dump(),
            n_observations=len(historical_data),
            periods=horizon,
            duration_ms=duration_ms,
        )

    def seasonality(self, historical_data: Sequence[TimeSeriesPoint]) -> SeasonalityResponse:
        """Seasonal indices for a monthly series."""
        indices = analyze_seasonality(historical_data)

        logger.info(
            "forecasting.seasonality_completed",
            n_observations=len(historical_data),
            has_indices=bool(indices),
        )

        return SeasonalityResponse(indices=indices, n_observations=len(historical_data))
