"""Forecasting API routes for the dashboard charts."""

from fastapi import APIRouter, status

from app.core.logging import get_logger
from app.features.forecasting.schemas import (
    ForecastRequest,
    ForecastResponse,
    SeasonalityRequest,
    SeasonalityResponse,
)
from app.features.forecasting.service import ForecastingService

logger = get_logger(__name__)

router = APIRouter(prefix="/forecasting", tags=["forecasting"])


@router.post(
    "/forecast",
    response_model=ForecastResponse,
    status_code=status.HTTP_200_OK,
    summary="Forecast the next months of a series",
    description="""
Forecast a monthly series (e.g. closed-offer revenue) for the dashboard.

**Model:** single-exponential smoothing (alpha=0.3) with a flat forecast.

**Confidence band:** forecast +/- 1.28 population standard deviations
(~80%), floored at zero.

**Trend:** direction between the oldest and newest of the last three points.

**Reliability:**
- `low`: fewer than 6 points or coefficient of variation > 0.5
- `high`: at least 12 points and coefficient of variation < 0.2
- `medium`: otherwise

Fewer than 2 points yield an empty forecast with `neutral` trend and `low`
reliability (not an error).
""",
)
async def forecast(request: ForecastRequest) -> ForecastResponse:
    """Forecast a single series.

    Args:
        request: Historical observations and horizon.

    Returns:
        Forecast with confidence band, trend and reliability.
    """
    logger.info(
        "forecasting.forecast_request_received",
        n_observations=len(request.historical_data),
        periods=request.periods,
    )

    service = ForecastingService()
    return service.forecast(request.historical_data, request.periods)


@router.post(
    "/seasonality",
    response_model=SeasonalityResponse,
    status_code=status.HTTP_200_OK,
    summary="Estimate monthly seasonal indices",
    description="""
Ratio-to-centered-moving-average seasonal indices (13-point window).

Returns 12 multipliers (1.0 = neutral) or an empty list when fewer than
12 observations are supplied.
""",
)
async def seasonality(request: SeasonalityRequest) -> SeasonalityResponse:
    """Estimate seasonal indices for a monthly series."""
    service = ForecastingService()
    return service.seasonality(request.historical_data)
