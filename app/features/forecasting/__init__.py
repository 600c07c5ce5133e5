"""Forecasting module for dashboard revenue projections.

Exports:
    Algorithms:
        - mean, standard_deviation: Population statistics
        - exponential_smoothing: Flat single-exponential smoothing forecast
        - calculate_seasonality: Monthly ratio-to-moving-average indices

    Orchestrator:
        - generate_forecast: Forecast with confidence band, trend, reliability
        - analyze_seasonality: Seasonal indices for TimeSeriesPoint input

    Schemas:
        - TimeSeriesPoint, ConfidenceBand, ForecastResult
        - ForecastRequest, ForecastResponse
        - SeasonalityRequest, SeasonalityResponse

    Service:
        - ForecastingService: Applies settings and logs computations
"""

from app.features.forecasting.algorithms import (
    calculate_seasonality,
    exponential_smoothing,
    mean,
    standard_deviation,
)
from app.features.forecasting.forecaster import (
    analyze_seasonality,
    assess_reliability,
    classify_trend,
    generate_forecast,
)
from app.features.forecasting.schemas import (
    ConfidenceBand,
    ForecastRequest,
    ForecastResponse,
    ForecastResult,
    SeasonalityRequest,
    SeasonalityResponse,
    TimeSeriesPoint,
)
from app.features.forecasting.service import ForecastingService

__all__ = [
    # Schemas
    "ConfidenceBand",
    "ForecastRequest",
    "ForecastResponse",
    "ForecastResult",
    # Service
    "ForecastingService",
    "SeasonalityRequest",
    "SeasonalityResponse",
    "TimeSeriesPoint",
    # Orchestrator
    "analyze_seasonality",
    "assess_reliability",
    # Algorithms
    "calculate_seasonality",
    "classify_trend",
    "exponential_smoothing",
    "generate_forecast",
    "mean",
    "standard_deviation",
]
