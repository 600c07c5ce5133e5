"""Forecast orchestrator for dashboard revenue charts.

Combines the smoothing engine with a coarse trend heuristic, a
standard-deviation confidence band and a reliability rating. This is a
deliberately simple model: the trend is not projected into the values and
the band assumes normally distributed residuals.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from datetime import date as date_type

import pandas as pd

from app.features.forecasting.algorithms import (
    calculate_seasonality,
    exponential_smoothing,
    mean,
    standard_deviation,
)
from app.features.forecasting.schemas import (
    ConfidenceBand,
    ForecastResult,
    Reliability,
    TimeSeriesPoint,
    Trend,
)

SMOOTHING_ALPHA = 0.3
CONFIDENCE_Z = 1.28  # two-sided ~80%
TREND_WINDOW = 3

MIN_FORECAST_POINTS = 2
MIN_SEASONALITY_POINTS = 12
MIN_RELIABLE_POINTS = 6
HIGH_RELIABILITY_POINTS = 12
HIGH_VARIATION_CV = 0.5
LOW_VARIATION_CV = 0.2


def classify_trend(values: Sequence[float]) -> Trend:
    """Compare the latest value with the oldest of the last three."""
    recent = list(values[-TREND_WINDOW:])
    if not recent:
        return "neutral"
    if recent[-1] > recent[0]:
        return "up"
    if recent[-1] < recent[0]:
        return "down"
    return "neutral"


def coefficient_of_variation(values: Sequence[float]) -> float:
    """std / mean of the values; infinite when the mean is zero."""
    avg = mean(values)
    if avg == 0:
        return math.inf
    return standard_deviation(values) / avg


def assess_reliability(n_points: int, cv: float) -> Reliability:
    """Rate forecast trustworthiness from sample size and variability.

    Args:
        n_points: Number of historical observations.
        cv: Coefficient of variation of the observations.

    Returns:
        "low" below 6 points or when cv > 0.5, "high" from 12 points with
        cv < 0.2, otherwise "medium".
    """
    if n_points < MIN_RELIABLE_POINTS:
        return "low"
    if cv > HIGH_VARIATION_CV:
        return "low"
    if n_points >= HIGH_RELIABILITY_POINTS and cv < LOW_VARIATION_CV:
        return "high"
    return "medium"


def add_months(start: date_type, months: int) -> date_type:
    """Shift a date by whole calendar months, clamping to the month end.

    2024-01-31 + 1 month -> 2024-02-29.
    """
    shifted: pd.Timestamp = pd.Timestamp(start) + pd.DateOffset(months=months)
    return shifted.date()


def generate_forecast(
    historical_data: Sequence[TimeSeriesPoint],
    periods: int = 3,
    *,
    alpha: float = SMOOTHING_ALPHA,
    z_score: float = CONFIDENCE_Z,
) -> ForecastResult:
    """Forecast the next ``periods`` months from a chronological series.

    Fewer than two observations never raise: the result is empty with a
    neutral trend and low reliability. Every returned value is floored at
    zero since the series represents money or counts.

    Args:
        historical_data: Observations sorted by date, oldest first.
        periods: Number of future months.
        alpha: Smoothing factor for the level.
        z_score: Width of the confidence band in standard deviations.

    Returns:
        ForecastResult with forecast, confidence band, trend and reliability.
    """
    if len(historical_data) < MIN_FORECAST_POINTS:
        return ForecastResult(
            forecast=[],
            confidence=ConfidenceBand(upper=[], lower=[]),
            trend="neutral",
            reliability="low",
        )

    values = [point.value for point in historical_data]
    last_date = historical_data[-1].date

    trend = classify_trend(values)
    projected = exponential_smoothing(values, alpha, periods)

    std = standard_deviation(values)
    margin = z_score * std
    dates = [add_months(last_date, step) for step in range(1, len(projected) + 1)]

    def _points(series: Sequence[float]) -> list[TimeSeriesPoint]:
        return [
            TimeSeriesPoint(date=when, value=max(0.0, float(value)))
            for when, value in zip(dates, series, strict=True)
        ]

    return ForecastResult(
        forecast=_points(projected),
        confidence=ConfidenceBand(
            upper=_points(projected + margin),
            lower=_points(projected - margin),
        ),
        trend=trend,
        reliability=assess_reliability(len(values), coefficient_of_variation(values)),
    )


def analyze_seasonality(data: Sequence[TimeSeriesPoint]) -> list[float]:
    """Seasonal indices for a monthly series; empty below 12 observations."""
    if len(data) < MIN_SEASONALITY_POINTS:
        return []
    return [float(index) for index in calculate_seasonality([p.value for p in data])]
