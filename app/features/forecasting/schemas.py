"""Pydantic schemas for forecast results and API contracts.

Result types are frozen: a ForecastResult is computed on demand from the
historical series and never mutated or persisted.
"""

from __future__ import annotations

from datetime import date as date_type
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

Trend = Literal["up", "down", "neutral"]
Reliability = Literal["high", "medium", "low"]


# =============================================================================
# Domain Types
# =============================================================================


class TimeSeriesPoint(BaseModel):
    """One observation (e.g. revenue for a month).

    Attributes:
        date: Calendar date of the observation.
        value: Observed value.
    """

    model_config = ConfigDict(frozen=True)

    date: date_type
    value: float


class ConfidenceBand(BaseModel):
    """Upper and lower bounds aligned point-by-point with the forecast."""

    model_config = ConfigDict(frozen=True)

    upper: list[TimeSeriesPoint] = Field(default_factory=list)
    lower: list[TimeSeriesPoint] = Field(default_factory=list)


class ForecastResult(BaseModel):
    """Forecast consumed by the dashboard charts.

    Attributes:
        forecast: Projected points, one per future month.
        confidence: ~80% band around the forecast.
        trend: Direction of the most recent observations.
        reliability: Qualitative trust rating of the forecast.
    """

    model_config = ConfigDict(frozen=True)

    forecast: list[TimeSeriesPoint] = Field(default_factory=list)
    confidence: ConfidenceBand = Field(default_factory=ConfidenceBand)
    trend: Trend = "neutral"
    reliability: Reliability = "low"


# =============================================================================
# API Request/Response Schemas
# =============================================================================


def _ensure_chronological(points: list[TimeSeriesPoint]) -> list[TimeSeriesPoint]:
    for previous, current in zip(points, points[1:], strict=False):
        if current.date <= previous.date:
            raise ValueError(
                "historical_data must be sorted by date with no duplicates "
                f"({current.date} follows {previous.date})"
            )
    return points


class ForecastRequest(BaseModel):
    """Request body for POST /forecasting/forecast.

    Attributes:
        historical_data: Observations in strictly ascending date order.
        periods: Months to forecast (defaults to forecast_default_periods).
    """

    model_config = ConfigDict(extra="forbid")

    historical_data: list[TimeSeriesPoint] = Field(
        ...,
        description="Historical observations, oldest first",
    )
    periods: int | None = Field(
        default=None,
        ge=1,
        description="Number of future months to forecast",
    )

    @field_validator("historical_data")
    @classmethod
    def validate_order(cls, v: list[TimeSeriesPoint]) -> list[TimeSeriesPoint]:
        """Reject unsorted or duplicated dates."""
        return _ensure_chronological(v)


class ForecastResponse(ForecastResult):
    """Response body for POST /forecasting/forecast.

    Attributes:
        n_observations: Number of historical points used.
        periods: Number of months forecast.
        duration_ms: Computation time in milliseconds.
    """

    n_observations: int
    periods: int
    duration_ms: float


class SeasonalityRequest(BaseModel):
    """Request body for POST /forecasting/seasonality."""

    model_config = ConfigDict(extra="forbid")

    historical_data: list[TimeSeriesPoint] = Field(
        ...,
        description="Monthly observations, oldest first",
    )

    @field_validator("historical_data")
    @classmethod
    def validate_order(cls, v: list[TimeSeriesPoint]) -> list[TimeSeriesPoint]:
        """Reject unsorted or duplicated dates."""
        return _ensure_chronological(v)


class SeasonalityResponse(BaseModel):
    """Response body for POST /forecasting/seasonality.

    Attributes:
        indices: Twelve seasonal multipliers, or empty below 12 observations.
        n_observations: Number of historical points used.
    """

    indices: list[float]
    n_observations: int
