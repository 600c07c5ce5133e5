"""Test fixtures for forecasting module."""

from datetime import date

import pandas as pd
import pytest

from app.features.forecasting.schemas import TimeSeriesPoint


def make_monthly_series(
    values: list[float], start: date = date(2024, 1, 1)
) -> list[TimeSeriesPoint]:
    """Build month-start points beginning at ``start``."""
    dates = pd.date_range(start=start, periods=len(values), freq="MS")
    return [
        TimeSeriesPoint(date=ts.date(), value=value)
        for ts, value in zip(dates, values, strict=True)
    ]


@pytest.fixture
def rising_series() -> list[TimeSeriesPoint]:
    """Jan-Mar 2024 revenue of 100, 110, 120."""
    return make_monthly_series([100.0, 110.0, 120.0])


@pytest.fixture
def stable_year_series() -> list[TimeSeriesPoint]:
    """Twelve months alternating 100/101 (coefficient of variation ~0.005)."""
    return make_monthly_series([100.0, 101.0] * 6)


@pytest.fixture
def volatile_series() -> list[TimeSeriesPoint]:
    """Six months alternating 1/100 (coefficient of variation ~0.98)."""
    return make_monthly_series([1.0, 100.0] * 3)


@pytest.fixture
def constant_two_years() -> list[float]:
    """24 monthly values of 50."""
    return [50.0] * 24


@pytest.fixture
def monthly_series():
    """Factory building month-start series from raw values."""
    return make_monthly_series
