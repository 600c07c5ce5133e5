"""Tests for forecasting schemas."""

from datetime import date

import pytest
from pydantic import ValidationError

from app.features.forecasting.schemas import (
    ConfidenceBand,
    ForecastRequest,
    ForecastResult,
    SeasonalityRequest,
    TimeSeriesPoint,
)


class TestTimeSeriesPoint:
    """Tests for TimeSeriesPoint."""

    def test_parses_iso_date(self):
        """Test ISO strings are coerced to dates."""
        point = TimeSeriesPoint.model_validate({"date": "2024-03-01", "value": 12})

        assert point.date == date(2024, 3, 1)
        assert point.value == 12.0

    def test_frozen_immutability(self):
        """Test points cannot be modified."""
        point = TimeSeriesPoint(date=date(2024, 1, 1), value=1.0)
        with pytest.raises(ValidationError):
            point.value = 2.0  # type: ignore[misc]


class TestForecastResult:
    """Tests for ForecastResult."""

    def test_defaults_match_fallback(self):
        """Test an empty result is the insufficient-history fallback."""
        result = ForecastResult()

        assert result.forecast == []
        assert result.confidence == ConfidenceBand(upper=[], lower=[])
        assert result.trend == "neutral"
        assert result.reliability == "low"

    def test_rejects_unknown_trend(self):
        """Test trend is restricted to up/down/neutral."""
        with pytest.raises(ValidationError):
            ForecastResult(trend="sideways")  # type: ignore[arg-type]


class TestForecastRequest:
    """Tests for ForecastRequest."""

    def test_valid_request(self):
        """Test a sorted series is accepted."""
        request = ForecastRequest.model_validate(
            {
                "historical_data": [
                    {"date": "2024-01-01", "value": 100},
                    {"date": "2024-02-01", "value": 110},
                ],
                "periods": 2,
            }
        )

        assert len(request.historical_data) == 2
        assert request.periods == 2

    def test_periods_optional(self):
        """Test periods defaults to None (service default applies)."""
        assert ForecastRequest(historical_data=[]).periods is None

    def test_periods_must_be_positive(self):
        """Test periods >= 1."""
        with pytest.raises(ValidationError):
            ForecastRequest(historical_data=[], periods=0)

    def test_unsorted_dates_rejected(self):
        """Test out-of-order observations are rejected."""
        with pytest.raises(ValidationError, match="sorted by date"):
            ForecastRequest(
                historical_data=[
                    TimeSeriesPoint(date=date(2024, 2, 1), value=1.0),
                    TimeSeriesPoint(date=date(2024, 1, 1), value=1.0),
                ]
            )

    def test_duplicate_dates_rejected(self):
        """Test repeated dates are rejected."""
        with pytest.raises(ValidationError, match="no duplicates"):
            SeasonalityRequest(
                historical_data=[
                    TimeSeriesPoint(date=date(2024, 1, 1), value=1.0),
                    TimeSeriesPoint(date=date(2024, 1, 1), value=2.0),
                ]
            )

    def test_extra_fields_forbidden(self):
        """Test unknown fields are rejected."""
        with pytest.raises(ValidationError):
            ForecastRequest.model_validate({"historical_data": [], "alpha": 0.5})
