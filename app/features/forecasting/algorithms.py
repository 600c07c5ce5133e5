"""Numeric building blocks for the dashboard forecast.

All functions are pure: they never mutate their input and keep no state
between calls.

- mean / standard_deviation: population statistics (no Bessel correction)
- exponential_smoothing: single-exponential smoothing with a flat forecast
- calculate_seasonality: ratio-to-centered-moving-average monthly indices
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import numpy as np

FloatArray = np.ndarray[Any, np.dtype[np.floating[Any]]]

# Months per seasonal cycle and half-width of the centered moving average
SEASON_LENGTH = 12
HALF_WINDOW = 6
WINDOW = 2 * HALF_WINDOW + 1


def _as_array(values: Sequence[float] | FloatArray) -> FloatArray:
    return np.asarray(values, dtype=np.float64)


def mean(values: Sequence[float] | FloatArray) -> float:
    """Arithmetic mean.

    Empty input is out of contract (numpy returns nan).
    """
    return float(np.mean(_as_array(values)))


def standard_deviation(values: Sequence[float] | FloatArray) -> float:
    """Population standard deviation: sqrt(mean((v - mean)^2)).

    Args:
        values: Non-empty numeric sequence.

    Returns:
        Standard deviation (always >= 0).
    """
    return float(np.std(_as_array(values), ddof=0))


def exponential_smoothing(
    data: Sequence[float] | FloatArray,
    alpha: float,
    periods: int,
) -> FloatArray:
    """Single-exponential smoothing with a flat forward forecast.

    Formula:
        s[0] = y[0]
        s[i] = alpha * y[i] + (1 - alpha) * s[i-1]
        y_hat[t+h] = s[-1] for all h

    No trend is projected; every future step repeats the final level.

    Args:
        data: Historical values in chronological order.
        alpha: Smoothing factor in (0, 1].
        periods: Number of future values to produce.

    Returns:
        Array of ``periods`` identical values, or an empty array when
        ``data`` is empty.
    """
    y = _as_array(data)
    if y.size == 0:
        return np.array([], dtype=np.float64)

    level = float(y[0])
    for value in y[1:]:
        level = alpha * float(value) + (1 - alpha) * level

    return np.full(max(periods, 0), level, dtype=np.float64)


def calculate_seasonality(data: Sequence[float] | FloatArray) -> FloatArray:
    """Monthly seasonal indices via ratio to a centered 13-point moving average.

    For every index i with a full window (6 <= i <= n-7) the ratio
    y[i] / mean(y[i-6 .. i+6]) is computed and assigned to month position
    i mod 12. Each position's index is the mean of its ratios; positions
    without any ratio are neutral (1.0).

    A window averaging to zero is out of contract.

    Args:
        data: Monthly values in chronological order.

    Returns:
        Empty array when fewer than 12 values are given, otherwise exactly
        12 seasonal multipliers.
    """
    y = _as_array(data)
    n = y.size
    if n < SEASON_LENGTH:
        return np.array([], dtype=np.float64)
    if n < WINDOW:
        return np.ones(SEASON_LENGTH, dtype=np.float64)

    moving_average = np.lib.stride_tricks.sliding_window_view(y, WINDOW).mean(axis=1)
    centers = np.arange(HALF_WINDOW, n - HALF_WINDOW)
    ratios = y[centers] / moving_average

    positions = centers % SEASON_LENGTH
    totals = np.bincount(positions, weights=ratios, minlength=SEASON_LENGTH)
    counts = np.bincount(positions, minlength=SEASON_LENGTH)

    indices = np.ones(SEASON_LENGTH, dtype=np.float64)
    observed = counts > 0
    indices[observed] = totals[observed] / counts[observed]
    return indices
