"""Shared statistical primitives: mean, variance, quartiles, trend slope.

Pure functions over sequences of finite floats. Callers filter out nulls
and non-finite values first. Every function raises ``EmptyInputError`` on
an empty sequence.

Quartiles use the floor-index selection rule (``sorted[floor(n * p)]``)
rather than interpolation, so results line up with reference fixtures
computed the same way.
"""

from __future__ import annotations

import math
import statistics
from typing import Sequence

from chart_advisor.errors import EmptyInputError


def _require(xs: Sequence[float], operation: str) -> None:
    if len(xs) == 0:
        raise EmptyInputError(operation)


def mean(xs: Sequence[float]) -> float:
    _require(xs, "mean")
    return statistics.mean(xs)


def variance(xs: Sequence[float]) -> float:
    """Population variance (divisor n); inf when it exceeds the float range."""
    _require(xs, "variance")
    try:
        return statistics.pvariance(xs)
    except OverflowError:
        return math.inf


def std_dev(xs: Sequence[float]) -> float:
    """Population standard deviation."""
    _require(xs, "std_dev")
    return statistics.pstdev(xs)


def select_quantile(sorted_xs: Sequence[float], p: float) -> float:
    """Pick ``sorted_xs[floor(n * p)]`` from an already sorted sequence."""
    _require(sorted_xs, "select_quantile")
    idx = min(int(math.floor(len(sorted_xs) * p)), len(sorted_xs) - 1)
    return sorted_xs[idx]


def quartiles(xs: Sequence[float]) -> tuple[float, float, float]:
    """Return (q1, median, q3) using the floor-index rule."""
    _require(xs, "quartiles")
    s = sorted(xs)
    return select_quantile(s, 0.25), select_quantile(s, 0.5), select_quantile(s, 0.75)


def linear_trend_slope(xs: Sequence[float]) -> float:
    """Least-squares slope of the values against their index position.

    Returns 0.0 for fewer than 3 values or a degenerate denominator.
    """
    _require(xs, "linear_trend_slope")
    n = len(xs)
    if n < 3:
        return 0.0

    sum_x = n * (n - 1) / 2
    sum_y = sum(xs)
    sum_xy = sum(i * y for i, y in enumerate(xs))
    sum_x2 = (n - 1) * n * (2 * n - 1) / 6

    denom = n * sum_x2 - sum_x * sum_x
    if denom == 0:
        return 0.0
    return (n * sum_xy - sum_x * sum_y) / denom


def iqr_bounds(xs: Sequence[float], multiplier: float = 1.5) -> tuple[float, float]:
    """Tukey fences ``[q1 - k*IQR, q3 + k*IQR]``."""
    _require(xs, "iqr_bounds")
    q1, _, q3 = quartiles(xs)
    iqr = q3 - q1
    return q1 - multiplier * iqr, q3 + multiplier * iqr


def iqr_outliers(xs: Sequence[float], multiplier: float = 1.5) -> list[float]:
    """Values strictly outside the IQR fences, in input order.

    Fewer than 4 values never yield outliers.
    """
    _require(xs, "iqr_outliers")
    if len(xs) < 4:
        return []
    low, high = iqr_bounds(xs, multiplier)
    return [x for x in xs if x < low or x > high]
