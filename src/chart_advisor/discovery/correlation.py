"""Pairwise Pearson correlation between numeric columns.

Pairs are formed row by row: a row contributes only when both columns
parse as numbers, so values never shift against each other.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from itertools import combinations
from typing import Sequence

from chart_advisor.cognitive.column_classifier import parse_number
from chart_advisor.models import Row

_T_THRESHOLD = 2.0


@dataclass
class CorrelationResult:
    column_a: str
    column_b: str
    correlation: float
    strength: str  # Strong | Moderate | Weak | Very Weak
    significant: bool
    n: int


def pearson_correlation(xs: Sequence[float], ys: Sequence[float]) -> float:
    """Pearson r of two equal-length sequences; 0.0 when undefined."""
    n = len(xs)
    if n != len(ys) or n < 2:
        return 0.0
    sum_x = sum(xs)
    sum_y = sum(ys)
    sum_xy = sum(x * y for x, y in zip(xs, ys))
    sum_x2 = sum(x * x for x in xs)
    sum_y2 = sum(y * y for y in ys)

    numerator = n * sum_xy - sum_x * sum_y
    spread = (n * sum_x2 - sum_x ** 2) * (n * sum_y2 - sum_y ** 2)
    if spread <= 0:
        return 0.0
    return numerator / math.sqrt(spread)


def correlation_strength(r: float) -> str:
    a = abs(r)
    if a >= 0.7:
        return "Strong"
    if a >= 0.3:
        return "Moderate"
    if a >= 0.1:
        return "Weak"
    return "Very Weak"


def is_significant(r: float, n: int) -> bool:
    """Rough t-test: |r * sqrt((n - 2) / (1 - r^2))| > 2."""
    if n < 3:
        return False
    if abs(r) >= 1.0:
        return True
    t = r * math.sqrt((n - 2) / (1 - r * r))
    return abs(t) > _T_THRESHOLD


def correlate(rows: Sequence[Row], column_a: str, column_b: str) -> CorrelationResult:
    xs: list[float] = []
    ys: list[float] = []
    for row in rows:
        x = parse_number(row.get(column_a))
        y = parse_number(row.get(column_b))
        if x is not None and y is not None:
            xs.append(x)
            ys.append(y)

    r = pearson_correlation(xs, ys)
    return CorrelationResult(
        column_a=column_a,
        column_b=column_b,
        correlation=round(r, 4),
        strength=correlation_strength(r),
        significant=is_significant(r, len(xs)),
        n=len(xs),
    )


def correlate_columns(rows: Sequence[Row], columns: Sequence[str]) -> list[CorrelationResult]:
    """All pairs in selection order; pairs with fewer than 2 rows are skipped."""
    results = []
    for a, b in combinations(columns, 2):
        res = correlate(rows, a, b)
        if res.n >= 2:
            results.append(res)
    return results
