"""Descriptive statistics: full numeric summary for a column.

Pure functions.  Quartiles follow the same floor-index rule as the outlier
detector so the two views of a column agree; the median here is the true
(averaged) median.
"""

from __future__ import annotations

import math
import statistics
from collections import Counter
from dataclasses import asdict, dataclass
from typing import Any, Sequence

from chart_advisor.cognitive.column_classifier import parse_numbers
from chart_advisor.discovery.stat_primitives import quartiles
from chart_advisor.models import Row


@dataclass
class DescriptiveStats:
    """Complete descriptive summary for a numeric column."""

    column: str
    count: int
    mean: float
    median: float
    mode: float | None
    min_val: float
    max_val: float
    range_val: float
    variance: float  # sample variance (n - 1)
    std: float
    skewness: float  # 0 = symmetric, >0 = right tail
    kurtosis: float  # excess; 0 = normal
    q1: float
    q3: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def compute_median(values: Sequence[float]) -> float:
    return statistics.median(values)


def compute_mode(values: Sequence[float]) -> float | None:
    """Most frequent value; earliest seen wins ties.  None for empty input."""
    if not values:
        return None
    counts = Counter(values)
    best = max(counts.values())
    return next(v for v in values if counts[v] == best)


def sample_variance(values: Sequence[float]) -> float:
    if len(values) < 2:
        return 0.0
    try:
        return statistics.variance(values)
    except OverflowError:
        return math.inf


def compute_skewness(values: Sequence[float]) -> float:
    """Mean cubed z-score (sample std).  0 when undefined."""
    n = len(values)
    if n < 3:
        return 0.0
    std = statistics.stdev(values)
    if std == 0:
        return 0.0
    m = statistics.mean(values)
    return sum(((v - m) / std) ** 3 for v in values) / n


def compute_kurtosis(values: Sequence[float]) -> float:
    """Excess kurtosis (mean fourth-power z-score minus 3).  0 when undefined."""
    n = len(values)
    if n < 4:
        return 0.0
    std = statistics.stdev(values)
    if std == 0:
        return 0.0
    m = statistics.mean(values)
    return sum(((v - m) / std) ** 4 for v in values) / n - 3.0


def describe(values: Sequence[Any], column: str = "value") -> DescriptiveStats | None:
    """Summarize the numeric values of a column.  None if nothing parses."""
    nums = parse_numbers(values)
    if not nums:
        return None

    n = len(nums)
    q1, _, q3 = quartiles(nums)
    var = sample_variance(nums)
    std = statistics.stdev(nums) if n > 1 else 0.0
    min_val = min(nums)
    max_val = max(nums)

    return DescriptiveStats(
        column=column,
        count=n,
        mean=round(statistics.mean(nums), 4),
        median=round(compute_median(nums), 4),
        mode=compute_mode(nums),
        min_val=min_val,
        max_val=max_val,
        range_val=max_val - min_val,
        variance=round(var, 4),
        std=round(std, 4),
        skewness=round(compute_skewness(nums), 4),
        kurtosis=round(compute_kurtosis(nums), 4),
        q1=q1,
        q3=q3,
    )


def describe_columns(rows: Sequence[Row], columns: Sequence[str]) -> dict[str, DescriptiveStats]:
    """Describe every column that has at least one numeric value."""
    out: dict[str, DescriptiveStats] = {}
    for col in columns:
        stats = describe([row.get(col) for row in rows], col)
        if stats is not None:
            out[col] = stats
    return out
