"""Outlier detector: configurable, index-preserving flags for one column.

Three interchangeable methods, selected by ``DetectionConfig.method``:

* ``iqr``      : outside ``[q1 - k*IQR, q3 + k*IQR]``, k = sensitivity
* ``zscore``   : ``|x - mean| / std_dev > k``, k = sensitivity (default 2.0)
* ``isolation``: heuristic, ``|x - median| > 2 * IQR`` (not a real
  isolation forest; sensitivity is ignored)

Row positions travel with each parsed value, so duplicate outlier values
each keep their own index.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Callable, Sequence

from config.settings import settings

from chart_advisor.cognitive.column_classifier import parse_number
from chart_advisor.discovery.insight_generator import outlier_actions, outlier_insights
from chart_advisor.discovery.stat_primitives import mean, quartiles, std_dev
from chart_advisor.errors import NoNumericDataError
from chart_advisor.models import DetectionConfig, OutlierReport, OutlierStatistics, Row

logger = logging.getLogger(__name__)

_ISOLATION_IQR_FACTOR = 2.0

# (is_outlier, lower_bound, upper_bound)
_Band = tuple[Callable[[float], bool], float, float]


def _iqr_band(stats: OutlierStatistics, k: float) -> _Band:
    iqr = stats.q3 - stats.q1
    low = stats.q1 - k * iqr
    high = stats.q3 + k * iqr
    return (lambda x: x < low or x > high), low, high


def _zscore_band(stats: OutlierStatistics, k: float) -> _Band:
    sd = stats.std_dev
    if sd == 0:
        return (lambda x: False), -math.inf, math.inf
    m = stats.mean
    return (lambda x: abs(x - m) / sd > k), m - k * sd, m + k * sd


def _isolation_band(stats: OutlierStatistics, k: float) -> _Band:
    reach = _ISOLATION_IQR_FACTOR * (stats.q3 - stats.q1)
    med = stats.median
    return (lambda x: abs(x - med) > reach), med - reach, med + reach


_METHODS: dict[str, Callable[[OutlierStatistics, float], _Band]] = {
    "iqr": _iqr_band,
    "zscore": _zscore_band,
    "isolation": _isolation_band,
}


def compute_statistics(nums: Sequence[float]) -> OutlierStatistics:
    """Summary statistics shared by all detection methods."""
    q1, median, q3 = quartiles(nums)
    return OutlierStatistics(
        count=len(nums),
        mean=mean(nums),
        median=median,
        std_dev=std_dev(nums),
        min=min(nums),
        max=max(nums),
        q1=q1,
        q3=q3,
    )


def detect(
    values: Sequence[Any],
    config: DetectionConfig | None = None,
    target_column: str = "value",
) -> OutlierReport:
    """Flag outliers in *values* (the raw target column, in row order).

    Entries that do not parse as finite numbers are skipped, but indices in
    the report are positions in *values* itself.

    Raises:
        NoNumericDataError: no entry parsed as a finite number.
    """
    config = config or DetectionConfig(method=settings.default_outlier_method)

    indexed: list[tuple[int, float]] = []
    for idx, raw in enumerate(values):
        num = parse_number(raw)
        if num is not None:
            indexed.append((idx, num))

    if not indexed:
        raise NoNumericDataError(target_column, len(values))

    nums = [num for _, num in indexed]
    stats = compute_statistics(nums)
    k = config.effective_sensitivity
    is_outlier, lower, upper = _METHODS[config.method](stats, k)

    flagged = [(idx, num) for idx, num in indexed if is_outlier(num)]
    outlier_indices = [idx for idx, _ in flagged]
    outlier_values = [num for _, num in flagged]
    percentage = len(flagged) / len(nums) * 100

    logger.info(
        "Outlier detection on %s: method=%s k=%.2f flagged %d/%d (%.1f%%)",
        target_column, config.method, k, len(flagged), len(nums), percentage,
    )

    return OutlierReport(
        target_column=target_column,
        method=config.method,
        sensitivity=k,
        statistics=stats,
        outlier_indices=outlier_indices,
        outlier_values=outlier_values,
        percentage=percentage,
        lower_bound=lower,
        upper_bound=upper,
        insights=outlier_insights(
            target_column, config.method, outlier_values, percentage, stats.median,
        ),
        recommendations=outlier_actions(target_column, len(flagged), percentage),
    )


def detect_column(
    rows: Sequence[Row],
    column: str,
    config: DetectionConfig | None = None,
) -> OutlierReport:
    """Run :func:`detect` over one column of *rows*; indices are row positions."""
    return detect([row.get(column) for row in rows], config, target_column=column)
