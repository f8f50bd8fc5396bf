"""Pattern analyzer: distribution shape, trend and outlier signal per column.

The outlier count here is an internal diagnostic with a fixed IQR
multiplier; it does not follow the user-facing detector's sensitivity.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

from config.settings import settings

from chart_advisor.cognitive.column_classifier import (
    classify_columns,
    clean_values,
    distinct_count,
    parse_numbers,
)
from chart_advisor.discovery.insight_generator import dataset_insights
from chart_advisor.discovery.stat_primitives import iqr_outliers, linear_trend_slope
from chart_advisor.models import ColumnProfile, DatasetProfile, Row

logger = logging.getLogger(__name__)

_CATEGORICAL_UNIQUE_LIMIT = 10
_CONTINUOUS_RATIO = 0.8
_MIN_NUMERIC_FOR_SIGNALS = 5  # exclusive


def classify_distribution(unique_count: int, total_count: int) -> str:
    """categorical (< 10 distinct), continuous (> 80% distinct), else mixed."""
    if unique_count < _CATEGORICAL_UNIQUE_LIMIT:
        return "categorical"
    if total_count and unique_count / total_count > _CONTINUOUS_RATIO:
        return "continuous"
    return "mixed"


def analyze_pattern(name: str, values: Sequence[Any], semantic_type: str) -> ColumnProfile:
    """Build the profile for one column from its cleaned values."""
    unique_count = distinct_count(values)
    total_count = len(values)
    has_trend = False
    outlier_count = 0

    if semantic_type == "numeric":
        nums = parse_numbers(values)
        if len(nums) > _MIN_NUMERIC_FOR_SIGNALS:
            slope = linear_trend_slope(nums)
            has_trend = abs(slope) > settings.trend_slope_threshold
            outlier_count = len(iqr_outliers(nums, settings.pattern_outlier_multiplier))
            logger.debug(
                "Pattern %s: slope=%.4f outliers=%d", name, slope, outlier_count,
            )

    return ColumnProfile(
        name=name,
        semantic_type=semantic_type,
        unique_count=unique_count,
        total_count=total_count,
        distribution=classify_distribution(unique_count, total_count),
        has_trend=has_trend,
        outlier_count=outlier_count,
    )


def profile_dataset(rows: Sequence[Row], columns: Sequence[str]) -> DatasetProfile:
    """Classify and profile the analyzed columns (first two selected).

    Never raises; columns with no usable values come back as ``empty``.
    """
    profiles = {
        col: analyze_pattern(col, clean_values(rows, col), semantic_type)
        for col, semantic_type in classify_columns(rows, columns).items()
    }

    return DatasetProfile(column_profiles=profiles, insights=dataset_insights(profiles))
