"""Analysis entry point: profile, score and (optionally) detect outliers.

1. Classify + profile the analyzed columns (first two selected)
2. Score chart recommendations from the profile
3. Run outlier detection on the target column, when one is given

Each call is independent and side-effect free.  Callers that recompute on
every input change should sequence results with
:class:`chart_advisor.session.AnalysisSession`.
"""

from __future__ import annotations

import logging
import time
from typing import Sequence

from chart_advisor.discovery.outlier_detector import detect_column
from chart_advisor.discovery.pattern_analyzer import profile_dataset
from chart_advisor.discovery.recommendation_scorer import recommend_charts
from chart_advisor.errors import InsufficientColumnsError
from chart_advisor.models import AnalysisResult, DetectionConfig, Row

logger = logging.getLogger(__name__)


def analyze(
    rows: Sequence[Row],
    columns: Sequence[str],
    config: DetectionConfig | None = None,
    target_column: str | None = None,
) -> AnalysisResult:
    """Run the full analysis for one selection.

    Raises:
        InsufficientColumnsError: no columns were selected.
        NoNumericDataError: *target_column* has no numeric values.
    """
    if not columns:
        raise InsufficientColumnsError(0)

    t0 = time.monotonic()
    profile = profile_dataset(rows, columns)
    recommendations = recommend_charts(profile, rows, columns)

    outlier_report = None
    if target_column is not None:
        outlier_report = detect_column(rows, target_column, config)

    logger.info(
        "Analyzed %d rows on %s: %s, top=%s (%d ms)",
        len(rows),
        list(profile.column_profiles),
        {n: p.semantic_type for n, p in profile.column_profiles.items()},
        recommendations[0].chart_kind if recommendations else None,
        int((time.monotonic() - t0) * 1000),
    )

    return AnalysisResult(
        profile=profile,
        recommendations=recommendations,
        outlier_report=outlier_report,
    )
