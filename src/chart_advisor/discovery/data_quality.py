"""Data quality assessment: completeness, uniqueness and outlier share.

Runs over every supplied column (not just the two chart axes) and produces
quality notes a caller can show before charting.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

from chart_advisor.cognitive.column_classifier import (
    classify_column,
    clean_values,
    distinct_count,
    parse_numbers,
)
from chart_advisor.discovery.stat_primitives import iqr_outliers
from chart_advisor.models import Row

logger = logging.getLogger(__name__)

_MIN_COMPLETENESS = 90.0
_MIN_UNIQUENESS = 50.0
_MAX_OUTLIER_PCT = 5.0


@dataclass
class ColumnQuality:
    column: str
    semantic_type: str
    completeness: float  # % of rows with a value
    uniqueness: float  # % of values that are distinct
    outlier_count: int = 0
    outlier_percentage: float = 0.0


@dataclass
class QualityNote:
    severity: str  # warning | info | alert
    column: str
    message: str
    action: str


@dataclass
class DataQualityReport:
    total_rows: int
    total_columns: int
    columns: dict[str, ColumnQuality] = field(default_factory=dict)
    notes: list[QualityNote] = field(default_factory=list)

    @property
    def overall_completeness(self) -> float:
        if not self.columns:
            return 0.0
        return round(sum(c.completeness for c in self.columns.values()) / len(self.columns), 2)


def _assess_column(rows: Sequence[Row], column: str) -> ColumnQuality:
    values = clean_values(rows, column)
    semantic_type = classify_column(values, column)
    completeness = len(values) / len(rows) * 100 if rows else 0.0
    uniqueness = distinct_count(values) / len(values) * 100 if values else 0.0

    quality = ColumnQuality(
        column=column,
        semantic_type=semantic_type,
        completeness=round(completeness, 2),
        uniqueness=round(uniqueness, 2),
    )
    if semantic_type == "numeric":
        nums = parse_numbers(values)
        if nums:
            outliers = iqr_outliers(nums)
            quality.outlier_count = len(outliers)
            quality.outlier_percentage = round(len(outliers) / len(nums) * 100, 2)
    return quality


def _notes_for(q: ColumnQuality, has_rows: bool) -> list[QualityNote]:
    notes: list[QualityNote] = []
    if has_rows and q.completeness < _MIN_COMPLETENESS:
        notes.append(QualityNote(
            severity="warning",
            column=q.column,
            message=f'Column "{q.column}" has {100 - q.completeness:.2f}% missing data',
            action="Consider imputing missing values or dropping the column",
        ))
    if q.semantic_type not in ("text", "empty") and q.uniqueness < _MIN_UNIQUENESS:
        notes.append(QualityNote(
            severity="info",
            column=q.column,
            message=f'Column "{q.column}" has low uniqueness ({q.uniqueness:.2f}%)',
            action="Check for duplicate values or treat the column as categorical",
        ))
    if q.outlier_count > 0 and q.outlier_percentage > _MAX_OUTLIER_PCT:
        notes.append(QualityNote(
            severity="alert",
            column=q.column,
            message=(
                f'Column "{q.column}" has {q.outlier_count} outliers '
                f"({q.outlier_percentage:.2f}%)"
            ),
            action="Consider outlier treatment or investigation",
        ))
    return notes


def assess_data_quality(rows: Sequence[Row], columns: Sequence[str]) -> DataQualityReport:
    """Assess every column; notes are grouped by rule, in column order."""
    report = DataQualityReport(total_rows=len(rows), total_columns=len(columns))
    for col in columns:
        report.columns[col] = _assess_column(rows, col)

    per_column = [_notes_for(q, bool(rows)) for q in report.columns.values()]
    for severity in ("warning", "info", "alert"):
        for notes in per_column:
            report.notes.extend(n for n in notes if n.severity == severity)

    logger.debug(
        "Quality assessment: %d rows, %d columns, %d notes",
        report.total_rows, report.total_columns, len(report.notes),
    )
    return report
