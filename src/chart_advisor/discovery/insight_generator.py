"""Insight generator: short findings and follow-up actions.

Deterministic and rule-ordered: the same inputs always give the same
messages in the same order.  No randomness, no I/O.
"""

from __future__ import annotations

from typing import Mapping, Sequence

from chart_advisor.models import ColumnProfile, Insight, OutlierAction

# Outlier-rate tiers (percent of numeric values)
_ERROR_RATE = 10.0
_VALIDATE_RATE = 5.0


def _fmt_pct(pct: float) -> str:
    return f"{pct:.1f}%"


def dataset_insights(column_profiles: Mapping[str, ColumnProfile]) -> list[Insight]:
    """Findings about the analyzed columns, in rule order."""
    insights: list[Insight] = []
    types = {p.semantic_type for p in column_profiles.values()}

    if "numeric" in types and "categorical" in types:
        insights.append(Insight(
            kind="info",
            message="Numeric and categorical columns together support category comparisons.",
        ))

    if "date" in types:
        date_col = next(n for n, p in column_profiles.items() if p.semantic_type == "date")
        insights.append(Insight(
            kind="trend",
            message="Time-based data detected; values can be tracked over time.",
            related_column=date_col,
        ))

    for name, profile in column_profiles.items():
        if profile.has_trend:
            insights.append(Insight(
                kind="trend",
                message=f'Trend detected in "{name}"; consider a time series chart.',
                related_column=name,
            ))
        if profile.outlier_count > 0:
            noun = "outlier" if profile.outlier_count == 1 else "outliers"
            insights.append(Insight(
                kind="warning",
                message=f'{profile.outlier_count} {noun} found in "{name}"; worth investigating.',
                related_column=name,
            ))

    return insights


def outlier_insights(
    column: str,
    method: str,
    outlier_values: Sequence[float],
    percentage: float,
    median: float,
) -> list[Insight]:
    """Findings for an outlier report: rate tiers, then directional bias."""
    count = len(outlier_values)
    if count == 0:
        return [Insight(
            kind="success",
            message=f'No outliers detected in "{column}" using the {method} method.',
            related_column=column,
        )]

    insights = [Insight(
        kind="warning",
        message=f'{count} outlier(s) detected in "{column}" ({_fmt_pct(percentage)} of values).',
        related_column=column,
    )]

    if percentage > _ERROR_RATE:
        insights.append(Insight(
            kind="error",
            message=(
                f'High outlier rate in "{column}" ({_fmt_pct(percentage)}); '
                "the data may contain errors or mixed populations."
            ),
            related_column=column,
        ))

    high = sum(1 for v in outlier_values if v > median)
    low = sum(1 for v in outlier_values if v < median)
    if high > low:
        insights.append(Insight(
            kind="info",
            message=f'Most outliers in "{column}" are unusually high values ({high} high vs {low} low).',
            related_column=column,
        ))
    elif low > high:
        insights.append(Insight(
            kind="info",
            message=f'Most outliers in "{column}" are unusually low values ({low} low vs {high} high).',
            related_column=column,
        ))

    return insights


def outlier_actions(column: str, count: int, percentage: float) -> list[OutlierAction]:
    """Prioritized follow-ups keyed to the outlier rate."""
    if count == 0:
        return [OutlierAction(
            action="monitor",
            message=f'Keep monitoring "{column}" as new data arrives.',
            priority="low",
        )]

    actions = [OutlierAction(
        action="investigate",
        message=f'Review the {count} flagged row(s) in "{column}" for entry or measurement errors.',
        priority="high",
    )]
    if percentage > _VALIDATE_RATE:
        actions.append(OutlierAction(
            action="validate",
            message=f'Validate the source of "{column}"; {_fmt_pct(percentage)} of values are outliers.',
            priority="medium",
        ))
    actions.append(OutlierAction(
        action="analyze",
        message=f'Compare results for "{column}" with and without the outliers.',
        priority="low",
    ))
    return actions
