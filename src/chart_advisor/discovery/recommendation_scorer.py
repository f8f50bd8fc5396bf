"""Recommendation scorer: ranks chart types for the analyzed columns.

Chart eligibility and scoring live in one declarative table
(``CHART_RULES``).  Each rule has a predicate over the column roles, a base
score, additive adjustments and a floor.  Every rule is evaluated the same
way; adding a chart kind means adding a row, not a branch.

The scorer never raises for data problems: any internal failure, or a
dataset for which no rule fires, yields the unconditioned fallback set.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Mapping, Sequence

from config.settings import settings

from chart_advisor.cognitive.column_classifier import clean_values, reclassify_as_numeric
from chart_advisor.errors import InsufficientColumnsError
from chart_advisor.models import (
    ChartAxes,
    ChartRecommendation,
    ColumnProfile,
    DatasetProfile,
    Row,
)

logger = logging.getLogger(__name__)

# Tie-break order for equal confidence
CHART_PRIORITY = ("line", "scatter", "bar", "area", "pie3d", "pie", "doughnut")


# ---------------------------------------------------------------------------
# Scoring context
# ---------------------------------------------------------------------------


@dataclass
class ScoringContext:
    """Column roles and dataset facts the rules are evaluated against."""

    profiles: Mapping[str, ColumnProfile]
    row_count: int
    numeric: list[str] = field(default_factory=list)
    categorical: list[str] = field(default_factory=list)
    date: list[str] = field(default_factory=list)
    text: list[str] = field(default_factory=list)

    # -- predicates ---------------------------------------------------------

    @property
    def has_time_series(self) -> bool:
        return bool(self.date)

    @property
    def has_comparisons(self) -> bool:
        return bool(self.categorical) and bool(self.numeric)

    @property
    def has_correlations(self) -> bool:
        return len(self.numeric) >= 2

    @property
    def has_proportions(self) -> bool:
        return self.has_comparisons

    @property
    def has_numeric_only(self) -> bool:
        return bool(self.numeric) and not self.categorical

    @property
    def has_categorical_only(self) -> bool:
        return bool(self.categorical) and not self.numeric

    # -- column facts -------------------------------------------------------

    def unique(self, col: str) -> int:
        p = self.profiles.get(col)
        return p.unique_count if p else 0

    def trend(self, col: str) -> bool:
        p = self.profiles.get(col)
        return bool(p and p.has_trend)

    def outliers(self, col: str) -> int:
        p = self.profiles.get(col)
        return p.outlier_count if p else 0

    @property
    def cat_unique(self) -> int:
        return self.unique(self.categorical[0])


def build_context(profile: DatasetProfile, rows: Sequence[Row]) -> ScoringContext:
    """Bucket the profiled columns into roles.

    Text columns get a second chance as numeric when no column classified
    as numeric; upstream values frequently arrive as decorated strings.
    """
    ctx = ScoringContext(profiles=profile.column_profiles, row_count=len(rows))
    buckets = {
        "numeric": ctx.numeric,
        "categorical": ctx.categorical,
        "date": ctx.date,
        "text": ctx.text,
    }
    for name, p in profile.column_profiles.items():
        bucket = buckets.get(p.semantic_type)
        if bucket is not None:
            bucket.append(name)

    if ctx.text and not ctx.numeric:
        for col in list(ctx.text):
            if reclassify_as_numeric(clean_values(rows, col)):
                logger.debug("Reclassified text column %s as numeric", col)
                ctx.text.remove(col)
                ctx.numeric.append(col)

    return ctx


# ---------------------------------------------------------------------------
# Rule table
# ---------------------------------------------------------------------------

_Pred = Callable[[ScoringContext], bool]
_Text = Callable[[ScoringContext], str]


@dataclass(frozen=True)
class Adjustment:
    delta: int
    when: _Pred


@dataclass(frozen=True)
class ChartRule:
    chart_kind: str
    fires: _Pred
    base: int
    adjustments: tuple[Adjustment, ...]
    axes: Callable[[ScoringContext], tuple[str, str]]
    reason: _Text
    explanation: _Text
    floor: int = 0

    def score(self, ctx: ScoringContext) -> int:
        raw = self.base + sum(a.delta for a in self.adjustments if a.when(ctx))
        return clamp_confidence(raw, self.floor)

    def evaluate(self, ctx: ScoringContext) -> ChartRecommendation:
        x, y = self.axes(ctx)
        return ChartRecommendation(
            chart_kind=self.chart_kind,
            confidence=self.score(ctx),
            reason=self.reason(ctx),
            explanation=self.explanation(ctx),
            axes=ChartAxes(x=x, y=y),
        )


def clamp_confidence(score: int, floor: int = 0) -> int:
    """Clamp to ``[floor, confidence_cap]`` and to the 0-100 scale."""
    bounded = max(floor, min(settings.confidence_cap, score))
    return int(max(0, min(100, bounded)))


def _cat_num(ctx: ScoringContext) -> tuple[str, str]:
    return ctx.categorical[0], ctx.numeric[0]


def _date_num(ctx: ScoringContext) -> tuple[str, str]:
    return ctx.date[0], ctx.numeric[0]


def _num_num(ctx: ScoringContext) -> tuple[str, str]:
    return ctx.numeric[0], ctx.numeric[1]


def _time_series(ctx: ScoringContext) -> bool:
    return ctx.has_time_series and bool(ctx.numeric)


CHART_RULES: tuple[ChartRule, ...] = (
    ChartRule(
        chart_kind="bar",
        fires=lambda c: c.has_comparisons,
        base=85,
        adjustments=(
            Adjustment(10, lambda c: c.cat_unique <= 15),
            Adjustment(-15, lambda c: c.cat_unique > 20),
            Adjustment(5, lambda c: c.row_count > 100),
        ),
        axes=_cat_num,
        reason=lambda c: f"Compare {c.categorical[0]} categories using {c.numeric[0]} values",
        explanation=lambda c: (
            "Bar charts compare values across categories and make rankings easy to read."
        ),
    ),
    ChartRule(
        chart_kind="line",
        fires=_time_series,
        base=90,
        adjustments=(
            Adjustment(8, lambda c: c.trend(c.numeric[0])),
            Adjustment(5, lambda c: c.row_count >= 10),
            Adjustment(-20, lambda c: c.row_count < 5),
        ),
        axes=_date_num,
        reason=lambda c: f"Show {c.numeric[0]} over time along {c.date[0]}",
        explanation=lambda c: (
            "A clear trend is present; a line chart shows its direction over time."
            if c.trend(c.numeric[0])
            else "Line charts show how values change over time."
        ),
    ),
    ChartRule(
        chart_kind="line",
        fires=lambda c: c.has_numeric_only and len(c.numeric) >= 2,
        base=75,
        adjustments=(
            Adjustment(10, lambda c: c.trend(c.numeric[1])),
            Adjustment(5, lambda c: c.row_count >= 10),
        ),
        axes=_num_num,
        reason=lambda c: f"Show how {c.numeric[1]} moves along {c.numeric[0]}",
        explanation=lambda c: (
            "Line charts can follow a numeric series in sequence even without dates."
        ),
    ),
    ChartRule(
        chart_kind="pie",
        fires=lambda c: c.has_proportions and c.cat_unique <= 8,
        base=80,
        adjustments=(
            Adjustment(15, lambda c: 3 <= c.cat_unique <= 6),
            Adjustment(-30, lambda c: c.cat_unique > 8),
        ),
        axes=_cat_num,
        reason=lambda c: f"Show proportions of {c.categorical[0]} ({c.cat_unique} categories)",
        explanation=lambda c: (
            "Pie charts show how parts make up a whole when there are only a few categories."
        ),
        floor=60,
    ),
    ChartRule(
        chart_kind="pie3d",
        fires=lambda c: c.has_proportions and c.cat_unique <= 10,
        base=75,
        adjustments=(
            Adjustment(10, lambda c: 3 <= c.cat_unique <= 8),
            Adjustment(5, lambda c: c.row_count > 50),
        ),
        axes=_cat_num,
        reason=lambda c: f"Interactive 3D view of {c.categorical[0]} proportions",
        explanation=lambda c: (
            "3D pie charts present proportions with depth and interactive rotation."
        ),
        floor=65,
    ),
    ChartRule(
        chart_kind="scatter",
        fires=lambda c: c.has_correlations,
        base=85,
        adjustments=(
            Adjustment(10, lambda c: c.outliers(c.numeric[0]) > 0),
            Adjustment(10, lambda c: c.outliers(c.numeric[1]) > 0),
            Adjustment(5, lambda c: c.row_count >= 20),
        ),
        axes=_num_num,
        reason=lambda c: f"Explore the relationship between {c.numeric[0]} and {c.numeric[1]}",
        explanation=lambda c: (
            "Scatter plots reveal correlations, clusters and outliers between two variables."
        ),
    ),
    ChartRule(
        chart_kind="area",
        fires=_time_series,
        base=75,
        adjustments=(
            Adjustment(10, lambda c: c.row_count >= 15),
            Adjustment(8, lambda c: c.trend(c.numeric[0])),
        ),
        axes=_date_num,
        reason=lambda c: f"Show volume of {c.numeric[0]} over {c.date[0]}",
        explanation=lambda c: (
            "Area charts emphasize volume and cumulative change across a time series."
        ),
    ),
    ChartRule(
        chart_kind="doughnut",
        fires=lambda c: c.has_proportions and c.cat_unique <= 8,
        base=70,
        adjustments=(
            Adjustment(10, lambda c: 3 <= c.cat_unique <= 6),
        ),
        axes=_cat_num,
        reason=lambda c: f"Show proportions of {c.categorical[0]} with room for a center label",
        explanation=lambda c: (
            "Doughnut charts work like pie charts and leave the center free for a total or label."
        ),
        floor=60,
    ),
)


# ---------------------------------------------------------------------------
# Fallback set
# ---------------------------------------------------------------------------

# (chart_kind, confidence, minimum rows (exclusive), reason, explanation)
_FALLBACK: tuple[tuple[str, int, int, str, str], ...] = (
    ("bar", 85, -1, "General purpose chart for comparisons",
     "Bar charts work for most data and are easy to read."),
    ("line", 80, 5, "Show trends and patterns in your data",
     "Line charts show how values change across a sequence."),
    ("pie", 75, -1, "Show proportions and percentages",
     "Pie charts show how parts relate to the whole."),
    ("pie3d", 70, -1, "Interactive 3D proportions view",
     "3D pie charts present proportions with interactive controls."),
    ("area", 75, 10, "Show volume and cumulative values",
     "Area charts emphasize volume and cumulative change."),
    ("doughnut", 70, -1, "Show proportions with center space",
     "Doughnut charts work like pie charts with room for a center label."),
)


def fallback_recommendations(columns: Sequence[str], row_count: int) -> list[ChartRecommendation]:
    """Type-agnostic defaults using the raw selected columns as axes."""
    if not columns:
        raise InsufficientColumnsError(0)
    x = columns[0]
    y = columns[1] if len(columns) > 1 else columns[0]

    return [
        ChartRecommendation(
            chart_kind=kind,
            confidence=clamp_confidence(confidence),
            reason=reason,
            explanation=explanation,
            axes=ChartAxes(x=x, y=y),
        )
        for kind, confidence, min_rows, reason, explanation in _FALLBACK
        if row_count > min_rows
    ]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def rank_recommendations(recs: Sequence[ChartRecommendation]) -> list[ChartRecommendation]:
    """Confidence descending, ties by ``CHART_PRIORITY``, otherwise stable."""
    return sorted(recs, key=lambda r: (-r.confidence, CHART_PRIORITY.index(r.chart_kind)))


def recommend_charts(
    profile: DatasetProfile,
    rows: Sequence[Row],
    columns: Sequence[str],
) -> list[ChartRecommendation]:
    """Ranked chart suggestions for the analyzed columns.

    Raises:
        InsufficientColumnsError: *columns* is empty.
    """
    if not columns:
        raise InsufficientColumnsError(0)

    recs: list[ChartRecommendation] = []
    try:
        ctx = build_context(profile, rows)
        recs = [rule.evaluate(ctx) for rule in CHART_RULES if rule.fires(ctx)]
    except Exception:
        logger.exception("Chart scoring failed for columns %s, using fallback set", list(columns[:2]))
        recs = []

    if not recs:
        logger.debug("No chart rule fired for %s, using fallback set", list(columns[:2]))
        recs = fallback_recommendations(columns[: settings.max_analyzed_columns], len(rows))

    return rank_recommendations(recs)
