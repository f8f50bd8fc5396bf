"""Result types shared by the classifier, detector and recommender.

Every analysis run creates these fresh; nothing here is mutated after it is
returned. ``to_dict()`` gives plain JSON-compatible structures for export.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field
from typing import Any, Mapping

Row = Mapping[str, Any]

SEMANTIC_TYPES = ("numeric", "date", "categorical", "text", "empty")
DISTRIBUTIONS = ("categorical", "continuous", "mixed")
INSIGHT_KINDS = ("info", "trend", "warning", "success", "error")
CHART_KINDS = ("bar", "line", "pie", "doughnut", "area", "scatter", "pie3d")
OUTLIER_METHODS = ("iqr", "zscore", "isolation")

# Sensitivity used when the caller does not set one for the chosen method.
DEFAULT_SENSITIVITY: dict[str, float] = {
    "iqr": 1.5,
    "zscore": 2.0,
    "isolation": 2.0,
}

IQR_SENSITIVITY_RANGE = (1.0, 3.0)


@dataclass(frozen=True)
class ColumnProfile:
    """Semantic type and statistical pattern of one analyzed column."""

    name: str
    semantic_type: str  # numeric | date | categorical | text | empty
    unique_count: int
    total_count: int
    distribution: str  # categorical | continuous | mixed
    has_trend: bool = False
    outlier_count: int = 0

    def __post_init__(self) -> None:
        if self.semantic_type not in SEMANTIC_TYPES:
            raise ValueError(f"Unknown semantic type {self.semantic_type!r}")
        if self.distribution not in DISTRIBUTIONS:
            raise ValueError(f"Unknown distribution {self.distribution!r}")

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class Insight:
    """A short human-readable finding."""

    kind: str  # info | trend | warning | success | error
    message: str
    related_column: str | None = None

    def __post_init__(self) -> None:
        if self.kind not in INSIGHT_KINDS:
            raise ValueError(f"Unknown insight kind {self.kind!r}")

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class DatasetProfile:
    """Profiles of the analyzed columns, in selection order, plus findings."""

    column_profiles: dict[str, ColumnProfile] = field(default_factory=dict)
    insights: list[Insight] = field(default_factory=list)

    def columns_of_type(self, semantic_type: str) -> list[str]:
        return [
            name for name, p in self.column_profiles.items()
            if p.semantic_type == semantic_type
        ]

    def to_dict(self) -> dict[str, Any]:
        return {
            "column_profiles": {n: p.to_dict() for n, p in self.column_profiles.items()},
            "insights": [i.to_dict() for i in self.insights],
        }


@dataclass(frozen=True)
class ChartAxes:
    x: str
    y: str


@dataclass
class ChartRecommendation:
    """One ranked chart suggestion."""

    chart_kind: str
    confidence: int  # 0-100, heuristic
    reason: str
    explanation: str
    axes: ChartAxes

    def to_dict(self) -> dict[str, Any]:
        return {
            "chart_kind": self.chart_kind,
            "confidence": self.confidence,
            "reason": self.reason,
            "explanation": self.explanation,
            "axes": {"x": self.axes.x, "y": self.axes.y},
        }


@dataclass(frozen=True)
class DetectionConfig:
    """Outlier detection method and its sensitivity knob.

    ``sensitivity`` is interpreted per method: the IQR multiplier for
    ``iqr`` and the z threshold for ``zscore``. ``isolation`` ignores it.
    Leaving it unset picks the method's default (1.5 for iqr, 2.0 for zscore).
    """

    method: str = "iqr"
    sensitivity: float | None = None

    def __post_init__(self) -> None:
        if self.method not in OUTLIER_METHODS:
            raise ValueError(
                f"Unknown outlier method {self.method!r}; expected one of {OUTLIER_METHODS}"
            )
        if self.sensitivity is None:
            return
        if not math.isfinite(self.sensitivity) or self.sensitivity <= 0:
            raise ValueError(f"Sensitivity must be a positive number, got {self.sensitivity}")
        low, high = IQR_SENSITIVITY_RANGE
        if self.method == "iqr" and not low <= self.sensitivity <= high:
            raise ValueError(
                f"IQR sensitivity must be within [{low}, {high}], got {self.sensitivity}"
            )

    @property
    def effective_sensitivity(self) -> float:
        if self.sensitivity is None:
            return DEFAULT_SENSITIVITY[self.method]
        return float(self.sensitivity)


@dataclass
class OutlierStatistics:
    count: int
    mean: float
    median: float
    std_dev: float
    min: float
    max: float
    q1: float
    q3: float


@dataclass
class OutlierAction:
    """A prioritized follow-up for an outlier report."""

    action: str  # investigate | validate | analyze | monitor
    message: str
    priority: str  # high | medium | low


@dataclass
class OutlierReport:
    """Index-level outlier flags for one target column."""

    target_column: str
    method: str
    sensitivity: float
    statistics: OutlierStatistics
    outlier_indices: list[int]
    outlier_values: list[float]
    percentage: float
    lower_bound: float
    upper_bound: float
    insights: list[Insight] = field(default_factory=list)
    recommendations: list[OutlierAction] = field(default_factory=list)

    @property
    def outlier_count(self) -> int:
        return len(self.outlier_indices)

    def to_dict(self) -> dict[str, Any]:
        """Plain dict; an unbounded side of the band is written as None."""
        d = asdict(self)
        for key in ("lower_bound", "upper_bound"):
            if not math.isfinite(d[key]):
                d[key] = None
        return d


@dataclass
class AnalysisResult:
    """Everything one ``analyze`` call returns."""

    profile: DatasetProfile
    recommendations: list[ChartRecommendation]
    outlier_report: OutlierReport | None = None

    @property
    def top_recommendation(self) -> ChartRecommendation | None:
        return self.recommendations[0] if self.recommendations else None

    def to_dict(self) -> dict[str, Any]:
        return {
            "profile": self.profile.to_dict(),
            "recommendations": [r.to_dict() for r in self.recommendations],
            "outlier_report": self.outlier_report.to_dict() if self.outlier_report else None,
        }
