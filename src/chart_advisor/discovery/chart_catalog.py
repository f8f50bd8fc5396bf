"""Display metadata for the fixed chart vocabulary."""

from __future__ import annotations

from dataclasses import dataclass

from chart_advisor.models import CHART_KINDS


@dataclass(frozen=True)
class ChartType:
    kind: str
    name: str
    description: str
    best_for: tuple[str, ...]


CHART_CATALOG: dict[str, ChartType] = {
    "bar": ChartType(
        kind="bar",
        name="Bar Chart",
        description="Compare categories or show rankings",
        best_for=("categorical data", "comparisons", "rankings"),
    ),
    "line": ChartType(
        kind="line",
        name="Line Chart",
        description="Show trends over time or continuous data",
        best_for=("time series", "trends", "continuous data"),
    ),
    "pie": ChartType(
        kind="pie",
        name="Pie Chart",
        description="Show proportions of a whole",
        best_for=("proportions", "percentages", "parts of whole"),
    ),
    "doughnut": ChartType(
        kind="doughnut",
        name="Doughnut Chart",
        description="Show proportions with center space",
        best_for=("proportions", "percentages", "center labels"),
    ),
    "pie3d": ChartType(
        kind="pie3d",
        name="3D Pie Chart",
        description="Interactive 3D proportions visualization",
        best_for=("proportions", "interactive", "presentations"),
    ),
    "area": ChartType(
        kind="area",
        name="Area Chart",
        description="Show volume and trends over time",
        best_for=("time series", "volume data", "cumulative values"),
    ),
    "scatter": ChartType(
        kind="scatter",
        name="Scatter Plot",
        description="Show relationships between two variables",
        best_for=("correlations", "relationships", "two variables"),
    ),
}


def describe_chart(kind: str) -> ChartType:
    """Look up display metadata; raises KeyError for unknown kinds."""
    if kind not in CHART_KINDS:
        raise KeyError(f"Unknown chart kind {kind!r}")
    return CHART_CATALOG[kind]
