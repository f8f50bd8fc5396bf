"""End-to-end tests for the analysis entry point."""

import datetime as dt
import json

import pytest

from chart_advisor.engine import analyze
from chart_advisor.errors import InsufficientColumnsError, NoNumericDataError
from chart_advisor.models import DetectionConfig


def _daily_series(n=20):
    start = dt.date(2024, 1, 1)
    return [
        {"date": (start + dt.timedelta(days=i)).isoformat(), "value": 100 + 5 * i}
        for i in range(n)
    ]


# ---------------------------------------------------------------------------
# Reference scenarios
# ---------------------------------------------------------------------------


class TestScenarios:
    SMALL_SALES = [
        {"region": "East", "sales": 100},
        {"region": "West", "sales": 150},
        {"region": "East", "sales": 120},
    ]

    def test_small_category_table_recommends_bar(self):
        result = analyze(self.SMALL_SALES, ["region", "sales"])
        top = result.top_recommendation
        assert top.chart_kind == "bar"
        assert top.confidence >= 85
        assert (top.axes.x, top.axes.y) == ("region", "sales")
        assert result.outlier_report is None

    def test_category_table_recommends_bar_then_pie(self):
        rows = [
            {"region": ["North", "South", "East", "West"][i % 4], "sales": 100 + 13 * i}
            for i in range(12)
        ]
        result = analyze(rows, ["region", "sales"])
        kinds = [(r.chart_kind, r.confidence) for r in result.recommendations]
        assert kinds == [("bar", 95), ("pie", 95), ("pie3d", 85), ("doughnut", 80)]

    def test_rising_time_series(self):
        result = analyze(_daily_series(), ["date", "value"])
        profiles = result.profile.column_profiles
        assert profiles["date"].semantic_type == "date"
        assert profiles["value"].semantic_type == "numeric"
        assert profiles["value"].has_trend
        kinds = [(r.chart_kind, r.confidence) for r in result.recommendations]
        assert kinds == [("line", 98), ("area", 93)]
        assert result.profile.insights[0].kind == "trend"

    def test_single_extreme_value(self):
        rows = [{"value": v} for v in [10, 12, 11, 13, 9, 500]]
        result = analyze(rows, ["value"], DetectionConfig("iqr", 1.5), target_column="value")
        report = result.outlier_report
        assert report.outlier_indices == [5]
        assert report.percentage == pytest.approx(16.6667, abs=0.01)

    def test_empty_dataset(self):
        result = analyze([], ["a", "b"])
        assert all(p.semantic_type == "empty" for p in result.profile.column_profiles.values())
        kinds = [(r.chart_kind, r.confidence) for r in result.recommendations]
        assert kinds == [("bar", 85), ("pie", 75), ("pie3d", 70), ("doughnut", 70)]


# ---------------------------------------------------------------------------
# Contract
# ---------------------------------------------------------------------------


class TestAnalyze:
    def test_no_columns(self):
        with pytest.raises(InsufficientColumnsError):
            analyze([{"a": 1}], [])

    def test_target_without_numbers(self):
        rows = [{"region": "East", "sales": 1}, {"region": "West", "sales": 2}]
        with pytest.raises(NoNumericDataError):
            analyze(rows, ["region", "sales"], target_column="region")

    def test_third_column_is_not_profiled(self):
        rows = [{"a": i, "b": i * 2, "c": "x"} for i in range(10)]
        result = analyze(rows, ["a", "b", "c"])
        assert list(result.profile.column_profiles) == ["a", "b"]

    def test_clean_target_column(self):
        result = analyze(TestScenarios.SMALL_SALES, ["region", "sales"], target_column="sales")
        assert result.outlier_report.outlier_indices == []
        assert result.outlier_report.insights[0].kind == "success"

    def test_idempotent(self):
        rows = _daily_series()
        first = analyze(rows, ["date", "value"], DetectionConfig("zscore"), "value")
        second = analyze(rows, ["date", "value"], DetectionConfig("zscore"), "value")
        assert first.to_dict() == second.to_dict()

    def test_to_dict_is_json_serializable(self):
        result = analyze(_daily_series(), ["date", "value"], target_column="value")
        payload = json.loads(json.dumps(result.to_dict()))
        assert payload["recommendations"][0]["axes"] == {"x": "date", "y": "value"}
        assert payload["outlier_report"]["method"] == "iqr"
