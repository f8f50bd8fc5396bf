"""Tests for result types and the error taxonomy."""

import json
import math

import pytest

from chart_advisor.errors import (
    ChartAdvisorError,
    EmptyInputError,
    InsufficientColumnsError,
    NoNumericDataError,
)
from chart_advisor.models import (
    DISTRIBUTIONS,
    INSIGHT_KINDS,
    SEMANTIC_TYPES,
    AnalysisResult,
    ChartAxes,
    ChartRecommendation,
    ColumnProfile,
    DatasetProfile,
    Insight,
    OutlierReport,
    OutlierStatistics,
)


class TestErrors:
    @pytest.mark.parametrize("error", [
        EmptyInputError("mean"),
        NoNumericDataError("sales", 3),
        InsufficientColumnsError(0),
    ])
    def test_hierarchy(self, error):
        assert isinstance(error, ChartAdvisorError)
        assert isinstance(error, ValueError)

    def test_to_dict(self):
        d = InsufficientColumnsError(0).to_dict()
        assert d["error_type"] == "InsufficientColumnsError"
        assert d["context"] == {"selected": 0, "required": 1}
        assert "got 0" in d["message"]


class TestAnalysisResult:
    def test_top_recommendation(self):
        rec = ChartRecommendation("bar", 85, "r", "e", ChartAxes("a", "b"))
        result = AnalysisResult(profile=DatasetProfile(), recommendations=[rec])
        assert result.top_recommendation is rec
        assert result.to_dict()["recommendations"][0]["axes"] == {"x": "a", "y": "b"}

    def test_no_recommendations(self):
        result = AnalysisResult(profile=DatasetProfile(), recommendations=[])
        assert result.top_recommendation is None
        assert result.to_dict()["outlier_report"] is None


class TestVocabularies:
    def test_column_profile_rejects_unknown_type(self):
        with pytest.raises(ValueError):
            ColumnProfile("a", "boolean", 1, 1, "categorical")

    def test_column_profile_rejects_unknown_distribution(self):
        with pytest.raises(ValueError):
            ColumnProfile("a", "numeric", 1, 1, "bimodal")

    def test_insight_rejects_unknown_kind(self):
        with pytest.raises(ValueError):
            Insight(kind="critical", message="x")

    def test_known_values_accepted(self):
        for semantic_type in SEMANTIC_TYPES:
            for distribution in DISTRIBUTIONS:
                ColumnProfile("a", semantic_type, 0, 0, distribution)
        for kind in INSIGHT_KINDS:
            Insight(kind=kind, message="x")


class TestOutlierReportExport:
    def _report(self, lower, upper):
        stats = OutlierStatistics(4, 4.0, 4.0, 0.0, 4.0, 4.0, 4.0, 4.0)
        return OutlierReport("v", "zscore", 2.0, stats, [], [], 0.0, lower, upper)

    def test_open_band_written_as_none(self):
        d = self._report(-math.inf, math.inf).to_dict()
        assert (d["lower_bound"], d["upper_bound"]) == (None, None)
        json.dumps(d, allow_nan=False)

    def test_finite_band_kept(self):
        d = self._report(1.5, 6.5).to_dict()
        assert (d["lower_bound"], d["upper_bound"]) == (1.5, 6.5)
