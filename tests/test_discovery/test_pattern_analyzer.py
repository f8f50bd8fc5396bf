"""Tests for per-column pattern analysis and dataset profiling."""

from chart_advisor.cognitive.column_classifier import classify_columns
from chart_advisor.discovery.pattern_analyzer import (
    analyze_pattern,
    classify_distribution,
    profile_dataset,
)


# ---------------------------------------------------------------------------
# classify_distribution
# ---------------------------------------------------------------------------


class TestClassifyDistribution:
    def test_few_distinct_values(self):
        assert classify_distribution(5, 100) == "categorical"

    def test_mostly_distinct(self):
        assert classify_distribution(90, 100) == "continuous"

    def test_in_between(self):
        assert classify_distribution(50, 100) == "mixed"

    def test_exactly_ten_distinct(self):
        # 10/12 = 0.83
        assert classify_distribution(10, 12) == "continuous"

    def test_empty_column(self):
        assert classify_distribution(0, 0) == "categorical"


# ---------------------------------------------------------------------------
# analyze_pattern
# ---------------------------------------------------------------------------


class TestAnalyzePattern:
    def test_rising_series_has_trend(self):
        values = [100 + 5 * i for i in range(20)]
        p = analyze_pattern("value", values, "numeric")
        assert p.has_trend
        assert p.outlier_count == 0
        assert p.unique_count == 20
        assert p.distribution == "continuous"

    def test_flat_series_has_no_trend(self):
        p = analyze_pattern("value", [7, 7, 7, 7, 7, 7, 7], "numeric")
        assert not p.has_trend

    def test_five_values_are_too_few_for_signals(self):
        p = analyze_pattern("value", [1, 10, 20, 30, 40], "numeric")
        assert not p.has_trend
        assert p.outlier_count == 0

    def test_outlier_count(self):
        p = analyze_pattern("value", [10, 12, 11, 13, 9, 500], "numeric")
        assert p.outlier_count == 1

    def test_non_numeric_columns_get_no_signals(self):
        values = [str(i) for i in range(20)]
        p = analyze_pattern("label", values, "text")
        assert not p.has_trend
        assert p.outlier_count == 0
        assert p.total_count == 20


# ---------------------------------------------------------------------------
# profile_dataset
# ---------------------------------------------------------------------------


class TestProfileDataset:
    ROWS = [
        {"region": ["North", "South", "East", "West"][i % 4], "sales": 100 + 7 * (i % 5), "extra": i}
        for i in range(12)
    ]

    def test_profiles_first_two_columns_in_order(self):
        profile = profile_dataset(self.ROWS, ["region", "sales", "extra"])
        assert list(profile.column_profiles) == ["region", "sales"]

    def test_semantic_types(self):
        profile = profile_dataset(self.ROWS, ["region", "sales"])
        assert profile.column_profiles["region"].semantic_type == "categorical"
        assert profile.column_profiles["sales"].semantic_type == "numeric"
        assert profile.columns_of_type("categorical") == ["region"]

    def test_comparison_insight(self):
        profile = profile_dataset(self.ROWS, ["region", "sales"])
        assert profile.insights[0].kind == "info"

    def test_integer_too_large_for_float(self):
        rows = [{"a": i, "b": 10 ** 400} for i in range(3)]
        profile = profile_dataset(rows, ["a", "b"])
        assert profile.column_profiles["a"].semantic_type == "numeric"
        assert profile.column_profiles["b"].semantic_type == "text"

    def test_types_match_classifier(self):
        columns = ["region", "sales", "extra"]
        profile = profile_dataset(self.ROWS, columns)
        types = {n: p.semantic_type for n, p in profile.column_profiles.items()}
        assert types == classify_columns(self.ROWS, columns)

    def test_empty_rows(self):
        profile = profile_dataset([], ["a", "b"])
        for p in profile.column_profiles.values():
            assert p.semantic_type == "empty"
            assert p.total_count == 0
        assert profile.insights == []

    def test_to_dict(self):
        d = profile_dataset(self.ROWS, ["region", "sales"]).to_dict()
        assert d["column_profiles"]["sales"]["semantic_type"] == "numeric"
        assert isinstance(d["insights"], list)
