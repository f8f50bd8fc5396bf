"""chart_advisor: dataset profiling, outlier detection and chart recommendations.

Public API: analyze(), detect(), detect_column(), recommend_charts()

Pipeline:
1. Classify the first two selected columns (numeric / date / categorical / text / empty)
2. Profile each: distribution, trend, outlier signal
3. Score chart kinds from a declarative rule table and rank them
4. Optionally flag outliers in one target column (iqr / zscore / isolation)
"""

from __future__ import annotations

from chart_advisor.discovery.outlier_detector import detect, detect_column
from chart_advisor.discovery.pattern_analyzer import profile_dataset
from chart_advisor.discovery.recommendation_scorer import recommend_charts
from chart_advisor.engine import analyze
from chart_advisor.errors import (
    ChartAdvisorError,
    EmptyInputError,
    InsufficientColumnsError,
    NoNumericDataError,
)
from chart_advisor.models import (
    AnalysisResult,
    ChartAxes,
    ChartRecommendation,
    ColumnProfile,
    DatasetProfile,
    DetectionConfig,
    Insight,
    OutlierAction,
    OutlierReport,
    OutlierStatistics,
)
from chart_advisor.session import AnalysisSequencer, AnalysisSession, analysis_key

__all__ = [
    "AnalysisResult",
    "AnalysisSequencer",
    "AnalysisSession",
    "ChartAdvisorError",
    "ChartAxes",
    "ChartRecommendation",
    "ColumnProfile",
    "DatasetProfile",
    "DetectionConfig",
    "EmptyInputError",
    "Insight",
    "InsufficientColumnsError",
    "NoNumericDataError",
    "OutlierAction",
    "OutlierReport",
    "OutlierStatistics",
    "analysis_key",
    "analyze",
    "detect",
    "detect_column",
    "profile_dataset",
    "recommend_charts",
]
