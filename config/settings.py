"""Analysis thresholds loaded from environment variables."""

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "CHART_ADVISOR_",
        "extra": "ignore",
    }

    # Column classification
    classifier_sample_size: int = 100
    date_ratio_threshold: float = 0.7  # strictly greater than
    numeric_ratio_threshold: float = 0.6  # strictly greater than
    categorical_uniqueness_threshold: float = 0.5  # strictly less than
    max_analyzed_columns: int = 2

    # Text -> numeric reclassification (recommender only)
    reclassify_sample_size: int = 10
    reclassify_ratio_threshold: float = 0.7

    # Pattern analysis
    trend_slope_threshold: float = 0.1
    pattern_outlier_multiplier: float = 1.5

    # Recommendation scoring
    confidence_cap: int = 98

    # Outlier detection
    default_outlier_method: str = "iqr"  # "iqr" | "zscore" | "isolation"

    # Caller-side session cache
    session_cache_size: int = 32

    @field_validator(
        "date_ratio_threshold",
        "numeric_ratio_threshold",
        "categorical_uniqueness_threshold",
        "reclassify_ratio_threshold",
    )
    @classmethod
    def _ratio_in_unit_interval(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError(f"ratio threshold must be within [0, 1], got {v}")
        return v

    @field_validator("confidence_cap")
    @classmethod
    def _cap_on_scale(cls, v: int) -> int:
        if not 0 <= v <= 100:
            raise ValueError(f"confidence cap must be within [0, 100], got {v}")
        return v

    @field_validator("default_outlier_method")
    @classmethod
    def _known_method(cls, v: str) -> str:
        if v not in ("iqr", "zscore", "isolation"):
            raise ValueError(f"unknown outlier method {v!r}")
        return v


settings = Settings()
