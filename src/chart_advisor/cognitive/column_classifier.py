"""Column semantic classifier: infers numeric / date / categorical / text.

Pure Python, no I/O.  Runs BEFORE pattern analysis and recommendation
scoring to decide which statistics apply to a column and which chart
roles it can fill.  Never raises: insufficient data degrades to ``empty``.
"""

from __future__ import annotations

import datetime as dt
import logging
import math
import numbers
import re
from typing import Any, Iterable, Sequence

from config.settings import settings

from chart_advisor.models import Row

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Value patterns
# ---------------------------------------------------------------------------

# Whole-string decimal literal, optionally signed, with optional exponent.
_NUMBER_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")

# Leading decimal literal; trailing junk ("12 kg", "3.5%") is ignored.
_LEADING_NUMBER_RE = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

# (pattern, field order), first match wins
_DATE_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})$"), "ymd"),  # YYYY-MM-DD, YYYY-M-D
    (re.compile(r"^(\d{4})/(\d{1,2})/(\d{1,2})$"), "ymd"),  # YYYY/M/D
    (re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{2,4})$"), "mdy"),  # MM/DD/YYYY, M/D/YY
    (re.compile(r"^(\d{1,2})-(\d{1,2})-(\d{2,4})$"), "mdy"),  # MM-DD-YYYY, M-D-YY
]

_MIN_YEAR = 1900  # exclusive
_MAX_YEAR = 2100  # exclusive


# ---------------------------------------------------------------------------
# Value helpers
# ---------------------------------------------------------------------------


def is_missing(value: Any) -> bool:
    """True for None, the empty string and float NaN.

    Whitespace-only strings are kept as values.
    """
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, float):
        return math.isnan(value)
    return False


def clean_values(rows: Sequence[Row], column: str) -> list[Any]:
    """Extract a column's values in row order, dropping missing entries."""
    return [v for v in (row.get(column) for row in rows) if not is_missing(v)]


def parse_number(value: Any) -> float | None:
    """Parse a finite number; the whole string must be a numeric literal.

    Booleans are not numbers.  Returns None when the value does not parse.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, numbers.Real):
        try:
            f = float(value)
        except OverflowError:
            return None
        return f if math.isfinite(f) else None
    if isinstance(value, str):
        s = value.strip()
        if not _NUMBER_RE.match(s):
            return None
        f = float(s)
        return f if math.isfinite(f) else None
    return None


def parse_leading_number(value: Any) -> float | None:
    """Lenient parse that accepts a numeric prefix ("12 kg" -> 12.0)."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        m = _LEADING_NUMBER_RE.match(value)
        if not m:
            return None
        f = float(m.group(1))
        return f if math.isfinite(f) else None
    return parse_number(value)


def parse_numbers(values: Iterable[Any]) -> list[float]:
    """Parse numeric values, skipping non-parseable ones."""
    nums = []
    for v in values:
        f = parse_number(v)
        if f is not None:
            nums.append(f)
    return nums


def parse_date(value: Any) -> dt.date | None:
    """Parse one of the supported literal date layouts into a calendar date.

    Only strings qualify.  Two-digit years map 00-49 to 20xx and 50-99 to
    19xx.  The year must fall strictly between 1900 and 2100.
    """
    if not isinstance(value, str):
        return None
    s = value.strip()
    if not s:
        return None

    for pattern, order in _DATE_PATTERNS:
        m = pattern.match(s)
        if not m:
            continue
        a, b, c = m.groups()
        if order == "ymd":
            year, month, day = int(a), int(b), int(c)
        else:
            month, day, year = int(a), int(b), int(c)
            if len(c) == 2:
                year += 2000 if year < 50 else 1900
        if not _MIN_YEAR < year < _MAX_YEAR:
            return None
        try:
            return dt.date(year, month, day)
        except ValueError:
            return None
    return None


def is_date_value(value: Any) -> bool:
    return parse_date(value) is not None


def _value_key(value: Any) -> Any:
    """Hashable identity used for distinct-value counting."""
    if isinstance(value, (str, int, float)):
        return value
    return repr(value)


def distinct_count(values: Iterable[Any]) -> int:
    return len({_value_key(v) for v in values})


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def classify_column(values: Sequence[Any], name: str = "") -> str:
    """Infer the semantic type of one column.

    *values* must already be stripped of missing entries.  Only the first
    ``classifier_sample_size`` values are inspected.  Priority order, first
    match wins: empty > date > numeric > categorical > text.
    """
    sample = list(values[: settings.classifier_sample_size])
    total = len(sample)
    if total == 0:
        return "empty"

    date_count = sum(1 for v in sample if is_date_value(v))
    numeric_count = sum(1 for v in sample if parse_number(v) is not None)
    unique_count = distinct_count(sample)

    date_ratio = date_count / total
    numeric_ratio = numeric_count / total
    uniqueness_ratio = unique_count / total

    logger.debug(
        "Classifying %s: n=%d date=%.2f numeric=%.2f unique=%.2f",
        name or "<column>", total, date_ratio, numeric_ratio, uniqueness_ratio,
    )

    if date_ratio > settings.date_ratio_threshold:
        return "date"
    if numeric_ratio > settings.numeric_ratio_threshold:
        return "numeric"
    if uniqueness_ratio < settings.categorical_uniqueness_threshold and total > 5:
        return "categorical"
    return "text"


def classify_columns(rows: Sequence[Row], columns: Sequence[str]) -> dict[str, str]:
    """Classify the analyzed prefix of *columns* (first two by default).

    Returns an insertion-ordered mapping column -> semantic type.
    """
    analyzed = list(columns[: settings.max_analyzed_columns])
    return {col: classify_column(clean_values(rows, col), col) for col in analyzed}


def reclassify_as_numeric(values: Sequence[Any]) -> bool:
    """Second-chance numeric check for columns classified as text.

    Upstream values often arrive as decorated strings ("1,200", "12 kg").
    Looks at the first ``reclassify_sample_size`` values and accepts the
    column when at least ``reclassify_ratio_threshold`` of them start with a
    finite number.
    """
    sample = [
        v.replace(",", "") if isinstance(v, str) else v
        for v in values[: settings.reclassify_sample_size]
    ]
    if not sample:
        return False
    parsed = sum(1 for v in sample if parse_leading_number(v) is not None)
    return parsed / len(sample) >= settings.reclassify_ratio_threshold
