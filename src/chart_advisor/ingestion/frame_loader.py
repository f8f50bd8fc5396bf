"""DataFrame to row records for the analysis core."""
from __future__ import annotations

import logging

import numpy as np
import pandas as pd

from chart_advisor.models import Row

logger = logging.getLogger(__name__)

_DATE_FORMAT = "%Y-%m-%d"


def _is_datetime(dtype: np.dtype) -> bool:
    return pd.api.types.is_datetime64_any_dtype(dtype)


def rows_from_dataframe(df: pd.DataFrame, columns: list[str] | None = None) -> list[Row]:
    """Convert *df* into a list of row dicts.

    Column names become strings, NaN/NaT become None, and datetime columns
    become ``YYYY-MM-DD`` strings so the classifier can recognise them.

    Args:
        df: Source frame; it is not modified.
        columns: Optional subset of columns to keep, in order.

    Returns:
        One dict per row, in frame order.
    """
    if columns is not None:
        df = df[columns]
    if df.empty:
        return []

    out = df.copy()
    out.columns = [str(c) for c in out.columns]
    for col in out.columns:
        if _is_datetime(out[col].dtype):
            out[col] = out[col].dt.strftime(_DATE_FORMAT)

    # Replace NaN/NaT with None; object dtype keeps None from being coerced back
    out = out.astype(object).where(out.notna(), None)
    rows = out.to_dict(orient="records")

    logger.debug("Converted frame to %d rows x %d columns", len(rows), len(out.columns))
    return [_to_native(r) for r in rows]


def _to_native(row: dict) -> dict:
    """Unwrap numpy scalars into plain Python values."""
    return {k: (v.item() if isinstance(v, np.generic) else v) for k, v in row.items()}


def columns_from_dataframe(df: pd.DataFrame) -> list[str]:
    return [str(c) for c in df.columns]
