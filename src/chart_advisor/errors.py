"""Error taxonomy for the analysis core.

Only two kinds ever reach a caller in normal use: ``EmptyInputError`` and
``NoNumericDataError``. Both mean the caller passed an unusable input.
``InsufficientColumnsError`` marks a contract violation (nothing selected).
"""

from __future__ import annotations

from typing import Any


class ChartAdvisorError(Exception):
    """Base exception carrying structured context for diagnostics."""

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        self.message = message
        self.context = context or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "context": self.context,
        }


class EmptyInputError(ChartAdvisorError, ValueError):
    """A statistical primitive received a zero-length sequence."""

    def __init__(self, operation: str):
        super().__init__(
            f"{operation}() requires at least one value",
            context={"operation": operation},
        )


class NoNumericDataError(ChartAdvisorError, ValueError):
    """No value of the target column parsed as a finite number."""

    def __init__(self, column: str, total: int = 0):
        super().__init__(
            f"Column {column!r} has no numeric values ({total} values inspected)",
            context={"column": column, "total": total},
        )


class InsufficientColumnsError(ChartAdvisorError, ValueError):
    """Too few columns were selected to build chart axes."""

    def __init__(self, selected: int, required: int = 1):
        super().__init__(
            f"At least {required} column(s) must be selected, got {selected}",
            context={"selected": selected, "required": required},
        )
