"""Caller-side sequencing and memoization for repeated analysis requests.

The analysis core is stateless.  A UI that recomputes on every input change
may fire requests faster than they finish, so the caller owns an
:class:`AnalysisSession`:

    ticket = session.begin()
    result = session.analyze(rows, columns, config)
    if session.complete(ticket, result):
        show(result)

Results are accepted last-writer-wins by *submission* order: a result whose
ticket is older than the last accepted one is discarded.  The cache is
exact-match keyed on (rows, columns, config, target column).
"""

from __future__ import annotations

import hashlib
import json
import logging
from collections import OrderedDict
from typing import Sequence

from config.settings import settings

from chart_advisor.engine import analyze
from chart_advisor.models import AnalysisResult, DetectionConfig, Row

logger = logging.getLogger(__name__)


def analysis_key(
    rows: Sequence[Row],
    columns: Sequence[str],
    config: DetectionConfig | None = None,
    target_column: str | None = None,
) -> str:
    """Deterministic SHA-256 key over the complete analysis input."""
    payload = json.dumps({
        "rows": [dict(r) for r in rows],
        "columns": list(columns),
        "method": config.method if config else None,
        "sensitivity": config.sensitivity if config else None,
        "target": target_column,
    }, default=str, sort_keys=True)
    return hashlib.sha256(payload.encode()).hexdigest()


class AnalysisSequencer:
    """Issues increasing tickets and accepts only results newer than the last."""

    def __init__(self) -> None:
        self._issued = 0
        self._accepted = 0

    def next_ticket(self) -> int:
        self._issued += 1
        return self._issued

    def accept(self, ticket: int) -> bool:
        if ticket <= self._accepted:
            return False
        self._accepted = ticket
        return True

    @property
    def last_accepted(self) -> int:
        return self._accepted


class AnalysisSession:
    """Caller-owned context: a sequencer plus a bounded exact-match cache."""

    def __init__(self, cache_size: int | None = None) -> None:
        self.sequencer = AnalysisSequencer()
        self._cache: OrderedDict[str, AnalysisResult] = OrderedDict()
        self._cache_size = settings.session_cache_size if cache_size is None else cache_size
        self.latest: AnalysisResult | None = None
        self.hits = 0
        self.misses = 0

    def begin(self) -> int:
        return self.sequencer.next_ticket()

    def analyze(
        self,
        rows: Sequence[Row],
        columns: Sequence[str],
        config: DetectionConfig | None = None,
        target_column: str | None = None,
    ) -> AnalysisResult:
        """Run :func:`chart_advisor.engine.analyze`, reusing identical prior runs."""
        key = analysis_key(rows, columns, config, target_column)
        cached = self._cache.get(key)
        if cached is not None:
            self._cache.move_to_end(key)
            self.hits += 1
            return cached

        self.misses += 1
        result = analyze(rows, columns, config, target_column)
        if self._cache_size > 0:
            self._cache[key] = result
            while len(self._cache) > self._cache_size:
                self._cache.popitem(last=False)
        return result

    def complete(self, ticket: int, result: AnalysisResult) -> bool:
        """Accept *result* if no newer ticket was accepted before it."""
        if not self.sequencer.accept(ticket):
            logger.debug(
                "Discarding stale result for ticket %d (accepted %d)",
                ticket, self.sequencer.last_accepted,
            )
            return False
        self.latest = result
        return True
