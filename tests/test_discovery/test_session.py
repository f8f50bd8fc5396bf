"""Tests for caller-side sequencing and result caching."""

from chart_advisor import session as session_module
from chart_advisor.models import DetectionConfig
from chart_advisor.session import AnalysisSequencer, AnalysisSession, analysis_key

ROWS = [{"region": "East", "sales": 100}, {"region": "West", "sales": 150}]
COLUMNS = ["region", "sales"]


# ---------------------------------------------------------------------------
# analysis_key
# ---------------------------------------------------------------------------


class TestAnalysisKey:
    def test_deterministic(self):
        assert analysis_key(ROWS, COLUMNS) == analysis_key(list(ROWS), list(COLUMNS))

    def test_key_order_in_rows_does_not_matter(self):
        reordered = [{"sales": 100, "region": "East"}, {"sales": 150, "region": "West"}]
        assert analysis_key(ROWS, COLUMNS) == analysis_key(reordered, COLUMNS)

    def test_every_input_changes_the_key(self):
        base = analysis_key(ROWS, COLUMNS)
        assert analysis_key(ROWS, ["sales", "region"]) != base
        assert analysis_key(ROWS[:1], COLUMNS) != base
        assert analysis_key(ROWS, COLUMNS, DetectionConfig("zscore")) != base
        assert analysis_key(ROWS, COLUMNS, target_column="sales") != base
        assert (
            analysis_key(ROWS, COLUMNS, DetectionConfig("iqr", 2.0))
            != analysis_key(ROWS, COLUMNS, DetectionConfig("iqr", 1.5))
        )


# ---------------------------------------------------------------------------
# Sequencer
# ---------------------------------------------------------------------------


class TestAnalysisSequencer:
    def test_tickets_increase(self):
        seq = AnalysisSequencer()
        assert [seq.next_ticket() for _ in range(3)] == [1, 2, 3]

    def test_stale_result_discarded(self):
        seq = AnalysisSequencer()
        older, newer = seq.next_ticket(), seq.next_ticket()
        assert seq.accept(newer)
        assert not seq.accept(older)
        assert seq.last_accepted == newer

    def test_in_order_results_accepted(self):
        seq = AnalysisSequencer()
        first, second = seq.next_ticket(), seq.next_ticket()
        assert seq.accept(first)
        assert seq.accept(second)


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------


class TestAnalysisSession:
    def test_cache_hit_returns_same_result(self):
        s = AnalysisSession()
        first = s.analyze(ROWS, COLUMNS)
        second = s.analyze(ROWS, COLUMNS)
        assert first is second
        assert (s.hits, s.misses) == (1, 1)

    def test_cache_eviction(self):
        s = AnalysisSession(cache_size=1)
        s.analyze(ROWS, COLUMNS)
        s.analyze(ROWS, ["sales", "region"])
        s.analyze(ROWS, COLUMNS)
        assert (s.hits, s.misses) == (0, 3)

    def test_cache_disabled(self):
        s = AnalysisSession(cache_size=0)
        s.analyze(ROWS, COLUMNS)
        s.analyze(ROWS, COLUMNS)
        assert s.misses == 2

    def test_cached_run_skips_analysis(self, monkeypatch):
        calls = []
        real = session_module.analyze

        def counting(*args):
            calls.append(args)
            return real(*args)

        monkeypatch.setattr(session_module, "analyze", counting)
        s = AnalysisSession()
        s.analyze(ROWS, COLUMNS)
        s.analyze(ROWS, COLUMNS)
        assert len(calls) == 1

    def test_out_of_order_completion(self):
        s = AnalysisSession()
        slow_ticket = s.begin()
        fast_ticket = s.begin()
        fast = s.analyze(ROWS, ["sales", "region"])
        slow = s.analyze(ROWS, COLUMNS)

        assert s.complete(fast_ticket, fast)
        assert not s.complete(slow_ticket, slow)
        assert s.latest is fast
