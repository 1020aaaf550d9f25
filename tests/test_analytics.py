"""Tests for the analytics outcome log."""

from __future__ import annotations

from flowscroll.engine.adaptive import adapt
from flowscroll.engine.evaluator import evaluate
from flowscroll.state.analytics import AnalyticsLog, build_payload


def _outcome(make_task, session, success=True):
    return evaluate(make_task(), success, 1800, False, session, now=1_001_800)


class TestBuildPayload:
    def test_without_adaptation(self, make_task, session):
        payload = build_payload("user-1", _outcome(make_task, session))
        assert payload["userId"] == "user-1"
        assert payload["taskId"] == "t-1"
        assert payload["outcome"] == "success"
        assert "algo_action" not in payload

    def test_with_adaptation_tags(self, make_task, session, profile):
        outcome = _outcome(make_task, session, success=False)
        payload = build_payload("user-1", outcome, adapt(profile, outcome))
        assert payload["algo_action"] == "decrease"
        assert payload["algo_trend"] == "steady"
        assert payload["algo_reason"]


class TestAnalyticsLog:
    def test_record_appends_lines(self, tmp_path, make_task, session):
        log = AnalyticsLog(tmp_path / "a" / "analytics.jsonl")
        assert log.record("u", _outcome(make_task, session))
        assert log.record("u", _outcome(make_task, session, success=False))
        rows = log.read_all()
        assert [r["success"] for r in rows] == [True, False]

    def test_disabled_writes_nothing(self, tmp_path, make_task, session):
        path = tmp_path / "analytics.jsonl"
        log = AnalyticsLog(path, enabled=False)
        assert log.record("u", _outcome(make_task, session)) is False
        assert not path.exists()
        assert log.read_all() == []

    def test_write_failure_is_swallowed(self, tmp_path, make_task, session):
        # A directory in place of the log file makes the write fail.
        log = AnalyticsLog(tmp_path)
        assert log.record("u", _outcome(make_task, session)) is False
