"""Tests for outcome evaluation and session ids."""

from __future__ import annotations

import re

import pytest

from flowscroll.engine.evaluator import SessionContext, _base36, classify, evaluate, new_session_id
from flowscroll.engine.migration import reconcile
from flowscroll.engine.profile import Outcome
from flowscroll.engine.task_types import TaskType


class TestSessionIds:
    @pytest.mark.parametrize("value, encoded", [(0, "0"), (35, "z"), (36, "10"), (1295, "zz")])
    def test_base36(self, value, encoded):
        assert _base36(value) == encoded

    def test_shape(self):
        session_id = new_session_id(1_700_000_000_000)
        assert re.fullmatch(r"sess_[0-9a-f]{8}_[0-9a-z]+", session_id)
        assert session_id.endswith("_" + _base36(1_700_000_000_000))

    def test_session_context_generates_id(self):
        ctx = SessionContext(started_at=42)
        assert ctx.session_id.startswith("sess_")
        assert ctx.session_id.endswith("_16")

    def test_explicit_id_kept(self):
        assert SessionContext(started_at=0, session_id="abc").session_id == "abc"


class TestClassify:
    @pytest.mark.parametrize("success, skipped, outcome", [
        (True, False, Outcome.SUCCESS),
        (False, False, Outcome.FAILED),
        (False, True, Outcome.SKIPPED),
        (True, True, Outcome.SKIPPED),
    ])
    def test_classify(self, success, skipped, outcome):
        assert classify(success, skipped) == outcome


class TestEvaluate:
    def test_success(self, make_task, session):
        task = make_task(TaskType.MUSIC_RHYTHM, level=3.4, task_id="t-9")
        record = evaluate(task, True, 2500, False, session, now=1_010_000)
        assert record.task_id == "t-9"
        assert record.type == TaskType.MUSIC_RHYTHM
        assert record.success is True
        assert record.outcome == Outcome.SUCCESS
        assert record.difficulty_level == 3.4
        assert record.timestamp == 1_010_000
        assert record.start_time == 1_010_000 - 2500
        assert record.session_id == "sess_test"
        assert record.session_duration_ms == 10_000

    def test_skip_is_never_a_success(self, make_task, session):
        record = evaluate(make_task(), True, 800, True, session, now=1_000_800)
        assert record.success is False
        assert record.was_skipped is True
        assert record.outcome == Outcome.SKIPPED

    def test_explicit_start_time(self, make_task, session):
        record = evaluate(make_task(), False, 3000, False, session, now=1_005_000, started_at=1_001_000)
        assert record.start_time == 1_001_000
        assert record.outcome == Outcome.FAILED

    def test_to_dict_uses_wire_names(self, make_task, session):
        data = evaluate(make_task(), True, 100, False, session, now=1_000_100).to_dict()
        assert data["type"] == "MATH_ADDITION"
        assert data["outcome"] == "success"
        assert {"taskId", "timeSpentMs", "startTime", "difficultyLevel", "wasSkipped",
                "sessionId", "sessionDurationMs"} <= data.keys()

    def test_clock_before_session_start(self, make_task, session):
        record = evaluate(make_task(), True, 500, False, session, now=999_000)
        assert record.session_duration_ms == 0
        assert reconcile({"history": [record.to_dict()]}).history == (record,)
