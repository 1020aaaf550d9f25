"""Tests for reconciling persisted profiles with the current schema."""

from __future__ import annotations

import json

import pytest

from flowscroll.engine.migration import reconcile
from flowscroll.engine.profile import Outcome, UserProfile, initial_levels
from flowscroll.engine.task_types import TaskType


def _entry(**overrides) -> dict:
    entry = {
        "taskId": "t-1",
        "type": "MATH_ADDITION",
        "success": True,
        "timeSpentMs": 1500,
        "timestamp": 10_000,
        "startTime": 8_500,
        "difficultyLevel": 2,
        "wasSkipped": False,
        "sessionId": "sess_x",
        "sessionDurationMs": 4000,
    }
    entry.update(overrides)
    return entry


class TestGarbage:
    @pytest.mark.parametrize("raw", [None, "", "not json {", b"\xff\xfe", [], 42, "null", '"text"'])
    def test_degrades_to_fresh_profile(self, raw):
        profile = reconcile(raw)
        assert profile.levels == initial_levels()
        assert profile.history == ()
        assert profile.total_time_ms == 0
        assert profile.user_id

    def test_profile_passes_through(self, profile):
        assert reconcile(profile) == profile


class TestLevels:
    def test_persisted_table_replaces_defaults(self):
        profile = reconcile({"levels": {"MATH_ADDITION": 4, "REACTION_COLOR": 2.5}})
        assert profile.levels[TaskType.MATH_ADDITION] == 4
        assert profile.levels[TaskType.REACTION_COLOR] == 2.5
        # Missing entries get 1, not their initial value.
        assert profile.levels[TaskType.MATH_SUBTRACTION] == 1
        assert set(profile.levels) == set(TaskType)

    def test_invalid_values_become_one(self):
        profile = reconcile({"levels": {
            "MATH_ADDITION": "five",
            "MUSIC_MEMORY": 0.5,
            "REACTION_SHAPE": -3,
            "LANG_CONNECT": True,
        }})
        for task_type in (TaskType.MATH_ADDITION, TaskType.MUSIC_MEMORY,
                          TaskType.REACTION_SHAPE, TaskType.LANG_CONNECT):
            assert profile.levels[task_type] == 1

    def test_unknown_types_dropped(self):
        profile = reconcile({"levels": {"MATH_DIVISION": 9}})
        assert "MATH_DIVISION" not in {t.value for t in profile.levels}

    def test_arithmetic_levels_clamped_to_ten(self):
        profile = reconcile({"levels": {"MATH_ADDITION": 50, "MATH_MULTIPLICATION": 10.5, "REACTION_COLOR": 50}})
        assert profile.levels[TaskType.MATH_ADDITION] == 10
        assert profile.levels[TaskType.MATH_MULTIPLICATION] == 10
        assert profile.levels[TaskType.REACTION_COLOR] == 50

    @pytest.mark.parametrize("value", ["1e999", "-1e999", "NaN", "1" + "0" * 400])
    def test_non_finite_levels_become_one(self, value):
        profile = reconcile('{"levels": {"MATH_ADDITION": ' + value + ', "MUSIC_MEMORY": ' + value + '}}')
        assert profile.levels[TaskType.MATH_ADDITION] == 1
        assert profile.levels[TaskType.MUSIC_MEMORY] == 1

    def test_reconciled_levels_can_generate(self, selector):
        profile = reconcile('{"levels": {"MATH_ADDITION": 1e999, "MATH_SUBTRACTION": 50}}')
        addition = selector.build_task(TaskType.MATH_ADDITION, profile)
        subtraction = selector.build_task(TaskType.MATH_SUBTRACTION, profile)
        assert addition.difficulty_level == 1
        assert subtraction.content.a >= subtraction.content.b


class TestConfidenceAndStreaks:
    def test_confidence_clamped(self):
        profile = reconcile({"confidence": {"REACTION_COLOR": 1.7, "MUSIC_MEMORY": -0.2, "NOPE": 0.5}})
        assert profile.confidence == {TaskType.REACTION_COLOR: 1.0, TaskType.MUSIC_MEMORY: 0.0}

    def test_streaks(self):
        profile = reconcile({"streaks": {"LANG_CONNECT": {"correct": 2}, "MUSIC_RHYTHM": "bad"}})
        assert profile.streaks[TaskType.LANG_CONNECT].correct == 2
        assert profile.streaks[TaskType.LANG_CONNECT].wrong == 0
        assert TaskType.MUSIC_RHYTHM not in profile.streaks


class TestHistory:
    def test_unreadable_entries_dropped(self):
        profile = reconcile({"history": [_entry(), "junk", _entry(type="LANG_HAIKU"), None]})
        assert len(profile.history) == 1
        assert profile.history[0].type == TaskType.MATH_ADDITION
        assert profile.history[0].outcome == Outcome.SUCCESS

    def test_skip_is_never_success(self):
        profile = reconcile({"history": [_entry(success=True, wasSkipped=True)]})
        record = profile.history[0]
        assert record.success is False
        assert record.outcome == Outcome.SKIPPED

    def test_total_time_from_history_when_missing(self):
        profile = reconcile({"history": [_entry(timeSpentMs=1000), _entry(timeSpentMs=2500)]})
        assert profile.total_time_ms == 3500

    def test_total_time_kept_when_valid(self):
        profile = reconcile({"history": [_entry()], "totalTimeMs": 99_000})
        assert profile.total_time_ms == 99_000

    def test_infinite_total_time_recomputed(self):
        profile = reconcile('{"history": [], "totalTimeMs": 1e999}')
        assert profile.total_time_ms == 0

    @pytest.mark.parametrize("field", ["timeSpentMs", "timestamp", "startTime", "sessionDurationMs", "difficultyLevel"])
    def test_infinite_history_fields_fall_back(self, field):
        raw = json.dumps({"history": [_entry(**{field: "INF"})]}).replace('"INF"', "1e999")
        profile = reconcile(raw)
        assert len(profile.history) == 1
        record = profile.history[0]
        assert record.time_spent_ms >= 0
        assert record.difficulty_level >= 1


class TestIdempotence:
    @pytest.mark.parametrize("raw", [
        None,
        {"userId": "u-1", "levels": {"MATH_ADDITION": 3}},
        {"history": [_entry(), _entry(type="REACTION_COLOR", success=False)], "confidence": {"REACTION_COLOR": 0.3}},
        {"levels": "broken", "streaks": {"MUSIC_MEMORY": {"correct": 1, "wrong": 0}}},
        '{"levels": {"MATH_ADDITION": 1e999, "MATH_SUBTRACTION": 42}, "totalTimeMs": 1e999}',
        '{"history": [{"type": "MATH_ADDITION", "timeSpentMs": 1e999, "sessionDurationMs": -1e999}]}',
    ])
    def test_reconcile_twice(self, raw):
        once = reconcile(raw)
        assert reconcile(once) == once
        assert reconcile(once.to_dict()) == once
        assert reconcile(json.dumps(once.to_dict())) == once

    def test_user_id_kept(self):
        assert reconcile({"userId": "abc"}).user_id == "abc"

    def test_round_trip_of_live_profile(self):
        profile = UserProfile(user_id="u", levels={**initial_levels(), TaskType.MUSIC_RHYTHM: 3.25})
        assert reconcile(json.dumps(profile.to_dict())) == profile
