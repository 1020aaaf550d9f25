"""Reconcile a persisted profile of unknown shape with the current schema.

Every field is reconciled on its own: a broken field falls back to its
default while the rest of the blob is kept. ``reconcile`` never raises,
and ``reconcile(reconcile(x)) == reconcile(x)``.
"""

from __future__ import annotations

import json
import logging
import math
from typing import Any, Optional

from flowscroll.engine.adaptive import MAX_ARITHMETIC_LEVEL
from flowscroll.engine.profile import (
    Outcome,
    OutcomeRecord,
    Streak,
    UserProfile,
    initial_levels,
    new_user_id,
)
from flowscroll.engine.task_types import TaskType

logger = logging.getLogger(__name__)


def _number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, int) and value.bit_length() > 53:
        return None
    return value


def _int(value: Any, default: int = 0) -> int:
    num = _number(value)
    return int(num) if num is not None else default


def _mapping(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def _reconcile_user_id(raw: dict) -> str:
    user_id = raw.get("userId")
    if isinstance(user_id, str) and user_id:
        return user_id
    return new_user_id()


def _reconcile_levels(raw: dict) -> dict[TaskType, float]:
    if not isinstance(raw.get("levels"), dict):
        return initial_levels()

    # A persisted level table replaces the defaults wholesale; only missing types get 1.
    persisted = raw["levels"]
    levels: dict[TaskType, float] = {}
    for task_type in TaskType:
        value = _number(persisted.get(task_type.value))
        level = max(1, value) if value is not None else 1
        if task_type.is_arithmetic:
            level = min(MAX_ARITHMETIC_LEVEL, level)
        levels[task_type] = level
    return levels


def _reconcile_confidence(raw: dict) -> dict[TaskType, float]:
    confidence: dict[TaskType, float] = {}
    for key, value in _mapping(raw.get("confidence")).items():
        task_type = TaskType.parse(key)
        num = _number(value)
        if task_type is None or num is None:
            continue
        confidence[task_type] = min(1.0, max(0.0, num))
    return confidence


def _reconcile_streaks(raw: dict) -> dict[TaskType, Streak]:
    streaks: dict[TaskType, Streak] = {}
    for key, value in _mapping(raw.get("streaks")).items():
        task_type = TaskType.parse(key)
        if task_type is None or not isinstance(value, dict):
            continue
        streaks[task_type] = Streak(
            correct=max(0, _int(value.get("correct"))),
            wrong=max(0, _int(value.get("wrong"))),
        )
    return streaks


def _reconcile_outcome(entry: Any) -> Optional[OutcomeRecord]:
    if not isinstance(entry, dict):
        return None
    task_type = TaskType.parse(entry.get("type"))
    if task_type is None:
        return None

    was_skipped = entry.get("wasSkipped") is True
    success = entry.get("success") is True and not was_skipped
    if was_skipped:
        outcome = Outcome.SKIPPED
    elif success:
        outcome = Outcome.SUCCESS
    else:
        outcome = Outcome.FAILED

    timestamp = _int(entry.get("timestamp"))
    level = _number(entry.get("difficultyLevel"))
    return OutcomeRecord(
        task_id=str(entry.get("taskId") or ""),
        type=task_type,
        success=success,
        outcome=outcome,
        time_spent_ms=max(0, _int(entry.get("timeSpentMs"))),
        timestamp=timestamp,
        start_time=_int(entry.get("startTime"), default=timestamp),
        difficulty_level=level if level is not None else 1,
        was_skipped=was_skipped,
        session_id=str(entry.get("sessionId") or ""),
        session_duration_ms=max(0, _int(entry.get("sessionDurationMs"))),
    )


def _reconcile_history(raw: dict) -> tuple[OutcomeRecord, ...]:
    entries = raw.get("history")
    if not isinstance(entries, list):
        return ()
    history = []
    for entry in entries:
        record = _reconcile_outcome(entry)
        if record is None:
            logger.info("Dropping unreadable history entry: %r", entry)
            continue
        history.append(record)
    return tuple(history)


def _decode(raw_value: Any) -> dict:
    if isinstance(raw_value, UserProfile):
        return raw_value.to_dict()
    if isinstance(raw_value, (bytes, bytearray)):
        raw_value = raw_value.decode("utf-8", errors="replace")
    if isinstance(raw_value, str):
        try:
            raw_value = json.loads(raw_value)
        except json.JSONDecodeError:
            logger.warning("Persisted profile is not valid JSON; starting fresh")
            return {}
    return raw_value if isinstance(raw_value, dict) else {}


def reconcile(raw_value: Any) -> UserProfile:
    """Build a current-schema UserProfile from whatever was persisted.

    Accepts a dict, a JSON string/bytes, an existing UserProfile, or
    garbage (None, lists, numbers...), which degrades to a fresh profile.
    """
    raw = _decode(raw_value)
    history = _reconcile_history(raw)

    total = _number(raw.get("totalTimeMs"))
    if total is None or total < 0:
        total_time_ms = sum(h.time_spent_ms for h in history)
    else:
        total_time_ms = int(total)

    return UserProfile(
        user_id=_reconcile_user_id(raw),
        levels=_reconcile_levels(raw),
        confidence=_reconcile_confidence(raw),
        streaks=_reconcile_streaks(raw),
        history=history,
        total_time_ms=total_time_ms,
    )
