"""User profile and outcome records: the durable adaptation state."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from flowscroll.engine.task_types import ARITHMETIC_TYPES, TaskType


class Outcome(str, Enum):
    SUCCESS = "success"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class OutcomeRecord:
    task_id: str
    type: TaskType
    success: bool
    outcome: Outcome
    time_spent_ms: int
    timestamp: int  # end of the interaction, epoch ms
    start_time: int
    difficulty_level: float
    was_skipped: bool
    session_id: str
    session_duration_ms: int

    def to_dict(self) -> dict:
        return {
            "taskId": self.task_id,
            "type": self.type.value,
            "success": self.success,
            "outcome": self.outcome.value,
            "timeSpentMs": self.time_spent_ms,
            "timestamp": self.timestamp,
            "startTime": self.start_time,
            "difficultyLevel": self.difficulty_level,
            "wasSkipped": self.was_skipped,
            "sessionId": self.session_id,
            "sessionDurationMs": self.session_duration_ms,
        }


@dataclass(frozen=True)
class Streak:
    correct: int = 0
    wrong: int = 0

    def to_dict(self) -> dict:
        return {"correct": self.correct, "wrong": self.wrong}


def new_user_id() -> str:
    return str(uuid.uuid4())


def initial_levels() -> dict[TaskType, float]:
    # Arithmetic starts one digit up (3 digits total) so the first tasks are not trivial.
    return {t: (2 if t in ARITHMETIC_TYPES else 1) for t in TaskType}


@dataclass(frozen=True)
class UserProfile:
    """Per-user skill state.

    Instances are treated as values: the adapter never mutates one, it
    builds a replacement. ``history`` is a tuple so it cannot be appended
    to in place.
    """
    user_id: str = field(default_factory=new_user_id)
    levels: dict[TaskType, float] = field(default_factory=initial_levels)
    confidence: dict[TaskType, float] = field(default_factory=dict)
    streaks: dict[TaskType, Streak] = field(default_factory=dict)
    history: tuple[OutcomeRecord, ...] = ()
    total_time_ms: int = 0

    def level_for(self, task_type: TaskType) -> float:
        return self.levels.get(task_type) or 1

    def last_outcome(self) -> Optional[OutcomeRecord]:
        return self.history[-1] if self.history else None

    def to_dict(self) -> dict:
        return {
            "userId": self.user_id,
            "levels": {t.value: v for t, v in self.levels.items()},
            "confidence": {t.value: v for t, v in self.confidence.items()},
            "streaks": {t.value: s.to_dict() for t, s in self.streaks.items()},
            "history": [h.to_dict() for h in self.history],
            "totalTimeMs": self.total_time_ms,
        }
