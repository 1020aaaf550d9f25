"""Turn a presented task plus the user's response into an outcome record."""

from __future__ import annotations

import time
import uuid
from dataclasses import dataclass, field
from typing import Optional

from flowscroll.engine.profile import Outcome, OutcomeRecord
from flowscroll.engine.tasks import TaskRecord

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def _base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def new_session_id(now: Optional[int] = None) -> str:
    now = now if now is not None else int(time.time() * 1000)
    return f"sess_{uuid.uuid4().hex[:8]}_{_base36(now)}"


@dataclass(frozen=True)
class SessionContext:
    started_at: int = field(default_factory=lambda: int(time.time() * 1000))
    session_id: str = ""

    def __post_init__(self):
        if not self.session_id:
            object.__setattr__(self, "session_id", new_session_id(self.started_at))


def classify(success: bool, was_skipped: bool) -> Outcome:
    if was_skipped:
        return Outcome.SKIPPED
    if success:
        return Outcome.SUCCESS
    return Outcome.FAILED


def evaluate(
    task: TaskRecord,
    success: bool,
    time_spent_ms: int,
    was_skipped: bool,
    session: SessionContext,
    now: Optional[int] = None,
    started_at: Optional[int] = None,
) -> OutcomeRecord:
    """Build the outcome record for one interaction.

    A skip never counts as a success, whatever the caller reported.
    ``started_at`` defaults to ``now - time_spent_ms``.
    """
    now = now if now is not None else int(time.time() * 1000)
    outcome = classify(success, was_skipped)
    return OutcomeRecord(
        task_id=task.id,
        type=task.type,
        success=outcome == Outcome.SUCCESS,
        outcome=outcome,
        time_spent_ms=time_spent_ms,
        timestamp=now,
        start_time=started_at if started_at is not None else now - time_spent_ms,
        difficulty_level=task.difficulty_level,
        was_skipped=was_skipped,
        session_id=session.session_id,
        session_duration_ms=max(0, now - session.started_at),
    )
