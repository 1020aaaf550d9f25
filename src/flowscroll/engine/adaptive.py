"""Adaptive difficulty: per-type level updates after every outcome.

Two controllers share the bookkeeping:

* Flow zone (arithmetic): looks at a window of recent results for the
  type and steps the integer digit-capacity level by one when the user is
  struggling (low accuracy or very slow) or bored (accurate and fast).
  Early on (fewer than 30 results) the window is short and increases are
  immediate; afterwards the window widens and increases only land on
  every 15th result.
* ELO-like (everything else): a single outcome moves a continuous level
  by a speed-graded amount, scaled by a volatility that shrinks as the
  type's confidence grows.

``adapt`` never touches the profile it is given; it returns a new one.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from enum import Enum

from flowscroll.engine.profile import Outcome, OutcomeRecord, Streak, UserProfile
from flowscroll.engine.task_types import TaskType

logger = logging.getLogger(__name__)

MIN_LEVEL = 1
MAX_ARITHMETIC_LEVEL = 10

# Flow zone
FLOW_MIN_MS = 5000
FLOW_MAX_MS = 20000
SLOW_FACTOR = 1.2
CALIBRATION_TASKS = 30
EARLY_WINDOW = 8
LATE_WINDOW = 15
STABLE_INCREASE_EVERY = 15
STRUGGLE_ACCURACY = 0.6
BOREDOM_ACCURACY = 0.9

# ELO
DEFAULT_CONFIDENCE = 0.1
DECISIVE_CONFIDENCE_GAIN = 0.05
SKIP_CONFIDENCE_GAIN = 0.01
FAST_SKIP_MS = 1500

TREND_STREAK = 3


class Decision(str, Enum):
    INCREASE_FAST = "increase_fast"
    INCREASE = "increase"
    DECREASE = "decrease"
    MAINTAIN = "maintain"
    INCREASE_ELO = "increase_elo"
    DECREASE_ELO = "decrease_elo"


@dataclass(frozen=True)
class WindowStats:
    total: int  # all results recorded for the type, including the new one
    size: int
    accuracy: float
    avg_time_ms: float

    @property
    def calibrating(self) -> bool:
        return self.total < CALIBRATION_TASKS


@dataclass(frozen=True)
class Adaptation:
    profile: UserProfile
    decision: Decision
    reason: str
    trend: str

    def tags(self) -> dict:
        return {
            "algo_action": self.decision.value,
            "algo_reason": self.reason,
            "algo_trend": self.trend,
        }


def window_stats(type_history: list[OutcomeRecord]) -> WindowStats:
    total = len(type_history)
    window_size = EARLY_WINDOW if total < CALIBRATION_TASKS else LATE_WINDOW
    window = type_history[-window_size:]
    if not window:
        return WindowStats(total=0, size=0, accuracy=0.0, avg_time_ms=0.0)
    wins = sum(1 for h in window if h.success)
    return WindowStats(
        total=total,
        size=len(window),
        accuracy=wins / len(window),
        avg_time_ms=sum(h.time_spent_ms for h in window) / len(window),
    )


def flow_zone_step(level: float, stats: WindowStats) -> tuple[int, Decision]:
    """One flow-zone decision; first matching rule wins."""
    level = int(level)

    if stats.accuracy < STRUGGLE_ACCURACY or stats.avg_time_ms > FLOW_MAX_MS * SLOW_FACTOR:
        return max(MIN_LEVEL, level - 1), Decision.DECREASE

    if stats.accuracy >= BOREDOM_ACCURACY and stats.avg_time_ms < FLOW_MIN_MS:
        if stats.calibrating:
            return min(MAX_ARITHMETIC_LEVEL, level + 1), Decision.INCREASE_FAST
        if stats.total % STABLE_INCREASE_EVERY == 0:
            return min(MAX_ARITHMETIC_LEVEL, level + 1), Decision.INCREASE

    return level, Decision.MAINTAIN


def base_change(outcome: OutcomeRecord) -> float:
    """Level delta before volatility: faster correct answers earn more."""
    t = outcome.time_spent_ms
    if outcome.success:
        if t < 3000:
            return 1.0
        if t < 5000:
            return 0.6
        if t < 10000:
            return 0.3
        return 0.1
    if outcome.was_skipped:
        # A snap skip reads as "too hard", a slow one as boredom.
        return -0.5 if t < FAST_SKIP_MS else -0.2
    return -0.5


def volatility(confidence: float) -> float:
    return 1 + (1 - confidence) * 2


def round2(value: float) -> float:
    """Round half up to two decimals."""
    return math.floor(value * 100 + 0.5) / 100


def elo_step(level: float, confidence: float, outcome: OutcomeRecord) -> tuple[float, float, float]:
    """Return (new level, new confidence, applied change).

    Only the lower bound is clamped; these levels have no ceiling.
    """
    change = base_change(outcome) * volatility(confidence)
    new_level = round2(max(MIN_LEVEL, level + change))
    gain = SKIP_CONFIDENCE_GAIN if outcome.was_skipped else DECISIVE_CONFIDENCE_GAIN
    return new_level, min(1.0, confidence + gain), change


def next_streak(streak: Streak, outcome: OutcomeRecord) -> Streak:
    if outcome.outcome == Outcome.SUCCESS:
        return Streak(correct=streak.correct + 1, wrong=0)
    if outcome.outcome == Outcome.FAILED:
        return Streak(correct=0, wrong=streak.wrong + 1)
    return streak


def trend_for(streak: Streak) -> str:
    if streak.correct >= TREND_STREAK:
        return "up"
    if streak.wrong >= TREND_STREAK:
        return "down"
    return "steady"


def adapt(profile: UserProfile, outcome: OutcomeRecord) -> Adaptation:
    """Record ``outcome`` and move the level of its task type."""
    task_type: TaskType = outcome.type
    history = profile.history + (outcome,)
    streak = next_streak(profile.streaks.get(task_type, Streak()), outcome)

    levels = dict(profile.levels)
    confidence = dict(profile.confidence)
    streaks = {**profile.streaks, task_type: streak}
    level = profile.level_for(task_type)

    if task_type.is_arithmetic:
        stats = window_stats([h for h in history if h.type == task_type])
        new_level, decision = flow_zone_step(level, stats)
        reason = (
            f"accuracy={stats.accuracy:.2f} avg_ms={stats.avg_time_ms:.0f} "
            f"window={stats.size} total={stats.total}"
        )
    else:
        current_confidence = profile.confidence.get(task_type) or DEFAULT_CONFIDENCE
        new_level, confidence[task_type], change = elo_step(level, current_confidence, outcome)
        if change > 0:
            decision = Decision.INCREASE_ELO
        elif change < 0:
            decision = Decision.DECREASE_ELO
        else:
            decision = Decision.MAINTAIN
        reason = (
            f"outcome={outcome.outcome.value} time_ms={outcome.time_spent_ms} "
            f"change={change:+.2f} confidence={current_confidence:.2f}"
        )

    levels[task_type] = new_level
    new_profile = replace(
        profile,
        levels=levels,
        confidence=confidence,
        streaks=streaks,
        history=history,
        total_time_ms=profile.total_time_ms + outcome.time_spent_ms,
    )

    logger.info("%s: %s (level %s -> %s; %s)", task_type.value, decision.value, level, new_level, reason)
    return Adaptation(profile=new_profile, decision=decision, reason=reason, trend=trend_for(streak))
