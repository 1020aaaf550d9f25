"""Pick the next task category and type, then generate its content."""

from __future__ import annotations

import logging
import random
import time
from typing import Optional

from flowscroll.engine.generators.language import fallback_language_content
from flowscroll.engine.generators.registry import generate_content
from flowscroll.engine.lexicon import Lexicon
from flowscroll.engine.profile import UserProfile
from flowscroll.engine.task_types import (
    CATEGORY_WEIGHTS,
    FALLBACK_CATEGORY,
    SELECTABLE_TYPES,
    TaskCategory,
    TaskType,
)
from flowscroll.engine.tasks import GeneratedContent, TaskRecord

logger = logging.getLogger(__name__)


def now_ms() -> int:
    return int(time.time() * 1000)


class TaskSelector:
    """Weighted category draw, uniform type draw, level-aware generation."""

    def __init__(
        self,
        lexicon: Lexicon,
        rng: Optional[random.Random] = None,
        weights: Optional[dict[TaskCategory, float]] = None,
    ):
        self.lexicon = lexicon
        self.rng = rng or random.Random()
        self.weights = weights or CATEGORY_WEIGHTS

    def choose_category(self) -> TaskCategory:
        draw = self.rng.random()
        cumulative = 0.0
        for category, weight in self.weights.items():
            cumulative += weight
            if draw < cumulative:
                return category
        # Rounding can leave the draw just above the last cumulative sum.
        return FALLBACK_CATEGORY

    def choose_type(self, category: TaskCategory) -> TaskType:
        return self.rng.choice(SELECTABLE_TYPES[category])

    def generate(self, task_type: TaskType, level: float) -> GeneratedContent:
        try:
            return generate_content(task_type, level, self.lexicon, self.rng)
        except Exception as e:
            # Only word tasks depend on external data; anything else is a real bug.
            if task_type.category != TaskCategory.LANGUAGE:
                raise
            logger.warning("Language generation failed for %s (%s); serving static content",
                           task_type.value, e)
            return fallback_language_content(task_type)

    def build_task(self, task_type: TaskType, profile: UserProfile,
                   now: Optional[int] = None) -> TaskRecord:
        level = profile.level_for(task_type)
        generated = self.generate(task_type, level)
        return TaskRecord(
            category=task_type.category,
            type=task_type,
            difficulty_level=level,
            question=generated.question or "Task",
            content=generated.content,
            solution=generated.solution,
            generated_at=now if now is not None else now_ms(),
        )

    def select_and_generate(self, profile: UserProfile, now: Optional[int] = None) -> TaskRecord:
        category = self.choose_category()
        task_type = self.choose_type(category)
        task = self.build_task(task_type, profile, now)
        logger.debug("Selected %s at level %s", task_type.value, task.difficulty_level)
        return task
