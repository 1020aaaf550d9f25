"""Route a task type to its content generator."""

from __future__ import annotations

import random

from flowscroll.engine.generators.arithmetic import generate_arithmetic
from flowscroll.engine.generators.language import generate_language
from flowscroll.engine.generators.music import generate_music
from flowscroll.engine.generators.reaction import generate_reaction
from flowscroll.engine.generators.sequence import generate_sequence
from flowscroll.engine.lexicon import Lexicon
from flowscroll.engine.task_types import TaskCategory, TaskType
from flowscroll.engine.tasks import GeneratedContent, MathStreamContent

LEGACY_MATH_STREAM = GeneratedContent(
    question="Math Stream",
    content=MathStreamContent(start_value=10, default_speed=2000, default_ops=("+",)),
    solution=0,
)


def generate_content(task_type: TaskType, level: float, lexicon: Lexicon,
                     rng: random.Random) -> GeneratedContent:
    """Produce question, payload and solution for one task of ``task_type`` at ``level``."""
    category = task_type.category

    if task_type.is_arithmetic:
        return generate_arithmetic(task_type, level, rng)
    if task_type == TaskType.MATH_SEQUENCE:
        return generate_sequence(level, rng)
    if task_type == TaskType.MATH_STREAM:
        return LEGACY_MATH_STREAM
    if category == TaskCategory.REACTION:
        return generate_reaction(task_type, level, rng)
    if category == TaskCategory.MUSIC:
        return generate_music(task_type, level, rng)
    if category == TaskCategory.LANGUAGE:
        return generate_language(task_type, level, lexicon, rng)

    raise ValueError(f"No generator for task type: {task_type.value}")
