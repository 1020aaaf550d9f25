"""Task categories, task types and their fixed membership."""

from __future__ import annotations

from enum import Enum


class TaskCategory(str, Enum):
    MATH = "MATH"
    LANGUAGE = "LANGUAGE"
    REACTION = "REACTION"
    MUSIC = "MUSIC"
    FREE_MIND = "FREE_MIND"


class TaskType(str, Enum):
    MATH_ADDITION = "MATH_ADDITION"
    MATH_SUBTRACTION = "MATH_SUBTRACTION"
    MATH_MULTIPLICATION = "MATH_MULTIPLICATION"
    MATH_STREAM = "MATH_STREAM"
    MATH_SEQUENCE = "MATH_SEQUENCE"
    LANG_SYNONYM = "LANG_SYNONYM"
    LANG_RHYME = "LANG_RHYME"
    LANG_SENTENCE = "LANG_SENTENCE"
    LANG_ODD_ONE_OUT = "LANG_ODD_ONE_OUT"
    LANG_CONNECT = "LANG_CONNECT"
    REACTION_COLOR = "REACTION_COLOR"
    REACTION_SHAPE = "REACTION_SHAPE"
    REACTION_STREAM = "REACTION_STREAM"
    REACTION_COLOR_SWITCH = "REACTION_COLOR_SWITCH"
    MUSIC_RHYTHM = "MUSIC_RHYTHM"
    MUSIC_MEMORY = "MUSIC_MEMORY"
    FREE_MIND_BREATHE = "FREE_MIND_BREATHE"

    @property
    def category(self) -> TaskCategory:
        return category_of(self)

    @property
    def is_arithmetic(self) -> bool:
        return self in ARITHMETIC_TYPES

    @classmethod
    def parse(cls, value) -> "TaskType | None":
        """Return the member named by ``value`` or None for unknown input."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


_PREFIXES: dict[str, TaskCategory] = {
    "MATH_": TaskCategory.MATH,
    "LANG_": TaskCategory.LANGUAGE,
    "REACTION_": TaskCategory.REACTION,
    "MUSIC_": TaskCategory.MUSIC,
    "FREE_MIND_": TaskCategory.FREE_MIND,
}


def category_of(task_type: TaskType) -> TaskCategory:
    for prefix, category in _PREFIXES.items():
        if task_type.value.startswith(prefix):
            return category
    raise ValueError(f"Task type without category: {task_type}")


# Types that adapt with the flow-zone controller; the level is a digit-capacity index.
ARITHMETIC_TYPES: frozenset[TaskType] = frozenset({
    TaskType.MATH_ADDITION,
    TaskType.MATH_SUBTRACTION,
    TaskType.MATH_MULTIPLICATION,
})

# Category draw order matters: the cumulative walk follows this sequence.
CATEGORY_WEIGHTS: dict[TaskCategory, float] = {
    TaskCategory.MATH: 0.40,
    TaskCategory.REACTION: 0.30,
    TaskCategory.MUSIC: 0.10,
    TaskCategory.LANGUAGE: 0.20,
}

FALLBACK_CATEGORY = TaskCategory.REACTION

SELECTABLE_TYPES: dict[TaskCategory, tuple[TaskType, ...]] = {
    TaskCategory.MATH: (
        TaskType.MATH_ADDITION,
        TaskType.MATH_SUBTRACTION,
        TaskType.MATH_MULTIPLICATION,
        TaskType.MATH_SEQUENCE,
    ),
    TaskCategory.REACTION: (
        TaskType.REACTION_COLOR,
        TaskType.REACTION_SHAPE,
        TaskType.REACTION_STREAM,
        TaskType.REACTION_COLOR_SWITCH,
    ),
    TaskCategory.LANGUAGE: (
        TaskType.LANG_ODD_ONE_OUT,
        TaskType.LANG_CONNECT,
    ),
    TaskCategory.MUSIC: (
        TaskType.MUSIC_RHYTHM,
        TaskType.MUSIC_MEMORY,
    ),
}
