"""Task records and the per-type content payloads they carry.

Each task type produces exactly one content shape. ``TaskContent`` is the
union of those shapes, so callers can ``match`` on the concrete class
instead of poking at untyped dicts.
"""

from __future__ import annotations

import uuid
from dataclasses import asdict, dataclass, field
from typing import Any, Union

from flowscroll.engine.task_types import TaskCategory, TaskType


def new_task_id() -> str:
    return str(uuid.uuid4())


def _camel(key: str) -> str:
    head, *rest = key.split("_")
    return head + "".join(part.title() for part in rest)


def to_camel_dict(value: Any) -> Any:
    """Recursively convert snake_case dict keys to camelCase for the wire."""
    if isinstance(value, dict):
        return {_camel(k): to_camel_dict(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_camel_dict(v) for v in value]
    if isinstance(value, TaskType):
        return value.value
    return value


# --- Math ---

@dataclass(frozen=True)
class ArithmeticContent:
    a: int
    b: int
    operator: TaskType


@dataclass(frozen=True)
class SequenceContent:
    sequence: tuple[int, ...]
    options: tuple[int, ...]
    correct_value: int
    pattern: str


@dataclass(frozen=True)
class MathStreamContent:
    start_value: int
    default_speed: int
    default_ops: tuple[str, ...]


# --- Reaction ---

@dataclass(frozen=True)
class ColorReactionContent:
    wait_min: float
    wait_max: float


@dataclass(frozen=True)
class ShapeItems:
    base: str
    odd: str


@dataclass(frozen=True)
class ShapeContent:
    grid_size: int
    odd_index: int
    mode: str  # "EMOJI" or "ROTATION"
    items: ShapeItems


@dataclass(frozen=True)
class ColorSwitchContent:
    tier: str
    num_trials: int
    distractor_step_min: int
    distractor_step_max: int
    color_change_speed: int
    target_window: int
    distractors: tuple[str, ...]
    target_color_class: str
    target_color_name: str


@dataclass(frozen=True)
class FocusStreamContent:
    tier: str
    target_emoji: str
    distractors: tuple[str, ...]
    num_target_events: int
    distractor_ratio: int
    min_interval: int
    max_interval: int
    display_duration: int
    emoji_size: str


# --- Music ---

@dataclass(frozen=True)
class Beat:
    time_offset: int
    type: str


@dataclass(frozen=True)
class RhythmContent:
    pattern: tuple[Beat, ...]
    total_duration: int


@dataclass(frozen=True)
class MemoryContent:
    sequence: tuple[int, ...]
    playback_speed: int
    active_pads: int


# --- Language ---

@dataclass(frozen=True)
class OddOneOutContent:
    options: tuple[str, ...]
    odd_index: int
    hint: str


@dataclass(frozen=True)
class ConnectContent:
    mode: str  # "synonym" or "antonym"
    target: str
    options: tuple[str, ...]
    correct_index: int
    answer: str


@dataclass(frozen=True)
class WordListContent:
    """Legacy synonym/rhyme payload served from static data."""
    word: str
    related: tuple[str, ...]
    hint: str


@dataclass(frozen=True)
class SentenceContent:
    word1: str
    word2: str
    example_sentence: str


TaskContent = Union[
    ArithmeticContent,
    SequenceContent,
    MathStreamContent,
    ColorReactionContent,
    ShapeContent,
    ColorSwitchContent,
    FocusStreamContent,
    RhythmContent,
    MemoryContent,
    OddOneOutContent,
    ConnectContent,
    WordListContent,
    SentenceContent,
]


@dataclass(frozen=True)
class GeneratedContent:
    """What a generator hands back: prompt, payload, canonical answer."""
    question: str
    content: TaskContent
    solution: Any = None


@dataclass(frozen=True)
class TaskRecord:
    category: TaskCategory
    type: TaskType
    difficulty_level: float
    question: str
    content: TaskContent
    solution: Any
    generated_at: int
    id: str = field(default_factory=new_task_id)

    def to_dict(self) -> dict:
        solution = self.solution
        if isinstance(solution, tuple):
            solution = [asdict(s) if hasattr(s, "__dataclass_fields__") else s for s in solution]
        return to_camel_dict({
            "id": self.id,
            "category": self.category.value,
            "type": self.type.value,
            "difficulty_level": self.difficulty_level,
            "question": self.question,
            "content": asdict(self.content),
            "solution": solution,
            "generated_at": self.generated_at,
        })
