"""Rhythm and tone-memory tasks."""

from __future__ import annotations

import math
import random

from flowscroll.engine.task_types import TaskType
from flowscroll.engine.tasks import Beat, GeneratedContent, MemoryContent, RhythmContent

STEP_MS = 500
INSTRUMENTS = ("kick", "snare", "hihat", "tom")
MAX_PADS = 4


def generate_rhythm(level: float, rng: random.Random) -> GeneratedContent:
    steps = 4 + math.floor(level / 2)
    fill_probability = min(0.8, 0.2 + level * 0.05)

    pattern = []
    for i in range(steps):
        # The downbeat is always a kick so the loop has an anchor.
        if i == 0:
            pattern.append(Beat(time_offset=0, type="kick"))
        elif rng.random() < fill_probability:
            pattern.append(Beat(time_offset=i * STEP_MS, type=rng.choice(INSTRUMENTS)))

    return GeneratedContent(
        question="Wiederhole den Beat",
        content=RhythmContent(pattern=tuple(pattern), total_duration=steps * STEP_MS),
        solution=tuple(pattern),
    )


def generate_memory(level: float, rng: random.Random) -> GeneratedContent:
    length = 3 + math.floor(level / 2)
    playback_speed = int(max(300, 800 - level * 50))
    active_pads = min(MAX_PADS, 2 + math.floor(level / 3))
    sequence = tuple(rng.randrange(active_pads) for _ in range(length))
    return GeneratedContent(
        question="Merke dir den Klang",
        content=MemoryContent(sequence=sequence, playback_speed=playback_speed, active_pads=active_pads),
        solution=sequence,
    )


def generate_music(task_type: TaskType, level: float, rng: random.Random) -> GeneratedContent:
    if task_type == TaskType.MUSIC_RHYTHM:
        return generate_rhythm(level, rng)
    if task_type == TaskType.MUSIC_MEMORY:
        return generate_memory(level, rng)
    raise ValueError(f"Not a music task type: {task_type}")
