"""Reaction and attention tasks.

Parameter tables are keyed by tier: easy below level 4, medium from 4,
hard from 8. The thresholds and table values are fixed; the presentation
layer times its animations against them.
"""

from __future__ import annotations

import math
import random
from enum import Enum

from flowscroll.engine.task_types import TaskType
from flowscroll.engine.tasks import (
    ColorReactionContent,
    ColorSwitchContent,
    FocusStreamContent,
    GeneratedContent,
    ShapeContent,
    ShapeItems,
)


class Tier(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


def tier_for_level(level: float) -> Tier:
    if level >= 8:
        return Tier.HARD
    if level >= 4:
        return Tier.MEDIUM
    return Tier.EASY


TARGET_COLOR_CLASS = "bg-green-500"
TARGET_COLOR_NAME = "Grün"

COLOR_SWITCH_PARAMS: dict[Tier, dict] = {
    Tier.EASY: {
        "num_trials": 5,
        "distractor_step_min": 2,
        "distractor_step_max": 4,
        "color_change_speed": 800,
        "target_window": 1200,
        "distractors": ("bg-red-500", "bg-blue-500", "bg-yellow-500", "bg-purple-500", "bg-orange-500"),
    },
    Tier.MEDIUM: {
        "num_trials": 8,
        "distractor_step_min": 3,
        "distractor_step_max": 6,
        "color_change_speed": 600,
        "target_window": 900,
        "distractors": ("bg-red-500", "bg-blue-600", "bg-yellow-500", "bg-purple-600", "bg-orange-500", "bg-pink-500"),
    },
    # Hard swaps in green-adjacent hues so the target is easy to confuse.
    Tier.HARD: {
        "num_trials": 10,
        "distractor_step_min": 4,
        "distractor_step_max": 8,
        "color_change_speed": 400,
        "target_window": 600,
        "distractors": ("bg-teal-500", "bg-lime-500", "bg-emerald-700", "bg-cyan-500", "bg-yellow-400"),
    },
}

FOCUS_STREAM_PARAMS: dict[Tier, dict] = {
    Tier.EASY: {
        "num_target_events": 3,
        "distractor_ratio": 2,
        "min_interval": 800,
        "max_interval": 1400,
        "display_duration": 800,
        "emoji_size": "text-7xl",
    },
    Tier.MEDIUM: {
        "num_target_events": 4,
        "distractor_ratio": 3,
        "min_interval": 600,
        "max_interval": 1100,
        "display_duration": 600,
        "emoji_size": "text-6xl",
    },
    Tier.HARD: {
        "num_target_events": 5,
        "distractor_ratio": 4,
        "min_interval": 400,
        "max_interval": 900,
        "display_duration": 450,
        "emoji_size": "text-5xl",
    },
}

FOCUS_EMOJI_SETS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("🦊", ("🐶", "🐱", "🦁", "🐯", "🐻", "🐨", "🐼")),
    ("⚽", ("🏀", "🏈", "⚾", "🎾", "🏐", "🏉", "🎱")),
    ("🍎", ("🍐", "🍊", "🍋", "🍌", "🍉", "🍇", "🍓")),
    ("🚀", ("✈️", "🚁", "🚂", "🚗", "🚌", "🚲", "🛵")),
    ("⭐", ("🌟", "✨", "💫", "☀️", "🌙", "⚡", "❄️")),
)

SHAPE_MODES = ("EMOJI", "ROTATION")

SHAPE_EMOJI_PAIRS: tuple[ShapeItems, ...] = (
    ShapeItems(base="😐", odd="😶"),
    ShapeItems(base="😀", odd="😃"),
    ShapeItems(base="⚪", odd="⚫"),
    ShapeItems(base="⬛", odd="⬜"),
    ShapeItems(base="🍎", odd="🍅"),
    ShapeItems(base="🕒", odd="🕓"),
)

ROTATION_ITEMS = ShapeItems(base="A", odd="B")


def generate_color(level: float) -> GeneratedContent:
    decay = 0.9 ** level
    return GeneratedContent(
        question="Tippe bei Grün",
        content=ColorReactionContent(
            wait_min=max(1000, 3500 * decay),
            wait_max=max(2000, 5000 * decay),
        ),
        solution=0,
    )


def generate_shape(level: float, rng: random.Random) -> GeneratedContent:
    grid_size = min(5, 2 + math.floor(level / 3))
    odd_index = rng.randrange(grid_size * grid_size)
    mode = rng.choice(SHAPE_MODES)
    items = rng.choice(SHAPE_EMOJI_PAIRS) if mode == "EMOJI" else ROTATION_ITEMS
    return GeneratedContent(
        question="Finde den Außenseiter",
        content=ShapeContent(grid_size=grid_size, odd_index=odd_index, mode=mode, items=items),
        solution=odd_index,
    )


def generate_color_switch(level: float) -> GeneratedContent:
    tier = tier_for_level(level)
    return GeneratedContent(
        question=f"Tippe nur bei {TARGET_COLOR_NAME}",
        content=ColorSwitchContent(
            tier=tier.value,
            target_color_class=TARGET_COLOR_CLASS,
            target_color_name=TARGET_COLOR_NAME,
            **COLOR_SWITCH_PARAMS[tier],
        ),
        solution=None,
    )


def generate_focus_stream(level: float, rng: random.Random) -> GeneratedContent:
    tier = tier_for_level(level)
    target, distractors = rng.choice(FOCUS_EMOJI_SETS)
    return GeneratedContent(
        question="Ziel Fokus",
        content=FocusStreamContent(
            tier=tier.value,
            target_emoji=target,
            distractors=distractors,
            **FOCUS_STREAM_PARAMS[tier],
        ),
        solution=None,
    )


def generate_reaction(task_type: TaskType, level: float, rng: random.Random) -> GeneratedContent:
    if task_type == TaskType.REACTION_COLOR:
        return generate_color(level)
    if task_type == TaskType.REACTION_SHAPE:
        return generate_shape(level, rng)
    if task_type == TaskType.REACTION_COLOR_SWITCH:
        return generate_color_switch(level)
    if task_type == TaskType.REACTION_STREAM:
        return generate_focus_stream(level, rng)
    raise ValueError(f"Not a reaction task type: {task_type}")
