"""Shared fixtures for FlowScroll tests."""

from __future__ import annotations

import random

import pytest

from flowscroll.config.settings import Settings
from flowscroll.engine.evaluator import SessionContext
from flowscroll.engine.lexicon import build_lexicon, load_lexicon
from flowscroll.engine.profile import UserProfile
from flowscroll.engine.selector import TaskSelector
from flowscroll.engine.task_types import TaskType
from flowscroll.engine.tasks import TaskRecord


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture(scope="session")
def lexicon():
    return load_lexicon()


@pytest.fixture
def tiny_lexicon_data():
    """A minimal lexicon: one category per tier plus a handful of related words."""
    return {
        "categories": {
            "ANIMALS": {"level": 1, "words": ["Katze", "Hund", "Maus", "Pferd"]},
            "TOOLS": {"level": 2, "words": ["Hammer", "Säge", "Zange", "Axt"]},
            "WEATHER": {"level": 3, "words": ["Regen", "Wind", "Nebel", "Frost"]},
        },
        "words": {
            "gut": {"level": 1, "pos": "adj", "synonyms": ["toll"], "antonyms": ["schlecht"]},
            "schlecht": {"level": 1, "pos": "adj", "antonyms": ["gut"]},
            "toll": {"level": 1, "pos": "adj"},
            "groß": {"level": 1, "pos": "adj", "antonyms": ["klein"]},
            "klein": {"level": 1, "pos": "adj"},
            "laufen": {"level": 1, "pos": "verb", "antonyms": ["stehen"]},
            "stehen": {"level": 1, "pos": "verb"},
        },
    }


@pytest.fixture
def tiny_lexicon(tiny_lexicon_data):
    return build_lexicon(tiny_lexicon_data)


@pytest.fixture
def settings(tmp_path):
    return Settings(data_dir=tmp_path / "data")


@pytest.fixture
def profile():
    return UserProfile(user_id="user-1")


@pytest.fixture
def session():
    return SessionContext(started_at=1_000_000, session_id="sess_test")


@pytest.fixture
def selector(lexicon, rng):
    return TaskSelector(lexicon, rng=rng)


@pytest.fixture
def make_task():
    """Build a bare TaskRecord of a given type; content is irrelevant to the adapter."""
    def _make(task_type: TaskType = TaskType.MATH_ADDITION, level: float = 2, task_id: str = "t-1"):
        return TaskRecord(
            category=task_type.category,
            type=task_type,
            difficulty_level=level,
            question="1 + 1",
            content=None,
            solution=2,
            generated_at=0,
            id=task_id,
        )
    return _make
