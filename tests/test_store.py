"""Tests for the SQLite profile store."""

from __future__ import annotations

import json

import pytest

from flowscroll.engine.adaptive import adapt
from flowscroll.engine.evaluator import evaluate
from flowscroll.engine.profile import initial_levels
from flowscroll.engine.task_types import TaskType
from flowscroll.state.store import DEFAULT_KEY, ProfileStore


@pytest.fixture
def store(tmp_path):
    return ProfileStore(db_path=tmp_path / "db" / "profiles.db")


class TestProfileStore:
    def test_creates_parent_dir(self, tmp_path):
        ProfileStore(db_path=tmp_path / "nested" / "dir" / "p.db")
        assert (tmp_path / "nested" / "dir").is_dir()

    def test_empty_store_gives_fresh_profile(self, store):
        assert store.get_raw() is None
        profile = store.load()
        assert profile.levels == initial_levels()
        assert profile.history == ()

    def test_save_and_load(self, store, profile, make_task, session):
        outcome = evaluate(make_task(TaskType.REACTION_COLOR), True, 2000, False, session, now=1_002_000)
        adapted = adapt(profile, outcome).profile
        store.save(adapted)
        assert store.load() == adapted

    def test_serialized_shape(self, store, profile):
        store.save(profile)
        data = json.loads(store.get_raw(DEFAULT_KEY))
        assert set(data) == {"userId", "levels", "confidence", "streaks", "history", "totalTimeMs"}
        assert data["levels"]["MATH_ADDITION"] == 2

    def test_keys_are_independent(self, store, profile):
        store.save(profile, key="a")
        assert store.get_raw("b") is None
        assert store.load("a").user_id == profile.user_id

    def test_overwrite(self, store, profile):
        store.put_raw("{}")
        store.save(profile)
        assert store.load().user_id == profile.user_id

    def test_corrupt_blob_reconciles(self, store):
        store.put_raw("{not json")
        profile = store.load()
        assert profile.levels == initial_levels()

    def test_reset(self, store, profile):
        store.save(profile)
        store.reset()
        assert store.get_raw() is None
