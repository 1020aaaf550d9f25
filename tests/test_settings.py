"""Tests for YAML-backed settings."""

from __future__ import annotations

import pytest
import yaml
from pydantic import ValidationError

from flowscroll.config.settings import Settings, default_data_dir


class TestSettings:
    def test_defaults(self, tmp_path):
        settings = Settings(data_dir=tmp_path)
        assert settings.storage_key == "flowScrollStats"
        assert settings.feed.buffer_size == 3
        assert settings.feed.generation_timeout_seconds == 5.0
        assert settings.analytics.enabled is True
        assert settings.db_path == tmp_path / "profiles.db"
        assert settings.analytics_path == tmp_path / "analytics.jsonl"

    def test_env_override(self, tmp_path, monkeypatch):
        monkeypatch.setenv("FLOWSCROLL_DATA_DIR", str(tmp_path))
        assert default_data_dir() == tmp_path
        assert Settings().data_dir == tmp_path

    def test_load_missing_file(self, tmp_path, monkeypatch):
        monkeypatch.setenv("FLOWSCROLL_DATA_DIR", str(tmp_path))
        assert Settings.load().feed.buffer_size == 3

    def test_save_and_load(self, tmp_path, monkeypatch):
        monkeypatch.setenv("FLOWSCROLL_DATA_DIR", str(tmp_path))
        settings = Settings(log_level="INFO")
        settings.feed.buffer_size = 5
        settings.save()

        with open(tmp_path / "config.yaml") as f:
            assert yaml.safe_load(f)["feed"]["buffer_size"] == 5
        loaded = Settings.load()
        assert loaded.log_level == "INFO"
        assert loaded.feed.buffer_size == 5

    def test_invalid_buffer_size(self):
        with pytest.raises(ValidationError):
            Settings(feed={"buffer_size": 0})
