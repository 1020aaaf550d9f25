"""Configuration model for FlowScroll."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field


def default_data_dir() -> Path:
    override = os.environ.get("FLOWSCROLL_DATA_DIR")
    return Path(override) if override else Path.home() / ".flowscroll"


class FeedConfig(BaseModel):
    buffer_size: int = Field(default=3, ge=1)
    generation_timeout_seconds: float = Field(default=5.0, gt=0)


class AnalyticsConfig(BaseModel):
    enabled: bool = True
    file_name: str = "analytics.jsonl"


class Settings(BaseModel):
    data_dir: Path = Field(default_factory=default_data_dir)
    storage_key: str = "flowScrollStats"
    log_level: str = "WARNING"
    lexicon_path: Optional[Path] = None
    feed: FeedConfig = Field(default_factory=FeedConfig)
    analytics: AnalyticsConfig = Field(default_factory=AnalyticsConfig)

    @property
    def db_path(self) -> Path:
        return self.data_dir / "profiles.db"

    @property
    def analytics_path(self) -> Path:
        return self.data_dir / self.analytics.file_name

    @classmethod
    def load(cls) -> "Settings":
        config_path = default_data_dir() / "config.yaml"
        if config_path.exists():
            with open(config_path) as f:
                data = yaml.safe_load(f) or {}
            return cls(**data)
        return cls()

    def save(self) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        config_path = self.data_dir / "config.yaml"
        with open(config_path, "w") as f:
            yaml.dump(self.model_dump(mode="json"), f, default_flow_style=False)
