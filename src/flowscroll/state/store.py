"""SQLite-backed key-value storage for serialized user profiles."""

from __future__ import annotations

import json
import logging
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Optional

from flowscroll.engine.migration import reconcile
from flowscroll.engine.profile import UserProfile

logger = logging.getLogger(__name__)

DEFAULT_KEY = "flowScrollStats"


class ProfileStore:
    def __init__(self, db_path: Optional[Path] = None):
        self.db_path = db_path or (Path.home() / ".flowscroll" / "profiles.db")
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _init_db(self) -> None:
        with self._conn() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS kv (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)

    def _conn(self) -> sqlite3.Connection:
        return sqlite3.connect(self.db_path)

    def get_raw(self, key: str = DEFAULT_KEY) -> Optional[str]:
        with self._conn() as conn:
            row = conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
        return row[0] if row else None

    def put_raw(self, value: str, key: str = DEFAULT_KEY) -> None:
        now = datetime.now().isoformat()
        with self._conn() as conn:
            conn.execute(
                "INSERT OR REPLACE INTO kv (key, value, updated_at) VALUES (?, ?, ?)",
                (key, value, now),
            )

    def load(self, key: str = DEFAULT_KEY) -> UserProfile:
        """Load the stored profile through migration; a fresh one if nothing is stored."""
        raw = self.get_raw(key)
        if raw is None:
            logger.info("No stored profile under %r; starting fresh", key)
        return reconcile(raw)

    def save(self, profile: UserProfile, key: str = DEFAULT_KEY) -> None:
        self.put_raw(json.dumps(profile.to_dict(), ensure_ascii=False), key)

    def reset(self, key: str = DEFAULT_KEY) -> None:
        with self._conn() as conn:
            conn.execute("DELETE FROM kv WHERE key = ?", (key,))
