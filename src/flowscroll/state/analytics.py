"""Fire-and-forget outcome analytics, one JSON line per task result."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

from flowscroll.engine.adaptive import Adaptation
from flowscroll.engine.profile import OutcomeRecord

logger = logging.getLogger(__name__)


def build_payload(user_id: str, outcome: OutcomeRecord,
                  adaptation: Optional[Adaptation] = None) -> dict:
    payload = {"userId": user_id, **outcome.to_dict()}
    if adaptation is not None:
        payload.update(adaptation.tags())
    return payload


class AnalyticsLog:
    def __init__(self, path: Path, enabled: bool = True):
        self.path = path
        self.enabled = enabled

    def record(self, user_id: str, outcome: OutcomeRecord,
               adaptation: Optional[Adaptation] = None) -> bool:
        """Append one payload. Returns False when nothing was written.

        Write failures are logged and dropped: analytics must never
        interfere with gameplay state.
        """
        if not self.enabled:
            return False
        line = json.dumps(build_payload(user_id, outcome, adaptation), ensure_ascii=False)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "a", encoding="utf-8") as f:
                f.write(line + "\n")
        except OSError as e:
            logger.warning("Analytics write to %s failed: %s", self.path, e)
            return False
        return True

    def read_all(self) -> list[dict]:
        if not self.path.exists():
            return []
        with open(self.path, encoding="utf-8") as f:
            return [json.loads(line) for line in f if line.strip()]
