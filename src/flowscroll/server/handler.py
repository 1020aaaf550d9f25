"""Server handler: dispatches JSON-lines requests to the feed runner."""

from __future__ import annotations

import random
from typing import Callable, Optional

from flowscroll.config.settings import Settings
from flowscroll.engine.feed_runner import FeedRunner
from flowscroll.engine.generators.language import validate_sentence
from flowscroll.engine.lexicon import load_lexicon
from flowscroll.engine.profile import UserProfile
from flowscroll.engine.selector import TaskSelector
from flowscroll.state.analytics import AnalyticsLog
from flowscroll.state.store import ProfileStore

from .protocol import Notification


def _profile_summary(profile: UserProfile) -> dict:
    """Profile without the raw history, which only grows."""
    data = profile.to_dict()
    history = data.pop("history")
    data["historyCount"] = len(history)
    return data


class ServerHandler:
    """Routes incoming requests to engine methods and returns result dicts."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        write_notification: Optional[Callable[[Notification], None]] = None,
        rng: Optional[random.Random] = None,
    ):
        self.settings = settings or Settings.load()
        self._write_notification = write_notification or (lambda n: None)

        self.lexicon = load_lexicon(self.settings.lexicon_path)
        self.store = ProfileStore(db_path=self.settings.db_path)
        self.analytics = AnalyticsLog(
            self.settings.analytics_path,
            enabled=self.settings.analytics.enabled,
        )
        self.runner = FeedRunner(
            selector=TaskSelector(self.lexicon, rng=rng),
            settings=self.settings,
            store=self.store,
            analytics=self.analytics,
        )

    async def dispatch(self, msg: dict) -> dict:
        """Route a request message to the appropriate handler method."""
        method = msg.get("method", "")
        params = msg.get("params", {})

        handler_map = {
            "nextTask": self._next_task,
            "recordOutcome": self._record_outcome,
            "getProfile": self._get_profile,
            "resetProfile": self._reset_profile,
            "prefetch": self._prefetch,
            "checkSentence": self._check_sentence,
        }

        handler = handler_map.get(method)
        if handler is None:
            raise ValueError(f"Unknown method: {method}")

        return await handler(params)

    async def _next_task(self, params: dict) -> dict:
        task = await self.runner.next_task()
        # Keep the lookahead full for the following call.
        if len(self.runner.buffer) < self.settings.feed.buffer_size:
            await self.runner.prefetch()
        return {"task": task.to_dict(), "buffered": len(self.runner.buffer)}

    async def _record_outcome(self, params: dict) -> dict:
        task_id = params["taskId"]
        task = self.runner.presented(task_id)
        previous = self.runner.profile.level_for(task.type) if task else None
        adaptation = self.runner.record_outcome(
            task_id,
            success=bool(params.get("success", False)),
            time_spent_ms=int(params.get("timeSpentMs", 0)),
            was_skipped=bool(params.get("wasSkipped", False)),
        )
        outcome = adaptation.profile.last_outcome()
        level = adaptation.profile.level_for(outcome.type)

        if level != previous:
            self._write_notification(Notification(
                "levelChanged",
                {"type": outcome.type.value, "level": level, "previous": previous},
            ))
        return {
            "outcome": outcome.outcome.value,
            "type": outcome.type.value,
            "level": level,
            **adaptation.tags(),
        }

    async def _get_profile(self, params: dict) -> dict:
        return {"profile": _profile_summary(self.runner.profile)}

    async def _reset_profile(self, params: dict) -> dict:
        profile = self.runner.reset()
        return {"ok": True, "userId": profile.user_id}

    async def _prefetch(self, params: dict) -> dict:
        added = await self.runner.prefetch()
        return {"added": added, "buffered": len(self.runner.buffer)}

    async def _check_sentence(self, params: dict) -> dict:
        valid = validate_sentence(params["word1"], params["word2"], params.get("sentence", ""))
        return {"valid": valid}
