"""Feed driver: lookahead buffer → present → record outcome → adapt → persist."""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from dataclasses import dataclass
from typing import Optional

from flowscroll.config.settings import Settings
from flowscroll.engine.adaptive import Adaptation, adapt
from flowscroll.engine.evaluator import SessionContext, evaluate
from flowscroll.engine.profile import UserProfile
from flowscroll.engine.selector import TaskSelector, now_ms
from flowscroll.engine.tasks import TaskRecord
from flowscroll.state.analytics import AnalyticsLog
from flowscroll.state.store import ProfileStore

logger = logging.getLogger(__name__)

# Tasks shown but never answered are forgotten oldest-first past this many.
MAX_PENDING_TASKS = 50


@dataclass(frozen=True)
class PresentedTask:
    task: TaskRecord
    presented_at: int


class FeedRunner:
    """Keeps a few tasks ready and applies outcomes strictly one at a time.

    Buffered tasks are generated against whatever profile was current when
    they were requested; only outcome processing has to be sequential.
    """

    def __init__(
        self,
        selector: TaskSelector,
        settings: Optional[Settings] = None,
        store: Optional[ProfileStore] = None,
        analytics: Optional[AnalyticsLog] = None,
        profile: Optional[UserProfile] = None,
        session: Optional[SessionContext] = None,
    ):
        self.selector = selector
        self.settings = settings or Settings.load()
        self.store = store
        self.analytics = analytics
        if profile is None:
            profile = store.load(self.settings.storage_key) if store else UserProfile()
        self.profile = profile
        self.session = session or SessionContext()
        self.buffer: deque[TaskRecord] = deque()
        self._presented: dict[str, PresentedTask] = {}
        self._prefetching = False

    async def _generate(self, profile: UserProfile) -> TaskRecord:
        return await asyncio.wait_for(
            asyncio.to_thread(self.selector.select_and_generate, profile),
            timeout=self.settings.feed.generation_timeout_seconds,
        )

    async def prefetch(self) -> int:
        """Top the buffer up to ``buffer_size``. Returns how many tasks were added."""
        needed = self.settings.feed.buffer_size - len(self.buffer)
        if needed <= 0 or self._prefetching:
            return 0

        self._prefetching = True
        snapshot = self.profile
        try:
            results = await asyncio.gather(
                *(self._generate(snapshot) for _ in range(needed)),
                return_exceptions=True,
            )
        finally:
            self._prefetching = False

        added = 0
        for result in results:
            if isinstance(result, asyncio.TimeoutError):
                logger.warning("Task generation timed out; slot will be retried")
                continue
            if isinstance(result, Exception):
                logger.warning("Task generation failed: %s", result)
                continue
            self.buffer.append(result)
            added += 1
        return added

    async def next_task(self, now: Optional[int] = None) -> TaskRecord:
        if not self.buffer:
            await self.prefetch()
        if not self.buffer:
            raise RuntimeError("No task could be generated")

        task = self.buffer.popleft()
        self._presented[task.id] = PresentedTask(task=task, presented_at=now if now is not None else now_ms())
        while len(self._presented) > MAX_PENDING_TASKS:
            stale = next(iter(self._presented))
            del self._presented[stale]
            logger.debug("Forgetting unanswered task %s", stale)
        return task

    def presented(self, task_id: str) -> Optional[TaskRecord]:
        """The task shown under ``task_id`` that still awaits its outcome."""
        entry = self._presented.get(task_id)
        return entry.task if entry else None

    def record_outcome(
        self,
        task_id: str,
        success: bool,
        time_spent_ms: int,
        was_skipped: bool = False,
        now: Optional[int] = None,
    ) -> Adaptation:
        """Evaluate, adapt, persist and report one presented task's result."""
        entry = self._presented.pop(task_id, None)
        if entry is None:
            raise ValueError(f"Unknown task: {task_id}")

        outcome = evaluate(
            entry.task,
            success=success,
            time_spent_ms=time_spent_ms,
            was_skipped=was_skipped,
            session=self.session,
            now=now,
            started_at=entry.presented_at,
        )
        adaptation = adapt(self.profile, outcome)
        self.profile = adaptation.profile

        if self.store is not None:
            self.store.save(self.profile, self.settings.storage_key)
        if self.analytics is not None:
            self.analytics.record(self.profile.user_id, outcome, adaptation)
        return adaptation

    def reset(self) -> UserProfile:
        """Discard all adaptation state and start over with a fresh profile."""
        self.profile = UserProfile()
        self.buffer.clear()
        self._presented.clear()
        if self.store is not None:
            self.store.reset(self.settings.storage_key)
        return self.profile
