"""Core submission pipeline.

This module is integration-agnostic. It only relies on ports for moderation
and storage, enabling other frontends or a remote moderator without changes
here.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional

from core.models import ModerationResult, NewsItem, SubmissionDraft
from core.ports import ModeratorPort
from core.stats import StatsAggregator
from core.store import NewsStore

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubmissionOutcome:
    """Moderation result plus the published item when approved."""

    result: ModerationResult
    item: Optional[NewsItem] = None

    @property
    def approved(self) -> bool:
        return self.result.approved


class TimestampIdFactory:
    """Millisecond-timestamp ids, bumped when two land in the same tick."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._last = 0

    def __call__(self) -> str:
        with self._lock:
            candidate = int(time.time() * 1000)
            if candidate <= self._last:
                candidate = self._last + 1
            self._last = candidate
            return str(candidate)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SubmissionProcessor:
    """Orchestrates moderation, statistics, and publication."""

    def __init__(
        self,
        moderator: ModeratorPort,
        store: NewsStore,
        stats: StatsAggregator,
        id_factory: Optional[Callable[[], str]] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._moderator = moderator
        self._store = store
        self._stats = stats
        self._id_factory = id_factory or TimestampIdFactory()
        self._clock = clock or _utc_now

    async def submit(self, draft: SubmissionDraft) -> SubmissionOutcome:
        """Run one draft through the pipeline.

        A ModerationError from the moderator propagates untouched and nothing
        is recorded or stored.
        """

        result = await self._moderator.evaluate(draft)
        if not result.approved:
            return SubmissionOutcome(result=result)

        item = NewsItem(
            id=self._id_factory(),
            edited_title=result.edited_title or draft.title,
            edited_summary=result.edited_summary or draft.description,
            city=draft.city,
            topic=draft.topic,
            publisher_name=draft.publisher_name,
            publisher_phone=draft.publisher_phone,
            timestamp=self._clock(),
            original_title=draft.title,
            original_description=draft.description,
            image=draft.image,
            moderation_reason=result.reason,
        )
        # Statistics follow the approval in the same logical step as the insert.
        self._stats.record(item)
        try:
            self._store.add_news(item)
        except Exception:
            self._store.reinitialize_stats()
            raise
        LOGGER.info("Published %s (%s, %s)", item.id, item.topic, item.city)
        return SubmissionOutcome(result=result, item=item)
