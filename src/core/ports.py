"""Ports (interfaces) used by the core.

Ports define the minimal contracts for moderation and storage adapters so
that the core can be reused with different backends, including a future
network-backed moderator.
"""

from __future__ import annotations

from typing import List, Optional, Protocol

from core.models import ModerationResult, NewsItem, SubmissionDraft


class ModeratorPort(Protocol):
    """Moderation operation required by the submission processor."""

    async def evaluate(self, draft: SubmissionDraft) -> ModerationResult:
        ...


class NewsStoragePort(Protocol):
    """Durable slots for the news collection and bookmark ids."""

    def load_news(self) -> Optional[List[NewsItem]]:
        ...

    def save_news(self, items: List[NewsItem]) -> None:
        ...

    def load_bookmarks(self) -> List[str]:
        ...

    def save_bookmarks(self, news_ids: List[str]) -> None:
        ...
