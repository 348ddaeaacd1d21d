"""Owned news store.

The store holds the news collection, bookmark ids, and feed filters for the
whole application. It is created once and handed to whichever component
needs it; persistence goes through ``NewsStoragePort``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

from core.models import FeedSummary, NewsItem
from core.ports import NewsStoragePort
from core.samples import sample_news
from core.stats import StatsAggregator

LOGGER = logging.getLogger(__name__)


@dataclass
class FeedFilters:
    """Exact-match filters; an empty value disables the filter."""

    city: str = ""
    topic: str = ""


def _distinct(values: Iterable[str]) -> List[str]:
    seen: dict[str, None] = {}
    for value in values:
        if value:
            seen.setdefault(value, None)
    return list(seen)


def _matches_query(item: NewsItem, query: str) -> bool:
    fields = (
        item.edited_title,
        item.edited_summary,
        item.city,
        item.topic,
        item.publisher_name,
    )
    return any(query in (value or "").lower() for value in fields)


class NewsStore:
    """News collection, bookmarks, and filters behind explicit operations."""

    def __init__(self, storage: NewsStoragePort, stats: StatsAggregator) -> None:
        self._storage = storage
        self._stats = stats
        self._news: List[NewsItem] = []
        self._bookmarks: List[str] = []
        self.filters = FeedFilters()

    @property
    def news(self) -> List[NewsItem]:
        return list(self._news)

    @property
    def bookmarks(self) -> List[str]:
        return list(self._bookmarks)

    def load(self) -> None:
        """Load persisted state, seeding sample items on first run."""

        stored = self._storage.load_news()
        if stored is None:
            self._news = sample_news()
            self._storage.save_news(self._news)
            for item in self._news:
                self._stats.record(item)
            LOGGER.info("Seeded %s sample news items", len(self._news))
        else:
            self._news = list(stored)
            self.reinitialize_stats()
            LOGGER.info("Loaded %s news items", len(self._news))
        self._bookmarks = list(self._storage.load_bookmarks())

    def add_news(self, item: NewsItem) -> None:
        """Insert a newly published item at the top of the feed."""

        items = [item, *self._news]
        self._storage.save_news(items)
        self._news = items

    def get(self, news_id: str) -> Optional[NewsItem]:
        for item in self._news:
            if item.id == news_id:
                return item
        return None

    def is_bookmarked(self, news_id: str) -> bool:
        return news_id in self._bookmarks

    def toggle_bookmark(self, news_id: str) -> bool:
        """Flip the bookmark for an item and return the new state."""

        bookmarked = news_id not in self._bookmarks
        if bookmarked:
            bookmarks = [*self._bookmarks, news_id]
        else:
            bookmarks = [value for value in self._bookmarks if value != news_id]
        self._storage.save_bookmarks(bookmarks)
        self._bookmarks = bookmarks
        return bookmarked

    def update_filters(self, city: Optional[str] = None, topic: Optional[str] = None) -> None:
        if city is not None:
            self.filters.city = city
        if topic is not None:
            self.filters.topic = topic

    def clear_filters(self) -> None:
        self.filters = FeedFilters()

    def filtered_news(self, query: str = "") -> List[NewsItem]:
        """Apply free-text search, then the city and topic filters."""

        items = self._news
        needle = query.strip().lower()
        if needle:
            items = [item for item in items if _matches_query(item, needle)]
        if self.filters.city:
            city = self.filters.city.lower()
            items = [item for item in items if (item.city or "").lower() == city]
        if self.filters.topic:
            topic = self.filters.topic.lower()
            items = [item for item in items if (item.topic or "").lower() == topic]
        return list(items)

    def bookmarked_news(self) -> List[NewsItem]:
        return [item for item in self._news if item.id in self._bookmarks]

    def cities(self) -> List[str]:
        return _distinct(item.city for item in self._news)

    def topics(self) -> List[str]:
        return _distinct(item.topic for item in self._news)

    def summary(self) -> FeedSummary:
        news_by_city: dict[str, int] = {}
        news_by_topic: dict[str, int] = {}
        for item in self._news:
            news_by_city[item.city] = news_by_city.get(item.city, 0) + 1
            news_by_topic[item.topic] = news_by_topic.get(item.topic, 0) + 1
        return FeedSummary(
            total_news=len(self._news),
            total_bookmarks=len(self._bookmarks),
            total_cities=len(news_by_city),
            total_topics=len(news_by_topic),
            news_by_city=news_by_city,
            news_by_topic=news_by_topic,
        )

    def stats_consistent(self) -> bool:
        return self._stats.total_posts() == len(self._news)

    def reinitialize_stats(self) -> None:
        """Rebuild the aggregator from the collection in its current order."""

        self._stats.rebuild(self._news)
        LOGGER.info("Statistics rebuilt from %s news items", len(self._news))
