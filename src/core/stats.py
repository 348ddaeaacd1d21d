"""Running statistics over published news (core domain)."""

from __future__ import annotations

import threading
from collections import Counter
from typing import Any, Iterable, List, Tuple

from core.models import AggregateStats, NewsItem


def _top(counter: Counter, limit: int) -> List[Tuple[str, int]]:
    # sorted() is stable, so ties keep first-recorded order.
    ranked = sorted(counter.items(), key=lambda entry: entry[1], reverse=True)
    return ranked[: max(limit, 0)]


class StatsAggregator:
    """Counts posts per case-folded topic, city, and publisher.

    Keys are lowercased once when recorded, so queries never normalize.
    A single lock serializes writers and readers; the counts are only ever
    changed through ``record`` and ``reset``.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._total_posts = 0
        self._topics: Counter = Counter()
        self._cities: Counter = Counter()
        self._publishers: Counter = Counter()

    def record(self, item: NewsItem) -> None:
        with self._lock:
            self._total_posts += 1
            self._topics[item.topic.lower()] += 1
            self._cities[item.city.lower()] += 1
            self._publishers[item.publisher_name.lower()] += 1

    def reset(self) -> None:
        with self._lock:
            self._total_posts = 0
            self._topics = Counter()
            self._cities = Counter()
            self._publishers = Counter()

    def rebuild(self, items: Iterable[NewsItem]) -> None:
        """Reset, then replay every item in the given order."""

        self.reset()
        for item in items:
            self.record(item)

    def total_posts(self) -> int:
        with self._lock:
            return self._total_posts

    def top_topics(self, limit: int = 5) -> List[Tuple[str, int]]:
        with self._lock:
            return _top(self._topics, limit)

    def top_cities(self, limit: int = 5) -> List[Tuple[str, int]]:
        with self._lock:
            return _top(self._cities, limit)

    def top_publishers(self, limit: int = 5) -> List[Tuple[str, int]]:
        with self._lock:
            return _top(self._publishers, limit)

    def snapshot(self) -> AggregateStats:
        with self._lock:
            return AggregateStats(
                total_posts=self._total_posts,
                topic_counts=dict(self._topics),
                city_counts=dict(self._cities),
                publisher_counts=dict(self._publishers),
            )

    def all_stats(self, limit: int = 5) -> dict[str, Any]:
        """Return totals and every top list in one consistent read."""

        with self._lock:
            return {
                "total_posts": self._total_posts,
                "top_topics": _top(self._topics, limit),
                "top_cities": _top(self._cities, limit),
                "top_publishers": _top(self._publishers, limit),
            }
