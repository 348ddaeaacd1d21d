"""Core domain models.

These dataclasses are shared across the core and adapters to avoid tight
coupling to any storage- or UI-specific types.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional


@dataclass(frozen=True)
class SubmissionDraft:
    """Unpersisted submission collected by the input layer."""

    title: str
    description: str
    city: str
    topic: str
    publisher_name: str
    publisher_phone: str
    image: Optional[str] = None


@dataclass(frozen=True)
class ModerationResult:
    """Decision for one draft; edited fields are only set when approved."""

    approved: bool
    reason: str
    edited_title: Optional[str] = None
    edited_summary: Optional[str] = None

    @classmethod
    def rejected(cls, reason: str) -> "ModerationResult":
        return cls(approved=False, reason=reason)

    @classmethod
    def accepted(cls, edited_title: str, edited_summary: str, reason: str) -> "ModerationResult":
        return cls(
            approved=True,
            reason=reason,
            edited_title=edited_title,
            edited_summary=edited_summary,
        )


@dataclass(frozen=True)
class NewsItem:
    """Published news item as kept in the persisted collection."""

    id: str
    edited_title: str
    edited_summary: str
    city: str
    topic: str
    publisher_name: str
    publisher_phone: str
    timestamp: datetime
    original_title: Optional[str] = None
    original_description: Optional[str] = None
    image: Optional[str] = None
    moderation_reason: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready record stored by persistence adapters."""

        return {
            "id": self.id,
            "editedTitle": self.edited_title,
            "editedSummary": self.edited_summary,
            "city": self.city,
            "topic": self.topic,
            "publisherFirstName": self.publisher_name,
            "publisherPhone": self.publisher_phone,
            "timestamp": self.timestamp.isoformat(),
            "originalTitle": self.original_title,
            "originalDescription": self.original_description,
            "image": self.image,
            "moderationReason": self.moderation_reason,
        }

    @classmethod
    def from_dict(cls, record: dict[str, Any]) -> "NewsItem":
        """Build an item from a stored record.

        Both the camelCase keys written by ``to_dict`` and plain snake_case
        keys are accepted, and the timestamp may be an ISO-8601 string or
        epoch milliseconds.
        """

        def pick(*keys: str, default: Any = None) -> Any:
            for key in keys:
                if record.get(key) is not None:
                    return record[key]
            return default

        return cls(
            id=str(record["id"]),
            edited_title=pick("editedTitle", "edited_title", "title", default=""),
            edited_summary=pick("editedSummary", "edited_summary", "summary", default=""),
            city=pick("city", default=""),
            topic=pick("topic", default=""),
            publisher_name=pick("publisherFirstName", "publisher_name", "publisherName", default=""),
            publisher_phone=pick("publisherPhone", "publisher_phone", default=""),
            timestamp=parse_timestamp(record.get("timestamp")),
            original_title=pick("originalTitle", "original_title"),
            original_description=pick("originalDescription", "original_description"),
            image=pick("image"),
            moderation_reason=pick("moderationReason", "moderation_reason", "gptReason"),
        )


def parse_timestamp(value: Any) -> datetime:
    """Coerce a stored timestamp into an aware datetime (UTC when naive)."""

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, (int, float)):
        parsed = datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    elif isinstance(value, str) and value:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    else:
        raise ValueError(f"Unsupported timestamp: {value!r}")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(frozen=True)
class AggregateStats:
    """Point-in-time copy of the running aggregation counters."""

    total_posts: int
    topic_counts: dict[str, int] = field(default_factory=dict)
    city_counts: dict[str, int] = field(default_factory=dict)
    publisher_counts: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class FeedSummary:
    """Direct counts over the stored collection, labels as written."""

    total_news: int
    total_bookmarks: int
    total_cities: int
    total_topics: int
    news_by_city: dict[str, int] = field(default_factory=dict)
    news_by_topic: dict[str, int] = field(default_factory=dict)
