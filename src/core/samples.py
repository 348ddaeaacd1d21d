"""Topic catalogue and the bootstrap items seeded on first run."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import List, Optional

from core.models import NewsItem

TOPICS = [
    "Accident",
    "Festival",
    "Community Event",
    "Local News",
    "City Update",
    "Town Event",
]

_SAMPLES = [
    (
        "1",
        "Local Community Festival Draws Hundreds",
        "The annual community festival in downtown attracted over 500 attendees this "
        "weekend. The event featured local musicians, food vendors, and family activities.",
        "Mumbai",
        "Festival",
        "John",
        "9876543210",
    ),
    (
        "2",
        "Major Traffic Accident on Main Street",
        "A serious traffic accident occurred on Main Street this morning, causing delays "
        "for commuters. Emergency services responded quickly.",
        "Delhi",
        "Accident",
        "Sarah",
        "9876543211",
    ),
    (
        "3",
        "New Community Center Opens",
        "The new community center officially opened its doors today, providing a space "
        "for local events and activities.",
        "Mumbai",
        "Community Event",
        "Mike",
        "9876543212",
    ),
    (
        "4",
        "Local Restaurant Wins Award",
        "A popular local restaurant has won the Best Local Cuisine award for the third "
        "year in a row.",
        "Delhi",
        "Local News",
        "Lisa",
        "9876543213",
    ),
]


def sample_news(now: Optional[datetime] = None) -> List[NewsItem]:
    """Return the seed items, dated one to four days before ``now``."""

    now = now or datetime.now(timezone.utc)
    return [
        NewsItem(
            id=news_id,
            edited_title=title,
            edited_summary=summary,
            city=city,
            topic=topic,
            publisher_name=publisher,
            publisher_phone=phone,
            timestamp=now - timedelta(days=age),
        )
        for age, (news_id, title, summary, city, topic, publisher, phone) in enumerate(
            _SAMPLES, start=1
        )
    ]
