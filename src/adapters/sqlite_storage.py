"""SQLite storage adapter.

Implements the core NewsStoragePort using a simple SQLite database.
"""

from __future__ import annotations

import json
import logging
import sqlite3
from datetime import datetime, timezone
from typing import Any, List, Optional

from core.models import NewsItem

LOGGER = logging.getLogger(__name__)

NEWS_SLOT = "news"
BOOKMARKS_SLOT = "bookmarks"


class SQLiteStorage:
    """Thin SQLite wrapper that satisfies the NewsStoragePort contract."""

    def __init__(self, db_path: str) -> None:
        self._db_path = db_path

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def init_db(self) -> None:
        """Create tables if they do not exist.

        Tables:
        - slots: named JSON payloads (the news collection and bookmark ids)
        """

        with self._connect() as conn:
            # slots mirrors a key/value store: every write replaces the whole
            # payload for a slot, so a reload always sees a complete list.
            # Fields:
            # - slot: slot name (PRIMARY KEY)
            # - payload: JSON document
            # - updated_at: timestamp of the last write
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS slots (
                    slot TEXT PRIMARY KEY,
                    payload TEXT NOT NULL,
                    updated_at TIMESTAMP NOT NULL
                )
                """
            )

    def get_slot(self, slot: str) -> Optional[Any]:
        """Return the decoded payload for a slot, or None when absent."""

        with self._connect() as conn:
            row = conn.execute(
                "SELECT payload FROM slots WHERE slot = ?",
                (slot,),
            ).fetchone()
        if row is None:
            return None
        try:
            return json.loads(row["payload"])
        except json.JSONDecodeError:
            LOGGER.warning("Ignoring corrupt payload in slot %s", slot)
            return None

    def set_slot(self, slot: str, value: Any) -> None:
        """Upsert the JSON payload for a slot."""

        now = datetime.now(timezone.utc)
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO slots (slot, payload, updated_at)
                VALUES (?, ?, ?)
                ON CONFLICT(slot) DO UPDATE SET
                    payload = excluded.payload,
                    updated_at = excluded.updated_at
                """,
                (slot, json.dumps(value, ensure_ascii=True), now.isoformat()),
            )

    def load_news(self) -> Optional[List[NewsItem]]:
        records = self.get_slot(NEWS_SLOT)
        if not isinstance(records, list):
            return None
        items: List[NewsItem] = []
        for index, record in enumerate(records):
            try:
                items.append(NewsItem.from_dict(record))
            except (KeyError, ValueError, TypeError, AttributeError) as exc:
                LOGGER.warning("Skipping unreadable news record %s: %s", index, exc)
        return items

    def save_news(self, items: List[NewsItem]) -> None:
        self.set_slot(NEWS_SLOT, [item.to_dict() for item in items])

    def load_bookmarks(self) -> List[str]:
        ids = self.get_slot(BOOKMARKS_SLOT)
        if not isinstance(ids, list):
            return []
        return [str(value) for value in ids]

    def save_bookmarks(self, news_ids: List[str]) -> None:
        self.set_slot(BOOKMARKS_SLOT, list(news_ids))
