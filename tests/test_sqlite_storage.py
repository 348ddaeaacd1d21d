from __future__ import annotations

import sqlite3

from adapters.sqlite_storage import NEWS_SLOT, SQLiteStorage
from core.stats import StatsAggregator
from core.store import NewsStore
from fakes import make_item


def _storage(tmp_path) -> SQLiteStorage:
    storage = SQLiteStorage(str(tmp_path / "news.db"))
    storage.init_db()
    return storage


def test_first_run_has_no_collection(tmp_path) -> None:
    storage = _storage(tmp_path)
    assert storage.load_news() is None
    assert storage.load_bookmarks() == []


def test_news_round_trip_keeps_order_and_fields(tmp_path) -> None:
    storage = _storage(tmp_path)
    items = [make_item("2", topic="Accident"), make_item("1")]
    storage.save_news(items)

    reopened = SQLiteStorage(str(tmp_path / "news.db"))
    assert reopened.load_news() == items


def test_empty_collection_is_distinct_from_missing(tmp_path) -> None:
    storage = _storage(tmp_path)
    storage.save_news([])
    assert storage.load_news() == []


def test_bookmarks_overwrite_previous_value(tmp_path) -> None:
    storage = _storage(tmp_path)
    storage.save_bookmarks(["1", "2"])
    storage.save_bookmarks(["2"])
    assert storage.load_bookmarks() == ["2"]


def test_corrupt_payload_is_treated_as_missing(tmp_path) -> None:
    storage = _storage(tmp_path)
    with sqlite3.connect(str(tmp_path / "news.db")) as conn:
        conn.execute(
            "INSERT INTO slots (slot, payload, updated_at) VALUES (?, ?, ?)",
            (NEWS_SLOT, "{not json", "2024-01-01T00:00:00+00:00"),
        )
    assert storage.load_news() is None


def test_store_seeds_once_then_reloads_from_sqlite(tmp_path) -> None:
    storage = _storage(tmp_path)
    first = NewsStore(storage, StatsAggregator())
    first.load()
    first.add_news(make_item("fresh", city="Nagpur"))
    first.toggle_bookmark("fresh")

    stats = StatsAggregator()
    second = NewsStore(SQLiteStorage(str(tmp_path / "news.db")), stats)
    second.load()

    assert [item.id for item in second.news] == ["fresh", "1", "2", "3", "4"]
    assert second.is_bookmarked("fresh")
    assert stats.total_posts() == 5
    assert ("nagpur", 1) in stats.top_cities()


def test_unreadable_records_are_skipped_on_load(tmp_path) -> None:
    storage = _storage(tmp_path)
    storage.set_slot(
        NEWS_SLOT,
        [
            make_item("1").to_dict(),
            {"id": "2", "timestamp": "not-a-date"},
            {"editedTitle": "no id", "timestamp": 1700000000000},
            "junk",
        ],
    )

    stats = StatsAggregator()
    store = NewsStore(storage, stats)
    store.load()

    assert [item.id for item in store.news] == ["1"]
    assert stats.total_posts() == 1
    assert store.stats_consistent()
