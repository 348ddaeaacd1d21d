from __future__ import annotations

import sqlite3

import pytest

from core.stats import StatsAggregator
from core.store import NewsStore
from fakes import FakeStorage, make_item


def _store(storage: FakeStorage) -> tuple[NewsStore, StatsAggregator]:
    stats = StatsAggregator()
    store = NewsStore(storage, stats)
    store.load()
    return store, stats


def test_first_run_seeds_samples_and_records_them() -> None:
    storage = FakeStorage(news=None)
    store, stats = _store(storage)

    assert [item.id for item in store.news] == ["1", "2", "3", "4"]
    assert storage.news is not None and len(storage.news) == 4
    assert stats.total_posts() == 4
    assert stats.top_cities() == [("mumbai", 2), ("delhi", 2)]
    assert store.stats_consistent()


def test_loading_existing_collection_replays_stats() -> None:
    items = [make_item("a", topic="Accident"), make_item("b", topic="accident")]
    storage = FakeStorage(news=items, bookmarks=["b"])
    store, stats = _store(storage)

    assert store.news == items
    assert store.bookmarks == ["b"]
    assert stats.top_topics() == [("accident", 2)]


def test_empty_persisted_collection_is_not_reseeded() -> None:
    store, stats = _store(FakeStorage(news=[]))
    assert store.news == []
    assert stats.total_posts() == 0


def test_add_news_prepends_and_persists() -> None:
    storage = FakeStorage(news=[make_item("old")])
    store, _ = _store(storage)
    store.add_news(make_item("new"))
    assert [item.id for item in store.news] == ["new", "old"]
    assert [item.id for item in storage.news] == ["new", "old"]


def test_toggle_bookmark_round_trip() -> None:
    storage = FakeStorage(news=[make_item("1"), make_item("2")])
    store, _ = _store(storage)

    assert store.toggle_bookmark("2") is True
    assert store.is_bookmarked("2")
    assert storage.bookmarks == ["2"]
    assert [item.id for item in store.bookmarked_news()] == ["2"]

    assert store.toggle_bookmark("2") is False
    assert storage.bookmarks == []
    assert store.bookmarked_news() == []


def test_search_covers_title_summary_city_topic_publisher() -> None:
    items = [
        make_item("1", title="Festival lights", city="Mumbai", publisher="John"),
        make_item("2", title="Road closed", summary="Crash on highway", topic="Accident", city="Delhi"),
        make_item("3", title="Market day", publisher="Priya", city="Pune", topic="Town Event"),
    ]
    store, _ = _store(FakeStorage(news=items))

    assert [item.id for item in store.filtered_news("FESTIVAL")] == ["1"]
    assert [item.id for item in store.filtered_news("highway")] == ["2"]
    assert [item.id for item in store.filtered_news("delhi")] == ["2"]
    assert [item.id for item in store.filtered_news("town event")] == ["3"]
    assert [item.id for item in store.filtered_news("priya")] == ["3"]
    assert len(store.filtered_news("   ")) == 3


def test_city_and_topic_filters_are_exact_and_case_insensitive() -> None:
    items = [
        make_item("1", city="Mumbai", topic="Festival"),
        make_item("2", city="Navi Mumbai", topic="Festival"),
        make_item("3", city="mumbai", topic="Accident"),
    ]
    store, _ = _store(FakeStorage(news=items))

    store.update_filters(city="MUMBAI")
    assert [item.id for item in store.filtered_news()] == ["1", "3"]

    store.update_filters(topic="festival")
    assert [item.id for item in store.filtered_news()] == ["1"]

    store.clear_filters()
    assert len(store.filtered_news()) == 3


def test_distinct_cities_and_topics_in_first_seen_order() -> None:
    items = [
        make_item("1", city="Pune", topic="Festival"),
        make_item("2", city="Delhi", topic="Accident"),
        make_item("3", city="Pune", topic="Festival"),
    ]
    store, _ = _store(FakeStorage(news=items))
    assert store.cities() == ["Pune", "Delhi"]
    assert store.topics() == ["Festival", "Accident"]


def test_summary_counts_labels_as_written() -> None:
    items = [
        make_item("1", city="Pune", topic="Festival"),
        make_item("2", city="pune", topic="Festival"),
    ]
    store, _ = _store(FakeStorage(news=items, bookmarks=["1"]))
    summary = store.summary()
    assert summary.total_news == 2
    assert summary.total_bookmarks == 1
    assert summary.total_cities == 2
    assert summary.total_topics == 1
    assert summary.news_by_city == {"Pune": 1, "pune": 1}


def test_reinitialize_repairs_inconsistent_stats() -> None:
    store, stats = _store(FakeStorage(news=[make_item("1"), make_item("2")]))
    stats.reset()
    assert not store.stats_consistent()

    store.reinitialize_stats()
    assert store.stats_consistent()
    assert stats.total_posts() == 2


def test_failed_save_leaves_feed_and_bookmarks_unchanged() -> None:
    storage = FakeStorage(news=[make_item("1")], bookmarks=["1"])
    store, _ = _store(storage)
    storage.save_error = sqlite3.OperationalError("database is locked")

    with pytest.raises(sqlite3.OperationalError):
        store.add_news(make_item("2"))
    with pytest.raises(sqlite3.OperationalError):
        store.toggle_bookmark("1")

    assert [item.id for item in store.news] == ["1"]
    assert store.is_bookmarked("1")
    assert [item.id for item in storage.news] == ["1"]
