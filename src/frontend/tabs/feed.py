"""Feed tab for browsing, filtering, bookmarking, and exporting news."""

from __future__ import annotations

import csv
import json
import sqlite3
from datetime import datetime
from typing import Any, Optional

from textual import on
from textual.containers import Container, Horizontal, Vertical
from textual.widgets import Button, DataTable, Input, Markdown, Select, Static, Switch

from adapters.news_formatting import format_news_markdown, format_timestamp
from core.models import NewsItem
from ..constants import EXPORTS_DIR
from ..state import FeedViewState


class FeedTab(Container):
    """Feed tab with search, city/topic filters, and a bookmarks view."""

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._view = FeedViewState()
        self._rows: list[NewsItem] = []
        self._table_ready = False

    def compose(self):
        with Vertical(id="feed-panel"):
            with Horizontal(id="feed-controls"):
                yield Input(placeholder="Search news", id="feed-search")
                yield Select([], id="feed-city", prompt="City")
                yield Select([], id="feed-topic", prompt="Topic")
                yield Static("bookmarks", classes="form-label inline-label")
                yield Switch(value=False, id="feed-bookmarks")
            with Horizontal(id="feed-body"):
                with Container(id="feed-left"):
                    yield DataTable(id="feed-table", cursor_type="row")
                with Container(id="feed-right"):
                    yield Markdown("Select a news item.", id="feed-detail")
                    yield Button("Bookmark", id="feed-bookmark", disabled=True)
            with Horizontal(id="feed-actions"):
                yield Button("Clear filters", id="feed-clear")
                yield Button("Export JSON", id="feed-export-json", variant="success")
                yield Button("Export CSV", id="feed-export-csv")
            yield Static("", id="feed-output")

    def on_mount(self) -> None:
        table = self.query_one("#feed-table", DataTable)
        table.add_column("date", key="date", width=17)
        table.add_column("title", key="title", width=40)
        table.add_column("city", key="city", width=12)
        table.add_column("topic", key="topic", width=16)
        table.add_column("★", key="bookmark", width=2)
        table.zebra_stripes = True
        self._table_ready = True
        self.reload_from_store()

    def reload_from_store(self) -> None:
        """Refresh filter choices and rows from the shared store."""

        if not self._table_ready:
            return
        store = self.app.store
        self._set_options("#feed-city", store.cities(), store.filters.city)
        self._set_options("#feed-topic", store.topics(), store.filters.topic)
        self._refresh_rows()

    def _set_options(self, selector: str, values: list[str], current: str) -> None:
        select = self.query_one(selector, Select)
        select.set_options([(value, value) for value in values])
        if current and current in values:
            select.value = current
        else:
            select.clear()

    def _refresh_rows(self) -> None:
        store = self.app.store
        if self._view.bookmarks_only:
            self._rows = store.bookmarked_news()
        else:
            self._rows = store.filtered_news(self._view.query)

        table = self.query_one("#feed-table", DataTable)
        table.clear()
        for item in self._rows:
            table.add_row(
                format_timestamp(item.timestamp),
                self._clip_text(item.edited_title),
                item.city,
                item.topic,
                "★" if store.is_bookmarked(item.id) else "",
                key=item.id,
            )

        if not self._rows:
            empty = "No bookmarked news yet" if self._view.bookmarks_only else "No news available"
            self._set_output(empty)
        else:
            self._set_output(f"{len(self._rows)} item(s)")
        self._show_detail(self._view.selected_id)

    def _show_detail(self, news_id: Optional[str]) -> None:
        store = self.app.store
        detail = self.query_one("#feed-detail", Markdown)
        button = self.query_one("#feed-bookmark", Button)
        item = store.get(news_id) if news_id else None
        if item is None:
            self._view.selected_id = None
            detail.update("Select a news item.")
            button.disabled = True
            button.label = "Bookmark"
            return
        bookmarked = store.is_bookmarked(item.id)
        detail.update(format_news_markdown(item, bookmarked))
        button.disabled = False
        button.label = "Remove bookmark" if bookmarked else "Bookmark"

    @on(Input.Changed, "#feed-search")
    def _on_search_changed(self, event: Input.Changed) -> None:
        self._view.query = event.value
        self._refresh_rows()

    @on(Select.Changed, "#feed-city")
    def _on_city_changed(self, event: Select.Changed) -> None:
        self.app.store.update_filters(city=event.value if isinstance(event.value, str) else "")
        self._refresh_rows()

    @on(Select.Changed, "#feed-topic")
    def _on_topic_changed(self, event: Select.Changed) -> None:
        self.app.store.update_filters(topic=event.value if isinstance(event.value, str) else "")
        self._refresh_rows()

    @on(Switch.Changed, "#feed-bookmarks")
    def _on_bookmarks_changed(self, event: Switch.Changed) -> None:
        self._view.bookmarks_only = bool(event.value)
        self._refresh_rows()

    def on_data_table_row_highlighted(self, event: DataTable.RowHighlighted) -> None:
        self._view.selected_id = self._coerce_row_key(event.row_key)
        self._show_detail(self._view.selected_id)

    @on(Button.Pressed, "#feed-bookmark")
    def _on_toggle_bookmark(self) -> None:
        news_id = self._view.selected_id
        if not news_id:
            return
        try:
            self.app.store.toggle_bookmark(news_id)
        except (sqlite3.Error, OSError) as exc:
            self._set_output(f"bookmark failed: {exc}")
            return
        self._refresh_rows()

    @on(Button.Pressed, "#feed-clear")
    def _on_clear_filters(self) -> None:
        self.app.store.clear_filters()
        self.query_one("#feed-search", Input).value = ""
        self._view.query = ""
        self.reload_from_store()

    @on(Button.Pressed, "#feed-export-json")
    def _on_export_json(self) -> None:
        self._export_rows("json")

    @on(Button.Pressed, "#feed-export-csv")
    def _on_export_csv(self) -> None:
        self._export_rows("csv")

    def _export_rows(self, fmt: str) -> None:
        if not self._rows:
            self._set_output("No news to export.")
            return
        records = [item.to_dict() for item in self._rows]
        EXPORTS_DIR.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
        path = EXPORTS_DIR / f"news-{timestamp}.{fmt}"
        try:
            if fmt == "json":
                path.write_text(json.dumps(records, indent=2, ensure_ascii=True), encoding="utf-8")
            else:
                fieldnames = list(records[0].keys())
                with path.open("w", encoding="utf-8", newline="") as handle:
                    writer = csv.DictWriter(handle, fieldnames=fieldnames)
                    writer.writeheader()
                    writer.writerows(records)
            self._set_output(f"exported {len(records)} items to {path}")
        except OSError as exc:
            self._set_output(f"export failed: {exc.strerror or exc}")

    def _set_output(self, message: str) -> None:
        self.query_one("#feed-output", Static).update(message)

    @staticmethod
    def _clip_text(value: str, limit: int = 40) -> str:
        if len(value) <= limit:
            return value
        return value[: limit - 3] + "..."

    @staticmethod
    def _coerce_row_key(value: Any) -> str:
        if hasattr(value, "value"):
            return str(value.value)
        return str(value)
