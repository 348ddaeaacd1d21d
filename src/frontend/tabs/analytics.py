"""Analytics tab: feed totals and running statistics."""

from __future__ import annotations

from typing import Any

from textual import on
from textual.containers import Container, Horizontal, Vertical
from textual.widgets import Button, Static

from adapters.news_formatting import format_top_list
from ..modals import ResetStatsScreen


class AnalyticsTab(Container):
    """Totals over the collection plus top topics, cities, and publishers."""

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._ready = False

    def compose(self):
        with Vertical(id="analytics-panel"):
            yield Static("", id="analytics-summary")
            with Horizontal(id="analytics-body"):
                with Vertical(classes="analytics-card"):
                    yield Static("Top topics", classes="card-title")
                    yield Static("", id="analytics-topics")
                with Vertical(classes="analytics-card"):
                    yield Static("Top cities", classes="card-title")
                    yield Static("", id="analytics-cities")
                with Vertical(classes="analytics-card"):
                    yield Static("Top publishers", classes="card-title")
                    yield Static("", id="analytics-publishers")
            with Horizontal(id="analytics-actions"):
                yield Button("Rebuild", id="analytics-rebuild", variant="primary")
                yield Button("Reset", id="analytics-reset", variant="error")
            yield Static("", id="analytics-output")

    def on_mount(self) -> None:
        self.query_one("#analytics-actions").styles.height = 3
        self._ready = True
        self.reload_from_store()

    def reload_from_store(self) -> None:
        if not self._ready:
            return
        summary = self.app.store.summary()
        stats = self.app.stats.all_stats(self.app.analytics.top_limit)
        self.query_one("#analytics-summary", Static).update(
            "\n".join(
                [
                    f"news: {summary.total_news}   bookmarks: {summary.total_bookmarks}   "
                    f"cities: {summary.total_cities}   topics: {summary.total_topics}",
                    f"tracked posts: {stats['total_posts']}",
                ]
            )
        )
        self.query_one("#analytics-topics", Static).update(format_top_list(stats["top_topics"]))
        self.query_one("#analytics-cities", Static).update(format_top_list(stats["top_cities"]))
        self.query_one("#analytics-publishers", Static).update(format_top_list(stats["top_publishers"]))
        if self.app.store.stats_consistent():
            self._set_output("")
        else:
            self._set_output("statistics are out of date; press Rebuild")

    @on(Button.Pressed, "#analytics-rebuild")
    def _on_rebuild(self) -> None:
        self.app.store.reinitialize_stats()
        self.reload_from_store()
        self._set_output("statistics rebuilt")

    @on(Button.Pressed, "#analytics-reset")
    def _on_reset(self) -> None:
        self.app.push_screen(ResetStatsScreen(), self._handle_reset)

    def _handle_reset(self, confirmed: bool | None) -> None:
        if not confirmed:
            return
        self.app.stats.reset()
        self.reload_from_store()

    def _set_output(self, message: str) -> None:
        self.query_one("#analytics-output", Static).update(message)
