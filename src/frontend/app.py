"""Main Textual app for newsdesk."""

from __future__ import annotations

from typing import Any

from rich.text import Text
from textual.app import App, ComposeResult
from textual.containers import Center, Container, Horizontal, Vertical
from textual.widgets import ContentSwitcher, Footer, Static, Tab, Tabs

from core.config import AnalyticsConfig, ModerationConfig
from core.processor import SubmissionProcessor
from core.stats import StatsAggregator
from core.store import NewsStore
from .constants import ACCENT
from .tabs.analytics import AnalyticsTab
from .tabs.feed import FeedTab
from .tabs.submit import SubmitTab


class NewsDeskApp(App):
    """Tabbed UI over one shared store, aggregator, and processor."""

    BINDINGS = [
        ("ctrl+r", "refresh_views", "Refresh"),
        ("q", "quit", "Quit"),
        ("ctrl+c", "quit", "Quit"),
    ]

    CSS = """
    Screen {
        background: #10191a;
        color: #e6efe9;
    }

    #header {
        height: 5;
        padding: 1 4;
        border-bottom: solid #2a3d36;
    }

    #header-left, #header-right {
        width: 1fr;
    }

    #header-right {
        text-align: right;
    }

    .subtle {
        color: #b9c9c1;
    }

    #tabs-bar {
        height: 4;
        padding: 0 4;
        border-bottom: solid #2a3d36;
    }

    #tabs {
        width: auto;
    }

    #content {
        height: 1fr;
        padding: 0 2;
    }

    #feed-controls {
        height: 3;
    }

    #feed-search {
        width: 2fr;
    }

    #feed-city, #feed-topic {
        width: 1fr;
    }

    .inline-label {
        width: auto;
        padding: 1 1 0 2;
    }

    #feed-body, #analytics-body {
        height: 1fr;
    }

    #feed-left {
        width: 3fr;
    }

    #feed-right {
        width: 2fr;
        padding: 0 1;
    }

    #feed-actions {
        height: 3;
    }

    .form-label {
        color: #b9c9c1;
        margin-top: 1;
    }

    .field-error, .modal-error {
        color: #ff7b72;
    }

    #field-description {
        height: 6;
    }

    #submit-loading {
        height: 3;
    }

    .analytics-card {
        width: 1fr;
        border: round #2a3d36;
        padding: 0 1;
    }

    .card-title, .modal-title {
        text-style: bold;
    }

    ModalScreen {
        align: center middle;
    }

    .modal-dialog {
        width: 64;
        height: auto;
        padding: 1 2;
        border: thick #2a3d36;
        background: #16231f;
    }

    .modal-actions {
        height: 3;
        margin-top: 1;
    }
    """

    def __init__(
        self,
        store: NewsStore,
        stats: StatsAggregator,
        processor: SubmissionProcessor,
        db_label: str = "newsdesk.db",
        analytics: AnalyticsConfig | None = None,
        moderation: ModerationConfig | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.store = store
        self.stats = stats
        self.processor = processor
        self.analytics = analytics or AnalyticsConfig()
        self.moderation = moderation or ModerationConfig()
        self._db_label = db_label

    def compose(self) -> ComposeResult:
        with Container(id="header"):
            with Horizontal(id="header-row"):
                with Vertical(id="header-left"):
                    yield Static(self._title_text(), id="title")
                    yield Static("local community news", classes="subtle")
                with Vertical(id="header-right"):
                    yield Static(f"db: {self._db_label}", classes="subtle")

        with Container(id="tabs-bar"):
            with Center(id="tabs-center"):
                yield Tabs(
                    Tab("Feed", id="feed"),
                    Tab("Submit", id="submit"),
                    Tab("Analytics", id="analytics"),
                    id="tabs",
                )

        with ContentSwitcher(id="content"):
            yield FeedTab(id="feed")
            yield SubmitTab(id="submit")
            yield AnalyticsTab(id="analytics")
        yield Footer()

    def on_mount(self) -> None:
        self._set_active_tab("feed")

    def on_tabs_tab_activated(self, event: Tabs.TabActivated) -> None:
        tab_id = event.tab.id or ""
        if not tab_id:
            label = event.tab.label
            if hasattr(label, "plain"):
                label = label.plain
            tab_id = str(label).strip().lower()
        self._set_active_tab(tab_id)

    def _set_active_tab(self, tab_id: str) -> None:
        switcher = self.query_one("#content", ContentSwitcher)
        switcher.current = tab_id
        if tab_id == "analytics":
            self.query_one(AnalyticsTab).reload_from_store()

    def show_tab(self, tab_id: str) -> None:
        """Activate a tab programmatically (also moves the tab underline)."""
        self.query_one("#tabs", Tabs).active = tab_id

    def action_refresh_views(self) -> None:
        self.refresh_views()

    def refresh_views(self) -> None:
        self.query_one(FeedTab).reload_from_store()
        self.query_one(AnalyticsTab).reload_from_store()

    @staticmethod
    def _title_text() -> Text:
        return Text.assemble(
            ("NEWS", ACCENT),
            ("DESK > Local News", "bold"),
        )
