"""Submit tab: form collection and moderation."""

from __future__ import annotations

import logging
import sqlite3
from typing import Any

from textual import on
from textual.containers import Container, Horizontal, ScrollableContainer
from textual.widgets import Button, Input, LoadingIndicator, Select, Static, TextArea

from core.moderation import LOCAL_KEYWORDS, SENSITIVE_KEYWORDS, SPAM_KEYWORDS, ModerationError
from core.phone import mask_phone
from core.samples import TOPICS
from ..modals import ErrorScreen, SubmissionResultScreen
from ..validators import build_draft, validate_submission

LOGGER = logging.getLogger(__name__)

INPUT_FIELDS = ("title", "city", "publisher_name", "publisher_phone", "image")
ERROR_FIELDS = ("title", "description", "city", "topic", "publisher_name", "publisher_phone")


class SubmitTab(Container):
    """Form for new drafts; moderation runs in a worker so the UI stays live."""

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._submitting = False

    def compose(self):
        with ScrollableContainer(id="submit-panel"):
            yield Static("Submit local news", id="submit-title")
            yield Static(self._checks_text(), id="submit-checks", classes="subtle")
            yield Static("title *", classes="form-label")
            yield Input(placeholder="News title", id="field-title")
            yield Static("", id="error-title", classes="field-error")
            yield Static("description * (min 50 characters)", classes="form-label")
            yield TextArea(id="field-description")
            yield Static("", id="error-description", classes="field-error")
            yield Static("city *", classes="form-label")
            yield Input(placeholder="City", id="field-city")
            yield Static("", id="error-city", classes="field-error")
            yield Static("topic *", classes="form-label")
            yield Select([(topic, topic) for topic in TOPICS], id="field-topic", prompt="Topic")
            yield Static("", id="error-topic", classes="field-error")
            yield Static("publisher first name *", classes="form-label")
            yield Input(placeholder="First name", id="field-publisher_name")
            yield Static("", id="error-publisher_name", classes="field-error")
            yield Static("publisher phone *", classes="form-label")
            yield Input(placeholder="10-digit phone", id="field-publisher_phone")
            yield Static("", id="error-publisher_phone", classes="field-error")
            yield Static("image (optional path or URL)", classes="form-label")
            yield Input(placeholder="path/to/photo.jpg", id="field-image")
            with Horizontal(id="submit-actions"):
                yield Button("Submit", id="submit-btn", variant="primary")
                yield Button("Clear", id="submit-clear")
            yield LoadingIndicator(id="submit-loading")
            yield Static("", id="submit-status")

    def on_mount(self) -> None:
        self.query_one("#submit-loading", LoadingIndicator).display = False
        self.query_one("#submit-actions").styles.height = 3

    @staticmethod
    def _checks_text() -> str:
        return "\n".join(
            [
                "Drafts are checked automatically before publishing:",
                f"  spam: {', '.join(SPAM_KEYWORDS)}",
                f"  sensitive: {', '.join(SENSITIVE_KEYWORDS)}",
                f"  local keywords: {', '.join(LOCAL_KEYWORDS)}",
            ]
        )

    def _collect_fields(self) -> dict[str, str]:
        fields = {name: self.query_one(f"#field-{name}", Input).value for name in INPUT_FIELDS}
        fields["description"] = self.query_one("#field-description", TextArea).text
        topic = self.query_one("#field-topic", Select).value
        fields["topic"] = topic if isinstance(topic, str) else ""
        return fields

    def _show_errors(self, errors: dict[str, str]) -> None:
        for name in ERROR_FIELDS:
            self.query_one(f"#error-{name}", Static).update(errors.get(name, ""))

    @on(Input.Changed, "#field-publisher_phone")
    def _on_phone_changed(self, event: Input.Changed) -> None:
        masked = mask_phone(event.value, tail=3)
        status = f"phone preview: {masked}" if masked else ""
        self.query_one("#submit-status", Static).update(status)

    @on(Button.Pressed, "#submit-clear")
    def _on_clear(self) -> None:
        self._reset_form()

    @on(Button.Pressed, "#submit-btn")
    def _on_submit(self) -> None:
        if self._submitting:
            return
        fields = self._collect_fields()
        errors = validate_submission(fields, self.app.moderation.min_description_chars)
        self._show_errors(errors)
        if errors:
            self.query_one("#submit-status", Static).update("Please fix the highlighted fields.")
            return
        draft = build_draft(fields)
        self._set_submitting(True)
        self.run_worker(self._moderate(draft), exclusive=True, group="moderation")

    async def _moderate(self, draft) -> None:
        try:
            outcome = await self.app.processor.submit(draft)
        except ModerationError as exc:
            self.app.push_screen(ErrorScreen(str(exc)))
            return
        except (sqlite3.Error, OSError) as exc:
            LOGGER.exception("Failed to store approved news")
            self.app.push_screen(ErrorScreen(f"Failed to save news: {exc}"))
            return
        finally:
            self._set_submitting(False)

        self.app.push_screen(SubmissionResultScreen(outcome.result))
        if outcome.approved:
            self._reset_form()
            self.app.refresh_views()
            self.app.show_tab("feed")

    def _set_submitting(self, submitting: bool) -> None:
        self._submitting = submitting
        self.query_one("#submit-btn", Button).disabled = submitting
        self.query_one("#submit-loading", LoadingIndicator).display = submitting
        self.query_one("#submit-status", Static).update("Checking your news..." if submitting else "")

    def _reset_form(self) -> None:
        for name in INPUT_FIELDS:
            self.query_one(f"#field-{name}", Input).value = ""
        self.query_one("#field-description", TextArea).text = ""
        self.query_one("#field-topic", Select).clear()
        self._show_errors({})
