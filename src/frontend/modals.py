"""Modal dialogs for the newsdesk UI."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.screen import ModalScreen
from textual.widgets import Button, Static

from adapters.news_formatting import format_result_message
from core.models import ModerationResult


class SubmissionResultScreen(ModalScreen[None]):
    """Show the moderation decision for a submitted draft."""

    def __init__(self, result: ModerationResult) -> None:
        super().__init__()
        self._result = result

    def compose(self) -> ComposeResult:
        title = "Published" if self._result.approved else "Rejected"
        yield Container(
            Static(title, classes="modal-title"),
            Static(format_result_message(self._result), classes="modal-body"),
            Horizontal(
                Button("OK", id="result-ok", variant="success" if self._result.approved else "warning"),
                classes="modal-actions",
            ),
            classes="modal-dialog modal-dialog--confirm",
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(None)


class ErrorScreen(ModalScreen[None]):
    """Show a failure the user can retry from."""

    def __init__(self, message: str) -> None:
        super().__init__()
        self._message = message

    def compose(self) -> ComposeResult:
        yield Container(
            Static("Error", classes="modal-title"),
            Static(self._message, classes="modal-body"),
            Horizontal(
                Button("OK", id="error-ok", variant="error"),
                classes="modal-actions",
            ),
            classes="modal-dialog modal-dialog--confirm",
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(None)


class ResetStatsScreen(ModalScreen[bool]):
    """Confirm wiping the running statistics."""

    def compose(self) -> ComposeResult:
        yield Container(
            Static("Reset statistics?", classes="modal-title"),
            Static("Counts stay empty until rebuilt or new news is published.", classes="modal-body"),
            Horizontal(
                Button("Reset", id="reset-confirm", variant="error"),
                Button("Cancel", id="reset-cancel"),
                classes="modal-actions",
            ),
            classes="modal-dialog modal-dialog--confirm",
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "reset-confirm":
            self.dismiss(True)
        else:
            self.dismiss(False)
