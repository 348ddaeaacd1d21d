"""Shared display formatting helpers.

Keeping formatting here prevents drift between the feed, the CLI, and the
analytics views, and keeps rendered items consistent regardless of surface.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Tuple

from core.models import ModerationResult, NewsItem
from core.phone import mask_phone


def format_timestamp(value: datetime) -> str:
    """Local date and HH:MM time for an item timestamp."""

    return value.astimezone().strftime("%d-%m-%Y %H:%M")


def format_publisher_line(item: NewsItem) -> str:
    return f"By {item.publisher_name} • {mask_phone(item.publisher_phone)}"


def format_news_markdown(item: NewsItem, bookmarked: bool = False) -> str:
    """Create the Markdown body shown in the feed detail pane."""

    def escape_md(value: str) -> str:
        for ch in r"*_[`":
            value = value.replace(ch, f"\\{ch}")
        return value

    marker = " ★" if bookmarked else ""
    lines = [
        f"## {escape_md(item.edited_title)}{marker}",
        "",
        f"**{escape_md(item.topic)}** · {escape_md(item.city)}",
        "",
        escape_md(item.edited_summary),
        "",
        f"_{escape_md(format_publisher_line(item))}_",
        "",
        format_timestamp(item.timestamp),
    ]
    if item.image:
        lines.extend(["", f"Image: {escape_md(item.image)}"])
    return "\n".join(lines)


def format_top_list(entries: Iterable[Tuple[str, int]]) -> str:
    """Numbered ``label: count`` lines, or a dash when empty."""

    lines = [f"{index}. {label}: {count}" for index, (label, count) in enumerate(entries, start=1)]
    return "\n".join(lines) if lines else "-"


def format_result_message(result: ModerationResult) -> str:
    if not result.approved:
        return f"News rejected\n\n{result.reason}"
    return "\n".join(
        [
            "News approved and published",
            "",
            result.edited_title or "",
            result.edited_summary or "",
            "",
            result.reason,
        ]
    )
