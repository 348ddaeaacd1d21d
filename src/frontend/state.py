"""View state shared by the feed tab."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class FeedViewState:
    query: str = ""
    bookmarks_only: bool = False
    selected_id: str | None = None
