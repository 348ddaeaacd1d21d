"""Application entry point for newsdesk."""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import re
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

from art import tprint
import settings
from adapters.news_formatting import (
    format_publisher_line,
    format_result_message,
    format_timestamp,
    format_top_list,
)
from adapters.sqlite_storage import SQLiteStorage
from core.config import AnalyticsConfig, ModerationConfig
from core.moderation import ModerationError, RuleBasedModerator
from core.phone import mask_phone
from core.processor import SubmissionProcessor
from core.stats import StatsAggregator
from core.store import NewsStore
from frontend.validators import build_draft, validate_submission

NAME = "NEWSDESK"
FONT = "tarty-1"

# 9876543210, 98765 43210, 98765-43210 or 987-654-3210, not inside a longer number.
_PHONE_PATTERN = re.compile(r"(?<![\d-])(?:\d{10}|\d{5}[ -]\d{5}|\d{3}-\d{3}-\d{4})(?![\d-])")


def _print_banner() -> None:
    tprint(NAME, FONT, space=1)


class _PhoneMaskingFormatter(logging.Formatter):
    """Mask anything that looks like a ten-digit phone number."""

    def __init__(self, fmt: str, datefmt: Optional[str] = None, tail: int = 2) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self._tail = tail

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        return _PHONE_PATTERN.sub(lambda match: mask_phone(match.group(0), self._tail), message)


def _configure_logging() -> None:
    config = settings.LOGGING or {}
    if not config.get("enabled", False):
        return

    level_name = str(config.get("level", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)

    fmt = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"
    redact_cfg = config.get("redact", {})
    if redact_cfg.get("enabled", True):
        formatter: logging.Formatter = _PhoneMaskingFormatter(
            fmt=fmt,
            datefmt=datefmt,
            tail=int(redact_cfg.get("tail", 2)),
        )
    else:
        formatter = logging.Formatter(fmt=fmt, datefmt=datefmt)

    handlers: list[logging.Handler] = []

    if config.get("console", True):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    file_cfg = config.get("file", {})
    if file_cfg.get("enabled", False):
        path = file_cfg.get("path", "logs/newsdesk.log")
        if not os.path.isabs(path):
            path = os.path.join(settings.PROJECT_ROOT, path)
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        max_bytes = int(file_cfg.get("max_bytes", 5 * 1024 * 1024))
        backup_count = int(file_cfg.get("backup_count", 5))
        file_handler = RotatingFileHandler(
            path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    if not handlers:
        return

    logging.basicConfig(level=level, handlers=handlers)


def _moderation_config() -> ModerationConfig:
    return ModerationConfig(
        latency_seconds=settings.MODERATION_LATENCY_SECONDS,
        min_description_chars=settings.MIN_DESCRIPTION_CHARS,
    )


def _build_services() -> tuple[NewsStore, StatsAggregator, SubmissionProcessor]:
    """Wire storage, store, aggregator, and processor from settings."""

    storage = SQLiteStorage(settings.DB_PATH)
    storage.init_db()

    stats = StatsAggregator()
    store = NewsStore(storage, stats)
    store.load()

    moderator = RuleBasedModerator(_moderation_config())
    processor = SubmissionProcessor(moderator=moderator, store=store, stats=stats)
    return store, stats, processor


def _ui() -> None:
    _print_banner()
    _configure_logging()
    logger = logging.getLogger(__name__)
    logger.info("Starting newsdesk UI")

    store, stats, processor = _build_services()

    from frontend.app import NewsDeskApp

    NewsDeskApp(
        store=store,
        stats=stats,
        processor=processor,
        db_label=os.path.basename(settings.DB_PATH),
        analytics=AnalyticsConfig(top_limit=settings.TOP_LIMIT),
        moderation=_moderation_config(),
    ).run()


def _submit(args: argparse.Namespace) -> int:
    _configure_logging()
    fields = {
        "title": args.title,
        "description": args.description,
        "city": args.city,
        "topic": args.topic,
        "publisher_name": args.name,
        "publisher_phone": args.phone,
        "image": args.image,
    }
    errors = validate_submission(fields, settings.MIN_DESCRIPTION_CHARS)
    if errors:
        for field, message in errors.items():
            print(f"{field}: {message}", file=sys.stderr)
        return 2

    _, _, processor = _build_services()
    try:
        outcome = asyncio.run(processor.submit(build_draft(fields)))
    except ModerationError as exc:
        print(str(exc), file=sys.stderr)
        return 1

    print(format_result_message(outcome.result))
    if outcome.item is not None:
        print(f"\nid: {outcome.item.id}")
    return 0 if outcome.approved else 1


def _stats(args: argparse.Namespace) -> int:
    _configure_logging()
    store, stats, _ = _build_services()
    limit = args.limit or settings.TOP_LIMIT
    summary = store.summary()
    report = stats.all_stats(limit)
    print(f"news: {summary.total_news}  bookmarks: {summary.total_bookmarks}")
    print(f"tracked posts: {report['total_posts']}")
    print("\nTop topics\n" + format_top_list(report["top_topics"]))
    print("\nTop cities\n" + format_top_list(report["top_cities"]))
    print("\nTop publishers\n" + format_top_list(report["top_publishers"]))
    return 0


def _feed(args: argparse.Namespace) -> int:
    _configure_logging()
    store, _, _ = _build_services()
    if args.bookmarks:
        items = store.bookmarked_news()
    else:
        store.update_filters(city=args.city or "", topic=args.topic or "")
        items = store.filtered_news(args.query or "")

    if not items:
        print("No news available")
        return 0
    for item in items:
        print(f"[{format_timestamp(item.timestamp)}] {item.edited_title}")
        print(f"  {item.topic} | {item.city} | {format_publisher_line(item)}")
        print(f"  {item.edited_summary}\n")
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="newsdesk")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("ui", help="Launch the news UI (default)")

    submit = subparsers.add_parser("submit", help="Moderate and publish one news item")
    submit.add_argument("--title", required=True)
    submit.add_argument("--description", required=True)
    submit.add_argument("--city", required=True)
    submit.add_argument("--topic", required=True)
    submit.add_argument("--name", required=True, help="Publisher first name")
    submit.add_argument("--phone", required=True, help="Publisher phone (10 digits)")
    submit.add_argument("--image", default="", help="Optional image path or URL")

    stats = subparsers.add_parser("stats", help="Print totals and top lists")
    stats.add_argument("--limit", type=int, default=0)

    feed = subparsers.add_parser("feed", help="Print the news feed")
    feed.add_argument("--query", default="")
    feed.add_argument("--city", default="")
    feed.add_argument("--topic", default="")
    feed.add_argument("--bookmarks", action="store_true", help="Only bookmarked news")

    args = parser.parse_args(argv)
    if args.command == "submit":
        return _submit(args)
    if args.command == "stats":
        return _stats(args)
    if args.command == "feed":
        return _feed(args)
    _ui()
    return 0


if __name__ == "__main__":
    sys.exit(main())
