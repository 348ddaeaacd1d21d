from __future__ import annotations

import logging

import pytest

import app
import settings


@pytest.fixture
def cli_settings(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "DB_PATH", str(tmp_path / "cli.db"))
    monkeypatch.setattr(settings, "MODERATION_LATENCY_SECONDS", 0.0)
    monkeypatch.setattr(settings, "LOGGING", {"enabled": False})
    return tmp_path


SUBMIT_ARGS = [
    "submit",
    "--title",
    "Lantern Festival",
    "--description",
    "The town square hosts a lantern festival with music. Food stalls open at six.",
    "--city",
    "Pune",
    "--topic",
    "Festival",
    "--name",
    "Asha",
    "--phone",
    "9876543210",
]


def test_submit_publishes_and_feed_lists_it(cli_settings, capsys) -> None:
    assert app.main(SUBMIT_ARGS) == 0
    out = capsys.readouterr().out
    assert "News approved and published" in out
    assert "Community Lantern Festival" in out

    assert app.main(["feed", "--city", "pune"]) == 0
    out = capsys.readouterr().out
    assert "Community Lantern Festival" in out
    assert "By Asha • 987****10" in out


def test_submit_with_invalid_fields_exits_with_usage_code(cli_settings, capsys) -> None:
    args = list(SUBMIT_ARGS)
    args[args.index("9876543210")] = "123"
    assert app.main(args) == 2
    assert "publisher_phone: Please enter a valid 10-digit phone number" in capsys.readouterr().err


def test_rejected_submission_exits_nonzero(cli_settings, capsys) -> None:
    args = list(SUBMIT_ARGS)
    args[args.index("Lantern Festival")] = "Free money festival"
    assert app.main(args) == 1
    assert capsys.readouterr().out.startswith("News rejected")


def test_stats_reports_seeded_collection(cli_settings, capsys) -> None:
    assert app.main(["stats", "--limit", "2"]) == 0
    out = capsys.readouterr().out
    assert "tracked posts: 4" in out
    assert "1. mumbai: 2\n2. delhi: 2" in out


def test_feed_with_no_matches(cli_settings, capsys) -> None:
    assert app.main(["feed", "--query", "nothing matches this"]) == 0
    assert "No news available" in capsys.readouterr().out


def test_log_formatter_masks_phone_numbers_but_not_dates() -> None:
    formatter = app._PhoneMaskingFormatter(fmt="%(asctime)s %(message)s", datefmt="%Y-%m-%d %H:%M:%S")
    record = logging.LogRecord(
        "newsdesk",
        logging.INFO,
        __file__,
        1,
        "publisher %s / %s / %s id=%s",
        ("9876543210", "98765 43210", "987-654-3210", "1700000000000"),
        None,
    )
    line = formatter.format(record)
    assert "publisher 987****10 / 987****10 / 987****10 id=1700000000000" in line
    assert formatter.formatTime(record, "%Y-%m-%d %H:%M:%S") in line
