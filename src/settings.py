"""Static configuration for newsdesk.

All user-editable settings (storage, moderation, analytics, logging) live in
a single JSON file for quick edits without touching Python. Environment
variables (optionally from a .env file) override the database location.
"""

import json
import os

from dotenv import load_dotenv

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

CONFIG_PATH = os.environ.get("NEWSDESK_CONFIG", os.path.join(PROJECT_ROOT, "config.json"))


def _load_json_config() -> dict:
    """Load config.json with a flat, user-friendly schema."""

    if not os.path.exists(CONFIG_PATH):
        raise FileNotFoundError(f"Config file not found: {CONFIG_PATH}")

    with open(CONFIG_PATH, "r", encoding="utf-8") as handle:
        return json.load(handle)


def _resolve_path(path: str) -> str:
    if os.path.isabs(path):
        return path
    return os.path.join(PROJECT_ROOT, path)


load_dotenv()

_CONFIG = _load_json_config()

# Expose the raw config for modules that need structured access.
CONFIG = _CONFIG

# Where to store the SQLite database.
_storage = _CONFIG.get("storage", {})
DB_PATH = _resolve_path(os.getenv("NEWSDESK_DB_PATH") or _storage.get("db_path", "newsdesk.db"))

# Moderation controls for the rule-based engine.
# - MODERATION_LATENCY_SECONDS: simulated editor delay before a decision
# - MIN_DESCRIPTION_CHARS: descriptions shorter than this are rejected
_moderation = _CONFIG.get("moderation", {})
MODERATION_LATENCY_SECONDS = float(_moderation.get("latency_seconds", 2.0))
MIN_DESCRIPTION_CHARS = int(_moderation.get("min_description_chars", 50))
if MODERATION_LATENCY_SECONDS < 0:
    raise ValueError("moderation.latency_seconds must not be negative")

# Size of every top list on the analytics tab and in the CLI.
_analytics = _CONFIG.get("analytics", {})
TOP_LIMIT = int(_analytics.get("top_limit", 5))

# Logging configuration (optional).
LOGGING = _CONFIG.get("logging", {})
