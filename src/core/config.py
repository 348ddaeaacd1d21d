"""Core configuration dataclasses.

We keep config parsing outside the core, but these dataclasses define the
shape the core expects so adapters and app layers can build safely.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ModerationConfig:
    """Moderation settings for the rule-based engine."""

    latency_seconds: float = 0.0
    min_description_chars: int = 50


@dataclass(frozen=True)
class AnalyticsConfig:
    """Ranking settings consumed by the analytics views."""

    top_limit: int = 5
