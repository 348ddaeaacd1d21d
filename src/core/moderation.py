"""Rule-based moderation engine (core domain).

The engine stands in for an external AI editor: it answers with the same
result shape a network-backed moderator would, so callers only depend on
``ModeratorPort``.
"""

from __future__ import annotations

import asyncio
import logging
import re
from typing import Iterable, List, Optional

from core.config import ModerationConfig
from core.models import ModerationResult, SubmissionDraft

LOGGER = logging.getLogger(__name__)

SPAM_KEYWORDS = ("buy now", "click here", "free money", "lottery", "viagra")
SENSITIVE_KEYWORDS = ("violence", "hate", "discrimination", "illegal")
LOCAL_KEYWORDS = ("accident", "festival", "community event", "local", "city", "town")

TOPIC_PREFIXES = {
    "accident": "Local",
    "festival": "Community",
    "community event": "Local",
    "local": "Local",
    "city": "City",
    "town": "Town",
}
DEFAULT_PREFIX = "Local"

SPAM_REASON = (
    "Content appears to be spam or off-topic. Please ensure your news relates "
    "to a local happening in your community."
)
SENSITIVE_REASON = (
    "Content contains potentially harmful or inappropriate material. Please "
    "review and resubmit with appropriate content."
)
IRRELEVANT_REASON = (
    "Content is too short or doesn't appear to be relevant local news. Please "
    "provide more details about a local happening."
)
APPROVED_REASON = "News is relevant to local community and contains appropriate content."

VALIDATION_FAILED = "Failed to validate news. Please try again later."

_SENTENCE_SPLIT = re.compile(r"[.!?]+")


class ModerationError(RuntimeError):
    """Raised when a moderation call cannot complete."""


def _contains_any(keywords: Iterable[str], *texts: str) -> List[str]:
    lowered = [text.lower() for text in texts]
    return [keyword for keyword in keywords if any(keyword in text for text in lowered)]


def generate_edited_title(title: str, topic: str) -> str:
    """Prefix the original title with a word derived from the topic."""

    prefix = TOPIC_PREFIXES.get(topic.lower(), DEFAULT_PREFIX)
    return f"{prefix} {title}"


def generate_edited_summary(description: str) -> str:
    """Keep the first two sentences, or the whole description when shorter."""

    sentences = [part.strip() for part in _SENTENCE_SPLIT.split(description) if part.strip()]
    if len(sentences) >= 2:
        return f"{sentences[0]}. {sentences[1]}."
    return f"{description.strip()}."


def evaluate_draft(draft: SubmissionDraft, min_description_chars: int = 50) -> ModerationResult:
    """Return the moderation decision for a draft.

    Checks run in a fixed order and the first failing one wins:
    - spam phrases in title or description
    - sensitive phrases in title or description
    - description shorter than the minimum, or no local keyword anywhere
      in title, description or topic
    Anything that survives is approved with an edited title and summary.
    """

    spam_hits = _contains_any(SPAM_KEYWORDS, draft.title, draft.description)
    if spam_hits:
        LOGGER.info("Draft rejected as spam (%s)", ", ".join(spam_hits))
        return ModerationResult.rejected(SPAM_REASON)

    sensitive_hits = _contains_any(SENSITIVE_KEYWORDS, draft.title, draft.description)
    if sensitive_hits:
        LOGGER.info("Draft rejected as sensitive (%s)", ", ".join(sensitive_hits))
        return ModerationResult.rejected(SENSITIVE_REASON)

    # Length and relevance fail independently; the messages stay merged.
    too_short = len(draft.description) < min_description_chars
    irrelevant = not _contains_any(LOCAL_KEYWORDS, draft.title, draft.description, draft.topic)
    if too_short or irrelevant:
        LOGGER.info("Draft rejected (too_short=%s, irrelevant=%s)", too_short, irrelevant)
        return ModerationResult.rejected(IRRELEVANT_REASON)

    return ModerationResult.accepted(
        edited_title=generate_edited_title(draft.title, draft.topic),
        edited_summary=generate_edited_summary(draft.description),
        reason=APPROVED_REASON,
    )


class RuleBasedModerator:
    """Deferred moderator that simulates the latency of a remote editor."""

    def __init__(self, config: Optional[ModerationConfig] = None) -> None:
        self._config = config or ModerationConfig()

    async def evaluate(self, draft: SubmissionDraft) -> ModerationResult:
        """Evaluate a draft after the configured simulated delay."""

        try:
            if self._config.latency_seconds > 0:
                await asyncio.sleep(self._config.latency_seconds)
            return evaluate_draft(draft, self._config.min_description_chars)
        except Exception as exc:
            LOGGER.exception("Moderation failed")
            raise ModerationError(VALIDATION_FAILED) from exc
