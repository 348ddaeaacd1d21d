"""Validation helpers for the submission form."""

from __future__ import annotations

from typing import Mapping

from core.models import SubmissionDraft
from core.phone import is_valid_phone

MIN_DESCRIPTION_CHARS = 50


def validate_submission(
    fields: Mapping[str, str | None],
    min_description_chars: int = MIN_DESCRIPTION_CHARS,
) -> dict[str, str]:
    """Return a field -> message map; empty when the form can be submitted."""

    def value(name: str) -> str:
        return fields.get(name) or ""

    errors: dict[str, str] = {}

    if not value("title").strip():
        errors["title"] = "News title is required"

    description = value("description")
    if not description.strip():
        errors["description"] = "News description is required"
    elif len(description) < min_description_chars:
        errors["description"] = f"Description must be at least {min_description_chars} characters"

    if not value("city").strip():
        errors["city"] = "City is required"

    if not value("topic").strip():
        errors["topic"] = "Topic/Category is required"

    if not value("publisher_name").strip():
        errors["publisher_name"] = "Publisher first name is required"

    phone = value("publisher_phone")
    if not phone.strip():
        errors["publisher_phone"] = "Publisher phone number is required"
    elif not is_valid_phone(phone):
        errors["publisher_phone"] = "Please enter a valid 10-digit phone number"

    return errors


def build_draft(fields: Mapping[str, str | None]) -> SubmissionDraft:
    """Build a draft from validated form fields, keeping text as typed."""

    image = (fields.get("image") or "").strip()
    return SubmissionDraft(
        title=fields.get("title") or "",
        description=fields.get("description") or "",
        city=fields.get("city") or "",
        topic=fields.get("topic") or "",
        publisher_name=fields.get("publisher_name") or "",
        publisher_phone=fields.get("publisher_phone") or "",
        image=image or None,
    )
