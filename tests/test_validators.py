from __future__ import annotations

from frontend.validators import build_draft, validate_submission

VALID_FIELDS = {
    "title": "Festival tonight",
    "description": "The town square hosts a lantern festival with music and food stalls.",
    "city": "Pune",
    "topic": "Festival",
    "publisher_name": "Asha",
    "publisher_phone": "9876543210",
    "image": "",
}


def test_valid_form_has_no_errors() -> None:
    assert validate_submission(VALID_FIELDS) == {}


def test_empty_form_reports_every_required_field() -> None:
    errors = validate_submission({})
    assert errors == {
        "title": "News title is required",
        "description": "News description is required",
        "city": "City is required",
        "topic": "Topic/Category is required",
        "publisher_name": "Publisher first name is required",
        "publisher_phone": "Publisher phone number is required",
    }


def test_whitespace_only_counts_as_missing() -> None:
    errors = validate_submission({**VALID_FIELDS, "title": "   ", "city": "\t"})
    assert set(errors) == {"title", "city"}


def test_short_description_and_bad_phone() -> None:
    errors = validate_submission(
        {**VALID_FIELDS, "description": "Too short.", "publisher_phone": "12345"}
    )
    assert errors["description"] == "Description must be at least 50 characters"
    assert errors["publisher_phone"] == "Please enter a valid 10-digit phone number"


def test_minimum_length_is_configurable() -> None:
    errors = validate_submission({**VALID_FIELDS, "description": "Short one."}, 5)
    assert "description" not in errors


def test_build_draft_keeps_text_and_drops_blank_image() -> None:
    draft = build_draft(VALID_FIELDS)
    assert draft.title == "Festival tonight"
    assert draft.publisher_phone == "9876543210"
    assert draft.image is None

    with_image = build_draft({**VALID_FIELDS, "image": "  photos/lanterns.jpg "})
    assert with_image.image == "photos/lanterns.jpg"
