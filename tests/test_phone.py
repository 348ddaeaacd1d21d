from __future__ import annotations

import pytest

from core.phone import is_valid_phone, mask_phone


@pytest.mark.parametrize(
    ("phone", "expected"),
    [
        ("9876543210", "987****10"),
        ("98765 43210", "987****10"),
        ("+91 98765-43210", "919****10"),
        ("12345", "123****45"),
    ],
)
def test_mask_phone(phone, expected) -> None:
    assert mask_phone(phone) == expected


def test_mask_phone_custom_tail() -> None:
    assert mask_phone("9876543210", tail=3) == "987****210"


@pytest.mark.parametrize("phone", ["", None, "1234", "ab-12", 9876543210])
def test_mask_phone_returns_short_or_invalid_input_unchanged(phone) -> None:
    assert mask_phone(phone) == phone


@pytest.mark.parametrize(
    ("phone", "valid"),
    [
        ("9876543210", True),
        ("(987) 654-3210", True),
        ("987654321", False),
        ("98765432101", False),
        ("", False),
    ],
)
def test_is_valid_phone(phone, valid) -> None:
    assert is_valid_phone(phone) is valid


@pytest.mark.parametrize(("tail", "expected"), [(0, "987****0"), (-3, "987****0"), (20, "987****6543210")])
def test_mask_phone_clamps_tail(tail, expected) -> None:
    assert mask_phone("9876543210", tail=tail) == expected
