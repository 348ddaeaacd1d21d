"""Phone number helpers used by the form and display layers."""

from __future__ import annotations

import re
from typing import Any

MASK = "****"

_NON_DIGITS = re.compile(r"\D")


def _digits(phone: str) -> str:
    return _NON_DIGITS.sub("", phone)


def mask_phone(phone: Any, tail: int = 2) -> Any:
    """Show the first three and last ``tail`` digits, e.g. 987****10.

    Anything that is not a non-empty string, or has fewer than five digits,
    is returned unchanged. ``tail`` is kept between one and the digits left
    after the first three.
    """

    if not phone or not isinstance(phone, str):
        return phone
    digits = _digits(phone)
    if len(digits) < 5:
        return phone
    tail = min(max(tail, 1), len(digits) - 3)
    return f"{digits[:3]}{MASK}{digits[-tail:]}"


def is_valid_phone(phone: str) -> bool:
    """Return True when the number has exactly ten digits."""

    if not phone:
        return False
    return len(_digits(phone)) == 10
