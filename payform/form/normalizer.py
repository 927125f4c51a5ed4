"""Keystroke normalization applied to raw field input before it is stored."""

from __future__ import annotations

import re
from typing import Any

from payform.form.fields import CARD_NUMBER, check_field

CARD_MAX_DIGITS = 16
CARD_GROUP_SIZE = 4
CARD_SEPARATOR = " "

_NON_DIGIT_RE = re.compile(r"\D")


def strip_card_number(value: Any) -> str:
    """Remove every non-digit character (grouping spaces, dashes, ...)."""
    return _NON_DIGIT_RE.sub("", "" if value is None else str(value))


def group_card_number(value: Any) -> str:
    """Digits only, at most 16, with a space after every group of four.

    Idempotent: grouping an already grouped number returns it unchanged.
    """
    digits = strip_card_number(value)[:CARD_MAX_DIGITS]
    groups = [digits[i : i + CARD_GROUP_SIZE] for i in range(0, len(digits), CARD_GROUP_SIZE)]
    return CARD_SEPARATOR.join(groups)


def normalize(field_name: str, raw_value: Any) -> str:
    check_field(field_name)
    if field_name == CARD_NUMBER:
        return group_card_number(raw_value)
    return "" if raw_value is None else str(raw_value)


def mask_card_number(value: Any) -> str:
    """Log-safe card number: only the last four digits are kept."""
    digits = strip_card_number(value)
    if not digits:
        return ""
    return "*" * max(len(digits) - 4, 0) + digits[-4:]
