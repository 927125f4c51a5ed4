"""Local validation for the cardholder form.

The form is validated on every submit attempt, before anything is sent. The
result is a full error map (one entry per field, empty string when the field
is fine) so the presentation layer can show every problem at once.

Code that must not proceed with an invalid form calls `raise_if_errors`,
which raises `FormValidationError` with structured `field_errors`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Tuple

from payform.form.fields import CARD_NUMBER, FIRST_NAME, LAST_NAME, ZIP_CODE, initial_errors
from payform.form.normalizer import strip_card_number

REQUIRED = "Required"
CARD_TOO_SHORT = "Card number too short"
MIN_CARD_DIGITS = 7


@dataclass
class FormValidationError(Exception):
    """Exception raised for form validation failures.

    Attributes:
        field_errors: mapping of field name -> human-readable error message.
        message: optional top-level message.
    """

    field_errors: Dict[str, str]
    message: str = "Validation failed"

    def __str__(self) -> str:  # pragma: no cover
        return self.message


def _as_str(v: Any) -> str:
    return "" if v is None else str(v)


def _strip(v: Any) -> str:
    return _as_str(v).strip()


def add_error(errors: Dict[str, str], field: str, message: str) -> None:
    if not errors.get(field):
        errors[field] = message


def require_str(payload: Mapping[str, Any], field: str, errors: Dict[str, str]) -> str:
    value = _strip(payload.get(field))
    if not value:
        add_error(errors, field, REQUIRED)
    return value


def validate_card_number(value: Any, errors: Dict[str, str], field: str = CARD_NUMBER) -> str:
    raw = _strip(value)
    if not raw:
        add_error(errors, field, REQUIRED)
        return raw
    if len(strip_card_number(raw)) < MIN_CARD_DIGITS:
        add_error(errors, field, CARD_TOO_SHORT)
    return raw


def validate(form: Mapping[str, Any]) -> Tuple[Dict[str, str], bool]:
    """Return ``(errors, is_valid)`` for a form snapshot. Does not mutate ``form``."""
    errors = initial_errors()
    require_str(form, FIRST_NAME, errors)
    require_str(form, LAST_NAME, errors)
    require_str(form, ZIP_CODE, errors)
    validate_card_number(form.get(CARD_NUMBER), errors)
    return errors, not has_errors(errors)


def has_errors(errors: Mapping[str, str]) -> bool:
    return any(message for message in errors.values())


def raise_if_errors(errors: Mapping[str, str], message: str = "Please correct the highlighted fields") -> None:
    if has_errors(errors):
        raise FormValidationError(field_errors={k: v for k, v in errors.items() if v}, message=message)
