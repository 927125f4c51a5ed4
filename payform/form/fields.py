"""
Cardholder form fields.

The form has a fixed set of named input slots. Both the form values and the
inline error messages are plain dictionaries keyed by these names, so the
presentation layer can bind them directly.
"""

from typing import Dict, Tuple

FIRST_NAME = "firstName"
LAST_NAME = "lastName"
ZIP_CODE = "zipCode"
CARD_NUMBER = "cardNumber"

FIELDS: Tuple[str, ...] = (FIRST_NAME, LAST_NAME, ZIP_CODE, CARD_NUMBER)

LABELS: Dict[str, str] = {
    FIRST_NAME: "First Name",
    LAST_NAME: "Last Name",
    ZIP_CODE: "ZIP Code",
    CARD_NUMBER: "Card Number",
}


class UnknownFieldError(KeyError):
    """Raised when an event names a field the form does not have."""


def check_field(name: str) -> str:
    if name not in FIELDS:
        raise UnknownFieldError(name)
    return name


def initial_form() -> Dict[str, str]:
    return {name: "" for name in FIELDS}


def initial_errors() -> Dict[str, str]:
    return {name: "" for name in FIELDS}
