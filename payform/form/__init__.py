"""
Form layer: field names, keystroke normalization, validation and the
outcome/notification value types shared with the controller.

Nothing in this package performs I/O.
"""

from .fields import CARD_NUMBER, FIELDS, FIRST_NAME, LAST_NAME, ZIP_CODE, UnknownFieldError, initial_errors, initial_form
from .normalizer import normalize, strip_card_number
from .outcomes import (
    Failed,
    Idle,
    NetworkError,
    Notification,
    OutcomeKind,
    Pending,
    Severity,
    SubmissionOutcome,
    Succeeded,
)
from .validation import FormValidationError, validate

__all__ = [
    "CARD_NUMBER",
    "FIELDS",
    "FIRST_NAME",
    "LAST_NAME",
    "ZIP_CODE",
    "UnknownFieldError",
    "initial_errors",
    "initial_form",
    "normalize",
    "strip_card_number",
    "Failed",
    "Idle",
    "NetworkError",
    "Notification",
    "OutcomeKind",
    "Pending",
    "Severity",
    "SubmissionOutcome",
    "Succeeded",
    "FormValidationError",
    "validate",
]
