"""
payform - cardholder payment form controller.

Collects cardholder details, normalizes and validates them locally, POSTs
them to the payment service and reflects the request lifecycle back to the
user (inline field errors, response panel, transient notification).

Layout:
- form/          field names, normalization, validation, outcome types (no I/O)
- integrations/  wire contracts and the HTTP client for the payment service
- controller.py  the submission state machine
- session.py     the event/snapshot boundary used by the presentation layer
- api/           local mock payment service for development and tests
"""

from .config import FormSettings, load_settings
from .controller import SubmissionController
from .notifications import NotificationEmitter
from .session import FieldChanged, FormSession, ResetRequested, SubmitRequested

__all__ = [
    "FormSettings",
    "load_settings",
    "SubmissionController",
    "NotificationEmitter",
    "FieldChanged",
    "FormSession",
    "ResetRequested",
    "SubmitRequested",
]
