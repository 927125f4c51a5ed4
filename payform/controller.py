"""
Submission controller for the cardholder payment form.

Runs one submit attempt through its lifecycle:

    validate -> (invalid: stay Idle, publish field errors)
             -> Pending -> POST -> Succeeded | Failed | NetworkError -> notify

Pending is always left on every exit path. Only one attempt may be in flight
per controller; a submit issued while Pending is ignored. Failed submissions
are never retried automatically.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Mapping, Optional

from payform.config import FormSettings
from payform.error_handler import TransportErrorHandler
from payform.form.fields import initial_errors
from payform.form.outcomes import (
    Failed,
    Idle,
    NetworkError,
    OutcomeKind,
    Pending,
    Severity,
    SubmissionOutcome,
    Succeeded,
    is_terminal,
)
from payform.form.validation import validate
from payform.integrations.clients.real_http.payments import PaymentsClient
from payform.integrations.contracts.payments import GatewayReply, PaymentPayload
from payform.notifications import NotificationEmitter

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Payment submitted ✓"
UNREACHABLE_MESSAGE = "Could not reach API"


def failure_message(status: int) -> str:
    return f"Error {status}"


def classify_reply(reply: GatewayReply) -> SubmissionOutcome:
    """Map a received reply onto an outcome using the transport's success flag."""
    if reply.ok:
        return Succeeded(status=reply.status, body=reply.body)
    return Failed(status=reply.status, body=reply.body)


class SubmissionController:
    def __init__(
        self,
        settings: Optional[FormSettings] = None,
        client: Optional[PaymentsClient] = None,
        notifier: Optional[NotificationEmitter] = None,
        error_handler: Optional[TransportErrorHandler] = None,
    ) -> None:
        self.settings = settings or FormSettings()
        self.client = client or PaymentsClient(self.settings)
        self.notifier = notifier or NotificationEmitter(duration=self.settings.toast_seconds)
        self.error_handler = error_handler or TransportErrorHandler(self.settings.api_url)
        self.errors: Dict[str, str] = initial_errors()
        self.outcome: SubmissionOutcome = Idle()
        self.last_response: Optional[SubmissionOutcome] = None

    @property
    def is_pending(self) -> bool:
        return self.outcome.kind is OutcomeKind.PENDING

    def clear_error(self, field: str) -> None:
        self.errors[field] = ""

    def reset(self) -> None:
        if self.is_pending:
            raise RuntimeError("Cannot reset while a submission is pending")
        self.errors = initial_errors()
        self.outcome = Idle()
        self.last_response = None
        self.notifier.dismiss()

    @contextmanager
    def pending(self) -> Iterator[None]:
        """Hold the Pending state for the duration of the block.

        If the block exits without setting a terminal outcome (including by
        raising or being cancelled), the attempt is recorded as a NetworkError.
        """
        self.outcome = Pending()
        self.last_response = None
        try:
            yield
        finally:
            if not is_terminal(self.outcome):
                self.outcome = NetworkError(
                    message="Submission ended without a response",
                    hint=self.error_handler.hint(),
                )
            self.last_response = self.outcome

    async def submit(self, form: Mapping[str, Any]) -> SubmissionOutcome:
        if self.is_pending:
            logger.warning("Submit ignored: a payment submission is already pending")
            return self.outcome

        errors, is_valid = validate(form)
        self.errors = errors
        if not is_valid:
            logger.info("Submit blocked by validation: %s", sorted(k for k, v in errors.items() if v))
            # last_response is kept so the previous response panel stays visible
            self.outcome = Idle()
            return self.outcome

        with self.pending():
            self.outcome = await self._send(form)

        self._notify(self.outcome)
        return self.outcome

    async def _send(self, form: Mapping[str, Any]) -> SubmissionOutcome:
        try:
            payload = PaymentPayload.from_form(form)
            reply = await self.client.submit_payment(payload)
        except Exception as exc:
            return self.error_handler.handle_exception(exc, {"url": self.client.url})
        return classify_reply(reply)

    def _notify(self, outcome: SubmissionOutcome) -> None:
        if isinstance(outcome, Succeeded):
            self.notifier.notify(SUCCESS_MESSAGE, Severity.OK)
        elif isinstance(outcome, Failed):
            self.notifier.notify(failure_message(outcome.status), Severity.ERROR)
        elif isinstance(outcome, NetworkError):
            self.notifier.notify(UNREACHABLE_MESSAGE, Severity.ERROR)
