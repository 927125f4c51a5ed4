"""
Form session: the boundary the presentation layer talks to.

One FormSession owns one bundle of form values, field errors, submission
outcome and notification. The UI dispatches events into it (field changed,
submit requested, reset) and renders `snapshot()`.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel

from payform.config import FormSettings, load_settings
from payform.controller import SubmissionController
from payform.form.fields import check_field, initial_form
from payform.form.normalizer import normalize
from payform.form.outcomes import Notification, OutcomeKind, Severity, SubmissionOutcome

logger = logging.getLogger(__name__)

SUBMIT_LABEL = "Submit Payment"
PROCESSING_LABEL = "Processing…"


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FieldChanged:
    name: str
    value: Any


@dataclass(frozen=True)
class SubmitRequested:
    pass


@dataclass(frozen=True)
class ResetRequested:
    pass


FormEvent = Union[FieldChanged, SubmitRequested, ResetRequested]


# ---------------------------------------------------------------------------
# View models
# ---------------------------------------------------------------------------

class ResponsePanel(BaseModel):
    status_label: str
    ok: bool
    body_text: str


class NotificationView(BaseModel):
    message: str
    severity: Severity


class FormView(BaseModel):
    form: Dict[str, str]
    errors: Dict[str, str]
    outcome: OutcomeKind
    pending: bool
    submit_label: str
    submit_disabled: bool
    response: Optional[ResponsePanel] = None
    notification: Optional[NotificationView] = None


def render_body(body: Any) -> str:
    if isinstance(body, (dict, list)):
        return json.dumps(body, indent=2, ensure_ascii=False)
    return "" if body is None else str(body)


def build_response_panel(outcome: SubmissionOutcome) -> ResponsePanel:
    status = getattr(outcome, "status", None)
    return ResponsePanel(
        status_label=f"HTTP {status if status is not None else '—'}",
        ok=bool(getattr(outcome, "ok", False)),
        body_text=render_body(getattr(outcome, "body", None)),
    )


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------

class FormSession:
    def __init__(
        self,
        controller: Optional[SubmissionController] = None,
        settings: Optional[FormSettings] = None,
    ) -> None:
        if controller is None:
            controller = SubmissionController(settings or load_settings())
        self.controller = controller
        self.form: Dict[str, str] = initial_form()

    @property
    def errors(self) -> Dict[str, str]:
        return self.controller.errors

    @property
    def outcome(self) -> SubmissionOutcome:
        return self.controller.outcome

    @property
    def is_pending(self) -> bool:
        return self.controller.is_pending

    @property
    def notification(self) -> Optional[Notification]:
        return self.controller.notifier.current

    def field_changed(self, name: str, raw_value: Any) -> str:
        """Store the normalized value and clear that field's error."""
        check_field(name)
        value = normalize(name, raw_value)
        self.form[name] = value
        self.controller.clear_error(name)
        return value

    async def submit_requested(self) -> SubmissionOutcome:
        return await self.controller.submit(dict(self.form))

    def reset(self) -> None:
        self.controller.reset()
        self.form = initial_form()
        logger.debug("Form session reset")

    async def dispatch(self, event: FormEvent) -> Any:
        if isinstance(event, FieldChanged):
            return self.field_changed(event.name, event.value)
        if isinstance(event, SubmitRequested):
            return await self.submit_requested()
        if isinstance(event, ResetRequested):
            return self.reset()
        raise TypeError(f"Unsupported form event: {event!r}")

    def snapshot(self) -> FormView:
        pending = self.is_pending
        last = self.controller.last_response
        notification = self.notification
        return FormView(
            form=dict(self.form),
            errors=dict(self.errors),
            outcome=self.outcome.kind,
            pending=pending,
            submit_label=PROCESSING_LABEL if pending else SUBMIT_LABEL,
            submit_disabled=pending,
            response=build_response_panel(last) if last is not None else None,
            notification=(
                NotificationView(message=notification.message, severity=notification.severity)
                if notification is not None
                else None
            ),
        )
