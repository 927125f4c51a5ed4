"""
Transient status notifications ("toasts").

At most one notification is active. `notify` replaces the current one and
restarts its lifetime; once the lifetime has elapsed the notification is gone.

Expiry is tracked against an injectable monotonic clock, so reading `current`
is always correct even without an event loop. When a loop is running the
emitter also schedules an active clear so `on_change` listeners are told.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable, Optional

from payform.config import DEFAULT_TOAST_SECONDS
from payform.form.outcomes import Notification, Severity

logger = logging.getLogger(__name__)


class NotificationEmitter:
    def __init__(
        self,
        duration: float = DEFAULT_TOAST_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        on_change: Optional[Callable[[Optional[Notification]], None]] = None,
    ) -> None:
        self.duration = duration
        self._clock = clock
        self._on_change = on_change
        self._current: Optional[Notification] = None
        self._timer: Optional[asyncio.TimerHandle] = None

    @property
    def current(self) -> Optional[Notification]:
        if self._current is not None and self._clock() >= self._current.expires_at:
            self._cancel_timer()
            self._expire()
        return self._current

    def notify(self, message: str, severity: Severity = Severity.OK) -> Notification:
        self._cancel_timer()
        notification = Notification(
            message=message,
            severity=severity,
            expires_at=self._clock() + self.duration,
        )
        self._current = notification
        logger.debug("Notification (%s): %s", severity.value, message)
        self._schedule_clear()
        self._changed()
        return notification

    def dismiss(self) -> None:
        self._cancel_timer()
        if self._current is not None:
            self._current = None
            self._changed()

    def _schedule_clear(self) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return
        self._timer = loop.call_later(self.duration, self._expire)

    def _expire(self) -> None:
        self._timer = None
        if self._current is None:
            return
        self._current = None
        self._changed()

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _changed(self) -> None:
        if self._on_change is not None:
            self._on_change(self._current)
