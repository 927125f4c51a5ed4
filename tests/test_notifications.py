import asyncio

import pytest

from payform.form.outcomes import Severity
from payform.notifications import NotificationEmitter


def test_notification_expires_after_duration(clock):
    emitter = NotificationEmitter(duration=3.5, clock=clock)
    emitter.notify("Payment submitted ✓", Severity.OK)

    clock.advance(3.49)
    assert emitter.current is not None
    assert emitter.current.message == "Payment submitted ✓"

    clock.advance(0.01)
    assert emitter.current is None


def test_new_notification_replaces_message_and_restarts_timer(clock):
    emitter = NotificationEmitter(duration=3.5, clock=clock)
    emitter.notify("first", Severity.OK)
    clock.advance(3.0)
    emitter.notify("second", Severity.ERROR)

    clock.advance(1.0)  # past the first deadline
    current = emitter.current
    assert current is not None
    assert current.message == "second"
    assert current.severity is Severity.ERROR

    clock.advance(2.5)
    assert emitter.current is None


def test_dismiss_clears_and_reports_change(clock):
    changes = []
    emitter = NotificationEmitter(duration=3.5, clock=clock, on_change=changes.append)
    emitter.notify("hello")
    emitter.dismiss()
    assert emitter.current is None
    assert [c.message if c else None for c in changes] == ["hello", None]


def test_expiry_on_read_notifies_listener(clock):
    changes = []
    emitter = NotificationEmitter(duration=1.0, clock=clock, on_change=changes.append)
    emitter.notify("hello")
    clock.advance(1.0)
    assert emitter.current is None
    assert changes[-1] is None


@pytest.mark.asyncio
async def test_running_loop_clears_notification_actively():
    changes = []
    emitter = NotificationEmitter(duration=0.01, on_change=changes.append)
    emitter.notify("short lived", Severity.ERROR)
    await asyncio.sleep(0.1)
    assert changes[-1] is None
    assert emitter.current is None


@pytest.mark.asyncio
async def test_replacing_cancels_the_pending_timer():
    changes = []
    emitter = NotificationEmitter(duration=0.05, on_change=changes.append)
    emitter.notify("first")
    emitter.notify("second")
    await asyncio.sleep(0.2)
    # one clear for "second" only; the cancelled timer for "first" never fires
    assert [c.message if c else None for c in changes] == ["first", "second", None]
