"""Pytest fixtures for the payment form tests."""

from typing import Callable, List

import httpx
import pytest

from payform.config import FormSettings
from payform.controller import SubmissionController
from payform.integrations.clients.real_http.payments import PaymentsClient
from payform.notifications import NotificationEmitter


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def settings():
    return FormSettings(api_url="http://payments.test", api_path="/v1/payments", timeout_seconds=5.0)


@pytest.fixture
def valid_form():
    return {
        "firstName": "  Jane ",
        "lastName": "Doe",
        "zipCode": " 2000",
        "cardNumber": "4111 1111 1111 1111",
    }


@pytest.fixture
def requests_seen() -> List[httpx.Request]:
    return []


@pytest.fixture
def make_controller(settings, clock, requests_seen):
    """Build a controller whose HTTP calls are answered by `handler`."""

    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> SubmissionController:
        def recording_handler(request: httpx.Request) -> httpx.Response:
            requests_seen.append(request)
            return handler(request)

        client = PaymentsClient(settings, transport=httpx.MockTransport(recording_handler))
        notifier = NotificationEmitter(duration=settings.toast_seconds, clock=clock)
        return SubmissionController(settings, client=client, notifier=notifier)

    return _make
