import asyncio
import json

import httpx
import pytest

from payform.controller import SubmissionController, classify_reply
from payform.form.fields import initial_form
from payform.form.outcomes import Failed, Idle, NetworkError, OutcomeKind, Severity, Succeeded
from payform.integrations.contracts.payments import GatewayReply


@pytest.mark.asyncio
async def test_empty_form_never_reaches_the_network(make_controller, requests_seen):
    controller = make_controller(lambda request: httpx.Response(200, json={}))

    outcome = await controller.submit(initial_form())

    assert isinstance(outcome, Idle)
    assert requests_seen == []
    assert controller.errors == {
        "firstName": "Required",
        "lastName": "Required",
        "zipCode": "Required",
        "cardNumber": "Required",
    }
    assert controller.notifier.current is None
    assert controller.last_response is None


@pytest.mark.asyncio
async def test_short_card_number_blocks_submission(make_controller, requests_seen, valid_form):
    controller = make_controller(lambda request: httpx.Response(200, json={}))
    valid_form["cardNumber"] = "123 456"

    outcome = await controller.submit(valid_form)

    assert outcome.kind is OutcomeKind.IDLE
    assert controller.errors["cardNumber"] == "Card number too short"
    assert requests_seen == []


@pytest.mark.asyncio
async def test_success_reply_yields_succeeded_and_ok_notification(make_controller, valid_form):
    pending_during_call = []
    holder = {}

    def handler(request: httpx.Request) -> httpx.Response:
        pending_during_call.append(holder["controller"].is_pending)
        return httpx.Response(200, json={"id": "abc"})

    controller = make_controller(handler)
    holder["controller"] = controller

    outcome = await controller.submit(valid_form)

    assert outcome == Succeeded(status=200, body={"id": "abc"})
    assert pending_during_call == [True]
    assert controller.is_pending is False
    assert controller.last_response == outcome
    assert controller.errors == {"firstName": "", "lastName": "", "zipCode": "", "cardNumber": ""}

    notification = controller.notifier.current
    assert notification.severity is Severity.OK
    assert notification.message == "Payment submitted ✓"


@pytest.mark.asyncio
async def test_payload_is_trimmed_and_card_digits_only(make_controller, requests_seen, valid_form):
    controller = make_controller(lambda request: httpx.Response(200, json={"id": "abc"}))
    valid_form["cardNumber"] = "4111-1111 1111"

    await controller.submit(valid_form)

    body = json.loads(requests_seen[0].content)
    assert body == {"firstName": "Jane", "lastName": "Doe", "zipCode": "2000", "cardNumber": "411111111111"}
    assert requests_seen[0].headers["content-type"] == "application/json"


@pytest.mark.asyncio
async def test_error_status_yields_failed_with_status_notification(make_controller, valid_form):
    controller = make_controller(lambda request: httpx.Response(400, json={"errorMessage": "Card number invalid"}))

    outcome = await controller.submit(valid_form)

    assert isinstance(outcome, Failed)
    assert outcome.status == 400
    assert outcome.ok is False
    assert outcome.body == {"errorMessage": "Card number invalid"}
    assert controller.notifier.current.message == "Error 400"
    assert controller.notifier.current.severity is Severity.ERROR


@pytest.mark.asyncio
async def test_text_error_body_is_kept_as_text(make_controller, valid_form):
    controller = make_controller(lambda request: httpx.Response(500, text="Internal Server Error"))

    outcome = await controller.submit(valid_form)

    assert outcome == Failed(status=500, body="Internal Server Error")


@pytest.mark.asyncio
async def test_connection_refused_yields_network_error(make_controller, valid_form):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    controller = make_controller(handler)

    outcome = await controller.submit(valid_form)

    assert isinstance(outcome, NetworkError)
    assert outcome.status is None
    assert "Connection refused" in outcome.message
    assert "payment service running" in outcome.message
    assert controller.is_pending is False
    assert controller.notifier.current.message == "Could not reach API"
    assert controller.notifier.current.severity is Severity.ERROR


@pytest.mark.asyncio
async def test_timeout_yields_network_error(make_controller, valid_form):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    controller = make_controller(handler)

    outcome = await controller.submit(valid_form)

    assert outcome.kind is OutcomeKind.NETWORK_ERROR


@pytest.mark.asyncio
async def test_malformed_json_yields_network_error(make_controller, valid_form):
    controller = make_controller(
        lambda request: httpx.Response(200, headers={"content-type": "application/json"}, content=b"<html>")
    )

    outcome = await controller.submit(valid_form)

    assert isinstance(outcome, NetworkError)
    assert "Malformed JSON" in outcome.message
    assert controller.is_pending is False


@pytest.mark.asyncio
async def test_unexpected_exception_in_network_step_is_contained(settings, valid_form):
    class ExplodingClient:
        url = "http://payments.test/v1/payments"

        async def submit_payment(self, payload):
            raise RuntimeError("boom")

    controller = SubmissionController(settings, client=ExplodingClient())

    outcome = await controller.submit(valid_form)

    assert isinstance(outcome, NetworkError)
    assert "boom" in outcome.message
    assert controller.is_pending is False


@pytest.mark.asyncio
async def test_submit_while_pending_is_ignored(settings, valid_form):
    release = asyncio.Event()
    calls = []

    class SlowClient:
        url = "http://payments.test/v1/payments"

        async def submit_payment(self, payload):
            calls.append(payload)
            await release.wait()
            return GatewayReply(status=200, ok=True, body={"id": "abc"})

    controller = SubmissionController(settings, client=SlowClient())

    first = asyncio.create_task(controller.submit(valid_form))
    await asyncio.sleep(0)
    assert controller.is_pending

    second = await controller.submit(valid_form)
    assert second.kind is OutcomeKind.PENDING

    release.set()
    outcome = await first
    assert outcome.kind is OutcomeKind.SUCCEEDED
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_new_attempt_clears_previous_response(make_controller, valid_form):
    replies = iter([httpx.Response(400, text="nope"), httpx.Response(200, json={"id": "abc"})])
    controller = make_controller(lambda request: next(replies))

    await controller.submit(valid_form)
    assert controller.last_response.kind is OutcomeKind.FAILED

    await controller.submit(valid_form)
    assert controller.last_response.kind is OutcomeKind.SUCCEEDED


@pytest.mark.asyncio
async def test_failed_submission_is_not_retried(make_controller, requests_seen, valid_form):
    controller = make_controller(lambda request: httpx.Response(503, text="down"))

    await controller.submit(valid_form)

    assert len(requests_seen) == 1


@pytest.mark.asyncio
async def test_invalid_resubmit_after_success_returns_idle(make_controller, requests_seen, valid_form):
    controller = make_controller(lambda request: httpx.Response(200, json={"id": "abc"}))
    first = await controller.submit(valid_form)
    assert first.kind is OutcomeKind.SUCCEEDED

    valid_form["cardNumber"] = ""
    second = await controller.submit(valid_form)

    assert isinstance(second, Idle)
    assert controller.outcome.kind is OutcomeKind.IDLE
    assert len(requests_seen) == 1
    assert controller.errors["cardNumber"] == "Required"
    # the previous response panel stays on screen
    assert controller.last_response == first


def test_pending_context_always_leaves_pending(settings):
    controller = SubmissionController(settings)
    with pytest.raises(RuntimeError):
        with controller.pending():
            assert controller.is_pending
            raise RuntimeError("interrupted")
    assert controller.is_pending is False
    assert controller.outcome.kind is OutcomeKind.NETWORK_ERROR


def test_classify_reply_uses_transport_success_flag():
    assert classify_reply(GatewayReply(status=204, ok=True, body="")).kind is OutcomeKind.SUCCEEDED
    assert classify_reply(GatewayReply(status=302, ok=False, body="")).kind is OutcomeKind.FAILED


@pytest.mark.asyncio
async def test_reset_restores_idle_state(make_controller, valid_form):
    controller = make_controller(lambda request: httpx.Response(200, json={"id": "abc"}))
    await controller.submit(valid_form)

    controller.reset()

    assert isinstance(controller.outcome, Idle)
    assert controller.last_response is None
    assert controller.notifier.current is None
