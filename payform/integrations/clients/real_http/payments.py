"""
Payments HTTP Client.

Posts the cardholder payload to the configured payment service and hands the
reply back untouched apart from body decoding. HTTP error statuses are NOT
raised: classifying them is the controller's job. Anything that prevents a
usable reply is raised as `TransportError`.
"""

from __future__ import annotations

import json
import logging
from typing import Dict, Optional

import httpx

from payform.config import FormSettings
from payform.error_handler import TransportError
from payform.form.normalizer import mask_card_number
from payform.integrations.contracts.payments import GatewayReply, PaymentPayload

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"


class PaymentsClient:
    def __init__(
        self,
        settings: Optional[FormSettings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.settings = settings or FormSettings()
        self.url = self.settings.payment_url
        self.timeout_seconds = self.settings.timeout_seconds
        self._transport = transport

    async def submit_payment(self, payload: PaymentPayload) -> GatewayReply:
        headers: Dict[str, str] = {"Content-Type": JSON_CONTENT_TYPE}
        body = json.dumps(payload.to_wire())

        logger.info(
            "Submitting payment to %s (card=%s)", self.url, mask_card_number(payload.card_number)
        )
        try:
            async with httpx.AsyncClient(timeout=self.timeout_seconds, transport=self._transport) as client:
                response = await client.post(self.url, content=body, headers=headers)
        except httpx.RequestError as e:
            logger.error("Request error connecting to payment service: %s", e)
            raise TransportError(str(e) or e.__class__.__name__, url=self.url, cause=e) from e

        reply = decode_reply(response, url=self.url)
        logger.info(
            "Received payment response: status=%s ok=%s content_type=%s",
            reply.status,
            reply.ok,
            reply.content_type or "-",
        )
        return reply


def decode_reply(response: httpx.Response, url: str = "") -> GatewayReply:
    """JSON-decode the body when the service declares it as JSON, else keep text."""
    content_type = response.headers.get("content-type", "")
    if JSON_CONTENT_TYPE in content_type.lower():
        try:
            body = response.json()
        except ValueError as e:
            logger.error("Payment service declared JSON but sent a malformed body (status=%s)", response.status_code)
            raise TransportError(
                f"Malformed JSON response body (HTTP {response.status_code}): {e}",
                url=url,
                cause=e,
            ) from e
    else:
        body = response.text
    return GatewayReply(
        status=response.status_code,
        ok=response.is_success,
        body=body,
        content_type=content_type,
    )
