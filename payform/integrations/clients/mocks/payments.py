"""
Mock Payments replies.

Purpose:
- Stands in for the payment service during local development and tests
- Does NOT make any network calls
- Returns deterministic replies so the form's success and failure paths can
  both be exercised

Behavior:
- card numbers ending in DECLINED_SUFFIX are declined (PaymentError
  CARD_DECLINED, answered with HTTP 422 by the mock API)
- everything else is accepted (HTTP 200, SUCCESS) with a transaction id
  derived from the request, so repeated submissions are reproducible
"""

import hashlib
import logging

from payform.form.normalizer import mask_card_number
from payform.integrations.contracts.payments import (
    ErrorCode,
    PaymentError,
    PaymentRequest,
    PaymentResponse,
    PaymentStatus,
)

logger = logging.getLogger(__name__)

DECLINED_SUFFIX = "0000"


def process_mock_payment(request: PaymentRequest) -> PaymentResponse:
    if request.card_number.endswith(DECLINED_SUFFIX):
        logger.info("Mock declining card %s", mask_card_number(request.card_number))
        raise PaymentError(ErrorCode.CARD_DECLINED)

    digest = hashlib.sha256(
        "|".join([request.first_name, request.last_name, request.zip_code, request.card_number]).encode("utf-8")
    ).hexdigest()
    return PaymentResponse(
        status=PaymentStatus.SUCCESS,
        transaction_id=f"TXN-{digest[:12].upper()}",
    )
