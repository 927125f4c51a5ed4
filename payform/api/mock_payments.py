"""
Local stand-in for the payment service, for development and tests.
Do not deploy.

Run (needs the `serve` extra):
    uvicorn payform.api.mock_payments:app --port 8080

Refusals use the service's error body:
    {"errorCode", "message", "path", "status", "timestamp", "fieldErrors"?}
- malformed or missing body -> 400 REQUEST_BODY_MISSING
- field rule broken         -> 400 VALIDATION_ERROR with fieldErrors
- declined card             -> 422 CARD_DECLINED
"""

import logging
from typing import Dict, Optional

from fastapi import APIRouter, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from payform.integrations.clients.mocks.payments import process_mock_payment
from payform.integrations.contracts.payments import ErrorCode, ErrorResponse, PaymentError, PaymentRequest

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

router = APIRouter(tags=["Mock Payments"])


def error_reply(code: ErrorCode, path: str, field_errors: Optional[Dict[str, str]] = None) -> JSONResponse:
    error = ErrorResponse.build(code, path, field_errors)
    return JSONResponse(
        status_code=error.status,
        content=error.model_dump(by_alias=True, mode="json", exclude_none=True),
    )


def collect_field_errors(exc: RequestValidationError) -> Optional[Dict[str, str]]:
    """First message per body field, or None when the body itself is unusable."""
    field_errors: Dict[str, str] = {}
    for err in exc.errors():
        loc = err.get("loc", ())
        if err.get("type") == "json_invalid" or len(loc) < 2:
            return None
        field_errors.setdefault(str(loc[-1]), err.get("msg", "Invalid value"))
    return field_errors


@router.post("/v1/payments")
async def create_payment(payment: PaymentRequest):
    """
    Accept a payment submission.

    Example payload:
    {
        "firstName": "Jane",
        "lastName": "Doe",
        "zipCode": "2000",
        "cardNumber": "4111111111111111"
    }
    """
    reply = process_mock_payment(payment)
    return JSONResponse(status_code=200, content=reply.model_dump(by_alias=True, mode="json", exclude_none=True))


@router.get("/health")
async def health():
    return {"status": "ok"}


app = FastAPI(
    title="Mock Payment Service",
    description="Deterministic stand-in for the payment service used by the payment form",
    version="1.0.0",
)
app.include_router(router)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    field_errors = collect_field_errors(exc)
    if field_errors is None:
        logger.warning("Rejected unreadable payment body on %s", request.url.path)
        return error_reply(ErrorCode.REQUEST_BODY_MISSING, request.url.path)
    logger.warning("Rejected payment on %s: %s", request.url.path, sorted(field_errors))
    return error_reply(ErrorCode.VALIDATION_ERROR, request.url.path, field_errors)


@app.exception_handler(PaymentError)
async def payment_exception_handler(request: Request, exc: PaymentError):
    logger.info("Payment refused on %s: %s", request.url.path, exc.error_code.value)
    return error_reply(exc.error_code, request.url.path)
