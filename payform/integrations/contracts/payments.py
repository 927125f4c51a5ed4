"""
Payment contracts.

Defines the request/response structures exchanged with the payment service:
- the JSON body the form POSTs (`PaymentPayload`)
- the reply shape the service answers with (`PaymentResponse`)
- what the service itself accepts (`PaymentRequest`) and how it refuses
  (`ErrorResponse`, `ErrorCode`, `PaymentError`)
- the transport-neutral view of a received reply (`GatewayReply`)

These contracts are used by both:
- clients/real_http/payments.py (real HTTP calls)
- clients/mocks/payments.py and api/mock_payments.py (local stand-in service)
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

from payform.form.fields import CARD_NUMBER, FIRST_NAME, LAST_NAME, ZIP_CODE
from payform.form.normalizer import strip_card_number
from payform.form.validation import raise_if_errors, validate


class PaymentStatus(str, Enum):
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"


class PaymentPayload(BaseModel):
    """Wire body for `POST /v1/payments`. Card number is digits only."""

    model_config = ConfigDict(populate_by_name=True)

    first_name: str = Field(..., alias=FIRST_NAME, min_length=1)
    last_name: str = Field(..., alias=LAST_NAME, min_length=1)
    zip_code: str = Field(..., alias=ZIP_CODE, min_length=1)
    card_number: str = Field(..., alias=CARD_NUMBER, pattern=r"^\d+$")

    @classmethod
    def from_form(cls, form: Mapping[str, Any]) -> "PaymentPayload":
        """Build the payload from a form snapshot; refuses invalid forms."""
        errors, _ = validate(form)
        raise_if_errors(errors)
        return cls(
            first_name=str(form[FIRST_NAME]).strip(),
            last_name=str(form[LAST_NAME]).strip(),
            zip_code=str(form[ZIP_CODE]).strip(),
            card_number=strip_card_number(form[CARD_NUMBER]),
        )

    def to_wire(self) -> Dict[str, str]:
        return self.model_dump(by_alias=True)


class PaymentResponse(BaseModel):
    """Reply body of the payment service."""

    model_config = ConfigDict(populate_by_name=True)

    status: PaymentStatus
    transaction_id: Optional[str] = Field(default=None, alias="transactionId")
    error_message: Optional[str] = Field(default=None, alias="errorMessage")


# ---------------------------------------------------------------------------
# Service-side request rules and error replies
# ---------------------------------------------------------------------------

CARD_NUMBER_RE = re.compile(r"^\d{13,19}$")


def _require_text(value: Optional[str], label: str, max_length: int) -> str:
    if value is None or not value.strip():
        raise PydanticCustomError("blank", f"{label} cannot be blank")
    if len(value) > max_length:
        raise PydanticCustomError("too_long", f"{label} must not exceed {max_length} characters")
    return value


class PaymentRequest(BaseModel):
    """What the payment service accepts. Stricter than the form's own checks:
    a 7-12 digit card passes local validation but is rejected here."""

    model_config = ConfigDict(populate_by_name=True, validate_default=True)

    first_name: Optional[str] = Field(default=None, alias=FIRST_NAME)
    last_name: Optional[str] = Field(default=None, alias=LAST_NAME)
    zip_code: Optional[str] = Field(default=None, alias=ZIP_CODE)
    card_number: Optional[str] = Field(default=None, alias=CARD_NUMBER)

    @field_validator("first_name")
    @classmethod
    def _first_name(cls, v: Optional[str]) -> str:
        return _require_text(v, "First name", 50)

    @field_validator("last_name")
    @classmethod
    def _last_name(cls, v: Optional[str]) -> str:
        return _require_text(v, "Last name", 50)

    @field_validator("zip_code")
    @classmethod
    def _zip_code(cls, v: Optional[str]) -> str:
        return _require_text(v, "ZIP code", 20)

    @field_validator("card_number")
    @classmethod
    def _card_number(cls, v: Optional[str]) -> str:
        if v is None or not v.strip():
            raise PydanticCustomError("blank", "Card number cannot be blank")
        if not CARD_NUMBER_RE.match(v):
            raise PydanticCustomError("card_length", "Card number must be between 13 and 19 digits")
        return v


class ErrorCode(str, Enum):
    CARD_DECLINED = "CARD_DECLINED"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    REQUEST_BODY_MISSING = "REQUEST_BODY_MISSING"


ERROR_DETAILS: Dict[ErrorCode, Tuple[int, str]] = {
    ErrorCode.CARD_DECLINED: (422, "Payment declined by issuing bank"),
    ErrorCode.VALIDATION_ERROR: (400, "Validation failed"),
    ErrorCode.REQUEST_BODY_MISSING: (400, "Request body is missing or malformed"),
}


class ErrorResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    error_code: ErrorCode = Field(..., alias="errorCode")
    message: str
    path: str
    status: int
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    field_errors: Optional[Dict[str, str]] = Field(default=None, alias="fieldErrors")

    @classmethod
    def build(cls, code: ErrorCode, path: str, field_errors: Optional[Dict[str, str]] = None) -> "ErrorResponse":
        status, message = ERROR_DETAILS[code]
        return cls(error_code=code, message=message, path=path, status=status, field_errors=field_errors)


class PaymentError(Exception):
    """A payment the service refuses, carrying the reply's error code."""

    def __init__(self, error_code: ErrorCode) -> None:
        super().__init__(ERROR_DETAILS[error_code][1])
        self.error_code = error_code


@dataclass
class GatewayReply:
    """A response that was actually received from the service."""

    status: int
    ok: bool
    body: Any                            # dict/list for JSON replies, str otherwise
    content_type: str = ""
