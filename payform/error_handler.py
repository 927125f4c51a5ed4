"""Error handling helpers for the payment submission step."""
from typing import Any, Dict, Optional
import logging

from payform.form.outcomes import NetworkError

logger = logging.getLogger(__name__)

UNREACHABLE_HINT = "Is the local payment service running and reachable?"


class TransportError(Exception):
    """No usable response came back: connection failure, timeout, aborted
    request, or a body declared as JSON that could not be parsed."""

    def __init__(self, message: str, *, url: str = "", cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.url = url
        self.cause = cause


class TransportErrorHandler:
    def __init__(self, service_url: str = "") -> None:
        self.service_url = service_url

    def hint(self) -> str:
        if self.service_url:
            return f"Is the local payment service running at {self.service_url}?"
        return UNREACHABLE_HINT

    def handle_exception(self, exc: Exception, context: Dict[str, Any] = None) -> NetworkError:
        logger.error("Payment request failed: %s (context=%s)", exc, context or {}, exc_info=True)
        detail = str(exc) or exc.__class__.__name__
        hint = self.hint()
        return NetworkError(
            message=f"Payment request failed: {detail}. {hint}",
            hint=hint,
        )
