"""
Runtime configuration for the payment form.

Values come from environment variables (a local `.env` file is loaded first):
- PAYMENT_API_URL       base URL of the payment service (default http://localhost:8080)
- PAYMENT_API_PATH      endpoint path (default /v1/payments)
- PAYMENT_API_TIMEOUT   request timeout in seconds (default 20)
- PAYFORM_TOAST_SECONDS notification lifetime in seconds (default 3.5)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

DEFAULT_API_URL = "http://localhost:8080"
DEFAULT_API_PATH = "/v1/payments"
DEFAULT_TIMEOUT_SECONDS = 20.0
DEFAULT_TOAST_SECONDS = 3.5


@dataclass(frozen=True)
class FormSettings:
    api_url: str = DEFAULT_API_URL
    api_path: str = DEFAULT_API_PATH
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    toast_seconds: float = DEFAULT_TOAST_SECONDS

    @property
    def payment_url(self) -> str:
        path = self.api_path if self.api_path.startswith("/") else f"/{self.api_path}"
        return f"{self.api_url.rstrip('/')}{path}"


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number; got {raw!r}") from exc
    if value <= 0:
        raise ValueError(f"{name} must be > 0; got {value}")
    return value


def load_settings(env_file: Optional[str] = None) -> FormSettings:
    load_dotenv(env_file)
    return FormSettings(
        api_url=os.getenv("PAYMENT_API_URL", "").strip() or DEFAULT_API_URL,
        api_path=os.getenv("PAYMENT_API_PATH", "").strip() or DEFAULT_API_PATH,
        timeout_seconds=_env_float("PAYMENT_API_TIMEOUT", DEFAULT_TIMEOUT_SECONDS),
        toast_seconds=_env_float("PAYFORM_TOAST_SECONDS", DEFAULT_TOAST_SECONDS),
    )
