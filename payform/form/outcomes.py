from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class OutcomeKind(str, Enum):
    IDLE = "IDLE"
    PENDING = "PENDING"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"
    NETWORK_ERROR = "NETWORK_ERROR"


class Severity(str, Enum):
    OK = "OK"
    ERROR = "ERROR"


# ---------------------------------------------------------------------------
# Submission outcomes
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Idle:
    kind: OutcomeKind = field(default=OutcomeKind.IDLE, init=False)


@dataclass(frozen=True)
class Pending:
    kind: OutcomeKind = field(default=OutcomeKind.PENDING, init=False)


@dataclass(frozen=True)
class Succeeded:
    status: int
    body: Any                            # parsed JSON or raw text
    ok: bool = field(default=True, init=False)
    kind: OutcomeKind = field(default=OutcomeKind.SUCCEEDED, init=False)


@dataclass(frozen=True)
class Failed:
    status: int
    body: Any
    ok: bool = field(default=False, init=False)
    kind: OutcomeKind = field(default=OutcomeKind.FAILED, init=False)


@dataclass(frozen=True)
class NetworkError:
    """No response was received (or its declared JSON body was unreadable)."""

    message: str
    hint: str = ""
    status: Optional[int] = field(default=None, init=False)
    ok: bool = field(default=False, init=False)
    kind: OutcomeKind = field(default=OutcomeKind.NETWORK_ERROR, init=False)

    @property
    def body(self) -> dict:
        return {"error": self.message, "hint": self.hint}


SubmissionOutcome = Union[Idle, Pending, Succeeded, Failed, NetworkError]

TERMINAL_KINDS = {OutcomeKind.SUCCEEDED, OutcomeKind.FAILED, OutcomeKind.NETWORK_ERROR}


def is_terminal(outcome: SubmissionOutcome) -> bool:
    """Return True if the outcome is the final classification of an attempt."""
    return outcome.kind in TERMINAL_KINDS


# ---------------------------------------------------------------------------
# Notifications
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Notification:
    message: str
    severity: Severity
    expires_at: float                    # emitter clock, seconds
