"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure. Adapters implement these protocols.
"""

from datetime import datetime
from enum import Enum
from typing import Protocol

from .models import DeliveryTask, PublishOutcome


class VerifyResult(Enum):
    """
    Result of a single verification attempt.

    Outcomes of the verify state machine:
    - NOT_FOUND: no pending record for the email (nothing mutated)
    - EXPIRED: record outlived its validity window (record deleted)
    - TOO_MANY_ATTEMPTS: attempt limit exceeded (record deleted)
    - INVALID_CODE: code mismatch (record kept, attempt counted)
    - SUCCESS: code consumed (record deleted)
    """

    SUCCESS = "success"
    INVALID_CODE = "invalid_code"
    EXPIRED = "expired"
    TOO_MANY_ATTEMPTS = "too_many_attempts"
    NOT_FOUND = "not_found"

    @property
    def success(self) -> bool:
        return self is VerifyResult.SUCCESS

    @property
    def message(self) -> str:
        """User-facing message for this outcome."""
        return _VERIFY_MESSAGES[self]


_VERIFY_MESSAGES = {
    VerifyResult.SUCCESS: "Email verified successfully!",
    VerifyResult.INVALID_CODE: "Invalid verification code.",
    VerifyResult.EXPIRED: "Verification code has expired.",
    VerifyResult.TOO_MANY_ATTEMPTS: "Too many failed attempts. Please request a new code.",
    VerifyResult.NOT_FOUND: "No verification code found for this email.",
}


class Clock(Protocol):
    """Port interface for the current time."""

    def now(self) -> datetime: ...


class CodeGenerator(Protocol):
    """Port interface for verification code generation."""

    def generate(self) -> str:
        """Return a fresh 4-digit numeric code as a string."""
        ...


class TaskPublisher(Protocol):
    """Port interface for handing a delivery task to the channel."""

    def publish(self, task: DeliveryTask) -> PublishOutcome:
        """
        Publish task to the delivery channel.

        Implementations must not raise on transport failure; the outcome
        reports whether the task was handed to the broker.
        """
        ...


class CodeSender(Protocol):
    """Port interface for the final delivery side effect."""

    def send(self, task: DeliveryTask) -> None:
        """
        Deliver the verification code to its destination.

        Args:
            task: Decoded delivery task
        """
        ...
