"""
Publish retry policy.

Failures are classified once, then the retry decision is a pure function
of (failure kind, attempt number, attempt budget).
"""

from enum import Enum

import pika.exceptions


class FailureKind(str, Enum):
    """Whether another attempt might succeed."""

    TRANSIENT = "transient"
    PERMANENT = "permanent"


# Broker unreachable, connection dropped, channel closed, protocol errors
_TRANSIENT_ERRORS: tuple[type[BaseException], ...] = (
    pika.exceptions.AMQPError,
    OSError,
)


def classify_failure(error: BaseException) -> FailureKind:
    """Map a publish exception to a FailureKind."""
    if isinstance(error, _TRANSIENT_ERRORS):
        return FailureKind.TRANSIENT
    return FailureKind.PERMANENT


def should_retry(kind: FailureKind, attempt: int, max_attempts: int) -> bool:
    """
    Decide whether to make another attempt.

    Args:
        kind: Classification of the failure just observed
        attempt: 1-based number of the attempt that failed
        max_attempts: Total attempts allowed

    Returns:
        True if the failure is transient and the budget is not spent
    """
    return kind is FailureKind.TRANSIENT and attempt < max_attempts
