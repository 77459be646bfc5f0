"""
Domain value objects.

VerificationRecord is mutable and owned by the credential store;
everything else here is immutable.
"""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class VerificationRecord:
    """Pending verification for one email."""

    email: str
    code: str
    issued_at: datetime
    expires_at: datetime
    attempt_count: int = 0


@dataclass(frozen=True)
class DeliveryTask:
    """Unit of work carried across the channel from issuance to delivery."""

    email: str
    code: str
    issued_at: datetime


@dataclass(frozen=True)
class PublishOutcome:
    """Result of publishing a task, including retries."""

    delivered: bool
    attempts: int
    error: str | None = None


@dataclass(frozen=True)
class IssueResult:
    """Result of a code request."""

    success: bool
    message: str
    delivered: bool = False


@dataclass(frozen=True)
class VerificationStatus:
    """Snapshot of an email's verification state."""

    has_pending_verification: bool
    can_request_new_code: bool
