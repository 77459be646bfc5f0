"""
Verification domain service - issuance and validation orchestration.

Issuance: store.issue_if_allowed() -> DeliveryTask -> publisher.
Validation: store.verify() only; the delivery channel is not involved.
"""

import logging
from dataclasses import dataclass

from .models import DeliveryTask, IssueResult, VerificationStatus
from .ports import TaskPublisher, VerifyResult
from .store import CredentialStore

logger = logging.getLogger(__name__)

COOLDOWN_MESSAGE = "Please wait 1 minute before requesting a new code."
CODE_SENT_MESSAGE = "Verification code sent successfully."


@dataclass
class VerificationService:
    """
    Domain service for email verification.

    Orchestrates the code flow: email normalization, cooldown
    enforcement, code issuance and hand-off to the delivery channel.
    """

    store: CredentialStore
    publisher: TaskPublisher

    def request_code(self, email: str) -> IssueResult:
        """
        Issue a verification code and queue it for delivery.

        A failed publish does not fail the request. The outcome is logged
        and exposed as IssueResult.delivered.

        Args:
            email: User's email address (will be normalized)

        Returns:
            IssueResult; success is False only while the cooldown is active
        """
        normalized_email = self._normalize_email(email)

        record = self.store.issue_if_allowed(normalized_email)
        if record is None:
            return IssueResult(success=False, message=COOLDOWN_MESSAGE)

        task = DeliveryTask(email=record.email, code=record.code, issued_at=record.issued_at)
        outcome = self.publisher.publish(task)

        if outcome.delivered:
            logger.info("Verification code queued for %s", normalized_email)
        else:
            logger.error(
                "Verification code for %s was not queued after %d attempt(s): %s",
                normalized_email,
                outcome.attempts,
                outcome.error,
            )
        return IssueResult(success=True, message=CODE_SENT_MESSAGE, delivered=outcome.delivered)

    def verify(self, email: str, code: str) -> VerifyResult:
        """
        Validate a code for email.

        Args:
            email: User's email (will be normalized)
            code: 4-digit verification code

        Returns:
            VerifyResult indicating success or specific failure reason
        """
        normalized_email = self._normalize_email(email)
        result = self.store.verify(normalized_email, code)
        if result.success:
            logger.info("Email %s verified successfully", normalized_email)
        else:
            logger.warning("Failed verification attempt for %s: %s", normalized_email, result.message)
        return result

    def status(self, email: str) -> VerificationStatus:
        normalized_email = self._normalize_email(email)
        return VerificationStatus(
            has_pending_verification=self.store.has_pending_verification(normalized_email),
            can_request_new_code=self.store.can_request_new_code(normalized_email),
        )

    def _normalize_email(self, email: str) -> str:
        """
        Normalize email address for consistent storage and lookup.

        Applies: strip whitespace + lowercase
        """
        return email.strip().lower()
