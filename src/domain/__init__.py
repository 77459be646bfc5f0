"""
Domain layer - Pure business logic with zero framework imports.

This package contains the verification code lifecycle: the in-memory
credential store, the verification service that orchestrates issuance,
and the port interfaces the adapters implement.
"""

from .exceptions import ChannelError, MailcodeError, MalformedTaskError
from .models import (
    DeliveryTask,
    IssueResult,
    PublishOutcome,
    VerificationRecord,
    VerificationStatus,
)
from .ports import Clock, CodeGenerator, CodeSender, TaskPublisher, VerifyResult
from .store import CredentialStore
from .verification import VerificationService

__all__ = [
    "ChannelError",
    "Clock",
    "CodeGenerator",
    "CodeSender",
    "CredentialStore",
    "DeliveryTask",
    "IssueResult",
    "MailcodeError",
    "MalformedTaskError",
    "PublishOutcome",
    "TaskPublisher",
    "VerificationRecord",
    "VerificationService",
    "VerificationStatus",
    "VerifyResult",
]
