"""
Unit tests for VerificationService domain logic.

Tests domain logic with a mocked publisher to verify:
- Email normalization
- Cooldown enforcement
- Delivery task construction and hand-off
- Publish failures not failing the request
- Status reporting
"""

import logging
from datetime import datetime, timedelta
from unittest.mock import Mock

import pytest

from src.domain.models import DeliveryTask, PublishOutcome
from src.domain.ports import VerifyResult
from src.domain.store import CredentialStore
from src.domain.verification import (
    CODE_SENT_MESSAGE,
    COOLDOWN_MESSAGE,
    VerificationService,
)


@pytest.fixture
def publisher() -> Mock:
    publisher = Mock()
    publisher.publish.return_value = PublishOutcome(delivered=True, attempts=1)
    return publisher


@pytest.fixture
def service(store: CredentialStore, publisher: Mock) -> VerificationService:
    return VerificationService(store=store, publisher=publisher)


class TestRequestCode:
    """Tests for request_code()."""

    def test_request_publishes_delivery_task(
        self, service: VerificationService, publisher: Mock, clock
    ) -> None:
        """Issuance emits exactly one task carrying email, code and time."""
        result = service.request_code("a@b.com")

        assert result.success is True
        assert result.message == CODE_SENT_MESSAGE
        assert result.delivered is True
        publisher.publish.assert_called_once_with(
            DeliveryTask(email="a@b.com", code="4821", issued_at=clock.now())
        )

    def test_email_normalized(self, service: VerificationService, publisher: Mock) -> None:
        service.request_code("  A@B.COM  ")

        task = publisher.publish.call_args[0][0]
        assert task.email == "a@b.com"

    def test_task_carries_stored_issue_time(self, publisher: Mock, code_generator) -> None:
        """The published timestamp is the record's, even on a clock that never repeats."""
        issued_at = datetime(2023, 4, 10, 18, 30, 0)
        ticks = iter(issued_at + timedelta(milliseconds=i) for i in range(100))
        clock = Mock()
        clock.now.side_effect = lambda: next(ticks)
        store = CredentialStore(clock=clock, code_generator=code_generator)
        service = VerificationService(store=store, publisher=publisher)

        service.request_code("a@b.com")

        task = publisher.publish.call_args[0][0]
        assert task.issued_at == issued_at
        assert task.code == "4821"

    def test_cooldown_rejects_second_request(
        self, service: VerificationService, publisher: Mock
    ) -> None:
        service.request_code("a@b.com")
        result = service.request_code("a@b.com")

        assert result.success is False
        assert result.message == COOLDOWN_MESSAGE
        assert publisher.publish.call_count == 1

    def test_cooldown_applies_across_email_case(self, service: VerificationService) -> None:
        service.request_code("a@b.com")
        assert service.request_code("A@B.com").success is False

    def test_request_allowed_after_cooldown(
        self, service: VerificationService, publisher: Mock, clock
    ) -> None:
        service.request_code("a@b.com")
        clock.advance(minutes=1)

        assert service.request_code("a@b.com").success is True
        assert publisher.publish.call_count == 2

    def test_publish_failure_still_reports_success(
        self,
        service: VerificationService,
        publisher: Mock,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Dropped delivery is logged and flagged, not surfaced as failure."""
        publisher.publish.return_value = PublishOutcome(
            delivered=False, attempts=3, error="Connection refused"
        )

        with caplog.at_level(logging.ERROR):
            result = service.request_code("a@b.com")

        assert result.success is True
        assert result.delivered is False
        assert "not queued after 3 attempt(s)" in caplog.text

    def test_code_remains_verifiable_after_publish_failure(
        self, service: VerificationService, publisher: Mock
    ) -> None:
        publisher.publish.return_value = PublishOutcome(delivered=False, attempts=3, error="x")
        service.request_code("a@b.com")

        assert service.verify("a@b.com", "4821") == VerifyResult.SUCCESS


class TestVerify:
    """Tests for verify()."""

    def test_verify_issued_code(self, service: VerificationService) -> None:
        service.request_code("a@b.com")
        result = service.verify("a@b.com", "4821")

        assert result == VerifyResult.SUCCESS
        assert result.success is True
        assert result.message == "Email verified successfully!"

    def test_verify_normalizes_email(self, service: VerificationService) -> None:
        service.request_code("a@b.com")
        assert service.verify(" A@B.COM ", "4821") == VerifyResult.SUCCESS

    def test_verify_unknown_email(self, service: VerificationService) -> None:
        result = service.verify("nobody@b.com", "4821")

        assert result == VerifyResult.NOT_FOUND
        assert result.success is False
        assert result.message == "No verification code found for this email."

    def test_failed_verify_logged(
        self, service: VerificationService, caplog: pytest.LogCaptureFixture
    ) -> None:
        service.request_code("a@b.com")
        with caplog.at_level(logging.WARNING):
            service.verify("a@b.com", "0000")

        assert "Invalid verification code." in caplog.text


class TestStatus:
    """Tests for status()."""

    def test_status_without_record(self, service: VerificationService) -> None:
        status = service.status("a@b.com")
        assert status.has_pending_verification is False
        assert status.can_request_new_code is True

    def test_status_after_request(self, service: VerificationService) -> None:
        service.request_code("a@b.com")
        status = service.status("A@b.com")
        assert status.has_pending_verification is True
        assert status.can_request_new_code is False

    def test_status_after_expiry(self, service: VerificationService, clock) -> None:
        service.request_code("a@b.com")
        clock.advance(minutes=11)
        status = service.status("a@b.com")
        assert status.has_pending_verification is False
        assert status.can_request_new_code is True
