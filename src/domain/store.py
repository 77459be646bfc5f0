"""
Credential store - in-memory verification code lifecycle.

Verification Lifecycle
======================

Each email holds at most one VerificationRecord:

    issue()   -> record created (or replaced, attempt history discarded)
    verify()  -> NOT_FOUND          no record, nothing mutated
              -> EXPIRED            record deleted
              -> TOO_MANY_ATTEMPTS  record deleted (attempt count > max)
              -> INVALID_CODE       record kept, attempt counted
              -> SUCCESS            record deleted (single use)

Expired records are reaped lazily by verify(), or in bulk by
purge_expired(). Nothing runs in the background.

Concurrency: every operation on one email runs under that email's lock
stripe, so two verify calls never observe the same attempt count and a
verify racing an issue sees one whole record. Emails hashing to different
stripes never contend.
"""

import logging
import secrets
import threading
from dataclasses import replace
from datetime import timedelta

from .models import VerificationRecord
from .ports import Clock, CodeGenerator, VerifyResult

logger = logging.getLogger(__name__)

DEFAULT_TTL = timedelta(minutes=10)
DEFAULT_COOLDOWN = timedelta(minutes=1)
DEFAULT_MAX_ATTEMPTS = 3


class CredentialStore:
    """
    Owns the mapping from email to pending verification record.

    Instances are constructed explicitly and passed to their users;
    there is no module-level store.
    """

    def __init__(
        self,
        clock: Clock,
        code_generator: CodeGenerator,
        ttl: timedelta = DEFAULT_TTL,
        cooldown: timedelta = DEFAULT_COOLDOWN,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        lock_stripes: int = 64,
    ) -> None:
        if lock_stripes < 1:
            raise ValueError("lock_stripes must be at least 1")
        self._clock = clock
        self._code_generator = code_generator
        self._ttl = ttl
        self._cooldown = cooldown
        self._max_attempts = max_attempts
        self._records: dict[str, VerificationRecord] = {}
        self._locks = [threading.Lock() for _ in range(lock_stripes)]

    def _lock_for(self, email: str) -> threading.Lock:
        return self._locks[hash(email) % len(self._locks)]

    def issue(self, email: str) -> str:
        """
        Generate a code for email, replacing any pending record.

        Args:
            email: Email address, already normalized by the caller

        Returns:
            The new 4-digit code
        """
        with self._lock_for(email):
            record = self._new_record(email)
            self._records[email] = record
        return record.code

    def issue_if_allowed(self, email: str) -> VerificationRecord | None:
        """
        Issue a code only if the cooldown allows it.

        The cooldown check and the replacement happen under one lock, so
        concurrent requests for one email yield at most one new record.

        Args:
            email: Email address, already normalized by the caller

        Returns:
            Snapshot of the new record, or None while the cooldown is active
        """
        with self._lock_for(email):
            if not self._cooldown_elapsed(email):
                return None
            record = self._new_record(email)
            self._records[email] = record
            return replace(record)

    def can_request_new_code(self, email: str) -> bool:
        """True if email has no record or its cooldown has elapsed."""
        with self._lock_for(email):
            return self._cooldown_elapsed(email)

    def _cooldown_elapsed(self, email: str) -> bool:
        # Caller holds the email's lock
        record = self._records.get(email)
        if record is None:
            return True
        return self._clock.now() >= record.issued_at + self._cooldown

    def _new_record(self, email: str) -> VerificationRecord:
        now = self._clock.now()
        return VerificationRecord(
            email=email,
            code=self._code_generator.generate(),
            issued_at=now,
            expires_at=now + self._ttl,
        )

    def has_pending_verification(self, email: str) -> bool:
        """True if email has a record that has not expired."""
        with self._lock_for(email):
            record = self._records.get(email)
            if record is None:
                return False
            return self._clock.now() <= record.expires_at

    def verify(self, email: str, code: str) -> VerifyResult:
        """
        Check code against the pending record for email.

        The attempt counter is incremented before the comparison, so the
        call after the last allowed attempt fails with TOO_MANY_ATTEMPTS
        even when it presents the right code.

        Args:
            email: Email address, already normalized by the caller
            code: Code presented by the user

        Returns:
            VerifyResult for this attempt
        """
        with self._lock_for(email):
            record = self._records.get(email)
            if record is None:
                return VerifyResult.NOT_FOUND

            if self._clock.now() > record.expires_at:
                del self._records[email]
                return VerifyResult.EXPIRED

            record.attempt_count += 1

            if record.attempt_count > self._max_attempts:
                del self._records[email]
                logger.warning("Attempt limit exceeded for %s, code revoked", email)
                return VerifyResult.TOO_MANY_ATTEMPTS

            if not secrets.compare_digest(record.code.encode(), code.encode()):
                return VerifyResult.INVALID_CODE

            del self._records[email]
            return VerifyResult.SUCCESS

    def purge_expired(self) -> int:
        """
        Delete every expired record.

        Returns:
            Number of records removed
        """
        removed = 0
        for email in list(self._records.copy()):
            with self._lock_for(email):
                record = self._records.get(email)
                if record is not None and self._clock.now() > record.expires_at:
                    del self._records[email]
                    removed += 1
        if removed:
            logger.info("Purged %d expired verification record(s)", removed)
        return removed

    def __len__(self) -> int:
        return len(self._records)
