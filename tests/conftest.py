"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- A controllable clock
- A predictable code generator
- A credential store wired to both
"""

from collections.abc import Iterable
from datetime import datetime, timedelta
from itertools import cycle

import pytest

from src.domain.store import CredentialStore

START = datetime(2023, 4, 10, 18, 30, 0)


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, start: datetime = START) -> None:
        self._now = start

    def now(self) -> datetime:
        return self._now

    def advance(self, **kwargs: float) -> None:
        self._now += timedelta(**kwargs)


class StubCodeGenerator:
    """Returns codes from a fixed sequence, repeating when exhausted."""

    def __init__(self, codes: Iterable[str]) -> None:
        self._codes = cycle(list(codes))

    def generate(self) -> str:
        return next(self._codes)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def code_generator() -> StubCodeGenerator:
    return StubCodeGenerator(["4821", "1234", "5678"])


@pytest.fixture
def store(clock: FakeClock, code_generator: StubCodeGenerator) -> CredentialStore:
    return CredentialStore(clock=clock, code_generator=code_generator)
