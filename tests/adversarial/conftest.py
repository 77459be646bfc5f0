"""
Shared fixtures for adversarial tests.

Provides a credential store with a real random code generator, so
attackers cannot rely on a predictable code sequence.
"""

import random

import pytest

from src.adapters.system import RandomCodeGenerator
from src.domain.store import CredentialStore

# Module-level marker for all adversarial tests
pytestmark = pytest.mark.adversarial


@pytest.fixture
def random_store(clock) -> CredentialStore:
    """Store with a seeded random generator and few lock stripes."""
    return CredentialStore(
        clock=clock,
        code_generator=RandomCodeGenerator(random.Random(1234)),
        lock_stripes=4,
    )
