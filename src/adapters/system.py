"""
System clock and random code generator - default Clock/CodeGenerator adapters.
"""

import random
import secrets
from datetime import datetime

CODE_MIN = 1000
CODE_MAX = 9999  # exclusive


class SystemClock:
    """Local wall-clock time, naive like the timestamps on the wire."""

    def now(self) -> datetime:
        return datetime.now()


class RandomCodeGenerator:
    """
    Draws codes uniformly from [1000, 9999).

    Defaults to the OS CSPRNG via secrets.SystemRandom. Pass a seeded
    random.Random for reproducible sequences.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng if rng is not None else secrets.SystemRandom()

    def generate(self) -> str:
        return str(self._rng.randrange(CODE_MIN, CODE_MAX))
