"""
Console code sender adapter - Implements CodeSender protocol.

This module provides a console-based implementation of the domain's
code sender port, writing verification codes to stdout for demo purposes.
"""

import logging
import sys
import threading
from typing import TextIO

from src.domain.models import DeliveryTask

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y.%m.%d %H:%M"


def format_delivery_line(task: DeliveryTask) -> str:
    """Render task as '<yyyy.MM.dd HH:mm> <email> Code: <code>'."""
    return f"{task.issued_at.strftime(TIMESTAMP_FORMAT)} {task.email} Code: {task.code}"


class ConsoleCodeSender:
    """
    Implements CodeSender protocol via a text stream.

    Uses structural subtyping - no explicit inheritance from Protocol.
    For demo/development purposes - prints one line per code to stdout.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream if stream is not None else sys.stdout
        self._write_lock = threading.Lock()

    def send(self, task: DeliveryTask) -> None:
        """
        Write the verification code line (simulates email delivery).

        In production, this would be replaced with an SMTP adapter.

        Args:
            task: Decoded delivery task
        """
        line = format_delivery_line(task)
        with self._write_lock:
            self._stream.write(line + "\n")
            self._stream.flush()
        logger.debug("[VERIFICATION] Delivered code to %s", task.email)
