"""
RabbitMQ producer adapter - Implements TaskPublisher protocol.

Each attempt opens its own connection and channel, declares the queue and
publishes one message. Transient failures are retried with a fixed delay;
once the budget is spent the failure is logged and reported in the
returned PublishOutcome. publish() never raises.
"""

import logging
import time
from collections.abc import Callable

import pika

from src.domain.models import DeliveryTask, PublishOutcome

from .codec import encode_task
from .retry import classify_failure, should_retry
from .topology import DEFAULT_QUEUE, declare_queue

logger = logging.getLogger(__name__)


class RabbitMQProducer:
    """
    Implements TaskPublisher protocol via pika.

    Uses structural subtyping - no explicit inheritance from Protocol.
    Holds no connection between calls, so concurrent publish() calls
    share no mutable state.
    """

    def __init__(
        self,
        parameters: pika.ConnectionParameters,
        queue: str = DEFAULT_QUEUE,
        max_attempts: int = 3,
        retry_delay_seconds: float = 1.0,
        connection_factory: Callable[[pika.ConnectionParameters], pika.BlockingConnection] = (
            pika.BlockingConnection
        ),
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """
        Initialize producer.

        Args:
            parameters: Broker connection parameters
            queue: Queue name (routing key on the default exchange)
            max_attempts: Total publish attempts, including the first
            retry_delay_seconds: Fixed wait between attempts
            connection_factory: Opens a blocking connection (swapped in tests)
            sleep: Wait function (swapped in tests)
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._parameters = parameters
        self._queue = queue
        self._max_attempts = max_attempts
        self._retry_delay_seconds = retry_delay_seconds
        self._connection_factory = connection_factory
        self._sleep = sleep

    def publish(self, task: DeliveryTask) -> PublishOutcome:
        """
        Publish task, retrying transient failures.

        Args:
            task: Delivery task to enqueue

        Returns:
            PublishOutcome with delivered=True on the first successful attempt
        """
        attempt = 0
        while True:
            attempt += 1
            try:
                self._publish_once(task)
            except Exception as e:
                kind = classify_failure(e)
                if not should_retry(kind, attempt, self._max_attempts):
                    logger.error(
                        "Publishing to %s failed after %d attempt(s) (%s): %s",
                        self._queue,
                        attempt,
                        kind.value,
                        e,
                    )
                    return PublishOutcome(delivered=False, attempts=attempt, error=str(e))
                logger.warning(
                    "Attempt %d failed: %s. Retrying in %.1fs...",
                    attempt,
                    e,
                    self._retry_delay_seconds,
                )
                self._sleep(self._retry_delay_seconds)
            else:
                return PublishOutcome(delivered=True, attempts=attempt)

    def _publish_once(self, task: DeliveryTask) -> None:
        body = encode_task(task)
        with self._connection_factory(self._parameters) as connection:
            channel = connection.channel()
            declare_queue(channel, self._queue)
            channel.basic_publish(exchange="", routing_key=self._queue, body=body)
