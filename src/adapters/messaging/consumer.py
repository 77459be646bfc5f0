"""
RabbitMQ consumer adapter - drains the task queue into a CodeSender.

Every delivery is settled exactly once from the consumer's side:
- decoded and sent   -> basic_ack (single message)
- undecodable/failed -> basic_nack, requeue=False (message dropped)

A bad message never stops the consumer.
"""

import logging
import threading
from collections.abc import Callable

import pika
from pika.adapters.blocking_connection import BlockingChannel
from pika.spec import Basic, BasicProperties

from src.domain.exceptions import MalformedTaskError
from src.domain.ports import CodeSender

from .codec import decode_task
from .topology import DEFAULT_QUEUE, declare_queue

logger = logging.getLogger(__name__)


class RabbitMQConsumer:
    """
    Consumes delivery tasks with manual acknowledgment.

    Holds one connection and one channel between run() and shutdown.
    """

    def __init__(
        self,
        parameters: pika.ConnectionParameters,
        sender: CodeSender,
        queue: str = DEFAULT_QUEUE,
        connection_factory: Callable[[pika.ConnectionParameters], pika.BlockingConnection] = (
            pika.BlockingConnection
        ),
    ) -> None:
        self._parameters = parameters
        self._sender = sender
        self._queue = queue
        self._connection_factory = connection_factory
        self._connection: pika.BlockingConnection | None = None
        self._channel: BlockingChannel | None = None
        self._state_lock = threading.RLock()
        self._stop_requested = False

    def handle_delivery(
        self,
        channel: BlockingChannel,
        method: Basic.Deliver,
        properties: BasicProperties,
        body: bytes,
    ) -> None:
        """
        Process one delivery (pika on_message_callback signature).

        Decode failures and sender exceptions are logged and the message
        is rejected without requeue.
        """
        try:
            task = decode_task(body)
            self._sender.send(task)
        except MalformedTaskError as e:
            logger.error("Rejecting malformed message %s: %s", method.delivery_tag, e)
            channel.basic_nack(delivery_tag=method.delivery_tag, multiple=False, requeue=False)
            return
        except Exception:
            logger.exception("Error processing message %s", method.delivery_tag)
            channel.basic_nack(delivery_tag=method.delivery_tag, multiple=False, requeue=False)
            return

        channel.basic_ack(delivery_tag=method.delivery_tag, multiple=False)

    def run(self) -> None:
        """
        Consume until stop() is called, then close the connection.

        Raises:
            pika.exceptions.AMQPConnectionError: broker unreachable at startup
        """
        connection = self._connection_factory(self._parameters)
        try:
            channel = connection.channel()
            declare_queue(channel, self._queue)
            channel.basic_consume(
                queue=self._queue,
                on_message_callback=self.handle_delivery,
                auto_ack=False,
            )

            with self._state_lock:
                self._connection = connection
                self._channel = channel
                if self._stop_requested:
                    return

            logger.info("Connected to RabbitMQ. Waiting for messages on %s", self._queue)
            channel.start_consuming()
        finally:
            with self._state_lock:
                self._connection = None
                self._channel = None
            if connection.is_open:
                connection.close()
            logger.info("Consumer on %s stopped", self._queue)

    def stop(self) -> None:
        """
        Ask run() to return. Safe to call from any thread.

        Deliveries not yet acknowledged are redelivered by the broker.
        """
        with self._state_lock:
            self._stop_requested = True
            connection, channel = self._connection, self._channel
        if connection is not None and channel is not None and connection.is_open:
            connection.add_callback_threadsafe(channel.stop_consuming)
