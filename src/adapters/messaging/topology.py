"""Queue declaration shared by producer and consumer."""

from pika.adapters.blocking_connection import BlockingChannel

DEFAULT_QUEUE = "email_tasks"


def declare_queue(channel: BlockingChannel, queue: str = DEFAULT_QUEUE) -> None:
    """
    Declare the task queue (idempotent, create-if-absent).

    Both sides declare with identical arguments so either may start first.
    """
    channel.queue_declare(
        queue=queue,
        durable=False,
        exclusive=False,
        auto_delete=False,
        arguments=None,
    )
