"""Messaging adapters - RabbitMQ delivery channel."""

from .codec import decode_task, encode_task
from .consumer import RabbitMQConsumer
from .producer import RabbitMQProducer
from .retry import FailureKind, classify_failure, should_retry
from .topology import DEFAULT_QUEUE, declare_queue

__all__ = [
    "DEFAULT_QUEUE",
    "FailureKind",
    "RabbitMQConsumer",
    "RabbitMQProducer",
    "classify_failure",
    "declare_queue",
    "decode_task",
    "encode_task",
    "should_retry",
]
