"""
Delivery worker entrypoint.

Consumes verification code tasks from RabbitMQ and hands them to the
console sender until SIGINT/SIGTERM.

Usage: python -m src.worker
"""

import logging
import signal
import sys

import pika.exceptions

from src.adapters.messaging.consumer import RabbitMQConsumer
from src.adapters.smtp.console import ConsoleCodeSender
from src.config.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def build_consumer(settings: Settings) -> RabbitMQConsumer:
    """Create a consumer wired to the console sender."""
    return RabbitMQConsumer(
        settings.connection_parameters(),
        sender=ConsoleCodeSender(),
        queue=settings.queue_name,
    )


def main() -> int:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    consumer = build_consumer(settings)

    def request_stop(signum: int, frame: object) -> None:
        logger.info("Received signal %d, stopping consumer...", signum)
        consumer.stop()

    signal.signal(signal.SIGINT, request_stop)
    signal.signal(signal.SIGTERM, request_stop)

    logger.info("Email consumer service starting...")
    try:
        consumer.run()
    except pika.exceptions.AMQPConnectionError as e:
        logger.error(
            "Error connecting to RabbitMQ at %s:%d: %s",
            settings.rabbitmq_host,
            settings.rabbitmq_port,
            e,
        )
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
