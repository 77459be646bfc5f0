"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes.
"""

from datetime import timedelta

from fastapi import Request

from src.adapters.messaging.producer import RabbitMQProducer
from src.adapters.system import RandomCodeGenerator, SystemClock
from src.config.settings import Settings
from src.domain.store import CredentialStore
from src.domain.verification import VerificationService


def build_verification_service(settings: Settings) -> VerificationService:
    """
    Wire the store, producer and clock into a verification service.

    Called once per application; the returned service owns the only
    credential store the app uses.
    """
    clock = SystemClock()
    store = CredentialStore(
        clock=clock,
        code_generator=RandomCodeGenerator(),
        ttl=timedelta(seconds=settings.code_ttl_seconds),
        cooldown=timedelta(seconds=settings.cooldown_seconds),
        max_attempts=settings.max_attempts,
        lock_stripes=settings.lock_stripes,
    )
    producer = RabbitMQProducer(
        settings.connection_parameters(),
        queue=settings.queue_name,
        max_attempts=settings.publish_max_attempts,
        retry_delay_seconds=settings.publish_retry_delay_seconds,
    )
    return VerificationService(store=store, publisher=producer)


def get_verification_service(request: Request) -> VerificationService:
    """
    Get verification service from app state.

    The service is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.verification_service
