"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance,
configures routes and lifespan events.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.api.dependencies import build_verification_service
from src.api.v1 import router as v1_router
from src.config.settings import get_settings

logger = logging.getLogger(__name__)

# OpenAPI tags for documentation grouping
tags_metadata = [
    {
        "name": "v1",
        "description": "Email verification API v1 - Request and verify email codes",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Builds the verification service (and its in-memory credential store)
    once on startup. The store is dropped with the process.
    """
    settings = get_settings()

    logger.info("Starting application...")
    app.state.verification_service = build_verification_service(settings)
    logger.info(
        "Publishing verification codes to %s on %s:%d",
        settings.queue_name,
        settings.rabbitmq_host,
        settings.rabbitmq_port,
    )
    logger.info("Application startup complete")

    yield

    logger.info("Shutting down application...")


app = FastAPI(
    title="mailcode",
    description="Email verification code API - issues short-lived codes and queues them for delivery",
    version="0.1.0",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
)

# Include v1 API routes
app.include_router(v1_router, prefix="/v1")


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}
