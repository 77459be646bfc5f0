"""
Application settings - pydantic-settings configuration.

This module defines application configuration using pydantic-settings
for environment variable loading with validation and defaults.
"""

from functools import lru_cache

import pika
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # RabbitMQ configuration
    rabbitmq_host: str = "localhost"
    rabbitmq_port: int = 5672
    rabbitmq_user: str = "guest"
    rabbitmq_password: str = "guest"
    rabbitmq_vhost: str = "/"
    queue_name: str = "email_tasks"

    # Verification policy
    code_ttl_seconds: int = 600  # Code validity window
    cooldown_seconds: int = 60  # Minimum gap between issuances per email
    max_attempts: int = 3  # Verify calls allowed before the record is dropped
    lock_stripes: int = 64

    # Publish retry policy
    publish_max_attempts: int = 3
    publish_retry_delay_seconds: float = 1.0

    log_level: str = "INFO"

    def connection_parameters(self) -> pika.ConnectionParameters:
        """Build pika connection parameters from the broker settings."""
        return pika.ConnectionParameters(
            host=self.rabbitmq_host,
            port=self.rabbitmq_port,
            virtual_host=self.rabbitmq_vhost,
            credentials=pika.PlainCredentials(self.rabbitmq_user, self.rabbitmq_password),
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
