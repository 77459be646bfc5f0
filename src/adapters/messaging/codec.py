"""
Wire codec for delivery tasks.

Message body is compact UTF-8 JSON with PascalCase field names, shared
with every other producer and consumer of the queue:

    {"Email":"a@b.com","Code":"4821","Timestamp":"2023-04-10T18:30:00"}
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from src.domain.exceptions import MalformedTaskError
from src.domain.models import DeliveryTask


class DeliveryTaskMessage(BaseModel):
    """Wire shape of a DeliveryTask."""

    model_config = ConfigDict(frozen=True)

    email: str = Field(alias="Email")
    code: str = Field(alias="Code")
    timestamp: datetime = Field(alias="Timestamp")


def encode_task(task: DeliveryTask) -> bytes:
    """Serialize task to the queue's JSON body."""
    message = DeliveryTaskMessage(Email=task.email, Code=task.code, Timestamp=task.issued_at)
    return message.model_dump_json(by_alias=True).encode("utf-8")


def decode_task(body: bytes) -> DeliveryTask:
    """
    Parse a queue body into a DeliveryTask.

    Raises:
        MalformedTaskError: body is not valid JSON or lacks a required field
    """
    try:
        message = DeliveryTaskMessage.model_validate_json(body)
    except ValidationError as e:
        raise MalformedTaskError(f"Undecodable delivery task: {e.error_count()} error(s)") from e
    return DeliveryTask(email=message.email, code=message.code, issued_at=message.timestamp)
