"""Common response schemas used across the API."""

from typing import Literal

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """Simple message response for operations that return only a message.

    Attributes:
        message: The response message
    """

    message: str


class ClientLogEntry(BaseModel):
    """A log line forwarded from the web client."""

    level: Literal["debug", "info", "warn", "warning", "error"] = "info"
    message: str = Field(..., min_length=1, max_length=2000)
    context: dict | None = None
