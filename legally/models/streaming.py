"""
Streaming event schemas for WebSocket chat.

Defines event types and payloads for real-time answer streaming.

Dependencies: pydantic
System role: Streaming protocol schemas
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class StreamEventType(str, Enum):
    """Server-to-client event types for streaming chat."""

    CONNECTED = "connected"
    TOKEN = "token"
    COMPLETE = "complete"
    ERROR = "error"
    PONG = "pong"


class ClientEventType(str, Enum):
    """Client-to-server event types."""

    CHAT = "chat"
    ANALYZE = "analyze"
    PING = "ping"


class StreamEvent(BaseModel):
    """
    Base streaming event model.

    A turn yields zero or more TOKEN events followed by exactly one
    COMPLETE or ERROR event.

    Attributes:
        event: Event type identifier
        data: Event-specific payload
    """

    event: StreamEventType
    data: dict[str, Any]

    @property
    def is_terminal(self) -> bool:
        return self.event in (StreamEventType.COMPLETE, StreamEventType.ERROR)

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        return {"event": self.event.value, "data": self.data}


class HistoryTurn(BaseModel):
    """One earlier conversation turn supplied by the client."""

    role: str = Field(description="Message role: 'user' or 'assistant'")
    content: str = Field(description="Message content")


class ClientChatEvent(BaseModel):
    """
    Client chat message event payload.

    Attributes:
        message: User's chat message
        conversation_id: Stored conversation to load history from and append to
        document_id: Restrict retrieval to one document
        document_name: Document name shown to the model with its context
        language: UI language code (``en``, ``ta``, ``hi``)
        history: Earlier turns when no conversation is stored
    """

    message: str
    conversation_id: str | None = None
    document_id: str | None = None
    document_name: str | None = None
    language: str | None = None
    history: list[HistoryTurn] = Field(default_factory=list)
