"""Chat assistant schemas."""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class ChatMessage(BaseModel):
    """One turn of the conversation."""

    role: Literal["user", "assistant", "model"]
    content: str = Field(..., max_length=8000)


class ChatRequest(BaseModel):
    """Ask the assistant; the last message is the new user turn."""

    messages: list[ChatMessage]
    language: Literal["en", "bn"] = "en"


class ChatResponse(BaseModel):
    message: str


class ChatHistorySave(BaseModel):
    """Replace the stored transcript, or append to it when ``delta`` is set."""

    messages: list[dict[str, Any]]
    delta: bool = False


class ChatHistoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    messages: list[dict[str, Any]]
    updated_at: datetime | None = None
