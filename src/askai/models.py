"""Data models for stored conversations."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from .config import DEFAULT_TITLE, TITLE_MAX_CHARS

Role = Literal["user", "assistant"]


class Message(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: Role
    content: str


class Conversation(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    title: str = DEFAULT_TITLE
    messages: list[Message] = []
    created_at: datetime = Field(alias="createdAt")

    @property
    def last_message(self) -> Message | None:
        return self.messages[-1] if self.messages else None


def truncate_title(text: str) -> str:
    """Shorten text to a conversation title, adding an ellipsis when cut."""
    if len(text) > TITLE_MAX_CHARS:
        return text[:TITLE_MAX_CHARS] + "..."
    return text


def derive_title(messages: list[Message]) -> str | None:
    """Title from the first user message, or None if there is none."""
    for msg in messages:
        if msg.role == "user":
            return truncate_title(msg.content)
    return None
