"""Send a user message, ask the completion service, record the reply."""

from __future__ import annotations

import enum
import logging

from .client import extract_text
from .config import ERROR_REPLY, FALLBACK_REPLY
from .conversations import ConversationStore
from .exceptions import ServiceUnavailableError
from .models import Message

logger = logging.getLogger(__name__)


class ExchangeStatus(enum.Enum):
    IDLE = "idle"
    SENDING = "sending"


class MessageExchangeController:
    """Runs one request/response exchange at a time against the active conversation."""

    def __init__(self, store: ConversationStore, client):
        self.store = store
        self.client = client
        self.status = ExchangeStatus.IDLE

    @property
    def is_sending(self) -> bool:
        return self.status is ExchangeStatus.SENDING

    async def send(self, text: str) -> Message | None:
        """Exchange one message with the service.

        Blank input, or a call made while another exchange is in flight,
        is ignored and returns None. Otherwise the assistant message that
        was appended is returned; service failures become an error reply
        rather than an exception.
        """
        trimmed = text.strip()
        if not trimmed or self.is_sending:
            return None

        self.status = ExchangeStatus.SENDING
        try:
            conversation_id = self.store.append_messages(
                self.store.active_id, [Message(role="user", content=trimmed)]
            )

            try:
                data = await self.client.generate_content(text)
            except ServiceUnavailableError as exc:
                logger.warning("Completion request failed: %s", exc)
                reply = Message(role="assistant", content=ERROR_REPLY)
            else:
                reply = Message(role="assistant", content=extract_text(data) or FALLBACK_REPLY)

            self.store.append_messages(conversation_id, [reply])
            return reply
        finally:
            self.status = ExchangeStatus.IDLE
