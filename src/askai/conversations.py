"""In-memory conversation collection mirrored to persistent storage."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from .config import DEFAULT_TITLE
from .exceptions import ConversationNotFoundError
from .models import Conversation, Message, derive_title

logger = logging.getLogger(__name__)

Collection = list[Conversation]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ConversationStore:
    """Owns the conversation collection and the active selection.

    The collection is kept newest-first. Every mutation is applied as a
    transform over the current collection and saved immediately, so the
    stored and in-memory collections never diverge.
    """

    def __init__(self, persistence, clock: Callable[[], datetime] = _utcnow):
        self.persistence = persistence
        self.clock = clock
        self._conversations: Collection = persistence.load()
        self._active_id: str | None = None

    @property
    def conversations(self) -> Collection:
        """Detached copies; changing them does not touch the store."""
        return [c.model_copy(deep=True) for c in self._conversations]

    @property
    def active_id(self) -> str | None:
        return self._active_id

    @property
    def messages(self) -> list[Message]:
        """Messages of the active conversation (empty when none is active)."""
        if self._active_id is None:
            return []
        conv = self._find(self._active_id)
        return list(conv.messages) if conv else []

    def _find(self, conversation_id: str) -> Conversation | None:
        for conv in self._conversations:
            if conv.id == conversation_id:
                return conv
        return None

    def get(self, conversation_id: str) -> Conversation | None:
        conv = self._find(conversation_id)
        return conv.model_copy(deep=True) if conv else None

    def _mutate(self, transform: Callable[[Collection], Collection]):
        self._conversations = transform(self._conversations)
        self.persistence.save(self._conversations)

    def _new_conversation(self, title: str, messages: list[Message]) -> Conversation:
        now = self.clock()
        taken = {c.id for c in self._conversations}
        stamp = int(now.timestamp() * 1000)
        while str(stamp) in taken:
            stamp += 1
        return Conversation(id=str(stamp), title=title, messages=messages, created_at=now)

    def create_conversation(self) -> str:
        """Start an empty conversation and make it active."""
        conv = self._new_conversation(DEFAULT_TITLE, [])
        self._mutate(lambda convs: [conv, *convs])
        self._active_id = conv.id
        logger.debug("Created conversation %s", conv.id)
        return conv.id

    def select_conversation(self, conversation_id: str) -> list[Message]:
        conv = self._find(conversation_id)
        if conv is None:
            raise ConversationNotFoundError(conversation_id)
        self._active_id = conversation_id
        return list(conv.messages)

    def rename_conversation(self, conversation_id: str, new_title: str):
        self._mutate(
            lambda convs: [
                c.model_copy(update={"title": new_title}) if c.id == conversation_id else c
                for c in convs
            ]
        )

    def delete_conversation(self, conversation_id: str):
        self._mutate(lambda convs: [c for c in convs if c.id != conversation_id])
        if self._active_id == conversation_id:
            self._active_id = None

    def append_messages(self, conversation_id: str | None, new_messages: list[Message]) -> str:
        """Append messages, creating the conversation first when no id is given.

        Returns the id of the conversation the messages went to.
        """
        if conversation_id is None:
            conv = self._new_conversation(
                derive_title(new_messages) or DEFAULT_TITLE, list(new_messages)
            )
            self._mutate(lambda convs: [conv, *convs])
            self._active_id = conv.id
            return conv.id

        if self._find(conversation_id) is None:
            logger.warning(
                "Dropping %d message(s) for missing conversation %s",
                len(new_messages),
                conversation_id,
            )
            self.persistence.save(self._conversations)
            return conversation_id

        def transform(convs: Collection) -> Collection:
            updated = []
            for c in convs:
                if c.id == conversation_id:
                    title = c.title
                    if title == DEFAULT_TITLE:
                        title = derive_title(new_messages) or title
                    c = c.model_copy(
                        update={"title": title, "messages": [*c.messages, *new_messages]}
                    )
                updated.append(c)
            return updated

        self._mutate(transform)
        return conversation_id
