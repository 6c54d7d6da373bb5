"""Exceptions raised by the conversation store and the completion client."""


class AskAiError(Exception):
    """Base class for AskAi errors."""


class ConversationNotFoundError(AskAiError, KeyError):
    """No conversation with the given id exists in the collection."""

    def __init__(self, conversation_id: str):
        super().__init__(conversation_id)
        self.conversation_id = conversation_id

    def __str__(self) -> str:
        return f"Conversation not found: {self.conversation_id}"


class ServiceUnavailableError(AskAiError):
    """The completion service could not be reached or returned an unusable reply."""
