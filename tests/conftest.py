"""
Pytest configuration and shared fixtures.
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import pytest

from askai.conversations import ConversationStore
from askai.storage import ConversationPersistence, LocalStorage


class TickingClock:
    """Deterministic clock that advances one second per call."""

    def __init__(self, start: datetime):
        self.current = start

    def __call__(self) -> datetime:
        now = self.current
        self.current = now + timedelta(seconds=1)
        return now


def gemini_reply(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}], "role": "model"}}]}


@pytest.fixture
def storage(tmp_path):
    return LocalStorage(tmp_path / "data")


@pytest.fixture
def persistence(storage):
    return ConversationPersistence(storage)


@pytest.fixture
def clock():
    return TickingClock(datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def store(persistence, clock):
    return ConversationStore(persistence, clock=clock)


@pytest.fixture
def make_reply():
    return gemini_reply


@pytest.fixture
def client():
    """Completion client double answering every prompt with a fixed reply."""
    fake = AsyncMock()
    fake.generate_content = AsyncMock(return_value=gemini_reply("**Hi** there"))
    return fake
