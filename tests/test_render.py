"""Tests for terminal rendering."""

from datetime import datetime, timezone

from rich.console import Console
from rich.markdown import Markdown

from askai.models import Conversation, Message
from askai.render import (
    RENDERERS,
    THEMES,
    render_conversation_list,
    render_message,
    render_thread,
    toggle_theme,
)


def _text(renderable) -> str:
    console = Console(width=100, record=True, color_system=None)
    console.print(renderable)
    return console.export_text()


def test_every_role_has_a_renderer():
    assert set(RENDERERS) == {"user", "assistant"}


def test_assistant_message_renders_markdown():
    panel = render_message(Message(role="assistant", content="# Title\n\n`code`"), THEMES["dark"])
    assert isinstance(panel.renderable, Markdown)
    output = _text(panel)
    assert "Title" in output
    assert "# Title" not in output


def test_user_message_renders_plain_text():
    output = _text(render_message(Message(role="user", content="# not a heading"), THEMES["dark"]))
    assert "# not a heading" in output


def test_empty_thread_shows_welcome():
    output = _text(render_thread([], THEMES["light"]))
    assert "Welcome to AskAi" in output
    assert "AskAi can make mistakes" in output


def test_conversation_list_previews_last_message():
    created = datetime(2026, 10, 19, tzinfo=timezone.utc)
    conversations = [
        Conversation(
            id="2",
            title="Closures",
            messages=[Message(role="user", content="q"), Message(role="assistant", content="the answer")],
            created_at=created,
        ),
        Conversation(id="1", created_at=created),
    ]

    output = _text(render_conversation_list(conversations, "2", THEMES["dark"]))

    assert "Closures" in output
    assert "the answer" in output
    assert "New Chat" in output
    assert "No messages yet" in output


def test_empty_conversation_list():
    assert "No conversations yet." in _text(render_conversation_list([], None, THEMES["dark"]))


def test_toggle_theme():
    assert toggle_theme(THEMES["dark"]).name == "light"
    assert toggle_theme(THEMES["light"]).name == "dark"


def test_conversation_titles_are_not_parsed_as_markup():
    conv = Conversation(
        id="1",
        title="[/bold] weird [red]",
        created_at=datetime(2026, 10, 19, tzinfo=timezone.utc),
    )
    output = _text(render_conversation_list([conv], None, THEMES["dark"]))
    assert "[/bold] weird [red]" in output
