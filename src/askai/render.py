"""Terminal rendering for messages and conversation lists."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from rich.align import Align
from rich.console import Group, RenderableType
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import Conversation, Message, Role

PREVIEW_CHARS = 60


@dataclass(frozen=True)
class Theme:
    name: str
    user_style: str
    assistant_style: str
    border_style: str
    muted_style: str
    active_style: str
    code_theme: str


THEMES: dict[str, Theme] = {
    "dark": Theme(
        name="dark",
        user_style="white on blue",
        assistant_style="white",
        border_style="grey37",
        muted_style="grey62",
        active_style="bold on grey23",
        code_theme="monokai",
    ),
    "light": Theme(
        name="light",
        user_style="white on blue",
        assistant_style="black",
        border_style="grey70",
        muted_style="grey42",
        active_style="bold on grey85",
        code_theme="default",
    ),
}


def toggle_theme(theme: Theme) -> Theme:
    return THEMES["light" if theme.name == "dark" else "dark"]


def _render_user(message: Message, theme: Theme) -> RenderableType:
    panel = Panel(
        Text(message.content),
        title="You",
        title_align="right",
        style=theme.user_style,
        expand=False,
    )
    return Align.right(panel)


def _render_assistant(message: Message, theme: Theme) -> RenderableType:
    return Panel(
        Markdown(message.content, code_theme=theme.code_theme),
        title="AskAi",
        title_align="left",
        style=theme.assistant_style,
        border_style=theme.border_style,
    )


RENDERERS: dict[Role, Callable[[Message, Theme], RenderableType]] = {
    "user": _render_user,
    "assistant": _render_assistant,
}


def render_message(message: Message, theme: Theme) -> RenderableType:
    return RENDERERS[message.role](message, theme)


def render_thread(messages: list[Message], theme: Theme) -> RenderableType:
    if not messages:
        return render_welcome(theme)
    return Group(*(render_message(m, theme) for m in messages))


def _preview(conv: Conversation) -> str:
    last = conv.last_message
    if last is None:
        return "No messages yet"
    text = " ".join(last.content.split())
    if len(text) > PREVIEW_CHARS:
        return text[:PREVIEW_CHARS] + "…"
    return text


def render_conversation_list(
    conversations: list[Conversation], active_id: str | None, theme: Theme
) -> RenderableType:
    """Table of conversations, newest first, with the active one highlighted."""
    if not conversations:
        return Text("No conversations yet.", style=theme.muted_style)

    table = Table(show_header=True, header_style="bold", border_style=theme.border_style)
    table.add_column("ID", no_wrap=True)
    table.add_column("Title")
    table.add_column("Last message", style=theme.muted_style)

    for conv in conversations:
        table.add_row(
            conv.id,
            Text(conv.title),
            Text(_preview(conv)),
            style=theme.active_style if conv.id == active_id else None,
        )
    return table


def render_welcome(theme: Theme) -> RenderableType:
    examples = Table.grid(padding=(0, 2))
    examples.add_column()
    examples.add_column()
    examples.add_row(
        Panel("💡 Example\nPaste your code to get a detailed explanation", border_style=theme.border_style),
        Panel("🔧 Debug\nShare problematic code for debugging assistance", border_style=theme.border_style),
    )
    return Panel(
        Group(
            Align.center(Text("Welcome to AskAi", style="bold")),
            Align.center(Text("How can I help you with your code today?", style=theme.muted_style)),
            Text(),
            Align.center(examples),
            Text(),
            Align.center(
                Text(
                    "AskAi can make mistakes. Consider checking important information.",
                    style=theme.muted_style,
                )
            ),
        ),
        border_style=theme.border_style,
    )
