"""CLI interface for askai."""

from __future__ import annotations

import asyncio
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path

import click
from rich.console import Console

from . import __version__
from .client import GeminiClient
from .config import DATA_DIR, DEFAULT_THEME, MODEL, STORAGE_KEY
from .conversations import ConversationStore
from .exceptions import ConversationNotFoundError
from .exchange import MessageExchangeController
from .render import (
    THEMES,
    Theme,
    render_conversation_list,
    render_message,
    render_thread,
    render_welcome,
    toggle_theme,
)
from .storage import ConversationPersistence, LocalStorage

logger = logging.getLogger(__name__)

CHAT_HELP = """\
Type a message and press Enter to send it. Commands:
  /new                 start a new conversation
  /list                list conversations
  /open ID             switch to a conversation
  /rename ID TITLE     rename a conversation
  /delete ID           delete a conversation
  /theme               toggle dark/light theme
  /help                show this help
  /quit                leave (also: exit, quit, Ctrl-D)"""


@dataclass
class AppContext:
    data_dir: Path
    theme: Theme
    console: Console = field(default_factory=Console)

    @property
    def storage(self) -> LocalStorage:
        return LocalStorage(self.data_dir)

    def open_store(self) -> ConversationStore:
        return ConversationStore(ConversationPersistence(self.storage))


def _build_client() -> GeminiClient:
    return GeminiClient()


def _warn_missing_key(client: GeminiClient):
    if not client.api_key:
        click.echo(
            "Warning: GEMINI_API_KEY is not set. Requests will fail until you set it "
            "in your environment or a .env file.",
            err=True,
        )


def _require_conversation(store: ConversationStore, conversation_id: str):
    conv = store.get(conversation_id)
    if conv is None:
        raise click.ClickException(f"Conversation not found: {conversation_id}")
    return conv


@click.group()
@click.version_option(version=__version__, prog_name="askai")
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=DATA_DIR,
    envvar="ASKAI_DATA_DIR",
    show_default=True,
    help="Directory holding the conversation history.",
)
@click.option(
    "--theme",
    type=click.Choice(sorted(THEMES)),
    default=DEFAULT_THEME,
    envvar="ASKAI_THEME",
    show_default=True,
    help="Colour theme for rendered messages.",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, data_dir: Path, theme: str, verbose: bool):
    """askai — chat with Gemini from your terminal.

    Conversations are saved locally so you can pick them up again later.
    """
    # Logging to stderr only — stdout carries the rendered conversation
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )
    ctx.obj = AppContext(data_dir=data_dir, theme=THEMES[theme])


@cli.command()
@click.pass_obj
def chat(app: AppContext):
    """Start an interactive chat session.

    Plain lines are sent to Gemini; lines starting with / are commands.
    Type /help inside the session for the list.
    """
    client = _build_client()
    _warn_missing_key(client)
    asyncio.run(_chat_loop(app, client))


async def _chat_loop(app: AppContext, client: GeminiClient):
    store = app.open_store()
    controller = MessageExchangeController(store, client)
    console = app.console

    console.print(render_welcome(app.theme))
    click.echo(CHAT_HELP)

    while True:
        try:
            line = click.prompt("You", prompt_suffix="> ", default="", show_default=False)
        except click.Abort:
            break

        stripped = line.strip()
        if stripped in ("exit", "quit"):
            break
        if stripped.startswith("/"):
            if not _handle_command(app, store, stripped):
                break
            continue
        if not stripped:
            continue

        with console.status("Thinking...", spinner="dots"):
            reply = await controller.send(line)
        if reply is not None:
            console.print(render_thread(store.messages, app.theme))


def _handle_command(app: AppContext, store: ConversationStore, line: str) -> bool:
    """Run a slash command. Returns False when the session should end."""
    name, _, rest = line.partition(" ")
    rest = rest.strip()
    console = app.console

    if name == "/quit":
        return False

    if name == "/help":
        click.echo(CHAT_HELP)
    elif name == "/new":
        conversation_id = store.create_conversation()
        console.print(render_welcome(app.theme))
        click.echo(f"Started conversation {conversation_id}")
    elif name == "/list":
        console.print(render_conversation_list(store.conversations, store.active_id, app.theme))
    elif name == "/open" and rest:
        try:
            messages = store.select_conversation(rest)
        except ConversationNotFoundError as exc:
            click.echo(str(exc), err=True)
        else:
            console.print(render_thread(messages, app.theme))
    elif name == "/rename" and " " in rest:
        conversation_id, new_title = (part.strip() for part in rest.split(" ", 1))
        if store.get(conversation_id) is None:
            click.echo(f"Conversation not found: {conversation_id}", err=True)
        else:
            store.rename_conversation(conversation_id, new_title)
            click.echo(f"Renamed {conversation_id} to {new_title!r}")
    elif name == "/delete" and rest:
        if store.get(rest) is None:
            click.echo(f"Conversation not found: {rest}", err=True)
        else:
            store.delete_conversation(rest)
            click.echo(f"Deleted {rest}")
    elif name == "/theme":
        app.theme = toggle_theme(app.theme)
        click.echo(f"Theme: {app.theme.name}")
    else:
        click.echo(f"Unknown command or missing argument: {line}. Type /help.", err=True)

    return True


@cli.command()
@click.argument("text")
@click.option(
    "-c",
    "--conversation",
    "conversation_id",
    help="Continue this conversation instead of starting a new one.",
)
@click.pass_obj
def ask(app: AppContext, text: str, conversation_id: str | None):
    """Send a single message and print the reply.

    Example:
        askai ask "Explain Python's GIL in two sentences"
    """
    if not text.strip():
        raise click.ClickException("Nothing to send.")

    store = app.open_store()
    if conversation_id:
        try:
            store.select_conversation(conversation_id)
        except ConversationNotFoundError as exc:
            raise click.ClickException(str(exc)) from exc

    client = _build_client()
    _warn_missing_key(client)
    controller = MessageExchangeController(store, client)

    reply = asyncio.run(controller.send(text))
    app.console.print(render_message(reply, app.theme))
    click.echo(f"Conversation: {store.active_id}")


@cli.command("list")
@click.pass_obj
def list_cmd(app: AppContext):
    """List saved conversations, newest first."""
    store = app.open_store()
    app.console.print(render_conversation_list(store.conversations, None, app.theme))


@cli.command()
@click.argument("conversation_id")
@click.pass_obj
def show(app: AppContext, conversation_id: str):
    """Print a conversation transcript."""
    store = app.open_store()
    conv = _require_conversation(store, conversation_id)
    click.echo(click.style(conv.title, bold=True))
    app.console.print(render_thread(conv.messages, app.theme))


@cli.command()
@click.pass_obj
def new(app: AppContext):
    """Create an empty conversation and print its id."""
    store = app.open_store()
    click.echo(store.create_conversation())


@cli.command()
@click.argument("conversation_id")
@click.argument("title")
@click.pass_obj
def rename(app: AppContext, conversation_id: str, title: str):
    """Change a conversation's title."""
    store = app.open_store()
    _require_conversation(store, conversation_id)
    store.rename_conversation(conversation_id, title)
    click.echo(f"Renamed {conversation_id} to {title!r}")


@cli.command()
@click.argument("conversation_id")
@click.pass_obj
def delete(app: AppContext, conversation_id: str):
    """Delete a conversation."""
    store = app.open_store()
    _require_conversation(store, conversation_id)
    store.delete_conversation(conversation_id)
    click.echo(f"Deleted {conversation_id}")


@cli.command()
@click.pass_obj
def config(app: AppContext):
    """Print the effective configuration."""
    client = _build_client()
    click.echo()
    click.echo(click.style("askai configuration", bold=True))
    click.echo(f"  Data dir:   {app.data_dir}")
    click.echo(f"  Storage:    {app.storage.path_for(STORAGE_KEY)}")
    click.echo(f"  Model:      {MODEL}")
    click.echo(f"  Endpoint:   {client.endpoint}")
    click.echo(f"  API key:    {'set' if client.api_key else 'not set (GEMINI_API_KEY)'}")
    click.echo(f"  Theme:      {app.theme.name}")
    click.echo()


@cli.command()
@click.confirmation_option(prompt="This will delete all saved conversations. Are you sure?")
@click.pass_obj
def reset(app: AppContext):
    """Delete all saved conversations and start fresh."""
    storage = app.storage
    if storage.get_item(STORAGE_KEY) is None:
        click.echo("No data to delete.")
        return
    storage.remove_item(STORAGE_KEY)
    click.echo(f"Deleted {storage.path_for(STORAGE_KEY)}")
