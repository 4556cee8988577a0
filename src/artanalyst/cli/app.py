"""Main CLI application using Typer."""
import asyncio
import base64
import json
import mimetypes
import time
import uuid
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table

from ..boundary import AppContext, BoundaryDispatcher, Channel
from ..config import AppConfig
from ..errors import (
    ApiKeyMissingError,
    BoundaryError,
    create_error_response,
    create_success_response,
)
from ..logs import configure_logging

# Create Typer app
app = typer.Typer(
    name="artanalyst",
    help="Inspect and drive the art analyst state store and image analysis",
    no_args_is_help=True,
    add_completion=False,
)

# Console for rich output
console = Console()

PREVIEW_LENGTH = 50  # Characters of message content shown in listings


def get_dispatcher(config: AppConfig | None = None) -> BoundaryDispatcher:
    """Create a dispatcher over the configured state file."""
    config = config or AppConfig.from_env()
    return BoundaryDispatcher(AppContext.create(config))


def _invoke(dispatcher: BoundaryDispatcher, channel: Channel, *args: Any) -> Any:
    try:
        return asyncio.run(dispatcher.invoke(channel, *args))
    except BoundaryError as e:
        console.print(f"[red]{e.error_type}: {e}[/red]")
        raise typer.Exit(code=1)


def _now_ms() -> int:
    return int(time.time() * 1000)


def _format_timestamp(timestamp: float) -> str:
    """Render epoch milliseconds as local time, or the raw number when out of range."""
    try:
        return time.strftime("%Y-%m-%d %H:%M", time.localtime(timestamp / 1000))
    except (OverflowError, OSError, ValueError):
        return str(timestamp)


def _preview(content: str) -> str:
    flat = " ".join(content.split())
    return flat[:PREVIEW_LENGTH] + "..." if len(flat) > PREVIEW_LENGTH else flat


@app.callback()
def main(
    log_level: str = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Log level (default: ARTANALYST_LOG_LEVEL or WARNING)"
    )
):
    """Art analyst state tools."""
    config = AppConfig.from_env()
    configure_logging(log_level or config.log_level)


@app.command()
def status():
    """Show AI backend status and where state is stored."""
    dispatcher = get_dispatcher()
    ai_status = _invoke(dispatcher, Channel.GET_AI_STATUS)

    table = Table(title="Status", show_header=False)
    table.add_column("Key", style="cyan")
    table.add_column("Value")
    table.add_row("AI initialized", "yes" if ai_status["isInitialized"] else "no")
    table.add_row("API key", "set" if ai_status["hasApiKey"] else "[yellow]missing[/yellow]")
    table.add_row("Model", ai_status["modelName"])
    table.add_row("State file", str(dispatcher.context.config.store_path))
    table.add_row("Messages", str(len(dispatcher.context.history)))
    console.print(table)


@app.command()
def history(
    limit: int = typer.Option(
        20,
        "--limit",
        "-n",
        min=1,
        help="Number of most recent messages to show"
    )
):
    """List the most recent chat messages."""
    dispatcher = get_dispatcher()
    messages = _invoke(dispatcher, Channel.GET_CHAT_HISTORY)

    if not messages:
        console.print("[dim]Chat history is empty.[/dim]")
        return

    table = Table(title=f"Chat history ({len(messages)} messages)")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Role", style="magenta")
    table.add_column("Time", style="dim")
    table.add_column("Content")
    for message in messages[-limit:]:
        when = _format_timestamp(message["timestamp"])
        table.add_row(message["id"], message["role"], when, _preview(message["content"]))
    console.print(table)


@app.command("delete-message")
def delete_message(message_id: str = typer.Argument(..., help="ID of the message to delete")):
    """Delete every message with the given ID."""
    dispatcher = get_dispatcher()
    if not _invoke(dispatcher, Channel.DELETE_MESSAGE, message_id):
        console.print("[red]Error: message could not be deleted[/red]")
        raise typer.Exit(code=1)
    console.print(f"[green]Deleted {message_id}[/green]")


@app.command("clear-history")
def clear_history(
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Skip the confirmation prompt"
    )
):
    """Remove all chat messages."""
    if not yes:
        confirm = typer.confirm("Clear the entire chat history?")
        if not confirm:
            console.print("[dim]Aborted.[/dim]")
            return

    dispatcher = get_dispatcher()
    if not _invoke(dispatcher, Channel.CLEAR_HISTORY):
        console.print("[red]Error: chat history could not be cleared[/red]")
        raise typer.Exit(code=1)
    console.print("[green]Chat history cleared.[/green]")


@app.command()
def analyze(
    image: Path = typer.Argument(
        ...,
        exists=True,
        file_okay=True,
        dir_okay=False,
        help="Image file to analyze"
    ),
    prompt: str = typer.Option(
        "Describe this artwork.",
        "--prompt",
        "-p",
        help="Instruction sent with the image"
    ),
    save: bool = typer.Option(
        False,
        "--save",
        "-s",
        help="Append the prompt and the reply to chat history"
    )
):
    """Send an image to Gemini and print the analysis."""
    dispatcher = get_dispatcher()
    if not dispatcher.context.config.has_api_key:
        error = ApiKeyMissingError(
            "GEMINI_API_KEY not found. Please add your Google AI API key to continue."
        )
        console.print(f"[red]{error.error_type}: {error}[/red]")
        raise typer.Exit(code=1)

    mime_type = mimetypes.guess_type(image.name)[0] or "application/octet-stream"
    image_base64 = base64.b64encode(image.read_bytes()).decode("ascii")

    with console.status("[dim]Analyzing image...[/dim]"):
        result = _invoke(dispatcher, Channel.ANALYZE_IMAGE, image_base64, mime_type, prompt)

    if not result["success"]:
        console.print(f"[red]Error: {result['error']}[/red]")
        raise typer.Exit(code=1)

    console.print(Panel(Markdown(result["text"]), title=image.name, border_style="blue"))

    if save:
        user_message = {"id": uuid.uuid4().hex, "role": "user", "content": prompt, "timestamp": _now_ms()}
        reply = {"id": uuid.uuid4().hex, "role": "assistant", "content": result["text"], "timestamp": _now_ms()}
        saved = all(_invoke(dispatcher, Channel.SAVE_MESSAGE, message) for message in (user_message, reply))
        if not saved:
            console.print("[yellow]Warning: conversation was not saved[/yellow]")


@app.command("window-state")
def window_state():
    """Show the persisted window geometry."""
    dispatcher = get_dispatcher()
    state = _invoke(dispatcher, Channel.GET_WINDOW_STATE)
    if state is None:
        console.print("[dim]No window state saved.[/dim]")
        return
    console.print(
        f"{state['width']}x{state['height']} at ({state['x']}, {state['y']})"
        f"{' (maximized)' if state['isMaximized'] else ''}"
    )


@app.command()
def call(
    channel: str = typer.Argument(..., help="Channel name, e.g. get-chat-history"),
    args: list[str] = typer.Argument(
        None,
        help="Operation arguments as JSON; values that are not JSON are passed as strings"
    )
):
    """Invoke a boundary channel and print its JSON envelope."""
    parsed = []
    for arg in args or []:
        try:
            parsed.append(json.loads(arg))
        except json.JSONDecodeError:
            parsed.append(arg)

    dispatcher = get_dispatcher()
    try:
        result = asyncio.run(dispatcher.invoke(channel, *parsed))
    except (BoundaryError, ValueError) as e:
        console.print_json(data=create_error_response(e))
        raise typer.Exit(code=1)
    console.print_json(data=create_success_response(result))


if __name__ == "__main__":
    app()
