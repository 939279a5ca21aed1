"""CLI main module for Parley."""

from __future__ import annotations

import asyncio

import typer

from parley.bootstrap import build_controller
from parley.clipboard import TerminalClipboard
from parley.errors import ConfigurationError

from .live import run_chat
from .render import Renderer

app = typer.Typer(
    name="parley",
    help="Ask questions to a retrieval answer service.",
    add_completion=False,
    rich_markup_mode="rich",
)

URL_OPTION = typer.Option(None, "--url", "-u", help="Answer service endpoint (PARLEY_API_CHAT_URL)")
TIMEOUT_OPTION = typer.Option(None, "--timeout", help="Request timeout in seconds")


@app.callback(invoke_without_command=True)
def main_callback(ctx: typer.Context) -> None:
    if ctx.invoked_subcommand is None:
        chat(url=None, timeout=None)


@app.command()
def chat(
    url: str | None = URL_OPTION,
    timeout: float | None = TIMEOUT_OPTION,
) -> None:
    """Start an interactive chat session."""

    try:
        controller = build_controller(url=url, timeout_seconds=timeout, clipboard=TerminalClipboard())
    except ConfigurationError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(1) from exc

    renderer = Renderer(controller.settings)
    asyncio.run(run_chat(controller, renderer))


@app.command()
def ask(
    question: str = typer.Argument(..., help="Question to send"),
    url: str | None = URL_OPTION,
    timeout: float | None = TIMEOUT_OPTION,
) -> None:
    """Ask a single question and print the answer."""

    if not question.strip():
        typer.echo("error: question is empty", err=True)
        raise typer.Exit(2)

    try:
        controller = build_controller(url=url, timeout_seconds=timeout)
    except ConfigurationError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(1) from exc

    renderer = Renderer(controller.settings)
    asyncio.run(controller.submit_question(question))
    renderer.exchange(controller.state)
    if controller.state.has_error:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
