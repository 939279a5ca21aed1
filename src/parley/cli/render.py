"""CLI renderer for Parley."""

from __future__ import annotations

import threading
from contextlib import AbstractContextManager

from prompt_toolkit import PromptSession
from prompt_toolkit.patch_stdout import patch_stdout
from rich.console import Console
from rich.markup import escape

from parley.commands import selectable_prompts
from parley.config import Settings
from parley.types import Message, SessionState


class Renderer:
    """Projects session state onto the terminal using Rich."""

    def __init__(self, settings: Settings, console: Console | None = None) -> None:
        self.console: Console = console or Console()
        self._settings = settings
        self._prompt_session: PromptSession[str] | None = None
        self._print_lock = threading.Lock()

    def info(self, message: str) -> None:
        """Print a markup line as-is."""
        self._print(message)

    def error(self, message: str) -> None:
        """Print a red error line."""
        self._print(f"[bold red]Error:[/bold red] {escape(message)}")

    def welcome(self) -> None:
        """Print the startup banner and the command help."""
        self._print("[bold blue]Parley[/bold blue] [dim]ask a question, or pick a suggestion by number[/dim]")
        copy_label = escape(self._settings.copy_response_button_label_text)
        self._print(f"[dim]/reset clears the chat, /copy {copy_label}, /prompts toggles suggestions, /quit exits[/dim]")

    def loading(self) -> AbstractContextManager[object]:
        """Spinner shown while an answer is awaited."""
        return self.console.status(self._settings.loading_indicator_text)

    def default_prompts(self, state: SessionState) -> None:
        """Print the numbered default prompts, or the hint to show them when hidden."""
        if not state.default_prompts:
            return
        if not state.default_prompts_visible:
            self.prompts_hint()
            return
        self._print(f"[bold]{escape(self._settings.default_prompts_heading)}[/bold]")
        for idx, prompt in enumerate(state.default_prompts, start=1):
            self._print(f"  [cyan]#{idx}[/cyan] {escape(prompt)}")

    def prompts_hint(self) -> None:
        """Point at /prompts while the suggestions are hidden."""
        self._print(f"[dim]{escape(self._settings.display_default_prompts_button)} (/prompts)[/dim]")

    def exchange(self, state: SessionState) -> None:
        """Render the transcript, then the error banner if the last request failed."""

        for message in state.transcript:
            self.message(message)
        if state.has_error:
            self._print(f"[bold white on red] {escape(self._settings.api_error_message)} [/bold white on red]")
            return
        followups = selectable_prompts(state) if not state.default_prompts_visible else []
        if followups:
            self._print("[bold]You may also want to ask...[/bold]")
            for idx, question in enumerate(followups, start=1):
                self._print(f"  [cyan]#{idx}[/cyan] {escape(question)}")

    def message(self, message: Message) -> None:
        """Print one transcript message with its steps and citations."""
        speaker = "You" if message.is_user_message else self._settings.user_is_bot
        color = "cyan" if message.is_user_message else "yellow"
        self._print(f"[bold {color}]{escape(speaker)}[/bold {color}] [dim]{message.timestamp}[/dim]")
        self._print(escape(message.text))
        for step in message.following_steps:
            self._print(f"  [dim]-[/dim] {escape(step)}")
        if message.citations:
            self._print("[bold]Citations[/bold]")
            for citation in message.citations:
                self._print(f"  [magenta]{escape(str(citation.ref))}.[/magenta] {escape(citation.text)}")

    def copied(self) -> None:
        """Confirm the last answer was copied."""
        self._print(f"[green]{escape(self._settings.copied_successfully_message)}[/green]")

    def reset(self) -> None:
        """Confirm the conversation was cleared."""
        self._print(f"[yellow]{escape(self._settings.reset_chat_button_title)}: conversation cleared.[/yellow]")

    def selected(self, question: str) -> None:
        """Echo the prompt staged as the next input."""
        self._print(f"[dim]Selected:[/dim] {escape(question)}")

    async def get_user_input(self, default: str = "") -> str:
        """Read one line, prefilled with ``default``."""
        if self._prompt_session is None:
            self._prompt_session = PromptSession()
        with patch_stdout(raw=True):
            return await self._prompt_session.prompt_async(
                f"{self._settings.chat_input_label_text}> ",
                default=default,
                placeholder=self._settings.chat_input_placeholder,
            )

    def _print(self, message: str) -> None:
        with self._print_lock:
            self.console.print(message)
