"""Clipboard sinks for copied answers."""

from __future__ import annotations

import base64
from typing import Protocol

from rich.console import Console


class ClipboardSink(Protocol):
    def copy(self, text: str) -> None: ...


class MemoryClipboard:
    """Keeps copied text in process memory."""

    def __init__(self) -> None:
        self.history: list[str] = []

    @property
    def text(self) -> str | None:
        if not self.history:
            return None
        return self.history[-1]

    def copy(self, text: str) -> None:
        self.history.append(text)


class TerminalClipboard:
    """Sets the terminal clipboard with an OSC 52 escape sequence."""

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console()

    def copy(self, text: str) -> None:
        if not self._console.is_terminal:
            return
        encoded = base64.b64encode(text.encode("utf-8")).decode("ascii")
        self._console.file.write(f"\x1b]52;c;{encoded}\x07")
        self._console.file.flush()
