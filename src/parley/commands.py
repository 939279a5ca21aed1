"""Commands accepted by the session controller."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

from parley.types import SessionState

QUIT_WORDS = frozenset({"/quit", "/exit"})


@dataclass(frozen=True)
class SubmitQuestion:
    text: str


@dataclass(frozen=True)
class ResetSession:
    pass


@dataclass(frozen=True)
class CopyLastAnswer:
    pass


@dataclass(frozen=True)
class ToggleDefaultPrompts:
    pass


@dataclass(frozen=True)
class SelectPrompt:
    """Pick a default prompt or follow-up question without submitting it."""

    text: str


Command: TypeAlias = SubmitQuestion | ResetSession | CopyLastAnswer | ToggleDefaultPrompts | SelectPrompt


def is_quit(line: str) -> bool:
    return line.strip().lower() in QUIT_WORDS


def selectable_prompts(state: SessionState) -> list[str]:
    """Prompts addressable with ``#N``: follow-ups once answered, else defaults."""

    last = state.transcript.last()
    if last is not None and not last.is_user_message and last.followup_questions:
        return list(last.followup_questions)
    if state.default_prompts_visible:
        return list(state.default_prompts)
    return []


def parse_command(line: str, state: SessionState) -> Command | None:
    """Map one interactive input line to a command.

    Returns None for blank lines, quit words and out-of-range ``#N`` picks.
    """
    text = line.strip()
    if not text or is_quit(text):
        return None

    lowered = text.lower()
    if lowered == "/reset":
        return ResetSession()
    if lowered == "/copy":
        return CopyLastAnswer()
    if lowered == "/prompts":
        return ToggleDefaultPrompts()
    if text.startswith("#") and text[1:].isdigit():
        choices = selectable_prompts(state)
        index = int(text[1:]) - 1
        if 0 <= index < len(choices):
            return SelectPrompt(choices[index])
        return None
    return SubmitQuestion(text)
