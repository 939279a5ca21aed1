"""Session data model."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from parley.errors import DispatchError
from parley.transcript import Transcript


@dataclass(frozen=True)
class Citation:
    """A source reference attached to an answer."""

    ref: int | str
    text: str


@dataclass(frozen=True)
class Message:
    """One transcript entry."""

    text: str
    timestamp: str
    is_user_message: bool
    citations: tuple[Citation, ...] = ()
    followup_questions: tuple[str, ...] = ()
    following_steps: tuple[str, ...] = ()


class SessionStatus(str, Enum):
    IDLE = "idle"
    AWAITING_RESPONSE = "awaiting_response"
    ANSWERED = "answered"
    ERRORED = "errored"


@dataclass(frozen=True)
class SessionState:
    """Snapshot of one chat session."""

    status: SessionStatus = SessionStatus.IDLE
    transcript: Transcript = field(default_factory=Transcript)
    error: DispatchError | None = None
    chat_started: bool = False
    default_prompts_visible: bool = True
    response_copied: bool = False
    pending_question: str = ""
    default_prompts: tuple[str, ...] = ()

    @property
    def is_awaiting_response(self) -> bool:
        return self.status is SessionStatus.AWAITING_RESPONSE

    @property
    def has_error(self) -> bool:
        return self.status is SessionStatus.ERRORED

    @property
    def is_disabled(self) -> bool:
        """Input is locked while a request is in flight."""
        return self.is_awaiting_response


def dedupe_citations(citations: list[Citation] | tuple[Citation, ...]) -> tuple[Citation, ...]:
    """Drop repeated citations, keeping first-seen order."""

    return tuple(dict.fromkeys(citations))
