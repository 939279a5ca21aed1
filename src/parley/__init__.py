"""Parley - a question-answering chat client."""

from .session import SessionController
from .transcript import Transcript
from .types import Citation, Message, SessionState, SessionStatus

__version__ = "0.1.0"

__all__ = ["Citation", "Message", "SessionController", "SessionState", "SessionStatus", "Transcript"]
