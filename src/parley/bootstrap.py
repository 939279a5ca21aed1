"""Session bootstrap helpers."""

from __future__ import annotations

from parley.annotations import AnnotationParser
from parley.clipboard import ClipboardSink
from parley.config import Settings, get_settings
from parley.dispatcher import AnswerRequestDispatcher
from parley.logging_utils import configure_logging
from parley.session import SessionController


def build_dispatcher(settings: Settings) -> AnswerRequestDispatcher:
    """Build the HTTP dispatcher configured for one answer service."""

    return AnswerRequestDispatcher(
        settings.api_chat_url,
        options=settings.retrieval_options(),
        timeout_seconds=settings.request_timeout_seconds,
    )


def build_controller(
    *,
    url: str | None = None,
    timeout_seconds: float | None = None,
    clipboard: ClipboardSink | None = None,
) -> SessionController:
    """Load settings, configure logging and wire one session controller."""

    settings = get_settings(api_chat_url=url, request_timeout_seconds=timeout_seconds)
    configure_logging(settings.log_level)
    return SessionController(
        dispatcher=build_dispatcher(settings),
        settings=settings,
        parser=AnnotationParser(),
        clipboard=clipboard,
    )
