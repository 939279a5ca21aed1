"""Chat session controller."""

from __future__ import annotations

import dataclasses
from collections.abc import Awaitable, Callable
from datetime import datetime
from typing import Any, TypeAlias

from loguru import logger

from parley.annotations import AnnotationParser, AnswerParser, ParsedAnswer
from parley.clipboard import ClipboardSink, MemoryClipboard
from parley.commands import (
    Command,
    CopyLastAnswer,
    ResetSession,
    SelectPrompt,
    SubmitQuestion,
    ToggleDefaultPrompts,
)
from parley.config import Settings
from parley.dispatcher import AnswerDispatcher, DispatchResult
from parley.errors import DispatchError, TransportFailureError
from parley.transcript import Transcript
from parley.types import Message, SessionState, SessionStatus, dedupe_citations

StateListener: TypeAlias = Callable[[SessionState], None]


def format_timestamp(moment: datetime) -> str:
    """Format a wall-clock time like ``3:45 PM``."""

    hour = moment.hour % 12 or 12
    suffix = "AM" if moment.hour < 12 else "PM"
    return f"{hour}:{moment.minute:02d} {suffix}"


class SessionController:
    """Sole owner and mutator of one chat session.

    State moves between ``IDLE``, ``AWAITING_RESPONSE``, ``ANSWERED`` and
    ``ERRORED``. Only one question may be in flight; a submission made while
    awaiting is dropped. Every accepted submission starts a fresh transcript.
    """

    def __init__(
        self,
        *,
        dispatcher: AnswerDispatcher,
        settings: Settings | None = None,
        parser: AnswerParser | None = None,
        clipboard: ClipboardSink | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._dispatcher = dispatcher
        self._settings = settings or Settings()
        self._parser = parser or AnnotationParser()
        self._clipboard = clipboard or MemoryClipboard()
        self._clock = clock
        self._generation = 0
        self._listeners: list[StateListener] = []
        self._state = self._initial_state()
        self._handlers: dict[type, Callable[[Any], Awaitable[Any]]] = {
            SubmitQuestion: self._on_submit,
            ResetSession: self._on_reset,
            CopyLastAnswer: self._on_copy,
            ToggleDefaultPrompts: self._on_toggle_prompts,
            SelectPrompt: self._on_select,
        }

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def settings(self) -> Settings:
        return self._settings

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a listener for state snapshots; returns an unsubscribe callable."""

        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    async def dispatch(self, command: Command) -> Any:
        handler = self._handlers.get(type(command))
        if handler is None:
            raise TypeError(f"unsupported command: {type(command).__name__}")
        return await handler(command)

    async def submit_question(self, raw: str) -> bool:
        """Send one question; returns False when the submission is ignored."""

        question = raw.strip()
        if not question:
            logger.debug("session.submit.ignored reason=empty")
            return False
        if self._state.is_awaiting_response:
            logger.debug("session.submit.ignored reason=in_flight")
            return False

        self._generation += 1
        generation = self._generation
        user_message = self._new_message(question, is_user_message=True)
        self._update(
            status=SessionStatus.AWAITING_RESPONSE,
            transcript=self._state.transcript.clear().append(user_message),
            error=None,
            chat_started=True,
            default_prompts_visible=False,
            response_copied=False,
            pending_question="",
        )
        logger.info("session.submit.accepted generation={}", generation)

        result = await self._send(question)
        if generation != self._generation:
            logger.info("session.submit.stale generation={} current={}", generation, self._generation)
            return True

        if result.error is not None:
            logger.warning("session.submit.errored kind={} error={}", result.error.kind, result.error)
            self._update(status=SessionStatus.ERRORED, error=result.error)
            return True

        parsed = self._parse(result.answer or "")
        bot_message = self._new_message(
            parsed.display_text,
            is_user_message=False,
            citations=dedupe_citations(parsed.citations),
            followup_questions=tuple(parsed.followup_questions),
            following_steps=tuple(parsed.following_steps),
        )
        self._update(
            status=SessionStatus.ANSWERED,
            transcript=self._state.transcript.append(bot_message),
            error=None,
        )
        logger.info("session.submit.answered generation={}", generation)
        return True

    def reset_session(self) -> None:
        """Clear the transcript and every flag, back to ``IDLE``."""

        self._generation += 1
        self._set(self._initial_state())
        logger.info("session.reset generation={}", self._generation)

    def copy_last_answer(self) -> bool:
        """Copy the most recent message text; returns False when there is nothing to copy."""

        last = self._state.transcript.last()
        if last is None or self._state.is_awaiting_response:
            return False
        try:
            self._clipboard.copy(last.text)
        except Exception:
            logger.exception("session.copy.failed")
            return False
        self._update(response_copied=True)
        return True

    def toggle_default_prompts_visibility(self) -> None:
        """Show or hide the default prompts; transcript and status are left alone."""

        if self._state.default_prompts_visible:
            self._update(default_prompts_visible=False)
            return
        self._update(default_prompts_visible=self._settings.is_default_prompts_enabled)

    def select_prompt(self, text: str) -> str:
        """Stage a default prompt or follow-up question as the next input."""

        question = text.strip()
        self._update(pending_question=question)
        return question

    async def _on_submit(self, command: SubmitQuestion) -> bool:
        return await self.submit_question(command.text)

    async def _on_reset(self, _command: ResetSession) -> None:
        self.reset_session()

    async def _on_copy(self, _command: CopyLastAnswer) -> bool:
        return self.copy_last_answer()

    async def _on_toggle_prompts(self, _command: ToggleDefaultPrompts) -> None:
        self.toggle_default_prompts_visibility()

    async def _on_select(self, command: SelectPrompt) -> str:
        return self.select_prompt(command.text)

    async def _send(self, question: str) -> DispatchResult:
        try:
            return await self._dispatcher.send(question)
        except DispatchError as exc:
            return DispatchResult(error=exc)
        except Exception as exc:
            logger.exception("session.dispatch.crashed")
            return DispatchResult(error=TransportFailureError(f"dispatcher failed: {exc!s}"))

    def _parse(self, raw_text: str) -> ParsedAnswer:
        try:
            return self._parser.parse(raw_text)
        except Exception:
            logger.exception("session.parse.failed")
            return ParsedAnswer(display_text=raw_text.strip())

    def _new_message(self, text: str, *, is_user_message: bool, **lists: Any) -> Message:
        return Message(
            text=text,
            timestamp=format_timestamp(self._clock()),
            is_user_message=is_user_message,
            **lists,
        )

    def _initial_state(self) -> SessionState:
        enabled = self._settings.is_default_prompts_enabled
        return SessionState(
            status=SessionStatus.IDLE,
            transcript=Transcript(),
            default_prompts_visible=enabled,
            default_prompts=tuple(self._settings.default_prompts) if enabled else (),
        )

    def _update(self, **changes: Any) -> None:
        self._set(dataclasses.replace(self._state, **changes))

    def _set(self, state: SessionState) -> None:
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("session.listener.failed")
