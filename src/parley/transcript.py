"""Immutable transcript snapshots."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING, overload

if TYPE_CHECKING:
    from parley.types import Message


class Transcript:
    """Ordered messages of the current exchange.

    Every mutation returns a new snapshot; existing snapshots never change, so
    observers can compare them by identity.
    """

    __slots__ = ("_messages",)

    def __init__(self, messages: tuple[Message, ...] = ()) -> None:
        self._messages = tuple(messages)

    @property
    def messages(self) -> tuple[Message, ...]:
        return self._messages

    def append(self, message: Message) -> Transcript:
        return Transcript((*self._messages, message))

    def clear(self) -> Transcript:
        if not self._messages:
            return self
        return Transcript()

    def last(self) -> Message | None:
        if not self._messages:
            return None
        return self._messages[-1]

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(self._messages)

    @overload
    def __getitem__(self, index: int) -> Message: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[Message, ...]: ...

    def __getitem__(self, index: int | slice) -> Message | tuple[Message, ...]:
        return self._messages[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Transcript):
            return NotImplemented
        return self._messages == other._messages

    def __hash__(self) -> int:
        return hash(self._messages)

    def __repr__(self) -> str:
        return f"Transcript(messages={len(self._messages)})"
