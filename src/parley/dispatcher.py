"""Answer service request dispatcher."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Protocol

import requests
from loguru import logger

from parley.config import RetrievalOptions
from parley.errors import DispatchError, ServiceRejectedError, TransportFailureError

USER_AGENT = "parley/0.1"


@dataclass(frozen=True)
class DispatchResult:
    """Outcome of one answer request; exactly one field is set."""

    answer: str | None = None
    error: DispatchError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class AnswerDispatcher(Protocol):
    """Contract consumed by the session controller."""

    async def send(self, question: str) -> DispatchResult: ...


def build_payload(question: str, options: RetrievalOptions) -> dict[str, Any]:
    return {
        "history": [{"user": question}],
        "approach": options.approach,
        "overrides": options.overrides(),
    }


class AnswerRequestDispatcher:
    """Single-attempt delivery of one question to the answer service."""

    def __init__(
        self,
        url: str,
        *,
        options: RetrievalOptions | None = None,
        timeout_seconds: float | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self._url = url
        self._options = options or RetrievalOptions()
        self._timeout_seconds = timeout_seconds
        self._session = session or requests.Session()
        self._session.headers.update({"Content-Type": "application/json", "User-Agent": USER_AGENT})

    @property
    def url(self) -> str:
        return self._url

    async def send(self, question: str) -> DispatchResult:
        logger.info("dispatcher.send.start url={} chars={}", self._url, len(question))
        try:
            answer = await asyncio.to_thread(self._post, question)
        except DispatchError as exc:
            logger.warning("dispatcher.send.failed kind={} error={}", exc.kind, exc)
            return DispatchResult(error=exc)
        logger.info("dispatcher.send.finish chars={}", len(answer))
        return DispatchResult(answer=answer)

    def _post(self, question: str) -> str:
        payload = build_payload(question, self._options)
        try:
            response = self._session.post(self._url, json=payload, timeout=self._timeout_seconds)
        except requests.RequestException as exc:
            raise TransportFailureError(f"request failed: {exc!s}") from exc

        if not 200 <= response.status_code < 300:
            raise ServiceRejectedError(response.status_code, response.reason or "")

        try:
            data = response.json()
        except ValueError as exc:
            raise TransportFailureError(f"invalid json response: {exc!s}") from exc

        if not isinstance(data, dict):
            raise TransportFailureError("invalid response: expected a json object")
        answer = data.get("answer")
        if not isinstance(answer, str):
            raise TransportFailureError("invalid response: missing answer")
        return answer
