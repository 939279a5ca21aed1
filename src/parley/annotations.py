"""Annotation extraction for raw answer text."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Protocol

from parley.types import Citation

CITATION_PATTERN = re.compile(r"\[([^\[\]]+)\]")
FOLLOWUP_PATTERN = re.compile(r"<<([^<>]+)>>")
FOLLOWUP_HEADING_PATTERN = re.compile(r"(?:next|follow-up)\s+questions\s*:", re.IGNORECASE)
NUMBERED_ITEM_PATTERN = re.compile(r"^\s*\d+[.)]\s+(.+?)\s*$")


@dataclass(frozen=True)
class ParsedAnswer:
    """Display text plus the structured lists pulled out of an answer."""

    display_text: str
    citations: tuple[Citation, ...] = ()
    following_steps: tuple[str, ...] = ()
    followup_questions: tuple[str, ...] = ()


class AnswerParser(Protocol):
    """Contract consumed by the session controller."""

    def parse(self, raw_text: str) -> ParsedAnswer: ...


class AnnotationParser:
    """Regex-based parser for citation, step and follow-up markers.

    - ``[label]`` becomes ``[n]``, one number per distinct label in first-seen order.
    - ``<<question>>`` is removed and collected as a follow-up question.
    - Numbered lines after a lead-in ending in ``:`` are collected as steps.
    """

    def parse(self, raw_text: str) -> ParsedAnswer:
        text, followups = _extract_followups(raw_text)
        text, citations = _extract_citations(text)
        text, steps = _extract_steps(text)
        return ParsedAnswer(
            display_text=_collapse_blank_lines(text),
            citations=citations,
            following_steps=steps,
            followup_questions=followups,
        )


def _extract_followups(text: str) -> tuple[str, tuple[str, ...]]:
    questions = [match.strip() for match in FOLLOWUP_PATTERN.findall(text) if match.strip()]
    if not questions:
        return text, ()
    stripped = FOLLOWUP_PATTERN.sub("", text)
    stripped = FOLLOWUP_HEADING_PATTERN.sub("", stripped)
    return stripped, tuple(questions)


def _extract_citations(text: str) -> tuple[str, tuple[Citation, ...]]:
    refs: dict[str, int] = {}

    def _replace(match: re.Match[str]) -> str:
        label = match.group(1).strip()
        if not label:
            return match.group(0)
        if label not in refs:
            refs[label] = len(refs) + 1
        return f"[{refs[label]}]"

    replaced = CITATION_PATTERN.sub(_replace, text)
    return replaced, tuple(Citation(ref=ref, text=label) for label, ref in refs.items())


def _extract_steps(text: str) -> tuple[str, tuple[str, ...]]:
    kept: list[str] = []
    steps: list[str] = []
    lead_in = False
    in_steps = False
    for line in text.splitlines():
        stripped = line.strip()
        match = NUMBERED_ITEM_PATTERN.match(line)
        if match and (lead_in or in_steps):
            steps.append(match.group(1))
            in_steps = True
            continue
        if not stripped:
            kept.append(line)
            continue
        in_steps = False
        lead_in = stripped.endswith(":")
        kept.append(line)
    return "\n".join(kept), tuple(steps)


def _collapse_blank_lines(text: str) -> str:
    lines = [line.rstrip() for line in text.splitlines()]
    collapsed: list[str] = []
    for line in lines:
        if not line and collapsed and not collapsed[-1]:
            continue
        collapsed.append(line)
    return "\n".join(collapsed).strip()
