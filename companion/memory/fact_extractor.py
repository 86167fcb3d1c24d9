"""Deterministic extraction of personal facts from a single user message.

No LLM calls. Each rule is a case-insensitive pattern whose alternatives map to one
fact type; rules are independent, so one message can yield several facts
("I'm Sarah and I love jazz" -> name + interest).
"""

from __future__ import annotations

import re

from companion.models import Fact, FactType

FACT_CONFIDENCE = 0.8

# Each entry: (fact_type, compiled_pattern)
# Alternatives are separate capture groups; the first non-empty group of the match wins.
# Non-name values run until the first comma, period, "!" or "?".
_FACT_PATTERNS: list[tuple[FactType, re.Pattern[str]]] = [
    (
        FactType.NAME,
        re.compile(r"my name is (\w+)|i'm (\w+)|call me (\w+)", re.IGNORECASE),
    ),
    (
        FactType.LOCATION,
        re.compile(r"i live in ([^,.!?]+)|i'm from ([^,.!?]+)", re.IGNORECASE),
    ),
    (
        FactType.INTEREST,
        re.compile(r"i love ([^,.!?]+)|i like ([^,.!?]+)|i enjoy ([^,.!?]+)", re.IGNORECASE),
    ),
    (
        FactType.OCCUPATION,
        re.compile(
            r"i work as ([^,.!?]+)|i'm a ([^,.!?]+)|my job is ([^,.!?]+)", re.IGNORECASE
        ),
    ),
    (
        FactType.MOOD,
        re.compile(r"i feel ([^,.!?]+)|i'm feeling ([^,.!?]+)", re.IGNORECASE),
    ),
]


def _first_group(match: re.Match[str]) -> str | None:
    for group in match.groups():
        if group:
            return group
    return None


def extract_facts(message: str) -> list[Fact]:
    """Extract candidate facts from a user message.

    Returns at most one fact per type, in rule order. Captured values are trimmed;
    a value that is blank after trimming is dropped.

    Example:
        extract_facts("I'm Sarah and I love jazz")
        # -> [Fact(type=name, content="Sarah"), Fact(type=interest, content="jazz")]
    """
    facts: list[Fact] = []

    for fact_type, pattern in _FACT_PATTERNS:
        match = pattern.search(message)
        if not match:
            continue
        value = _first_group(match)
        if value is None:
            continue
        content = value.strip()
        if not content:
            continue
        facts.append(
            Fact(
                type=fact_type,
                content=content,
                confidence=FACT_CONFIDENCE,
                source=message,
            )
        )

    return facts
