"""Builds the single prompt sent to the model for one conversation turn.

Sections are separated by one blank line. A section with no content is left out
entirely, so the model never sees an empty labelled block.
"""

from __future__ import annotations

from collections.abc import Sequence

from companion.context.persona import Persona
from companion.models import SessionContext, Turn, UserProfile

NEW_PERSON_LINE = "This seems to be a new person you're meeting."


class PromptSections:
    """Ordered prompt sections; empty or None sections are skipped automatically."""

    def __init__(self) -> None:
        self._sections: list[str] = []

    def add(self, content: str | None) -> PromptSections:
        if content:
            self._sections.append(content)
        return self

    def build(self) -> str:
        return "\n\n".join(self._sections)


def _persona_block(persona: Persona) -> str:
    return (
        f"You are {persona.name}. Here's who you are:\n\n"
        f"Core traits: {', '.join(persona.core_traits)}\n"
        f"Speaking style: {', '.join(persona.speaking_style)}\n"
        f"Background: {persona.background}\n\n"
        f"Important: {persona.never_reveal}"
    )


def _facts_block(profile: UserProfile) -> str:
    if not profile.facts:
        return NEW_PERSON_LINE
    bullets = "\n".join(f"- {fact.content}" for fact in profile.facts)
    return (
        f"What you know about this person:\n{bullets}\n\n"
        f"Conversation themes you've discussed: {', '.join(profile.themes)}"
    )


def _history_block(history: Sequence[Turn]) -> str | None:
    if not history:
        return None
    exchanges = "\n\n".join(f"User: {t.message}\nYou: {t.response}" for t in history)
    return f"Recent conversation context:\n{exchanges}"


def _session_block(session: SessionContext | None) -> str | None:
    if session is None:
        return None
    mood = session.mood.value if session.mood else "neutral"
    return f"Current conversation mood/context: {mood}"


def _message_block(message: str, persona: Persona) -> str:
    return (
        f'Current message from user: "{message}"\n\n'
        f"Respond as {persona.name}. Be natural, reference relevant past details if "
        "appropriate, and match their energy. Keep responses conversational "
        "(1-3 sentences typically)."
    )


def build_prompt(
    message: str,
    profile: UserProfile,
    history: Sequence[Turn],
    session: SessionContext | None,
    persona: Persona,
) -> str:
    """Assemble persona, known facts, recent turns, session mood and the message."""
    return (
        PromptSections()
        .add(_persona_block(persona))
        .add(_facts_block(profile))
        .add(_history_block(history))
        .add(_session_block(session))
        .add(_message_block(message, persona))
        .build()
    )
