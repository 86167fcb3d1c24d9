from __future__ import annotations

from typing import Protocol

from companion.models import Mood, SessionContext


class SessionStore(Protocol):
    async def get_session_context(self, session_id: str) -> SessionContext | None: ...

    async def update_mood(self, session_id: str, mood: Mood) -> None: ...


class InMemorySessionStore:
    def __init__(self) -> None:
        self._sessions: dict[str, SessionContext] = {}

    async def get_session_context(self, session_id: str) -> SessionContext | None:
        context = self._sessions.get(session_id)
        return context.model_copy() if context is not None else None

    async def update_mood(self, session_id: str, mood: Mood) -> None:
        context = self._sessions.setdefault(session_id, SessionContext())
        context.mood = mood
