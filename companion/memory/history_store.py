from __future__ import annotations

from collections import defaultdict, deque
from typing import Protocol

from companion.models import Turn

MAX_TURNS_PER_USER = 50


class HistoryStore(Protocol):
    async def append_turn(self, user_id: str, turn: Turn) -> None: ...

    async def recent(self, user_id: str, limit: int) -> list[Turn]: ...


class InMemoryHistoryStore:
    """Per-user turn history holding at most MAX_TURNS_PER_USER turns (oldest evicted first)."""

    def __init__(self) -> None:
        self._turns: dict[str, deque[Turn]] = defaultdict(
            lambda: deque(maxlen=MAX_TURNS_PER_USER)
        )

    async def append_turn(self, user_id: str, turn: Turn) -> None:
        self._turns[user_id].append(turn)

    async def recent(self, user_id: str, limit: int) -> list[Turn]:
        """Return up to ``limit`` latest turns, oldest first."""
        if limit <= 0 or user_id not in self._turns:
            return []
        turns = list(self._turns[user_id])
        return turns[-limit:]
