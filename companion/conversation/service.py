"""ConversationService: the single entry point for one conversation turn.

Turn lifecycle:
    START -> CONTEXT_LOADED -> FACTS_EXTRACTED -> PROMPT_BUILT -> MODEL_CALLED
    -> PERSISTED -> DONE, or FAILED from any step after START.

Any failure is folded into a fixed fallback reply; generate_response never raises.
Writes already made when a later step fails (e.g. recorded facts) are kept.
Turns of the same user run concurrently unless serialize_user_turns is enabled,
in which case a per-user asyncio.Lock is held for the whole turn. Locks live in a
WeakValueDictionary and are released once no turn of that user is in flight.
"""

from __future__ import annotations

import asyncio
import logging
import weakref
from collections.abc import Awaitable
from dataclasses import dataclass
from enum import StrEnum
from typing import TypeVar

from companion.context.persona import DEFAULT_PERSONA, Persona
from companion.context.prompt_builder import build_prompt
from companion.conversation.errors import ConversationError, ModelFailure, StoreFailure
from companion.llm.client import GenerationResult, ModelClient
from companion.memory.fact_extractor import extract_facts
from companion.memory.history_store import HistoryStore
from companion.memory.mood import classify_mood
from companion.memory.profile_store import ProfileStore
from companion.memory.session_store import SessionStore
from companion.models import SessionContext, Turn, UserProfile

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_CONFIDENCE = 0.8
FALLBACK_CONFIDENCE = 0.3
FALLBACK_TEXT = "I'm having trouble thinking right now. Could you try asking me that again?"


class TurnState(StrEnum):
    START = "start"
    CONTEXT_LOADED = "context_loaded"
    FACTS_EXTRACTED = "facts_extracted"
    PROMPT_BUILT = "prompt_built"
    MODEL_CALLED = "model_called"
    PERSISTED = "persisted"
    DONE = "done"
    FAILED = "failed"


@dataclass
class Reply:
    text: str
    confidence: float
    state: TurnState = TurnState.DONE

    @classmethod
    def fallback(cls) -> Reply:
        return cls(text=FALLBACK_TEXT, confidence=FALLBACK_CONFIDENCE, state=TurnState.FAILED)


class ConversationService:
    def __init__(
        self,
        model_client: ModelClient,
        profiles: ProfileStore,
        histories: HistoryStore,
        sessions: SessionStore,
        persona: Persona = DEFAULT_PERSONA,
        recent_history_limit: int = 5,
        model_timeout: float | None = 60.0,
        serialize_user_turns: bool = False,
    ):
        self._model = model_client
        self._profiles = profiles
        self._histories = histories
        self._sessions = sessions
        self._persona = persona
        self._history_limit = recent_history_limit
        self._model_timeout = model_timeout
        self._serialize = serialize_user_turns
        # Held only while a turn is using it, so idle users do not accumulate locks
        self._user_locks: weakref.WeakValueDictionary[str, asyncio.Lock] = (
            weakref.WeakValueDictionary()
        )

    async def generate_response(self, user_id: str, message: str, session_id: str) -> Reply:
        logger.info("Incoming [%s] (session %s): %s", user_id, session_id, message[:80])
        if self._serialize:
            async with self._lock_for(user_id):
                return await self._run_turn(user_id, message, session_id)
        return await self._run_turn(user_id, message, session_id)

    def _lock_for(self, user_id: str) -> asyncio.Lock:
        lock = self._user_locks.get(user_id)
        if lock is None:
            lock = asyncio.Lock()
            self._user_locks[user_id] = lock
        return lock

    async def _run_turn(self, user_id: str, message: str, session_id: str) -> Reply:
        state = TurnState.START
        try:
            profile, history, session = await self._load_context(user_id, session_id)
            state = self._advance(TurnState.CONTEXT_LOADED, user_id)

            facts = extract_facts(message)
            if facts:
                profile = await self._store(
                    "record_facts", self._profiles.record_facts(user_id, facts)
                )
            state = self._advance(TurnState.FACTS_EXTRACTED, user_id)

            prompt = build_prompt(message, profile, history, session, self._persona)
            state = self._advance(TurnState.PROMPT_BUILT, user_id)

            result = await self._call_model(prompt)
            state = self._advance(TurnState.MODEL_CALLED, user_id)

            await self._persist(user_id, session_id, message, result.text)
            state = self._advance(TurnState.PERSISTED, user_id)
        except ConversationError as exc:
            logger.warning("Turn for %s failed after %s: %s", user_id, state, exc)
            return Reply.fallback()
        except Exception:
            logger.exception("Unexpected error in turn for %s after %s", user_id, state)
            return Reply.fallback()

        confidence = result.confidence if result.confidence is not None else DEFAULT_CONFIDENCE
        self._advance(TurnState.DONE, user_id)
        return Reply(text=result.text, confidence=confidence)

    @staticmethod
    def _advance(state: TurnState, user_id: str) -> TurnState:
        logger.debug("Turn for %s -> %s", user_id, state)
        return state

    @staticmethod
    async def _store(operation: str, awaitable: Awaitable[T]) -> T:
        try:
            return await awaitable
        except Exception as exc:
            raise StoreFailure(operation, exc) from exc

    async def _load_context(
        self, user_id: str, session_id: str
    ) -> tuple[UserProfile, list[Turn], SessionContext | None]:
        # Independent reads, fetched in parallel
        profile, history, session = await self._store(
            "load_context",
            asyncio.gather(
                self._profiles.get_or_create_profile(user_id),
                self._histories.recent(user_id, self._history_limit),
                self._sessions.get_session_context(session_id),
            ),
        )
        return profile, history, session

    async def _call_model(self, prompt: str) -> GenerationResult:
        try:
            if self._model_timeout:
                result = await asyncio.wait_for(
                    self._model.generate(prompt), timeout=self._model_timeout
                )
            else:
                result = await self._model.generate(prompt)
        except TimeoutError as exc:
            raise ModelFailure(f"model call timed out after {self._model_timeout}s") from exc
        except Exception as exc:
            raise ModelFailure(f"model call failed: {exc!r}") from exc

        text = getattr(result, "text", None)
        confidence = getattr(result, "confidence", None)
        if not isinstance(text, str) or not text.strip():
            raise ModelFailure(f"malformed model result: {result!r}")
        if confidence is not None and (
            isinstance(confidence, bool)
            or not isinstance(confidence, (int, float))
            or not 0.0 <= confidence <= 1.0
        ):
            raise ModelFailure(f"malformed model confidence: {confidence!r}")
        return GenerationResult(text=text, confidence=confidence)

    async def _persist(self, user_id: str, session_id: str, message: str, response: str) -> None:
        turn = Turn(session_id=session_id, message=message, response=response)
        await self._store("append_turn", self._histories.append_turn(user_id, turn))
        # Single call site for the counter: one increment per persisted turn
        await self._store(
            "increment_conversation_count",
            self._profiles.increment_conversation_count(user_id),
        )

        mood = classify_mood(message)
        if mood is not None:
            await self._store("update_mood", self._sessions.update_mood(session_id, mood))
