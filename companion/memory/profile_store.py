from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Protocol

from companion.models import Fact, FactType, UserProfile, utcnow

logger = logging.getLogger(__name__)


class ProfileStore(Protocol):
    async def get_or_create_profile(self, user_id: str) -> UserProfile: ...

    async def record_facts(self, user_id: str, facts: Sequence[Fact]) -> UserProfile: ...

    async def increment_conversation_count(self, user_id: str) -> None: ...


class InMemoryProfileStore:
    """Process-lifetime profile storage keyed by user id.

    Profiles are created lazily on first reference. Callers always receive a
    deep copy; the stored profile is only mutated through this class.
    """

    def __init__(self) -> None:
        self._profiles: dict[str, UserProfile] = {}

    def _touch(self, user_id: str) -> UserProfile:
        profile = self._profiles.get(user_id)
        if profile is None:
            profile = UserProfile(id=user_id)
            self._profiles[user_id] = profile
            logger.info("Created profile for user %s", user_id)
        else:
            profile.last_seen = utcnow()
        return profile

    async def get_or_create_profile(self, user_id: str) -> UserProfile:
        return self._touch(user_id).model_copy(deep=True)

    async def record_facts(self, user_id: str, facts: Sequence[Fact]) -> UserProfile:
        """Append facts not already known, keeping themes in sync with interests.

        Identity is (type, lower-cased content); the first-seen casing is kept.
        """
        profile = self._touch(user_id)
        known = {f.dedup_key for f in profile.facts}

        added = 0
        for fact in facts:
            if fact.dedup_key in known:
                continue
            profile.facts.append(fact)
            known.add(fact.dedup_key)
            added += 1
            if fact.type == FactType.INTEREST and fact.content not in profile.themes:
                profile.themes.append(fact.content)

        if added:
            logger.debug("Recorded %d new fact(s) for user %s", added, user_id)
        return profile.model_copy(deep=True)

    async def increment_conversation_count(self, user_id: str) -> None:
        profile = self._touch(user_id)
        profile.conversation_count += 1
