from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def utcnow() -> datetime:
    return datetime.now(UTC)


class FactType(StrEnum):
    NAME = "name"
    LOCATION = "location"
    INTEREST = "interest"
    OCCUPATION = "occupation"
    MOOD = "mood"


class Mood(StrEnum):
    HAPPY = "happy"
    SAD = "sad"
    ANGRY = "angry"
    CURIOUS = "curious"


class Fact(BaseModel):
    type: FactType
    content: str
    confidence: float = Field(ge=0.0, le=1.0)
    source: str  # verbatim message the fact was extracted from
    timestamp: datetime = Field(default_factory=utcnow)

    model_config = ConfigDict(frozen=True)

    @property
    def dedup_key(self) -> tuple[FactType, str]:
        return (self.type, self.content.lower())


class UserProfile(BaseModel):
    id: str
    facts: list[Fact] = Field(default_factory=list)
    themes: list[str] = Field(default_factory=list)
    preferences: dict[str, Any] = Field(default_factory=dict)
    conversation_count: int = Field(default=0, ge=0)
    first_seen: datetime = Field(default_factory=utcnow)
    last_seen: datetime = Field(default_factory=utcnow)

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Turn(BaseModel):
    session_id: str
    message: str
    response: str
    timestamp: datetime = Field(default_factory=utcnow)

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class SessionContext(BaseModel):
    mood: Mood | None = None


class ChatRequest(BaseModel):
    user_id: str | None = None
    message: str | None = None
    session_id: str | None = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ChatReply(BaseModel):
    response: str
    user_id: str
    session_id: str
    timestamp: datetime

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ModelCheck(BaseModel):
    available: bool


class HealthResponse(BaseModel):
    status: str
    checks: ModelCheck
