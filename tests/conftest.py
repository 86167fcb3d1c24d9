from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from companion.config import Settings
from companion.conversation.service import ConversationService
from companion.llm.client import GenerationResult, OllamaClient
from companion.main import app
from companion.memory.history_store import InMemoryHistoryStore
from companion.memory.profile_store import InMemoryProfileStore
from companion.memory.session_store import InMemorySessionStore

TEST_SETTINGS = Settings(
    ollama_base_url="http://localhost:11434",
    ollama_model="test-model",
    model_timeout_seconds=5.0,
    log_file="",
)


@pytest.fixture
def settings() -> Settings:
    return TEST_SETTINGS


@pytest.fixture
def profile_store() -> InMemoryProfileStore:
    return InMemoryProfileStore()


@pytest.fixture
def history_store() -> InMemoryHistoryStore:
    return InMemoryHistoryStore()


@pytest.fixture
def session_store() -> InMemorySessionStore:
    return InMemorySessionStore()


def make_model(reply: str = "Nice to meet you!", confidence: float | None = None) -> MagicMock:
    """Return a mock ModelClient whose generate always returns reply."""
    client = MagicMock()
    client.generate = AsyncMock(return_value=GenerationResult(text=reply, confidence=confidence))
    return client


@pytest.fixture
def model_client() -> MagicMock:
    return make_model()


@pytest.fixture
def service(model_client, profile_store, history_store, session_store) -> ConversationService:
    return ConversationService(
        model_client=model_client,
        profiles=profile_store,
        histories=history_store,
        sessions=session_store,
    )


# --- Sync fixture for TestClient-based integration tests ---


@pytest.fixture
def client(settings: Settings) -> TestClient:
    mock_response = MagicMock()
    mock_response.status_code = 200
    mock_response.raise_for_status = MagicMock()
    mock_response.json.return_value = {"model": "test-model", "response": "Mock reply", "done": True}

    mock_http = AsyncMock()
    mock_http.post = AsyncMock(return_value=mock_response)
    mock_http.get = AsyncMock()

    profile_store = InMemoryProfileStore()
    ollama_client = OllamaClient(
        http_client=mock_http,
        base_url=settings.ollama_base_url,
        model=settings.ollama_model,
    )

    app.state.http_client = mock_http
    app.state.ollama_client = ollama_client
    app.state.profile_store = profile_store
    app.state.conversation_service = ConversationService(
        model_client=ollama_client,
        profiles=profile_store,
        histories=InMemoryHistoryStore(),
        sessions=InMemorySessionStore(),
        model_timeout=settings.model_timeout_seconds,
    )

    return TestClient(app, raise_server_exceptions=False)
