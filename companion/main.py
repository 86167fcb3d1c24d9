import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from companion.chat.router import router as chat_router
from companion.config import Settings
from companion.conversation.service import ConversationService
from companion.health.router import router as health_router
from companion.llm.client import OllamaClient
from companion.logging_config import configure_logging
from companion.memory.history_store import InMemoryHistoryStore
from companion.memory.profile_store import InMemoryProfileStore
from companion.memory.session_store import InMemorySessionStore

logger = logging.getLogger(__name__)

settings = Settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(
        level=settings.log_level, json_format=settings.log_json, log_file=settings.log_file
    )

    http_client = httpx.AsyncClient(
        timeout=httpx.Timeout(settings.model_timeout_seconds, connect=10.0)
    )

    # Volatile, process-lifetime stores
    profile_store = InMemoryProfileStore()
    history_store = InMemoryHistoryStore()
    session_store = InMemorySessionStore()

    app.state.http_client = http_client
    app.state.ollama_client = OllamaClient(
        http_client=http_client,
        base_url=settings.ollama_base_url,
        model=settings.ollama_model,
    )
    app.state.profile_store = profile_store
    app.state.conversation_service = ConversationService(
        model_client=app.state.ollama_client,
        profiles=profile_store,
        histories=history_store,
        sessions=session_store,
        recent_history_limit=settings.recent_history_limit,
        model_timeout=settings.model_timeout_seconds,
        serialize_user_turns=settings.serialize_user_turns,
    )
    logger.info("Companion service started (model=%s)", settings.ollama_model)

    yield

    await http_client.aclose()


app = FastAPI(title="Companion", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(health_router)
app.include_router(chat_router)
