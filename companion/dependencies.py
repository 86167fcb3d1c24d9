from fastapi import Request

from companion.conversation.service import ConversationService
from companion.llm.client import OllamaClient
from companion.memory.profile_store import ProfileStore


def get_ollama_client(request: Request) -> OllamaClient:
    return request.app.state.ollama_client


def get_conversation_service(request: Request) -> ConversationService:
    return request.app.state.conversation_service


def get_profile_store(request: Request) -> ProfileStore:
    return request.app.state.profile_store
