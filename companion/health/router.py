from fastapi import APIRouter, Request

from companion.dependencies import get_ollama_client
from companion.models import HealthResponse, ModelCheck

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(request: Request) -> HealthResponse:
    model_ok = await get_ollama_client(request).is_available()
    return HealthResponse(
        status="ok" if model_ok else "degraded",
        checks=ModelCheck(available=model_ok),
    )
