from __future__ import annotations

import logging
import uuid

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from companion.dependencies import get_conversation_service, get_profile_store
from companion.models import ChatReply, ChatRequest, utcnow

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


@router.post("/chat")
async def chat(request: Request, body: ChatRequest) -> JSONResponse:
    if not body.user_id or not body.message:
        return JSONResponse(
            status_code=400, content={"error": "userId and message are required"}
        )

    session_id = body.session_id or str(uuid.uuid4())
    service = get_conversation_service(request)
    try:
        reply = await service.generate_response(body.user_id, body.message, session_id)
    except Exception:
        logger.exception("Chat error for %s", body.user_id)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    payload = ChatReply(
        response=reply.text,
        user_id=body.user_id,
        session_id=session_id,
        timestamp=utcnow(),
    )
    return JSONResponse(content=payload.model_dump(mode="json", by_alias=True))


@router.get("/user/{user_id}/profile")
async def get_profile(request: Request, user_id: str) -> JSONResponse:
    try:
        profile = await get_profile_store(request).get_or_create_profile(user_id)
    except Exception:
        logger.exception("Profile error for %s", user_id)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})
    return JSONResponse(content=profile.model_dump(mode="json", by_alias=True))
