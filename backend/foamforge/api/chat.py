"""POST /api/chat — Volt foam-cutting assistant (standard + streaming)."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import StreamingResponse

from foamforge.config import Settings
from foamforge.dependencies import get_model_client, get_settings
from foamforge.errors import ConfigurationError, ModelError
from foamforge.llm.client import ModelClient
from foamforge.llm.prompts import CHAT_FAILURE_MESSAGE
from foamforge.models.requests import ChatRequest
from foamforge.models.responses import ChatResponse

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/chat", response_model=ChatResponse)
async def chat(
    req: ChatRequest,
    client: ModelClient = Depends(get_model_client),
    cfg: Settings = Depends(get_settings),
) -> ChatResponse:
    from foamforge.llm.stream import get_chat_response

    try:
        answer = await get_chat_response(client, req.history, req.message, cfg)
    except ConfigurationError as e:
        raise HTTPException(status_code=503, detail=str(e)) from e
    except ModelError as e:
        logger.warning("Chat failed: %s", e)
        raise HTTPException(status_code=502, detail=CHAT_FAILURE_MESSAGE) from e

    return ChatResponse(answer=answer)


@router.post("/chat/stream")
async def chat_stream(
    req: ChatRequest,
    client: ModelClient = Depends(get_model_client),
    cfg: Settings = Depends(get_settings),
) -> StreamingResponse:
    from foamforge.llm.stream import stream_chat_response

    return StreamingResponse(
        stream_chat_response(client, req.history, req.message, cfg),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )
