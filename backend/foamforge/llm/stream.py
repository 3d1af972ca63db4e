"""Volt chat: ordered text increments, plus their Server-Sent Events framing."""

from __future__ import annotations

import json
import logging
from collections.abc import AsyncGenerator, Sequence

from foamforge.config import Settings, settings as _settings
from foamforge.llm.client import ModelClient
from foamforge.llm.model_router import get_model_for_task
from foamforge.llm.prompts import CHAT_FAILURE_MESSAGE, CHAT_SYSTEM_INSTRUCTION
from foamforge.models.pattern import ChatMessage

logger = logging.getLogger(__name__)


def _sse(event: str, payload: dict) -> str:
    return f"event: {event}\ndata: {json.dumps(payload)}\n\n"


def stream_chat_increments(
    client: ModelClient,
    history: Sequence[ChatMessage],
    message: str,
    settings: Settings | None = None,
):
    """Text increments from the chat model, in arrival order."""
    model_id = get_model_for_task("chat", settings or _settings)
    return client.stream_chat(model_id, CHAT_SYSTEM_INSTRUCTION, history, message)


async def get_chat_response(
    client: ModelClient,
    history: Sequence[ChatMessage],
    message: str,
    settings: Settings | None = None,
) -> str:
    """Whole chat answer (increments concatenated in order)."""
    parts: list[str] = []
    async for text in stream_chat_increments(client, history, message, settings):
        parts.append(text)
    return "".join(parts)


async def stream_chat_response(
    client: ModelClient,
    history: Sequence[ChatMessage],
    message: str,
    settings: Settings | None = None,
) -> AsyncGenerator[str, None]:
    """Stream SSE events: one ``response`` per increment, then ``done``.

    Failures are logged and reach the client as one ``error`` event with
    the friendly failure text, never the provider error. The stream still
    ends with ``done`` so the consumer can stop its spinner.
    """
    try:
        async for text in stream_chat_increments(client, history, message, settings):
            yield _sse("response", {"type": "response", "content": text})
    except Exception as e:
        logger.warning("Chat stream failed: %s", e)
        yield _sse("error", {"type": "error", "content": CHAT_FAILURE_MESSAGE})

    yield _sse("done", {"type": "done"})
