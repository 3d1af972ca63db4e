"""Model capability: structured generation + streaming chat over LangChain ChatAnthropic.

The orchestrator and the chat endpoints depend only on the ``ModelClient``
protocol; tests substitute a fake.
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import AsyncIterator, Sequence
from dataclasses import dataclass
from typing import Any, Protocol

from foamforge.config import Settings, settings as _settings
from foamforge.errors import ConfigurationError, ModelError
from foamforge.models.pattern import ChatMessage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SamplingConfig:
    temperature: float = 0.2
    max_output_tokens: int = 8192


class ModelClient(Protocol):
    async def structured_generate(
        self,
        model_id: str,
        prompt: str,
        schema: dict[str, Any],
        sampling: SamplingConfig,
        system_instruction: str = "",
    ) -> str: ...

    def stream_chat(
        self,
        model_id: str,
        system_instruction: str,
        history: Sequence[ChatMessage],
        message: str,
    ) -> AsyncIterator[str]: ...


def _content_text(content: Any) -> str:
    """Flatten LangChain message content (str or list of blocks) to text."""
    if isinstance(content, str):
        return content
    parts: list[str] = []
    for block in content or []:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
    return "".join(parts)


def _to_langchain_history(history: Sequence[ChatMessage]) -> list:
    from langchain_core.messages import AIMessage, HumanMessage

    messages: list = []
    for msg in history:
        if msg.role == "user":
            messages.append(HumanMessage(content=msg.text))
        elif msg.role == "model":
            messages.append(AIMessage(content=msg.text))
    return messages


class AnthropicModelClient:
    """ModelClient backed by ``langchain_anthropic.ChatAnthropic``."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or _settings

    def _require_key(self) -> str:
        if not self.settings.anthropic_api_key:
            raise ConfigurationError("LLM not configured: set ANTHROPIC_API_KEY in .env")
        return self.settings.anthropic_api_key

    def _llm(self, api_key: str, model_id: str, temperature: float | None, max_tokens: int):
        from langchain_anthropic import ChatAnthropic

        kwargs: dict[str, Any] = {
            "model": model_id,
            "api_key": api_key,
            "max_tokens": max_tokens,
            "timeout": self.settings.model_timeout_s,
        }
        if temperature is not None:
            kwargs["temperature"] = temperature
        return ChatAnthropic(**kwargs)

    async def structured_generate(
        self,
        model_id: str,
        prompt: str,
        schema: dict[str, Any],
        sampling: SamplingConfig,
        system_instruction: str = "",
    ) -> str:
        from langchain_core.messages import HumanMessage, SystemMessage

        system = (
            f"{system_instruction}\n\n"
            "Respond with a single JSON object that validates against this JSON schema. "
            "All fields are required.\n"
            f"{json.dumps(schema)}"
        ).strip()
        messages = [SystemMessage(content=system), HumanMessage(content=prompt)]

        api_key = self._require_key()
        try:
            llm = self._llm(api_key, model_id, sampling.temperature, sampling.max_output_tokens)
            response = await asyncio.wait_for(llm.ainvoke(messages), timeout=self.settings.model_timeout_s)
        except asyncio.TimeoutError as e:
            raise ModelError(model_id, f"timed out after {self.settings.model_timeout_s:.0f}s") from e
        except Exception as e:
            raise ModelError(model_id, str(e)) from e

        text = _content_text(response.content)
        if not text:
            raise ModelError(model_id, "No response from model")
        return text

    async def stream_chat(
        self,
        model_id: str,
        system_instruction: str,
        history: Sequence[ChatMessage],
        message: str,
    ) -> AsyncIterator[str]:
        from langchain_core.messages import HumanMessage, SystemMessage

        messages: list = [SystemMessage(content=system_instruction)]
        messages.extend(_to_langchain_history(history))
        messages.append(HumanMessage(content=message))

        api_key = self._require_key()
        try:
            llm = self._llm(api_key, model_id, None, self.settings.chat_max_tokens)
            async for chunk in llm.astream(messages):
                text = _content_text(chunk.content)
                if text:
                    yield text
        except Exception as e:
            raise ModelError(model_id, str(e)) from e
