"""FastAPI dependency injection."""

from __future__ import annotations

from fastapi import Depends

from foamforge.config import Settings, settings
from foamforge.engine.orchestrator import PatternGenerator
from foamforge.llm.client import AnthropicModelClient, ModelClient


def get_settings() -> Settings:
    return settings


def get_model_client(cfg: Settings = Depends(get_settings)) -> ModelClient:
    return AnthropicModelClient(cfg)


def get_generator(
    client: ModelClient = Depends(get_model_client),
    cfg: Settings = Depends(get_settings),
) -> PatternGenerator:
    return PatternGenerator(client, settings=cfg)
