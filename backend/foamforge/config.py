"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    anthropic_api_key: str = ""
    foamforge_env: str = "development"
    foamforge_log_level: str = "debug"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Pattern generation: ordered fallback list, best quality first
    pattern_models: list[str] = [
        "claude-sonnet-4-5-20250929",
        "claude-haiku-4-5-20251001",
    ]
    pattern_temperature: float = 0.2
    pattern_max_tokens: int = 8192

    # Chat assistant
    chat_model: str = "claude-haiku-4-5-20251001"
    chat_max_tokens: int = 1024

    # Upper bound for a single model call, in seconds
    model_timeout_s: float = 90.0

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
