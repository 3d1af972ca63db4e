"""Task -> model selection. Pattern generation walks an ordered fallback list."""

from __future__ import annotations

from foamforge.config import Settings, settings as _settings


def get_models_for_task(task: str, settings: Settings | None = None) -> list[str]:
    """Ordered model IDs for a task, highest quality first."""
    cfg = settings or _settings
    if task == "pattern":
        return list(cfg.pattern_models)
    return [cfg.chat_model]


def get_model_for_task(task: str, settings: Settings | None = None) -> str:
    return get_models_for_task(task, settings)[0]
