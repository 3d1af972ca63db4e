"""Health check + meta endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from foamforge.models.responses import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    from foamforge.engine.procedural import get_registry

    return HealthResponse(
        status="ok",
        version="0.1.0",
        procedural_shapes=[s.id for s in get_registry().all()],
    )


@router.get("/prompts")
async def prompts() -> dict[str, str]:
    from foamforge.llm.prompts import get_all_templates

    return get_all_templates()
