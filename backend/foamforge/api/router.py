"""Master API router — mounts all endpoint routers."""

from __future__ import annotations

from fastapi import APIRouter

from foamforge.api import chat, health, materials, patterns

api_router = APIRouter(prefix="/api")

api_router.include_router(health.router)
api_router.include_router(patterns.router)
api_router.include_router(chat.router)
api_router.include_router(materials.router)
