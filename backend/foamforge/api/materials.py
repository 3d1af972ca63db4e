"""GET /api/materials — foam material reference."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from foamforge.data.materials import MATERIALS, get_material
from foamforge.models.responses import MaterialInfo

router = APIRouter(prefix="/materials")


@router.get("", response_model=list[MaterialInfo])
async def list_materials() -> list[MaterialInfo]:
    return list(MATERIALS)


@router.get("/{material_id}", response_model=MaterialInfo)
async def material(material_id: str) -> MaterialInfo:
    info = get_material(material_id)
    if info is None:
        raise HTTPException(status_code=404, detail=f"Unknown material: {material_id}")
    return info
