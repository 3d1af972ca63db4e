"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from foamforge.models.pattern import Pattern


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    procedural_shapes: list[str] = Field(default_factory=list)


class GenerateResponse(BaseModel):
    pattern: Pattern
    svg_path: str
    source: str = "model"  # "procedural" or "model"


class ChatResponse(BaseModel):
    answer: str


class MaterialInfo(BaseModel):
    """Foam reference row; multi-word fields travel in camelCase."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: str
    density: str
    melt_point: str = Field(alias="meltPoint")
    best_for: str = Field(alias="bestFor")
    cutting_speed: str = Field(alias="cuttingSpeed")
    wire_temp: str = Field(alias="wireTemp")
