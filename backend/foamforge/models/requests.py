"""API request models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from foamforge.models.pattern import ChatMessage, Pattern


class GenerateRequest(BaseModel):
    prompt: str = Field(..., min_length=1, description="Shape description, e.g. 'a heart' or 'the letter O'")


class SvgExportRequest(BaseModel):
    pattern: Pattern = Field(..., description="Pattern to serialize as an SVG download")


class ChatRequest(BaseModel):
    message: str = Field(..., min_length=1, description="User's new message")
    history: list[ChatMessage] = Field(
        default_factory=list,
        description="Prior turns, oldest first",
    )
