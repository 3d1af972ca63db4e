"""Pattern data model: the cut path plus its metadata."""

from __future__ import annotations

import enum
from typing import Literal

import numpy as np
from numpy.typing import NDArray
from pydantic import BaseModel, ConfigDict, Field, field_validator


class Difficulty(str, enum.Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


class Point(BaseModel):
    """A single cut-path coordinate in the 0-100 design square (Y up)."""

    model_config = ConfigDict(frozen=True)

    x: float
    y: float


class Pattern(BaseModel):
    """A named, continuous cut path.

    Frozen: processing steps build a new Pattern via ``with_points`` instead of
    mutating. ``estimated_cut_time`` travels as ``estimatedCutTime`` on the wire.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    points: tuple[Point, ...] = Field(default_factory=tuple)
    description: str = ""
    difficulty: Difficulty = Difficulty.MEDIUM
    estimated_cut_time: str = Field(default="", alias="estimatedCutTime")

    @field_validator("difficulty", mode="before")
    @classmethod
    def _normalize_difficulty(cls, value: object) -> Difficulty:
        if isinstance(value, Difficulty):
            return value
        label = str(value or "").strip().lower()
        for d in Difficulty:
            if d.value.lower() == label:
                return d
        return Difficulty.MEDIUM

    def as_array(self) -> NDArray[np.float64]:
        """Points as an Nx2 float array."""
        if not self.points:
            return np.empty((0, 2))
        return np.array([[p.x, p.y] for p in self.points], dtype=np.float64)

    def with_points(self, points: NDArray[np.float64]) -> Pattern:
        """Copy of this pattern with the given Nx2 array as its path."""
        new_points = tuple(Point(x=float(x), y=float(y)) for x, y in points)
        return self.model_copy(update={"points": new_points})


class ChatMessage(BaseModel):
    role: Literal["user", "model"]
    text: str
