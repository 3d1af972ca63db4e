"""Procedural shape library: exact parametric paths for well-known shapes.

Usage:
    @procedural_shape(id="heart", keywords=("heart",), name="Heart Silhouette")
    def heart(n_samples: int) -> NDArray[np.float64]:
        ...

A generator returns raw (unnormalized, open) samples in Cartesian Y-up
space. The library normalizes them into the design square and closes the
ring. Adding a shape = one decorated function. The orchestrator only calls
``try_procedural``.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Callable

import numpy as np
from numpy.typing import NDArray

from foamforge.models.pattern import Difficulty, Pattern
from foamforge.utils.geometry import close_ring, normalize_to_box

logger = logging.getLogger(__name__)

SAMPLES = 600
PADDING = 6.0


@dataclass
class ProceduralShape:
    id: str
    fn: Callable[[int], NDArray[np.float64]]
    keywords: tuple[str, ...] = ()
    name: str = ""
    description: str = ""
    difficulty: Difficulty = Difficulty.EASY
    estimated_cut_time: str = "2 mins"
    whole_word: bool = False
    samples: int = SAMPLES
    _patterns: list[re.Pattern[str]] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        for kw in self.keywords:
            escaped = re.escape(kw.lower())
            if self.whole_word:
                escaped = rf"\b{escaped}\b"
            self._patterns.append(re.compile(escaped))

    def matches(self, prompt: str) -> bool:
        text = prompt.lower()
        return any(p.search(text) for p in self._patterns)

    def build(self) -> Pattern:
        raw = np.asarray(self.fn(self.samples), dtype=np.float64)
        points = close_ring(normalize_to_box(raw, padding=PADDING))
        return Pattern(
            name=self.name or self.id.title(),
            description=self.description,
            difficulty=self.difficulty,
            estimated_cut_time=self.estimated_cut_time,
        ).with_points(points)


class ProceduralRegistry:
    """Ordered keyword -> generator table. First match wins."""

    def __init__(self) -> None:
        self._shapes: dict[str, ProceduralShape] = {}

    def register(self, shape: ProceduralShape) -> None:
        if shape.id in self._shapes:
            raise ValueError(f"Duplicate procedural shape ID: {shape.id}")
        self._shapes[shape.id] = shape
        logger.debug("Registered procedural shape %s %s", shape.id, shape.keywords)

    def all(self) -> list[ProceduralShape]:
        return list(self._shapes.values())

    def match(self, prompt: str) -> ProceduralShape | None:
        for shape in self._shapes.values():
            if shape.matches(prompt):
                return shape
        return None


# Module-level singleton
_registry = ProceduralRegistry()


def get_registry() -> ProceduralRegistry:
    return _registry


def procedural_shape(
    *,
    id: str,
    keywords: tuple[str, ...],
    name: str = "",
    description: str = "",
    difficulty: Difficulty = Difficulty.EASY,
    estimated_cut_time: str = "2 mins",
    whole_word: bool = False,
):
    """Decorator to register a procedural shape generator."""

    def decorator(fn: Callable[[int], NDArray[np.float64]]):
        _registry.register(
            ProceduralShape(
                id=id,
                fn=fn,
                keywords=keywords,
                name=name,
                description=description,
                difficulty=difficulty,
                estimated_cut_time=estimated_cut_time,
                whole_word=whole_word,
            )
        )
        return fn

    return decorator


def try_procedural(prompt: str, registry: ProceduralRegistry | None = None) -> Pattern | None:
    """Return the procedural pattern for the first matching shape, or None."""
    shape = (registry or _registry).match(prompt)
    if shape is None:
        return None
    logger.info("Procedural match: %s", shape.id)
    return shape.build()


# --- Shapes ---


@procedural_shape(
    id="heart",
    keywords=("heart",),
    name="Heart Silhouette",
    description="Classic two-lobed heart. Start at the top notch and cut clockwise.",
    difficulty=Difficulty.EASY,
    estimated_cut_time="3 mins",
)
def heart(n_samples: int) -> NDArray[np.float64]:
    t = np.linspace(0.0, 2 * np.pi, n_samples, endpoint=False)
    x = 16 * np.sin(t) ** 3
    y = 13 * np.cos(t) - 5 * np.cos(2 * t) - 2 * np.cos(3 * t) - np.cos(4 * t)
    return np.column_stack([x, y])


@procedural_shape(
    id="circle",
    keywords=("circle", "disc", "disk"),
    name="Circle",
    description="Plain round disc. Keep the feed rate constant for an even kerf.",
    difficulty=Difficulty.EASY,
    estimated_cut_time="2 mins",
    whole_word=True,
)
def circle(n_samples: int) -> NDArray[np.float64]:
    t = np.linspace(0.0, 2 * np.pi, n_samples, endpoint=False)
    return np.column_stack([np.cos(t), np.sin(t)])


@procedural_shape(
    id="star",
    keywords=("star",),
    name="Five-Point Star",
    description="Five-pointed star. Slow down at the tips so the wire does not drag.",
    difficulty=Difficulty.MEDIUM,
    estimated_cut_time="4 mins",
    whole_word=True,
)
def star(n_samples: int) -> NDArray[np.float64]:
    # 10 alternating outer/inner vertices, point up, edges densely resampled
    angles = np.pi / 2 + np.arange(10) * np.pi / 5
    radii = np.where(np.arange(10) % 2 == 0, 1.0, 0.382)
    corners = np.column_stack([radii * np.cos(angles), radii * np.sin(angles)])
    per_edge = max(1, n_samples // 10)
    s = np.linspace(0.0, 1.0, per_edge, endpoint=False)[:, None]
    edges = [a + s * (b - a) for a, b in zip(corners, np.roll(corners, -1, axis=0))]
    return np.vstack(edges)
