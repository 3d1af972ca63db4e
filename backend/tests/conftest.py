"""Shared test fixtures: reference paths and a scripted model client."""

from __future__ import annotations

import json
import math

import numpy as np
import pytest

from foamforge.models.pattern import ChatMessage

# Bridge seam of the letter-O fixture: outer trace enters/leaves at BRIDGE_OUTER,
# the hole is cut starting and ending at BRIDGE_INNER.
BRIDGE_OUTER = (50.0, 10.0)
BRIDGE_INNER = (50.0, 25.0)


def octagon_points(n: int = 200, radius: float = 40.0) -> np.ndarray:
    """Regular octagon, edges densely resampled (open ring, n points)."""
    per_edge = n // 8
    corners = [
        (50 + radius * math.cos(2 * math.pi * i / 8), 50 + radius * math.sin(2 * math.pi * i / 8))
        for i in range(8)
    ]
    pts = []
    for i in range(8):
        (ax, ay), (bx, by) = corners[i], corners[(i + 1) % 8]
        for s in range(per_edge):
            t = s / per_edge
            pts.append((ax + (bx - ax) * t, ay + (by - ay) * t))
    return np.array(pts, dtype=np.float64)


def letter_o_points() -> np.ndarray:
    """300-point closed 'O': outer ring, bridge in, hole, bridge out (Y-up)."""
    pts = []
    for i in range(185):
        a = -math.pi / 2 + 2 * math.pi * i / 185
        pts.append((50 + 40 * math.cos(a), 50 + 40 * math.sin(a)))
    pts.append(BRIDGE_OUTER)
    for j in range(112):
        a = -math.pi / 2 - 2 * math.pi * j / 112
        pts.append((50 + 25 * math.cos(a), 50 + 25 * math.sin(a)))
    pts.append(BRIDGE_INNER)
    pts.append(BRIDGE_OUTER)
    return np.array(pts, dtype=np.float64)


def y_down_points(bottom_count: int = 2) -> np.ndarray:
    """Frame with 30 points hugging y=98 and ``bottom_count`` hugging y=2.

    Padded with side points to >= 220 so post-processing does not smooth.
    """
    pts = [(10 + 80 * i / 29, 98.0) for i in range(30)]
    pts += [(95.0, 80 - 60 * i / 99) for i in range(100)]
    if bottom_count == 2:
        pts += [(90.0, 2.0), (10.0, 2.0)]
    else:
        pts += [(90 - 80 * i / (bottom_count - 1), 2.0) for i in range(bottom_count)]
    pts += [(5.0, 20 + 60 * i / 99) for i in range(100)]
    return np.array(pts, dtype=np.float64)


def model_output(points: np.ndarray, name: str = "Test Pattern", **extra) -> str:
    """JSON text shaped like the structured model response."""
    data = {
        "name": name,
        "points": [{"x": float(x), "y": float(y)} for x, y in points],
        "description": "test",
        "difficulty": "Medium",
        "estimatedCutTime": "5 mins",
    }
    data.update(extra)
    return json.dumps(data)


class FakeModelClient:
    """Scripted ModelClient.

    ``responses`` are consumed one per ``structured_generate`` call: strings
    are returned, exceptions raised. ``chunks`` feed ``stream_chat``.
    """

    def __init__(self, responses=None, chunks=None, stream_error: BaseException | None = None) -> None:
        self.responses = list(responses or [])
        self.chunks = list(chunks or [])
        self.stream_error = stream_error
        self.calls: list[tuple[str, str]] = []
        self.chat_calls: list[tuple[str, str, list[ChatMessage], str]] = []

    async def structured_generate(self, model_id, prompt, schema, sampling, system_instruction=""):
        self.calls.append((model_id, prompt))
        if not self.responses:
            raise AssertionError("FakeModelClient ran out of scripted responses")
        item = self.responses.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item

    async def stream_chat(self, model_id, system_instruction, history, message):
        self.chat_calls.append((model_id, system_instruction, list(history), message))
        for chunk in self.chunks:
            yield chunk
        if self.stream_error is not None:
            raise self.stream_error

    @property
    def models_called(self) -> list[str]:
        return [model_id for model_id, _ in self.calls]


@pytest.fixture
def octagon() -> np.ndarray:
    return octagon_points()


@pytest.fixture
def letter_o() -> np.ndarray:
    return letter_o_points()


@pytest.fixture
def heart() -> np.ndarray:
    from foamforge.engine.procedural import try_procedural

    return try_procedural("heart").as_array()
