"""Tolerant JSON extraction for near-valid model output.

The repair chain is an ordered tuple of pure text stages. Each stage maps one
candidate string to zero or more new candidates; every candidate is tried
with ``_try_parse`` (parse-or-None) before the chain moves on. Stages only
ever see the candidates produced by the stage before them, so each stage can
be tested on its own.
"""

from __future__ import annotations

import json
import logging
import math
import re
from typing import Any, Callable

from foamforge.errors import ParseError
from foamforge.models.pattern import Pattern

logger = logging.getLogger(__name__)

PREVIEW_CHARS = 300

_FENCE_OPEN = re.compile(r"^\s*```(?:json|JSON)?[ \t]*\n?")
_FENCE_CLOSE = re.compile(r"\n?```\s*$")
_TRAILING_COMMA = re.compile(r",\s*([}\]])")
_MISSING_COMMA = re.compile(r"([}\]])\s*([{\[])")

Stage = Callable[[str], list[str]]


def strip_code_fences(text: str) -> list[str]:
    stripped = _FENCE_OPEN.sub("", text.strip())
    stripped = _FENCE_CLOSE.sub("", stripped)
    return [stripped.strip()]


def direct(text: str) -> list[str]:
    return [text]


def extract_braces(text: str) -> list[str]:
    """Substring from the first '{' to the last '}' (drops prose around JSON)."""
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        return []
    return [text[start : end + 1]]


def remove_trailing_commas(text: str) -> list[str]:
    fixed = _TRAILING_COMMA.sub(r"\1", text)
    return [fixed] if fixed != text else []


def insert_missing_commas(text: str) -> list[str]:
    """``}{`` -> ``},{`` and friends; wraps the result in [] if it became a sequence."""
    fixed = _MISSING_COMMA.sub(r"\1,\2", text)
    if fixed == text:
        return []
    return [fixed, f"[{fixed}]"]


REPAIR_STAGES: tuple[tuple[str, Stage], ...] = (
    ("strip_code_fences", strip_code_fences),
    ("direct", direct),
    ("extract_braces", extract_braces),
    ("remove_trailing_commas", remove_trailing_commas),
    ("insert_missing_commas", insert_missing_commas),
)


def _try_parse(text: str) -> tuple[Any, str | None]:
    """Return (value, None) on success or (None, error message)."""
    try:
        return json.loads(text), None
    except json.JSONDecodeError as e:
        return None, str(e)


def _preview(text: str) -> str:
    if len(text) <= PREVIEW_CHARS:
        return text
    return text[: PREVIEW_CHARS - 3] + "..."


def parse_model_json(raw: str) -> Any:
    """Parse model output, escalating through the repair stages.

    Candidates accumulate across stages: a stage that yields nothing new
    (e.g. no trailing commas to remove) leaves the previous candidates in
    play for the next stage. Raises ParseError with the last decode error
    and a preview of the text it was decoding.
    """
    if raw is None or not raw.strip():
        raise ParseError("Empty model response")

    candidates = [raw]
    last_error = "no candidate produced"
    last_text = raw

    for stage_name, stage in REPAIR_STAGES:
        produced: list[str] = []
        for candidate in candidates:
            for text in stage(candidate):
                value, error = _try_parse(text)
                if error is None:
                    if stage_name not in ("strip_code_fences", "direct"):
                        logger.debug("Model JSON repaired by stage %s", stage_name)
                    return value
                last_error = error
                last_text = text
                produced.append(text)
        if produced:
            candidates = produced

    raise ParseError(f"Could not parse model JSON: {last_error}", preview=_preview(last_text))


def _coerce_coord(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError, OverflowError):
        return math.nan


def _coerce_points(raw_points: Any) -> list[dict[str, float]]:
    """Accept {x, y} objects or [x, y] pairs; unusable coordinates become NaN."""
    if not isinstance(raw_points, list):
        raise ParseError("'points' is not a list")
    points: list[dict[str, float]] = []
    for item in raw_points:
        if isinstance(item, dict):
            points.append({"x": _coerce_coord(item.get("x")), "y": _coerce_coord(item.get("y"))})
        elif isinstance(item, (list, tuple)) and len(item) >= 2:
            points.append({"x": _coerce_coord(item[0]), "y": _coerce_coord(item[1])})
    return points


def coerce_pattern(value: Any) -> Pattern:
    """Turn parsed model JSON into a Pattern.

    A list (e.g. from repaired concatenated objects) contributes its first
    object carrying a ``points`` field.
    """
    if isinstance(value, list):
        value = next((v for v in value if isinstance(v, dict) and "points" in v), None)
    if not isinstance(value, dict):
        raise ParseError("Model JSON is not a pattern object")
    if "points" not in value:
        raise ParseError("Model JSON has no 'points' field")

    return Pattern(
        name=str(value.get("name") or "Untitled Pattern"),
        points=_coerce_points(value["points"]),
        description=str(value.get("description") or ""),
        difficulty=value.get("difficulty"),
        estimated_cut_time=str(value.get("estimatedCutTime") or value.get("estimated_cut_time") or ""),
    )


def parse_pattern(raw: str) -> Pattern:
    return coerce_pattern(parse_model_json(raw))
