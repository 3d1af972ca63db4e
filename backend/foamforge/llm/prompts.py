"""Prompt templates for pattern generation and the Volt chat assistant."""

from __future__ import annotations

import json

from foamforge.engine.config import GenerationConfig
from foamforge.engine.quality import QualityReport

PATTERN_SCHEMA: dict = {
    "type": "object",
    "properties": {
        "name": {"type": "string", "description": "A creative name for the pattern"},
        "points": {
            "type": "array",
            "description": "A dense ordered list of X,Y coordinates (0-100) forming the continuous cut path.",
            "items": {
                "type": "object",
                "properties": {"x": {"type": "number"}, "y": {"type": "number"}},
                "required": ["x", "y"],
            },
        },
        "description": {"type": "string", "description": "Short description of the shape and usage."},
        "difficulty": {"type": "string", "description": "Estimated difficulty: Easy, Medium, or Hard"},
        "estimatedCutTime": {
            "type": "string",
            "description": "Estimated time to cut with hot wire, e.g., '5 mins'",
        },
    },
    "required": ["name", "points", "description", "difficulty", "estimatedCutTime"],
}

PATTERN_SYSTEM_INSTRUCTION = (
    "You are a specialized G-code generator. Output coordinates where Y=0 is the floor/bottom. "
    "Always connect disjoint letters with a baseline segment."
)

_PATTERN_TEMPLATE = """You are an expert CNC Hot Wire Foam Cutter path generator.

User Request: Create a cut path for: "{prompt}".

CRITICAL GEOMETRIC RULES:
1. COORDINATE SYSTEM: Use Standard Cartesian Coordinates. (0,0) is BOTTOM-LEFT. (100,100) is TOP-RIGHT.
   - Ensure the shape is upright in this coordinate system.
   - Every coordinate must lie within 0-100.
2. SINGLE CONTINUOUS POLYLINE: The output must be a single ordered array of coordinates. The wire CANNOT lift.
3. CLOSED OUTLINE: The path is a silhouette. The last point must equal the first point.
4. HANDLING TEXT / MULTIPLE SHAPES:
   - If the input is text (e.g., "HELLO") or disjoint shapes, you MUST connect them.
   - Strategy: Draw the first letter, then exit at the bottom-right, draw a connecting line along the bottom (baseline) to the start of the next letter.
   - Do not cross through the middle of the shape if possible.
5. INTERNAL HOLES (The "Hidden Seam"):
   - To cut a hole (e.g., inside 'A', 'O', 'B'), use the "Bridge" method.
   - Cut from the outer perimeter -> Enter at a vertex -> Cut the hole -> Exit at the same vertex -> Resume outer perimeter.
6. DENSITY: Use {min_points}-{max_points} points. Curves must be smooth and features recognizable.
7. NO DEGENERATE POLYGONS: Never answer with a triangle, square, hexagon or rough blob standing in for the real shape.
   Model the actual silhouette with its organic details.

ALGORITHM EXAMPLE (Letter 'O'):
Start at outside bottom-left -> Trace outside to bottom-middle -> Cut IN to inner bottom-middle -> Trace inner circle -> Cut OUT to outer bottom-middle -> Finish tracing outside.
{extra}
Return the response as a single JSON object matching this JSON schema:
{schema}"""

_FEEDBACK_HEADER = "\nCORRECTIVE FEEDBACK (your previous answer was rejected):"

_FEEDBACK_LINES = {
    "too_few_points": (
        "- It had only {point_count} points. Use at least {min_points} points, ideally {target_min}-{target_max}."
    ),
    "too_polygonal": (
        "- It was too polygon-like (only {major_vertices} significant vertices). Add organic features: "
        "curves, bumps, limbs, serifs, whatever the subject really has."
    ),
    "long_edges": (
        "- It contained a straight edge {max_edge:.0f} units long. No straight edge may be longer than ~8 units; "
        "subdivide long runs into dense points."
    ),
}

_GENERIC_FEEDBACK = (
    "- The outline was too crude. Make it more detailed and organic, with no straight edge longer than ~8 units."
)

CHAT_SYSTEM_INSTRUCTION = (
    "You are 'Volt', a helpful AI assistant for foam cutting enthusiasts. You know about XPS, EPS, EPP foams, "
    "hot wire cutters, CNC machines, and manual crafting techniques. Keep answers concise, practical, and "
    "safety-focused (remind about fumes)."
)

CHAT_GREETING = "Hi! I'm Volt. Ask me anything about foam cutting, wire temperatures, or CNC setups."

CHAT_FAILURE_MESSAGE = "Sorry, I sparked out. Could you try asking that again?"


def build_pattern_prompt(prompt: str, config: GenerationConfig | None = None, extra: str = "") -> str:
    """Base generation prompt, optionally followed by extra constraints."""
    cfg = config or GenerationConfig()
    return _PATTERN_TEMPLATE.format(
        prompt=prompt.strip(),
        min_points=cfg.target_points_min,
        max_points=cfg.target_points_max,
        extra=extra,
        schema=json.dumps(PATTERN_SCHEMA, indent=2),
    )


def corrective_feedback(report: QualityReport | None, config: GenerationConfig | None = None) -> str:
    """Extra prompt text describing why the previous candidate was rejected.

    ``report`` is None when the previous attempt produced nothing usable
    (unparseable output); the generic feedback is used then.
    """
    cfg = config or GenerationConfig()
    lines = [_FEEDBACK_HEADER]
    if report is None or not report.reasons:
        lines.append(_GENERIC_FEEDBACK)
    else:
        for reason in report.reasons:
            lines.append(
                _FEEDBACK_LINES[reason].format(
                    point_count=report.point_count,
                    major_vertices=report.major_vertices,
                    max_edge=report.max_edge,
                    min_points=cfg.min_points,
                    target_min=cfg.target_points_min,
                    target_max=cfg.target_points_max,
                )
            )
    lines.append("Respond with valid JSON only, no markdown fences and no text around it.")
    return "\n".join(lines) + "\n"


def get_all_templates() -> dict[str, str]:
    """Return all prompt templates keyed by task name."""
    return {
        "pattern": _PATTERN_TEMPLATE,
        "pattern_system": PATTERN_SYSTEM_INSTRUCTION,
        "chat_system": CHAT_SYSTEM_INSTRUCTION,
        "chat_greeting": CHAT_GREETING,
        "chat_failure": CHAT_FAILURE_MESSAGE,
    }
