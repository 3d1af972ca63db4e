"""Generation orchestrator: procedural shortcut, then a bounded model search.

Search order (strictly sequential, one model call in flight at a time):

    for model in models (best first):
        attempt 1: base prompt
        attempt 2: base prompt + corrective feedback from attempt 1
        -> repair -> post-process -> quality gate; return on first accept

Every produced candidate replaces ``SearchState.best``; when nothing passes
the gate the most recent candidate is returned as best effort. Only when no
candidate was ever produced does ``generate`` raise GenerationError.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass

from foamforge.config import Settings, settings as _settings
from foamforge.engine.config import GenerationConfig
from foamforge.engine.postprocess import post_process
from foamforge.engine.procedural import ProceduralRegistry, try_procedural
from foamforge.engine.quality import QualityReport, assess_quality
from foamforge.engine.repair import parse_pattern
from foamforge.errors import GenerationError, ModelError, ParseError
from foamforge.llm.client import ModelClient, SamplingConfig
from foamforge.llm.model_router import get_models_for_task
from foamforge.llm.prompts import (
    PATTERN_SCHEMA,
    PATTERN_SYSTEM_INSTRUCTION,
    build_pattern_prompt,
    corrective_feedback,
)
from foamforge.models.pattern import Pattern

logger = logging.getLogger(__name__)


@dataclass
class SearchState:
    """Best-effort accumulator threaded through the (model x attempt) search."""

    best: Pattern | None = None
    best_report: QualityReport | None = None
    last_error: BaseException | None = None
    attempts: int = 0
    model_calls: int = 0


@dataclass(frozen=True)
class GenerationResult:
    pattern: Pattern
    source: str  # "procedural" or "model"
    accepted: bool
    attempts: int = 0


class PatternGenerator:
    """Turns a shape description into a finalized Pattern."""

    def __init__(
        self,
        client: ModelClient,
        models: Sequence[str] | None = None,
        config: GenerationConfig | None = None,
        sampling: SamplingConfig | None = None,
        registry: ProceduralRegistry | None = None,
        settings: Settings | None = None,
    ) -> None:
        cfg = settings or _settings
        self.client = client
        self.models = list(models) if models is not None else get_models_for_task("pattern", cfg)
        self.config = config or GenerationConfig()
        self.sampling = sampling or SamplingConfig(
            temperature=cfg.pattern_temperature,
            max_output_tokens=cfg.pattern_max_tokens,
        )
        self.registry = registry

    async def generate(self, prompt: str) -> Pattern:
        return (await self.run(prompt)).pattern

    async def run(self, prompt: str) -> GenerationResult:
        procedural = try_procedural(prompt, self.registry)
        if procedural is not None:
            return GenerationResult(pattern=procedural, source="procedural", accepted=True)

        start = time.perf_counter()
        state = SearchState()
        accepted = await self.search(prompt, state)
        elapsed = (time.perf_counter() - start) * 1000

        if accepted is not None:
            logger.info("Generation accepted after %d attempts in %.0fms", state.attempts, elapsed)
            return GenerationResult(pattern=accepted, source="model", accepted=True, attempts=state.attempts)

        if state.best is not None:
            logger.warning(
                "No candidate passed the quality gate after %d attempts (%.0fms); returning best effort %r",
                state.attempts,
                elapsed,
                state.best.name,
            )
            return GenerationResult(pattern=state.best, source="model", accepted=False, attempts=state.attempts)

        logger.error("Generation exhausted %d models without a usable pattern", len(self.models))
        raise GenerationError("Pattern generation failed on every model", state.last_error)

    async def search(self, prompt: str, state: SearchState) -> Pattern | None:
        """Bounded (model x attempt) search. Returns the first accepted pattern.

        ``state`` is updated in place, so callers can inspect the best effort
        and the last error afterwards. ConfigurationError is not caught.
        """
        for model_id in self.models:
            report: QualityReport | None = None
            for attempt in range(1, self.config.attempts_per_model + 1):
                extra = "" if attempt == 1 else corrective_feedback(report, self.config)
                state.attempts += 1
                try:
                    candidate = await self._attempt(model_id, prompt, extra, state)
                except ModelError as e:
                    logger.warning("Model %s failed on attempt %d: %s", model_id, attempt, e)
                    state.last_error = e
                    break
                except ParseError as e:
                    logger.warning("Model %s attempt %d unusable: %s", model_id, attempt, e)
                    state.last_error = e
                    report = None
                    continue

                report = assess_quality(candidate.as_array(), self.config)
                state.best = candidate
                state.best_report = report
                logger.info(
                    "Model %s attempt %d: %d points, %d major vertices, max edge %.1f -> %s",
                    model_id,
                    attempt,
                    report.point_count,
                    report.major_vertices,
                    report.max_edge,
                    "accepted" if report.accepted else "rejected (" + ", ".join(report.reasons) + ")",
                )
                if report.accepted:
                    return candidate
        return None

    async def _attempt(self, model_id: str, prompt: str, extra: str, state: SearchState) -> Pattern:
        """One model call through repair and post-processing."""
        text = build_pattern_prompt(prompt, self.config, extra)
        state.model_calls += 1
        raw = await self.client.structured_generate(
            model_id,
            text,
            PATTERN_SCHEMA,
            self.sampling,
            system_instruction=PATTERN_SYSTEM_INSTRUCTION,
        )
        parsed = parse_pattern(raw)
        processed = post_process(parsed, self.config)
        # post_process hands back its input untouched when the path is unsalvageable
        if processed is parsed:
            raise ParseError(f"Pattern {parsed.name!r} has too few usable points ({len(parsed.points)})")
        return processed
