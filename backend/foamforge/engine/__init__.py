"""FoamForge pattern engine: procedural shapes, repair, post-processing, quality gate.

The orchestrator (``foamforge.engine.orchestrator``) is not re-exported here:
it depends on ``foamforge.llm``, which itself builds on this package.
"""

from foamforge.engine.config import GenerationConfig
from foamforge.engine.procedural import get_registry, procedural_shape, try_procedural
from foamforge.engine.postprocess import post_process
from foamforge.engine.quality import QualityReport, assess_quality, is_acceptable
from foamforge.engine.repair import parse_model_json

__all__ = [
    "GenerationConfig",
    "get_registry",
    "procedural_shape",
    "try_procedural",
    "post_process",
    "QualityReport",
    "assess_quality",
    "is_acceptable",
    "parse_model_json",
]
