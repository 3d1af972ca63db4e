"""Quality gate: cheap heuristic check that a candidate path is organic and detailed.

Not a proof of shape correctness. It exists to catch the egregious failures
(blobs, triangles, low-sided polygons, paths with long straight jumps) before
a candidate is shown; false accepts and rejects are expected.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

from foamforge.engine.config import GenerationConfig
from foamforge.utils.geometry import close_ring, edge_lengths_closed, open_ring, rdp_simplify

_DEFAULT_CONFIG = GenerationConfig()


@dataclass
class QualityReport:
    """Measurements behind a gate verdict. ``reasons`` is empty when accepted."""

    point_count: int = 0
    major_vertices: int = 0
    max_edge: float = 0.0
    reasons: list[str] = field(default_factory=list)

    @property
    def too_few_points(self) -> bool:
        return "too_few_points" in self.reasons

    @property
    def too_polygonal(self) -> bool:
        return "too_polygonal" in self.reasons

    @property
    def long_edges(self) -> bool:
        return "long_edges" in self.reasons

    @property
    def accepted(self) -> bool:
        return not self.reasons


def assess_quality(points: NDArray[np.float64], config: GenerationConfig | None = None) -> QualityReport:
    cfg = config or _DEFAULT_CONFIG
    ring = open_ring(np.asarray(points, dtype=np.float64).reshape(-1, 2), cfg.same_point_eps)
    report = QualityReport(point_count=len(ring))

    if len(ring) < cfg.min_points:
        report.reasons.append("too_few_points")

    if len(ring) >= 2:
        report.major_vertices = len(rdp_simplify(close_ring(ring), cfg.rdp_epsilon))
        report.max_edge = float(np.max(edge_lengths_closed(ring)))
    else:
        report.major_vertices = len(ring)

    if report.major_vertices < cfg.min_major_vertices:
        report.reasons.append("too_polygonal")
    if report.max_edge > cfg.max_edge_length:
        report.reasons.append("long_edges")

    return report


def is_acceptable(points: NDArray[np.float64], config: GenerationConfig | None = None) -> bool:
    return assess_quality(points, config).accepted
