"""Generation configuration: quality-gate, post-processing and search knobs.

The thresholds are empirically tuned for a 0-100 design square; they are
kept here, not inlined, so they can be adjusted per deployment or per test.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GenerationConfig:
    """Controls post-processing, the quality gate and the retry search."""

    # Design square
    coord_min: float = 0.0
    coord_max: float = 100.0
    same_point_eps: float = 1e-6

    # Paths shorter than this are returned untouched by the post-processor
    min_valid_points: int = 4

    # Orientation heuristic (screen-space Y-down detection)
    bottom_band: float = 5.0  # y <= bottom_band counts as a bottom-hugger
    top_band: float = 95.0  # y >= top_band counts as a top-hugger
    flip_min_top_huggers: int = 25
    flip_top_to_bottom_ratio: float = 2.0

    # Adaptive Chaikin smoothing: (point count below, iterations)
    smoothing_schedule: tuple[tuple[int, int], ...] = ((120, 3), (220, 2))

    # Quality gate
    min_points: int = 80
    rdp_epsilon: float = 1.5
    min_major_vertices: int = 18
    max_edge_length: float = 18.0

    # Retry search
    attempts_per_model: int = 2
    target_points_min: int = 250
    target_points_max: int = 500

    def smoothing_iterations(self, n_points: int) -> int:
        for limit, iterations in self.smoothing_schedule:
            if n_points < limit:
                return iterations
        return 0
