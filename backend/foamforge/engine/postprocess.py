"""Pattern post-processor: clean, orient, smooth and close a raw candidate.

Steps (points only; metadata is carried over):
  1. Drop non-finite points, clamp to the design square
  2. Collapse consecutive duplicates
  3. Bail out (return input unchanged) below ``min_valid_points``
  4. Flip Y when the path hugs the top edge (screen-space output)
  5. Open the ring (drop a duplicated closing point)
  6. Adaptive Chaikin smoothing by point density
  7. Close the ring again
"""

from __future__ import annotations

import logging

import numpy as np
from numpy.typing import NDArray

from foamforge.engine.config import GenerationConfig
from foamforge.models.pattern import Pattern
from foamforge.utils.geometry import (
    clamp_points,
    close_ring,
    dedupe_consecutive,
    finite_points,
    open_ring,
    smooth_closed,
)

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG = GenerationConfig()


def should_flip(points: NDArray[np.float64], config: GenerationConfig | None = None) -> bool:
    """True when the path looks like Y-down output.

    The cut path must sit on a bottom baseline in Y-up space. A path with many
    points along the top edge and few along the bottom was most likely drawn
    with screen coordinates.
    """
    cfg = config or _DEFAULT_CONFIG
    if len(points) == 0:
        return False
    bottom = int(np.sum(points[:, 1] <= cfg.bottom_band))
    top = int(np.sum(points[:, 1] >= cfg.top_band))
    return top >= cfg.flip_min_top_huggers and top > cfg.flip_top_to_bottom_ratio * bottom


def flip_y(points: NDArray[np.float64], config: GenerationConfig | None = None) -> NDArray[np.float64]:
    cfg = config or _DEFAULT_CONFIG
    out = points.copy()
    out[:, 1] = (cfg.coord_min + cfg.coord_max) - out[:, 1]
    return out


def post_process(pattern: Pattern, config: GenerationConfig | None = None) -> Pattern:
    """Return a new, finalized Pattern (or ``pattern`` itself if unsalvageable)."""
    cfg = config or _DEFAULT_CONFIG

    pts = finite_points(pattern.as_array())
    pts = clamp_points(pts, cfg.coord_min, cfg.coord_max)
    pts = dedupe_consecutive(pts, cfg.same_point_eps)

    if len(pts) < cfg.min_valid_points:
        logger.warning(
            "Pattern %r has %d usable points (< %d), left unprocessed",
            pattern.name,
            len(pts),
            cfg.min_valid_points,
        )
        return pattern

    if should_flip(pts, cfg):
        logger.info("Pattern %r looks Y-down, flipping", pattern.name)
        pts = flip_y(pts, cfg)

    ring = open_ring(pts, cfg.same_point_eps)
    iterations = cfg.smoothing_iterations(len(ring))
    if iterations:
        ring = smooth_closed(ring, iterations)
        # Smoothing can land two neighbours on the same spot (e.g. a back-and-forth seam)
        ring = open_ring(dedupe_consecutive(ring, cfg.same_point_eps), cfg.same_point_eps)

    logger.debug(
        "Post-processed %r: %d -> %d points (%d smoothing passes)",
        pattern.name,
        len(pattern.points),
        len(ring) + 1,
        iterations,
    )
    return pattern.with_points(close_ring(ring))
