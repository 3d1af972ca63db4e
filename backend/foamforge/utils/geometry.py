"""Leaf-node geometry helpers for cut paths. No engine imports.

Paths are Nx2 float arrays of (x, y). A closed path either repeats its first
point at the end ("closed ring") or is stored open and treated as wrapping.
"""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import ArrayLike, NDArray

SAME_POINT_EPS = 1e-6


def clamp(v: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, v))


def same_point(a: ArrayLike, b: ArrayLike, eps: float = SAME_POINT_EPS) -> bool:
    """True when both coordinates differ by at most eps."""
    ax, ay = a
    bx, by = b
    return abs(ax - bx) <= eps and abs(ay - by) <= eps


def distance(a: ArrayLike, b: ArrayLike) -> float:
    ax, ay = a
    bx, by = b
    return math.hypot(ax - bx, ay - by)


def point_to_segment_distance(p: ArrayLike, a: ArrayLike, b: ArrayLike) -> float:
    """Euclidean distance from p to segment ab (projection clamped to the segment)."""
    px, py = p
    ax, ay = a
    bx, by = b
    dx = bx - ax
    dy = by - ay
    len_sq = dx * dx + dy * dy
    if len_sq < 1e-20:
        return math.hypot(px - ax, py - ay)
    t = clamp(((px - ax) * dx + (py - ay) * dy) / len_sq, 0.0, 1.0)
    return math.hypot(px - (ax + t * dx), py - (ay + t * dy))


def segment_distances(points: NDArray[np.float64], a: ArrayLike, b: ArrayLike) -> NDArray[np.float64]:
    """Vectorized point_to_segment_distance for every row of ``points``."""
    a = np.asarray(a, dtype=np.float64)
    ab = np.asarray(b, dtype=np.float64) - a
    ap = points - a
    len_sq = float(ab @ ab)
    if len_sq < 1e-20:
        return np.hypot(ap[:, 0], ap[:, 1])
    t = np.clip(ap @ ab / len_sq, 0.0, 1.0)
    diff = ap - np.outer(t, ab)
    return np.hypot(diff[:, 0], diff[:, 1])


def rdp_simplify(points: NDArray[np.float64], epsilon: float) -> NDArray[np.float64]:
    """Ramer-Douglas-Peucker simplification of an open polyline.

    Endpoints are always kept. For each span, the interior point farthest from
    the chord is kept (and the span split there) when its distance exceeds
    epsilon; otherwise the span collapses to its two ends. The recursion is
    run on an explicit stack so dense paths cannot hit the interpreter's
    recursion limit.

    Only meant for measuring shape complexity; output paths are never
    simplified.
    """
    n = len(points)
    if n <= 2:
        return points.copy()

    keep = np.zeros(n, dtype=bool)
    keep[0] = keep[-1] = True
    stack = [(0, n - 1)]
    while stack:
        start, end = stack.pop()
        if end - start < 2:
            continue
        dists = segment_distances(points[start + 1 : end], points[start], points[end])
        offset = int(np.argmax(dists))
        max_dist = dists[offset]
        max_idx = start + 1 + offset
        if max_dist > epsilon:
            keep[max_idx] = True
            stack.append((start, max_idx))
            stack.append((max_idx, end))

    return points[keep]


def smooth_closed(points: NDArray[np.float64], iterations: int) -> NDArray[np.float64]:
    """Chaikin corner cutting on a closed polyline.

    ``points`` must not repeat the first point at the end. Every iteration
    replaces each edge (p0, p1), including the wrap-around edge, with the
    points at 25% and 75% along it, so the count doubles per iteration.

    This rounds corners; it cannot recover detail the input never had. A
    hexagon smoothed three times is a rounder hexagon, not a circle.
    """
    result = np.asarray(points, dtype=np.float64).copy()
    if len(result) < 2:
        return result
    for _ in range(iterations):
        nxt = np.roll(result, -1, axis=0)
        q = 0.75 * result + 0.25 * nxt
        r = 0.25 * result + 0.75 * nxt
        out = np.empty((2 * len(result), 2), dtype=np.float64)
        out[0::2] = q
        out[1::2] = r
        result = out
    return result


def finite_points(points: NDArray[np.float64]) -> NDArray[np.float64]:
    """Drop rows with a NaN or infinite coordinate."""
    if len(points) == 0:
        return points.reshape(0, 2)
    mask = np.all(np.isfinite(points), axis=1)
    return points[mask]


def clamp_points(points: NDArray[np.float64], lo: float = 0.0, hi: float = 100.0) -> NDArray[np.float64]:
    return np.clip(points, lo, hi)


def dedupe_consecutive(points: NDArray[np.float64], eps: float = SAME_POINT_EPS) -> NDArray[np.float64]:
    """Collapse runs of coincident consecutive points to their first member."""
    if len(points) < 2:
        return points.copy()
    kept = [points[0]]
    for p in points[1:]:
        if not same_point(p, kept[-1], eps):
            kept.append(p)
    return np.array(kept, dtype=np.float64)


def is_closed(points: NDArray[np.float64], eps: float = SAME_POINT_EPS) -> bool:
    return len(points) > 1 and same_point(points[0], points[-1], eps)


def open_ring(points: NDArray[np.float64], eps: float = SAME_POINT_EPS) -> NDArray[np.float64]:
    """Drop the duplicated closing point(s), if any."""
    end = len(points)
    while end > 1 and same_point(points[0], points[end - 1], eps):
        end -= 1
    return points[:end].copy()


def close_ring(points: NDArray[np.float64]) -> NDArray[np.float64]:
    """Append a copy of the first point."""
    if len(points) == 0:
        return points.copy()
    return np.vstack([points, points[:1]])


def edge_lengths_closed(points: NDArray[np.float64]) -> NDArray[np.float64]:
    """Length of every edge of an open-stored ring, including last -> first."""
    if len(points) < 2:
        return np.zeros(0)
    diffs = np.roll(points, -1, axis=0) - points
    return np.sqrt(np.sum(diffs**2, axis=1))


def bbox(points: NDArray[np.float64]) -> tuple[float, float, float, float]:
    """Compute (xmin, ymin, xmax, ymax) bounding box."""
    if len(points) == 0:
        return (0.0, 0.0, 0.0, 0.0)
    return (
        float(np.min(points[:, 0])),
        float(np.min(points[:, 1])),
        float(np.max(points[:, 0])),
        float(np.max(points[:, 1])),
    )


def normalize_to_box(
    points: NDArray[np.float64],
    lo: float = 0.0,
    hi: float = 100.0,
    padding: float = 6.0,
) -> NDArray[np.float64]:
    """Fit points into [lo+padding, hi-padding] with one uniform scale, centered.

    The scale is the smaller of the two per-axis scales, so aspect ratio is
    preserved and the longer side touches the padding.
    """
    if len(points) == 0:
        return points.copy()
    xmin, ymin, xmax, ymax = bbox(points)
    w = xmax - xmin
    h = ymax - ymin
    avail = (hi - lo) - 2 * padding
    scales = [avail / s for s in (w, h) if s > 1e-12]
    scale = min(scales) if scales else 1.0

    center = (lo + hi) / 2
    out = np.empty_like(points, dtype=np.float64)
    out[:, 0] = center + (points[:, 0] - (xmin + xmax) / 2) * scale
    out[:, 1] = center + (points[:, 1] - (ymin + ymax) / 2) * scale
    return out
