"""Tests for the leaf geometry helpers."""

from __future__ import annotations

import math

import numpy as np
import pytest

from foamforge.utils.geometry import (
    clamp,
    close_ring,
    dedupe_consecutive,
    distance,
    edge_lengths_closed,
    finite_points,
    is_closed,
    normalize_to_box,
    open_ring,
    point_to_segment_distance,
    rdp_simplify,
    same_point,
    segment_distances,
    smooth_closed,
)


def _arc(n: int = 50) -> np.ndarray:
    """Strictly convex arc: no three points collinear."""
    t = np.linspace(0.1, math.pi - 0.1, n)
    return np.column_stack([50 + 40 * np.cos(t), 20 + 40 * np.sin(t)])


class TestScalars:
    def test_clamp(self):
        assert clamp(-3.0, 0.0, 100.0) == 0.0
        assert clamp(150.0, 0.0, 100.0) == 100.0
        assert clamp(42.5, 0.0, 100.0) == 42.5

    def test_same_point_eps(self):
        assert same_point((1.0, 2.0), (1.0 + 5e-7, 2.0 - 5e-7))
        assert not same_point((1.0, 2.0), (1.0 + 1e-5, 2.0))
        assert same_point((1.0, 2.0), (1.4, 2.0), eps=0.5)

    def test_distance(self):
        assert distance((0, 0), (3, 4)) == pytest.approx(5.0)

    def test_point_to_segment_projection_inside(self):
        assert point_to_segment_distance((5, 3), (0, 0), (10, 0)) == pytest.approx(3.0)

    def test_point_to_segment_clamped_to_endpoint(self):
        # Beyond b: distance to b, not to the infinite line
        assert point_to_segment_distance((13, 4), (0, 0), (10, 0)) == pytest.approx(5.0)

    def test_point_to_degenerate_segment(self):
        assert point_to_segment_distance((3, 4), (0, 0), (0, 0)) == pytest.approx(5.0)

    @pytest.mark.parametrize("b", [(10.0, 0.0), (3.0, 7.0), (0.0, 0.0)])
    def test_segment_distances_match_scalar(self, b):
        rng = np.random.default_rng(7)
        pts = rng.uniform(-20, 20, size=(200, 2))
        expected = [point_to_segment_distance(p, (0.0, 0.0), b) for p in pts]
        assert np.allclose(segment_distances(pts, (0.0, 0.0), b), expected)


class TestRdp:
    def test_epsilon_zero_keeps_non_collinear_path(self):
        arc = _arc()
        out = rdp_simplify(arc, 0.0)
        assert len(out) == len(arc)
        assert np.allclose(out, arc)

    def test_collinear_collapses_to_endpoints(self):
        line = np.column_stack([np.linspace(0, 100, 40), np.linspace(0, 50, 40)])
        out = rdp_simplify(line, 0.5)
        assert len(out) == 2
        assert np.allclose(out[0], line[0])
        assert np.allclose(out[-1], line[-1])

    def test_endpoints_fixed(self):
        arc = _arc()
        out = rdp_simplify(arc, 5.0)
        assert np.array_equal(out[0], arc[0])
        assert np.array_equal(out[-1], arc[-1])

    def test_monotone_in_epsilon(self):
        rng = np.random.default_rng(7)
        for _ in range(10):
            walk = np.cumsum(rng.normal(size=(120, 2)), axis=0)
            counts = [len(rdp_simplify(walk, eps)) for eps in (0.0, 0.25, 0.5, 1.0, 2.0, 4.0, 8.0)]
            assert counts == sorted(counts, reverse=True)

    def test_keeps_corner(self):
        pts = np.array([[0, 0], [5, 0], [10, 0], [10, 5], [10, 10]], dtype=float)
        out = rdp_simplify(pts, 1.0)
        assert [tuple(p) for p in out] == [(0, 0), (10, 0), (10, 10)]

    def test_dense_path_does_not_recurse_too_deep(self):
        # Spiral: every point is a split point at small epsilon
        t = np.linspace(0, 20 * math.pi, 2000)
        spiral = np.column_stack([t * np.cos(t), t * np.sin(t)])
        out = rdp_simplify(spiral, 0.01)
        assert 2 < len(out) <= len(spiral)

    def test_matches_scalar_reference_on_noisy_ring(self):
        rng = np.random.default_rng(3)
        t = np.linspace(0, 2 * math.pi, 6000)
        ring = np.column_stack([50 + 40 * np.cos(t), 50 + 40 * np.sin(t)]) + rng.normal(0, 0.3, (6000, 2))

        def reference(pts, eps):
            if len(pts) <= 2:
                return [tuple(p) for p in pts]
            d = [point_to_segment_distance(p, pts[0], pts[-1]) for p in pts[1:-1]]
            i = int(np.argmax(d)) + 1
            if d[i - 1] > eps:
                return reference(pts[: i + 1], eps)[:-1] + reference(pts[i:], eps)
            return [tuple(pts[0]), tuple(pts[-1])]

        out = rdp_simplify(ring, 1.5)
        assert [tuple(p) for p in out] == reference(ring, 1.5)


class TestChaikin:
    def test_zero_iterations_is_identity(self, octagon):
        out = smooth_closed(octagon, 0)
        assert np.array_equal(out, octagon)
        assert out is not octagon

    @pytest.mark.parametrize("iterations", [1, 2, 3])
    def test_count_doubles_per_iteration(self, octagon, iterations):
        out = smooth_closed(octagon, iterations)
        assert len(out) == len(octagon) * 2**iterations

    def test_quarter_points(self):
        square = np.array([[0, 0], [4, 0], [4, 4], [0, 4]], dtype=float)
        out = smooth_closed(square, 1)
        assert np.allclose(out[0], [1, 0])
        assert np.allclose(out[1], [3, 0])
        # Wrap-around edge (0,4) -> (0,0)
        assert np.allclose(out[-2], [0, 3])
        assert np.allclose(out[-1], [0, 1])

    def test_stays_inside_hull(self):
        square = np.array([[0, 0], [100, 0], [100, 100], [0, 100]], dtype=float)
        out = smooth_closed(square, 3)
        assert out.min() >= 0.0
        assert out.max() <= 100.0


class TestRings:
    def test_finite_points(self):
        pts = np.array([[1, 2], [np.nan, 3], [4, np.inf], [5, 6]], dtype=float)
        assert finite_points(pts).tolist() == [[1, 2], [5, 6]]

    def test_dedupe_consecutive(self):
        pts = np.array([[0, 0], [0, 0], [1, 1], [1, 1 + 1e-9], [0, 0]], dtype=float)
        assert dedupe_consecutive(pts).tolist() == [[0, 0], [1, 1], [0, 0]]

    def test_open_and_close(self):
        ring = np.array([[0, 0], [1, 0], [1, 1], [0, 0]], dtype=float)
        assert is_closed(ring)
        opened = open_ring(ring)
        assert len(opened) == 3
        assert not is_closed(opened)
        assert np.array_equal(close_ring(opened), ring)

    def test_open_ring_drops_repeated_closers(self):
        ring = np.array([[0, 0], [1, 0], [1, 1], [0, 0], [0, 0]], dtype=float)
        assert len(open_ring(ring)) == 3

    def test_edge_lengths_wrap(self):
        square = np.array([[0, 0], [10, 0], [10, 10], [0, 10]], dtype=float)
        assert edge_lengths_closed(square).tolist() == [10, 10, 10, 10]

    def test_normalize_to_box_uniform_scale(self):
        wide = np.array([[0, 0], [200, 0], [200, 50], [0, 50]], dtype=float)
        out = normalize_to_box(wide, padding=6.0)
        assert out[:, 0].min() == pytest.approx(6.0)
        assert out[:, 0].max() == pytest.approx(94.0)
        # Aspect ratio preserved, centered vertically
        height = out[:, 1].max() - out[:, 1].min()
        assert height == pytest.approx(88.0 / 4)
        assert (out[:, 1].max() + out[:, 1].min()) / 2 == pytest.approx(50.0)
