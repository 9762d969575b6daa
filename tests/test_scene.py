"""Tests for spheretrace.scene: minimum distance over a shape collection."""

import math

import numpy as np
import numpy.testing as npt
import pytest

from spheretrace.geometry import Circle, Rectangle
from spheretrace.scene import MAX_RAY_DIST, Scene, SceneBounds


class _BareDisk:
    """Radius-2 disk at the origin implementing only sdf."""

    def sdf(self, p):
        return np.linalg.norm(p, axis=-1) - 2.0


class TestSceneConstruction:
    @pytest.mark.parametrize("shapes", [(), []])
    def test_empty_scene_rejected(self, shapes):
        with pytest.raises(ValueError, match="at least one shape"):
            Scene(xp=np, shapes=shapes)

    def test_rejects_object_without_sdf(self):
        c = Circle(xp=np, center=(0.0, 0.0), radius=1.0)
        with pytest.raises(ValueError, match="shape 1"):
            Scene(xp=np, shapes=(c, object()))

    def test_accepts_structural_shape(self):
        scene = Scene(xp=np, shapes=(_BareDisk(),))
        assert scene.min_distance(np.array([3.0, 4.0])) == pytest.approx(3.0)
        assert scene.nearest(np.array([0.0, 5.0])) == (0, pytest.approx(3.0))

    def test_shapes_stored_as_tuple(self):
        c = Circle(xp=np, center=(0.0, 0.0), radius=1.0)
        scene = Scene(xp=np, shapes=[c])
        assert scene.shapes == (c,)

    def test_default_bounds(self, circle_scene):
        assert circle_scene.bounds.far_distance == MAX_RAY_DIST

    def test_drawables_are_shapes(self, screen_scene):
        assert screen_scene.drawables == list(screen_scene.shapes)


class TestMinDistance:
    def test_picks_closest_shape(self, screen_scene):
        # rect (20,20)-(300,300) is closest: overflow (20, 700)
        d = screen_scene.min_distance(np.array([0.0, 1000.0]))
        assert d == pytest.approx(math.hypot(20.0, 700.0))

    def test_nearest_index(self, screen_scene):
        assert screen_scene.nearest(np.array([0.0, 1000.0]))[0] == 0
        index, d = screen_scene.nearest(np.array([1000.0, 900.0]))
        assert index == 2
        assert d == pytest.approx(60.0)

    def test_nearest_tie_prefers_first(self):
        c = Circle(xp=np, center=(0.0, 0.0), radius=1.0)
        scene = Scene(xp=np, shapes=(c, Circle(xp=np, center=(0.0, 0.0), radius=1.0)))
        assert scene.nearest(np.array([5.0, 0.0])) == (0, pytest.approx(4.0))

    def test_order_does_not_change_result(self, screen_scene):
        reversed_scene = Scene(xp=np, shapes=tuple(reversed(screen_scene.shapes)))
        for p in [(0.0, 1000.0), (960.0, 540.0), (1550.0, 10.0)]:
            q = np.array(p)
            assert screen_scene.min_distance(q) == reversed_scene.min_distance(q)

    def test_idempotent(self, screen_scene):
        p = np.array([812.5, 77.0])
        assert screen_scene.min_distance(p) == screen_scene.min_distance(p)

    def test_non_negative_outside_all_shapes(self, screen_scene):
        xs, ys = np.meshgrid(np.linspace(0.0, 1920.0, 25), np.linspace(0.0, 1080.0, 15))
        for p in np.stack([xs.ravel(), ys.ravel()], axis=-1):
            if all(s.distance(p) > 0.0 for s in screen_scene.shapes):
                assert screen_scene.min_distance(p) >= 0.0

    def test_sdf_matches_min_distance(self, screen_scene):
        pts = np.array([[0.0, 1000.0], [960.0, 540.0], [1550.0, 350.0], [1000.0, 1000.0]])
        expected = [screen_scene.min_distance(p) for p in pts]
        npt.assert_allclose(screen_scene.sdf(pts), expected, atol=1e-9)

    def test_scene_is_an_sdf(self, screen_scene):
        p = np.array([960.0, 540.0])
        assert screen_scene.distance(p) == screen_scene.min_distance(p)


class TestSceneBounds:
    def test_from_extent_is_diagonal(self):
        bounds = SceneBounds.from_extent(1920, 1080)
        assert bounds.far_distance == pytest.approx(math.hypot(1920.0, 1080.0))

    @pytest.mark.parametrize("far", [0.0, -5.0, float("nan"), float("inf")])
    def test_rejects_bad_far_distance(self, far):
        with pytest.raises(ValueError, match="far_distance"):
            SceneBounds(far_distance=far)

    def test_mixed_shapes(self):
        scene = Scene(
            xp=np,
            shapes=(
                Rectangle(xp=np, min_corner=(0.0, 0.0), max_corner=(10.0, 10.0)),
                Circle(xp=np, center=(30.0, 5.0), radius=5.0),
            ),
            bounds=SceneBounds(far_distance=100.0),
        )
        assert scene.min_distance(np.array([17.0, 5.0])) == pytest.approx(7.0)
        assert scene.min_distance(np.array([5.0, 5.0])) == 0.0
