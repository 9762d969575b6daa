import numpy as np
import numpy.testing as npt
import pytest

from spheretrace.camera import Camera2D


class TestCamera2D:
    def test_single_ray_points_forward(self):
        cam = Camera2D(position=[0.0, 0.0], forward=[0.0, 3.0], fov_deg=60.0, num_rays=1)
        (d,) = cam.ray_directions(np)
        npt.assert_allclose(d, [0.0, 1.0], atol=1e-12)

    def test_fan_spans_fov(self):
        cam = Camera2D(position=[0.0, 0.0], forward=[1.0, 0.0], fov_deg=90.0, num_rays=3)
        dirs = cam.ray_directions(np)
        s = np.sqrt(0.5)
        npt.assert_allclose(dirs[0], [s, -s], atol=1e-12)
        npt.assert_allclose(dirs[1], [1.0, 0.0], atol=1e-12)
        npt.assert_allclose(dirs[2], [s, s], atol=1e-12)

    def test_directions_are_unit(self):
        cam = Camera2D(position=[5.0, 5.0], forward=[-2.0, 7.0], fov_deg=125.0, num_rays=35)
        npt.assert_allclose(np.linalg.norm(cam.ray_directions_array(np), axis=-1), 1.0)

    def test_from_look_at(self):
        cam = Camera2D.from_look_at([1.0, 1.0], [4.0, 5.0], fov_deg=30.0, num_rays=5, xp=np)
        npt.assert_allclose(cam.forward, [3.0, 4.0])
        assert cam.ray_directions_array(np).shape == (5, 2)

    @pytest.mark.parametrize(("fov", "num"), [(0.0, 3), (400.0, 3), (60.0, 0)])
    def test_rejects_bad_parameters(self, fov, num):
        with pytest.raises(ValueError):
            Camera2D(position=[0.0, 0.0], forward=[1.0, 0.0], fov_deg=fov, num_rays=num)
