from __future__ import annotations

import os
import sys
import unittest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from driver_sim.config import GameConfig  # noqa: E402
from driver_sim.projection import project  # noqa: E402


class TestProject(unittest.TestCase):
    def setUp(self) -> None:
        self.cfg = GameConfig()

    def test_point_at_camera_is_not_visible(self) -> None:
        self.assertIsNone(project(100.0, 100.0, self.cfg))

    def test_point_behind_camera_is_not_visible(self) -> None:
        for camera in (0.0, 35.0, 12345.6):
            self.assertIsNone(project(camera - 10.0, camera, self.cfg))
            self.assertIsNone(project(camera + 0.005, camera, self.cfg))

    def test_point_just_past_epsilon_is_visible(self) -> None:
        self.assertIsNotNone(project(101.0, 100.0, self.cfg))

    def test_scale_strictly_decreases_with_depth(self) -> None:
        for camera in (0.0, 250.0):
            depths = [camera + d for d in (1.0, 10.0, 50.0, 100.0, 500.0, 5000.0)]
            scales = [project(d, camera, self.cfg).scale for d in depths]
            for near, far in zip(scales, scales[1:]):
                self.assertGreater(near, far)

    def test_closer_points_sit_lower_on_screen(self) -> None:
        near = project(60.0, 0.0, self.cfg)
        far = project(600.0, 0.0, self.cfg)
        self.assertGreater(near.y, far.y)
        self.assertGreater(far.y, self.cfg.height / 2.0)

    def test_geometry_values(self) -> None:
        p = project(40.0, 0.0, self.cfg, lateral_offset=100.0)
        self.assertAlmostEqual(p.scale, 1.0)
        self.assertAlmostEqual(p.y, 360.0 + 800.0)
        self.assertAlmostEqual(p.width, 4000.0)
        self.assertAlmostEqual(p.x, 640.0 + 150.0)

    def test_only_camera_relative_depth_matters(self) -> None:
        a = project(140.0, 100.0, self.cfg, lateral_offset=-30.0)
        b = project(1040.0, 1000.0, self.cfg, lateral_offset=-30.0)
        self.assertEqual(a, b)

    def test_scale_has_a_floor(self) -> None:
        p = project(1e9, 0.0, self.cfg)
        self.assertAlmostEqual(p.scale, self.cfg.min_scale)
        self.assertGreater(p.width, 0.0)


if __name__ == "__main__":
    unittest.main()
