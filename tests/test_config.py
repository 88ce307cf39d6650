from __future__ import annotations

import os
import sys
import tempfile
import unittest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from driver_sim.config import GameConfig, build_config, load_config  # noqa: E402


class TestGameConfig(unittest.TestCase):
    def test_defaults_are_valid(self) -> None:
        cfg = GameConfig()
        cfg.validate()
        self.assertEqual(cfg.visible_segments, 31)
        self.assertAlmostEqual(cfg.lane_width, 3200.0 / 3.0)
        self.assertEqual(cfg.player_y, 512.0)
        self.assertGreater(cfg.traffic_recycle_min, cfg.tree_recycle_distance)

    def test_build_config_overrides_and_warns(self) -> None:
        with self.assertLogs("driver_sim.config", level="WARNING") as logs:
            cfg = build_config({"speed": 500.0, "sky_color": [1, 2, 3], "bogus": 1})
        self.assertEqual(cfg.speed, 500.0)
        self.assertEqual(cfg.sky_color, (1, 2, 3))
        self.assertIn("bogus", logs.output[0])

    def test_traffic_must_jump_past_trees(self) -> None:
        with self.assertRaises(ValueError):
            build_config({"traffic_recycle_min": 20000.0})
        with self.assertRaises(ValueError):
            build_config({"traffic_recycle_min": 30000.0, "traffic_recycle_max": 25000.0})

    def test_rejects_bad_values(self) -> None:
        for overrides in ({"segment_length": 0}, {"lane_count": 4}, {"speed": -1.0}, {"tree_count": 0}):
            with self.assertRaises(ValueError):
                build_config(overrides)

    def test_load_yaml_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "config.yaml")
            with open(path, "w", encoding="utf-8") as handle:
                handle.write("speed: 420\nnear_field: 120\nreset_scenery_on_restart: false\n")
            cfg = load_config(path)
        self.assertEqual(cfg.speed, 420)
        self.assertEqual(cfg.near_field, 120)
        self.assertFalse(cfg.reset_scenery_on_restart)

    def test_yaml_must_be_a_mapping(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "config.yaml")
            with open(path, "w", encoding="utf-8") as handle:
                handle.write("- 1\n- 2\n")
            with self.assertRaises(ValueError):
                GameConfig.from_yaml(path)

    def test_missing_file_and_empty_path_give_defaults(self) -> None:
        self.assertEqual(load_config(""), GameConfig())
        with self.assertLogs("driver_sim.config", level="WARNING"):
            cfg = load_config(os.path.join(ROOT, "does-not-exist.yaml"))
        self.assertEqual(cfg, GameConfig())

    def test_shipped_config_loads(self) -> None:
        cfg = load_config(os.path.join(ROOT, "config.yaml"))
        self.assertEqual(cfg.speed, 350)


if __name__ == "__main__":
    unittest.main()
