from __future__ import annotations

import os
import sys
import tempfile
import unittest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

from driver_sim import DriverEnv  # noqa: E402
from driver_sim.assets import ASSET_NAMES, Ready  # noqa: E402
from driver_sim.compositor import DrawImage, FillRect  # noqa: E402
from driver_sim.controls import InputSnapshot  # noqa: E402


def pygame_available() -> bool:
    try:
        import pygame  # noqa: F401
    except Exception:
        return False
    return True


@unittest.skipUnless(pygame_available(), "pygame not installed")
class TestPygameRenderer(unittest.TestCase):
    def test_rgb_frame_and_placeholder_assets(self) -> None:
        env = DriverEnv(render_mode="rgb_array", seed=0)
        frame = env.render()
        self.assertEqual(frame.shape, (720, 1280, 3))
        self.assertEqual(tuple(int(v) for v in frame[2, 2]), env.config.sky_color)
        self.assertEqual(set(env.assets), set(ASSET_NAMES))
        self.assertTrue(all(isinstance(h, Ready) for h in env.assets.values()))
        env.close()
        self.assertEqual(env.assets, {})

    def test_pause_overlay_darkens_frame(self) -> None:
        env = DriverEnv(render_mode="rgb_array", seed=0)
        before = env.render()
        env.tick(0.0, InputSnapshot(pause=True))
        after = env.render()
        self.assertLess(int(after[2, 2].sum()), int(before[2, 2].sum()))
        env.close()

    def test_images_loaded_from_asset_dir(self) -> None:
        import pygame

        with tempfile.TemporaryDirectory() as tmp:
            tree = pygame.Surface((30, 90))
            tree.fill((0, 255, 0))
            pygame.image.save(tree, os.path.join(tmp, "tree.png"))
            env = DriverEnv(render_mode="rgb_array", seed=0, asset_dir=tmp)
            with self.assertLogs("driver_sim.render", level="WARNING"):
                env.render()
        self.assertEqual(env.assets["tree"], Ready(30, 90))
        env.close()

    def test_unsupported_sizes_are_skipped(self) -> None:
        from driver_sim.render import PygameRenderer

        renderer = PygameRenderer(1280, 720, "rgb_array")
        frame = renderer.draw([
            FillRect(0, 0, 1280, 720, (10, 20, 30)),
            DrawImage("tree", 0, 0, 0, 50),
            DrawImage("tree", -10, -10, 1e6, 1e6),
            DrawImage("unknown", 0, 0, 10, 10),
        ])
        self.assertEqual(tuple(int(v) for v in frame[5, 5]), (10, 20, 30))
        renderer.close()


if __name__ == "__main__":
    unittest.main()
