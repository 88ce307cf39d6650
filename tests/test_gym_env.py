from __future__ import annotations

import os
import sys
import unittest

import numpy as np

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

from driver_sim import DriverGymEnv  # noqa: E402
from driver_sim.world import Lane, TrafficCar  # noqa: E402


def pygame_available() -> bool:
    try:
        import pygame  # noqa: F401
    except Exception:
        return False
    return True


class TestDriverGymEnv(unittest.TestCase):
    def test_state_observation_shape_and_range(self) -> None:
        env = DriverGymEnv(render_mode=None, obs_mode="state", action_mode="discrete", seed=0)
        obs, info = env.reset(seed=0)

        self.assertEqual(obs.shape, env.observation_space.shape)
        self.assertTrue(np.all(np.isfinite(obs)))
        self.assertTrue(np.all(obs <= 1.0))
        self.assertTrue(np.all(obs >= -1.0))
        self.assertIn("score", info)
        env.close()

    def test_step_return_types(self) -> None:
        env = DriverGymEnv(render_mode=None, obs_mode="state", action_mode="discrete", seed=0)
        env.reset(seed=0)
        obs, reward, terminated, truncated, info = env.step(0)

        self.assertIsInstance(reward, float)
        self.assertIsInstance(terminated, bool)
        self.assertIsInstance(truncated, bool)
        self.assertIsInstance(info, dict)
        self.assertEqual(obs.shape, env.observation_space.shape)
        env.close()

    def test_left_right_actions_change_position(self) -> None:
        env = DriverGymEnv(render_mode=None, obs_mode="state", action_mode="discrete", seed=1)
        obs, _ = env.reset(seed=1)
        x0 = obs[0]

        obs_left, _, _, _, _ = env.step(1)
        self.assertLess(obs_left[0], x0)

        obs, _ = env.reset(seed=1)
        obs_right, _, _, _, _ = env.step(2)
        self.assertGreater(obs_right[0], x0)
        env.close()

    def test_buttons_action_mode(self) -> None:
        env = DriverGymEnv(render_mode=None, obs_mode="state", action_mode="buttons", seed=4)
        obs, _ = env.reset(seed=4)
        x0 = obs[0]

        obs, _, _, _, _ = env.step(np.array([1, 0], dtype=np.int8))
        self.assertLess(obs[0], x0)
        env.close()

    def test_continuous_action_mode(self) -> None:
        env = DriverGymEnv(render_mode=None, obs_mode="state", action_mode="continuous", seed=5)
        obs, _ = env.reset(seed=5)
        x0 = obs[0]

        obs, _, _, _, _ = env.step(np.array([1.0], dtype=np.float32))
        self.assertGreater(obs[0], x0)
        env.close()

    def test_crash_terminates_episode(self) -> None:
        env = DriverGymEnv(render_mode=None, obs_mode="state", action_mode="discrete", seed=6)
        env.reset(seed=6)
        env.env.world.traffic = [TrafficCar(depth=50.0, lane=Lane.CENTER)]
        obs, _, terminated, _, info = env.step(0)
        self.assertTrue(terminated)
        self.assertEqual(obs[1], 1.0)
        self.assertEqual(info["status"], "crashed")
        env.close()

    def test_unknown_modes_rejected(self) -> None:
        with self.assertRaises(ValueError):
            DriverGymEnv(action_mode="joystick")
        with self.assertRaises(ValueError):
            DriverGymEnv(obs_mode="audio")

    def test_pixel_observation(self) -> None:
        if not pygame_available():
            self.skipTest("pygame not installed")

        env = DriverGymEnv(render_mode="rgb_array", obs_mode="pixels", action_mode="discrete", seed=7)
        obs, _ = env.reset(seed=7)

        self.assertEqual(obs.shape, (env.env.height, env.env.width, 3))
        self.assertEqual(obs.dtype, np.uint8)
        env.close()


if __name__ == "__main__":
    unittest.main()
