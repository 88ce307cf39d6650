from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .assets import AssetHandle
from .collision import find_collision
from .compositor import DrawCommand, compose
from .config import GameConfig
from .controls import IDLE, InputSnapshot
from .session import GameSession, PlayerCar, Status
from .world import TrafficCar, World, lane_world_x

logger = logging.getLogger(__name__)


class DriverEnv:
    def __init__(
        self,
        config: Optional[GameConfig] = None,
        render_mode: Optional[str] = None,
        obs_mode: str = "state",
        action_mode: str = "discrete",
        seed: Optional[int] = None,
        max_objects: int = 4,
        asset_dir: Optional[str] = None,
    ) -> None:
        self.config = config if config is not None else GameConfig()
        self.config.validate()
        self.width = self.config.width
        self.height = self.config.height
        self.fps = self.config.fps
        self.dt = 1.0 / float(self.fps)
        self.render_mode = render_mode
        self.obs_mode = obs_mode
        self.action_mode = action_mode
        self.max_objects = max_objects
        self.asset_dir = asset_dir

        self.seed_value = seed
        self.renderer = None
        self.assets: Mapping[str, AssetHandle] = {}

        self.world = World(self.config, seed)
        self.session = GameSession()
        self.player = PlayerCar.centered(self.config)
        self.previous_input = IDLE
        self.crash_count = 0

    def seed(self, seed: Optional[int]) -> None:
        self.seed_value = seed
        self.world.seed(seed)

    def reset(self, seed: Optional[int] = None) -> Tuple[Any, Dict[str, Any]]:
        if seed is not None:
            self.seed(seed)
        self.world.reset(reset_scenery=True)
        self.session = GameSession()
        self.player = PlayerCar.centered(self.config)
        self.previous_input = IDLE
        return self._get_observation(), self._get_info()

    def restart(self) -> bool:
        if not self.session.restart():
            return False
        self.world.reset(reset_scenery=self.config.reset_scenery_on_restart)
        self.player = PlayerCar.centered(self.config)
        logger.info("Restarted")
        return True

    def update(self, dt: float, snapshot: InputSnapshot = IDLE) -> None:
        """Advance the simulation by one frame of dt seconds."""
        dt = max(0.0, dt)
        pressed = snapshot.newly_pressed(self.previous_input)
        self.previous_input = snapshot

        if pressed.pause and self.session.toggle_pause():
            logger.info("Game %s", self.session.status.value)
        # A restart frame starts from the initial layout; simulation resumes next tick.
        if pressed.restart and self.restart():
            return
        if not self.session.running:
            return

        self.world.advance(self.config.speed * dt)
        self.player.steer(snapshot.left, snapshot.right, dt, self.config)
        self.world.recycle()
        self.session.accumulate(dt, self.config.speed, self.config)

        hit = find_collision(self.world.traffic, self.world.camera_position, self.player.x, self.config)
        if hit is not None:
            self.session.crash()
            self.crash_count += 1
            logger.info(
                "Crashed into car in lane %s at depth %.1f (score %d)",
                hit.lane.name, hit.depth, self.session.score,
            )

    def frame(self) -> List[DrawCommand]:
        return compose(self.world, self.session, self.player, self.config, self.assets)

    def tick(self, dt: float, snapshot: InputSnapshot = IDLE) -> List[DrawCommand]:
        self.update(dt, snapshot)
        return self.frame()

    def step(self, action: Any) -> Tuple[Any, float, bool, bool, Dict[str, Any]]:
        prev_score = self.session.score
        self.update(self.dt, self.apply_action(action))
        reward = float(self.session.score - prev_score)
        terminated = self.session.status is Status.CRASHED
        truncated = False
        return self._get_observation(), reward, terminated, truncated, self._get_info()

    def render(self, mode: Optional[str] = None) -> Optional[Any]:
        if mode is None:
            mode = self.render_mode
        if mode is None:
            return None

        if self.renderer is None or self.renderer.mode != mode:
            from .render import PygameRenderer

            if self.renderer is not None:
                self.renderer.close()
            self.renderer = PygameRenderer(self.width, self.height, mode, asset_dir=self.asset_dir)
            self.assets = self.renderer.asset_handles()
        frame = self.renderer.draw(self.frame())
        if mode == "human":
            self.renderer.tick(self.fps)
            return None
        return frame

    def close(self) -> None:
        if self.renderer is not None:
            self.renderer.close()
            self.renderer = None
            self.assets = {}

    def apply_action(self, action: Any) -> InputSnapshot:
        left = right = False
        if self.action_mode == "discrete":
            try:
                action_id = int(action)
            except (TypeError, ValueError):
                action_id = 0
            left = action_id == 1
            right = action_id == 2
        elif self.action_mode == "continuous":
            try:
                steer = float(action[0]) if hasattr(action, "__len__") else float(action)
            except (TypeError, ValueError, IndexError):
                steer = 0.0
            deadzone = 0.1
            left = steer < -deadzone
            right = steer > deadzone
        elif self.action_mode == "buttons":
            if isinstance(action, dict):
                left = bool(action.get("left", False))
                right = bool(action.get("right", False))
        else:
            raise ValueError(f"Unknown action_mode: {self.action_mode}")

        if left and right:
            left = right = False
        return InputSnapshot(left=left, right=right)

    @staticmethod
    def action_from_buttons(left: bool, right: bool) -> int:
        if left and right:
            return 0
        if left:
            return 1
        if right:
            return 2
        return 0

    def _get_observation(self) -> Any:
        if self.obs_mode == "state":
            return self._get_state_observation()
        if self.obs_mode in ("pixels", "rgb_array"):
            return self.render(mode="rgb_array")
        raise ValueError(f"Unknown obs_mode: {self.obs_mode}")

    def _get_state_observation(self) -> List[float]:
        cfg = self.config
        half = cfg.width / 2.0
        player_x_norm = max(-1.0, min(1.0, (self.player.x - half) / half))
        crashed_flag = 1.0 if self.session.status is Status.CRASHED else 0.0

        base = [player_x_norm, crashed_flag]
        lane_unit = cfg.lane_width / cfg.lateral_exaggeration
        for car in self._nearest_cars():
            dz = car.depth - self.world.camera_position
            dz_norm = max(0.0, min(1.0, dz / cfg.draw_distance))
            lane_norm = lane_world_x(car.lane, cfg) / lane_unit
            base.extend([dz_norm, lane_norm])

        while len(base) < self.state_size:
            base.append(0.0)
        return base

    def _nearest_cars(self) -> List[TrafficCar]:
        camera = self.world.camera_position
        ahead = [car for car in self.world.traffic if car.depth > camera]
        ahead.sort(key=lambda car: car.depth)
        return ahead[: self.max_objects]

    @property
    def state_size(self) -> int:
        return 2 + self.max_objects * 2

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.session.score,
            "elapsed_time": self.session.elapsed_time,
            "camera_position": self.world.camera_position,
            "player_x": self.player.x,
            "status": self.session.status.value,
            "crashes": self.crash_count,
            "message": self.current_message(),
        }

    def current_message(self) -> Optional[str]:
        if self.session.status is Status.CRASHED:
            return "CRASHED"
        if self.session.status is Status.PAUSED:
            return "PAUSED"
        return None
