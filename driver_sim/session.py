from __future__ import annotations

import enum
import math
from dataclasses import dataclass

from .config import GameConfig


class Status(enum.Enum):
    RUNNING = "running"
    PAUSED = "paused"
    CRASHED = "crashed"


class Facing(enum.Enum):
    STRAIGHT = "straight"
    LEFT = "left"
    RIGHT = "right"


@dataclass
class PlayerCar:
    x: float
    facing: Facing = Facing.STRAIGHT

    @classmethod
    def centered(cls, config: GameConfig) -> "PlayerCar":
        return cls(x=config.width / 2.0)

    def steer(self, left: bool, right: bool, dt: float, config: GameConfig) -> None:
        if left and right:
            left = right = False
        if left:
            self.x -= config.player_turn_speed * dt
            self.facing = Facing.LEFT
        elif right:
            self.x += config.player_turn_speed * dt
            self.facing = Facing.RIGHT
        else:
            self.facing = Facing.STRAIGHT
        self.clamp(config)

    def clamp(self, config: GameConfig) -> None:
        min_x = config.player_width / 2.0
        max_x = config.width - config.player_width / 2.0
        self.x = min(max(self.x, min_x), max_x)


@dataclass
class GameSession:
    elapsed_time: float = 0.0
    score: int = 0
    status: Status = Status.RUNNING
    score_carry: float = 0.0

    @property
    def running(self) -> bool:
        return self.status is Status.RUNNING

    def toggle_pause(self) -> bool:
        if self.status is Status.RUNNING:
            self.status = Status.PAUSED
        elif self.status is Status.PAUSED:
            self.status = Status.RUNNING
        else:
            return False
        return True

    def crash(self) -> None:
        self.status = Status.CRASHED

    def restart(self) -> bool:
        if self.status is not Status.CRASHED:
            return False
        self.elapsed_time = 0.0
        self.score = 0
        self.score_carry = 0.0
        self.status = Status.RUNNING
        return True

    def accumulate(self, dt: float, speed: float, config: GameConfig) -> int:
        """Add time and distance-based score; returns the points gained."""
        if not self.running or dt <= 0.0:
            return 0
        self.elapsed_time += dt
        self.score_carry += speed * dt * config.score_rate
        gained = int(math.floor(self.score_carry))
        self.score_carry -= gained
        self.score += gained
        return gained
