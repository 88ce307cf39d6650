from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from .config import GameConfig
from .projection import project
from .world import TrafficCar, lane_world_x


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    w: float
    h: float

    @property
    def left(self) -> float:
        return self.x

    @property
    def right(self) -> float:
        return self.x + self.w

    @property
    def top(self) -> float:
        return self.y

    @property
    def bottom(self) -> float:
        return self.y + self.h


def rects_overlap(a: Rect, b: Rect) -> bool:
    return a.right > b.left and b.right > a.left and a.bottom > b.top and b.bottom > a.top


def player_box(player_x: float, config: GameConfig) -> Rect:
    return Rect(
        x=player_x - config.player_width / 2.0,
        y=config.player_y,
        w=config.player_width,
        h=config.player_height,
    )


def traffic_car_box(car: TrafficCar, camera_position: float, config: GameConfig) -> Optional[Rect]:
    """Screen box of a traffic car, bottom edge resting on its projected road line."""
    p = project(car.depth, camera_position, config, lane_world_x(car.lane, config))
    if p is None:
        return None
    w = p.scale * config.traffic_world_width
    h = p.scale * config.traffic_world_height
    return Rect(x=p.x - w / 2.0, y=p.y - h, w=w, h=h)


def in_near_field(car: TrafficCar, camera_position: float, config: GameConfig) -> bool:
    dz = car.depth - camera_position
    return 0.0 < dz <= config.near_field


def find_collision(
    traffic: Iterable[TrafficCar],
    camera_position: float,
    player_x: float,
    config: GameConfig,
) -> Optional[TrafficCar]:
    player = player_box(player_x, config)
    for car in traffic:
        if not in_near_field(car, camera_position, config):
            continue
        box = traffic_car_box(car, camera_position, config)
        if box is not None and rects_overlap(player, box):
            return car
    return None
