from __future__ import annotations

import enum
import random
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from .config import GameConfig


class Lane(enum.IntEnum):
    CENTER = 0
    LEFT = 1
    RIGHT = 2


# Lane centres in paved-lane widths from the road centre line
_LANE_STEPS = {Lane.CENTER: 0.0, Lane.LEFT: -1.0, Lane.RIGHT: 1.0}


def lane_world_x(lane: Lane, config: GameConfig) -> float:
    # Divided by the exaggeration so the projected centre lands mid-lane on the drawn road.
    return _LANE_STEPS[Lane(lane)] * config.lane_width / config.lateral_exaggeration


@dataclass
class SceneryObject:
    depth: float
    lateral_offset: float


@dataclass
class TrafficCar:
    depth: float
    lane: Lane


WorldObject = Union[SceneryObject, TrafficCar]


def initial_trees(config: GameConfig) -> List[SceneryObject]:
    return [
        SceneryObject(
            depth=i * config.tree_spacing,
            lateral_offset=-config.tree_offset if i % 2 == 0 else config.tree_offset,
        )
        for i in range(config.tree_count)
    ]


def initial_traffic(config: GameConfig) -> List[TrafficCar]:
    # First car sits in the left lane so a fresh run does not open on a head-on hit.
    return [
        TrafficCar(
            depth=config.traffic_start_depth + i * config.traffic_spacing,
            lane=Lane((i + 1) % config.lane_count),
        )
        for i in range(config.traffic_count)
    ]


class World:
    """Camera position plus the fixed-size tree and traffic pools."""

    def __init__(self, config: GameConfig, seed: Optional[int] = None) -> None:
        self.config = config
        self.rng = random.Random(seed)
        self.camera_position = 0.0
        self.trees: List[SceneryObject] = initial_trees(config)
        self.traffic: List[TrafficCar] = initial_traffic(config)

    def seed(self, seed: Optional[int]) -> None:
        self.rng.seed(seed)

    def reset(self, reset_scenery: bool = True) -> None:
        self.camera_position = 0.0
        self.traffic = initial_traffic(self.config)
        if reset_scenery:
            self.trees = initial_trees(self.config)

    def advance(self, distance: float) -> None:
        if distance < 0.0:
            raise ValueError("the camera only moves forward")
        self.camera_position += distance

    def recycle(self) -> int:
        recycled = 0
        for tree in self.trees:
            if tree.depth < self.camera_position:
                while tree.depth < self.camera_position:
                    tree.depth += self.config.tree_recycle_distance
                recycled += 1

        for car in self.traffic:
            if car.depth < self.camera_position:
                while car.depth < self.camera_position:
                    car.depth += self.rng.uniform(
                        self.config.traffic_recycle_min, self.config.traffic_recycle_max
                    )
                car.lane = Lane(self.rng.randrange(self.config.lane_count))
                recycled += 1
        return recycled

    def visible_objects(self) -> List[WorldObject]:
        """Trees and cars inside the draw window, farthest first."""
        low = self.config.projection_epsilon
        high = self.config.object_draw_distance
        candidates: List[Tuple[float, WorldObject]] = []
        for obj in list(self.trees) + list(self.traffic):
            dz = obj.depth - self.camera_position
            if low < dz <= high:
                candidates.append((obj.depth, obj))
        candidates.sort(key=lambda item: item[0], reverse=True)
        return [obj for _, obj in candidates]
