from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from typing import List, Tuple

from .config import Color, GameConfig
from .projection import Projection, project

Point = Tuple[float, float]


class Parity(enum.Enum):
    A = "a"
    B = "b"


@dataclass(frozen=True)
class RoadSegment:
    index: int
    depth_start: float

    @property
    def parity(self) -> Parity:
        return Parity.A if self.index % 2 == 0 else Parity.B

    def has_dash(self, config: GameConfig) -> bool:
        return self.index % config.dash_every == 0


@dataclass(frozen=True)
class Quad:
    points: Tuple[Point, Point, Point, Point]
    color: Color


def base_index(position: float, config: GameConfig) -> int:
    return int(math.floor(position / config.segment_length))


def segment_at(index: int, config: GameConfig) -> RoadSegment:
    return RoadSegment(index=index, depth_start=index * config.segment_length)


def visible_segments(position: float, config: GameConfig) -> List[RoadSegment]:
    """Segments from the far end of the draw window back to the camera."""
    first = base_index(position, config)
    count = config.visible_segments + config.segment_buffer
    return [segment_at(first + n, config) for n in range(count, -1, -1)]


def segment_color(segment: RoadSegment, config: GameConfig) -> Color:
    return config.road_color_a if segment.parity is Parity.A else config.road_color_b


def rumble_color(segment: RoadSegment, config: GameConfig) -> Color:
    return config.rumble_color_a if segment.parity is Parity.A else config.rumble_color_b


def _band(near: Projection, far: Projection, near_span: Tuple[float, float],
          far_span: Tuple[float, float], color: Color) -> Quad:
    return Quad(
        points=(
            (near_span[0], near.y),
            (near_span[1], near.y),
            (far_span[1], far.y),
            (far_span[0], far.y),
        ),
        color=color,
    )


def segment_quads(segment: RoadSegment, position: float, config: GameConfig) -> List[Quad]:
    near = project(segment.depth_start, position, config)
    far = project(segment.depth_start + config.segment_length, position, config)
    if near is None or far is None:
        return []

    def edges(p: Projection) -> Tuple[float, float]:
        return p.x - p.width / 2.0, p.x + p.width / 2.0

    near_left, near_right = edges(near)
    far_left, far_right = edges(far)
    near_rumble = near.width * config.rumble_fraction
    far_rumble = far.width * config.rumble_fraction

    quads = [
        _band(near, far, (near_left, near_right), (far_left, far_right), segment_color(segment, config)),
        _band(
            near, far,
            (near_left, near_left + near_rumble),
            (far_left, far_left + far_rumble),
            rumble_color(segment, config),
        ),
        _band(
            near, far,
            (near_right - near_rumble, near_right),
            (far_right - far_rumble, far_right),
            rumble_color(segment, config),
        ),
    ]

    if segment.has_dash(config):
        near_lane = (near.width - 2.0 * near_rumble) / config.lane_count
        far_lane = (far.width - 2.0 * far_rumble) / config.lane_count
        near_dash = max(config.dash_min_width, near.width * config.dash_width_fraction)
        far_dash = max(config.dash_min_width, far.width * config.dash_width_fraction)
        for boundary in range(1, config.lane_count):
            near_mid = near_left + near_rumble + near_lane * boundary
            far_mid = far_left + far_rumble + far_lane * boundary
            quads.append(
                _band(
                    near, far,
                    (near_mid - near_dash / 2.0, near_mid + near_dash / 2.0),
                    (far_mid - far_dash / 2.0, far_mid + far_dash / 2.0),
                    config.dash_color,
                )
            )
    return quads


def road_quads(position: float, config: GameConfig) -> List[Quad]:
    quads: List[Quad] = []
    for segment in visible_segments(position, config):
        quads.extend(segment_quads(segment, position, config))
    return quads
