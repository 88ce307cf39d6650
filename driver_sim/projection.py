from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .config import GameConfig


@dataclass(frozen=True)
class Projection:
    x: float
    y: float
    scale: float
    width: float


def project(
    depth: float,
    camera_position: float,
    config: GameConfig,
    lateral_offset: float = 0.0,
) -> Optional[Projection]:
    """Map a world depth (and lateral offset) to screen space.

    Returns None when the point is at or behind the camera; callers skip
    whatever they were about to draw for this frame.
    """
    dz = depth - camera_position
    if dz <= config.projection_epsilon:
        return None

    scale = max(config.camera_depth / dz, config.min_scale)
    x = config.width / 2.0 + scale * lateral_offset * config.lateral_exaggeration
    y = config.height / 2.0 + scale * config.camera_height
    return Projection(x=x, y=y, scale=scale, width=scale * config.road_width)
