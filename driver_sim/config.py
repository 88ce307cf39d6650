from __future__ import annotations

import logging
import math
import os
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Tuple

logger = logging.getLogger(__name__)

Color = Tuple[int, int, int]


@dataclass
class GameConfig:
    """Tunables for the road, camera, world objects and scoring."""
    # Logical resolution (the window is letterboxed around it)
    width: int = 1280
    height: int = 720
    fps: int = 60

    # Road
    segment_length: float = 35.0
    visible_segments: int = math.ceil(720 / 35) + 10
    segment_buffer: int = 20
    road_width: float = 4000.0
    rumble_fraction: float = 0.1
    lane_count: int = 3
    dash_every: int = 3
    dash_min_width: float = 4.0
    dash_width_fraction: float = 0.01

    # Camera / projection
    camera_depth: float = 40.0
    camera_height: float = 800.0
    projection_epsilon: float = 0.01
    min_scale: float = 0.0005
    lateral_exaggeration: float = 1.5
    speed: float = 350.0  # world units per second

    # Player car (screen space)
    player_width: float = 350.0
    player_height: float = 188.0
    player_bottom_margin: float = 20.0
    player_turn_speed: float = 480.0  # 8 px per frame at 60 Hz

    # Scenery
    tree_count: int = 100
    tree_spacing: float = 200.0
    tree_offset: float = 3000.0
    tree_recycle_distance: float = 20000.0
    tree_world_height: float = 3000.0
    object_draw_distance: float = 20000.0

    # Traffic
    traffic_count: int = 16
    traffic_start_depth: float = 900.0
    traffic_spacing: float = 1500.0
    traffic_recycle_min: float = 21000.0
    traffic_recycle_max: float = 27000.0
    traffic_world_width: float = 520.0
    traffic_world_height: float = 450.0
    near_field: float = 150.0

    # Session
    score_rate: float = 0.1  # points per world unit travelled
    reset_scenery_on_restart: bool = True

    # Parallax
    sky_drift_speed: float = 12.0  # px per second
    skyline_parallax: float = 0.15

    # Palette
    sky_color: Color = (135, 206, 235)
    grass_color: Color = (34, 139, 34)
    road_color_a: Color = (112, 112, 112)
    road_color_b: Color = (96, 96, 96)
    rumble_color_a: Color = (255, 0, 0)
    rumble_color_b: Color = (255, 255, 255)
    dash_color: Color = (255, 255, 255)
    hud_color: Color = (255, 255, 255)
    hint_color: Color = (220, 220, 220)
    overlay_color: Color = (0, 0, 0)

    @classmethod
    def from_yaml(cls, path: str) -> "GameConfig":
        return build_config(load_yaml(path))

    @property
    def draw_distance(self) -> float:
        return (self.visible_segments + self.segment_buffer + 1) * self.segment_length

    @property
    def paved_width(self) -> float:
        return self.road_width * (1.0 - 2.0 * self.rumble_fraction)

    @property
    def lane_width(self) -> float:
        return self.paved_width / float(self.lane_count)

    @property
    def player_y(self) -> float:
        return self.height - self.player_height - self.player_bottom_margin

    def validate(self) -> None:
        positive = (
            "width",
            "height",
            "fps",
            "segment_length",
            "road_width",
            "camera_depth",
            "projection_epsilon",
            "min_scale",
            "lateral_exaggeration",
            "tree_recycle_distance",
            "near_field",
        )
        for name in positive:
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)!r}")
        if self.speed < 0:
            raise ValueError("speed must not be negative")
        if self.lane_count != 3:
            raise ValueError("the road is striped for exactly 3 lanes")
        if self.tree_count < 1 or self.traffic_count < 1:
            raise ValueError("tree_count and traffic_count must be at least 1")
        if not 0.0 <= self.rumble_fraction < 0.5:
            raise ValueError("rumble_fraction must be in [0, 0.5)")
        if self.traffic_recycle_min <= self.tree_recycle_distance:
            raise ValueError("traffic_recycle_min must exceed tree_recycle_distance")
        if self.traffic_recycle_max < self.traffic_recycle_min:
            raise ValueError("traffic_recycle_max must be >= traffic_recycle_min")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def load_yaml(path: str) -> Dict[str, Any]:
    import yaml

    if not os.path.exists(path):
        logger.warning("Config file %s not found, using defaults", path)
        return {}

    with open(path, "r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}

    if not isinstance(data, dict):
        raise ValueError("Config file must contain a YAML mapping (key/value pairs).")
    return data


def build_config(config_data: Dict[str, Any]) -> GameConfig:
    cfg = GameConfig()
    valid_fields = {field.name for field in fields(GameConfig)}
    extras = sorted(set(config_data.keys()) - valid_fields)
    if extras:
        logger.warning("Unknown config keys ignored: %s", ", ".join(extras))

    for field in fields(GameConfig):
        if field.name not in config_data:
            continue
        value = config_data[field.name]
        if field.name.endswith("_color") and isinstance(value, list):
            value = tuple(int(c) for c in value)
        setattr(cfg, field.name, value)

    cfg.validate()
    return cfg


def load_config(path: str = "") -> GameConfig:
    if not path:
        return GameConfig()
    return GameConfig.from_yaml(path)
