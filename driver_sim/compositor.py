from __future__ import annotations

from dataclasses import dataclass
from typing import List, Mapping, Optional, Tuple, Union

from .assets import AssetHandle, Ready, handle_for, is_ready
from .collision import traffic_car_box
from .config import Color, GameConfig
from .projection import project
from .road import Point, road_quads
from .session import Facing, GameSession, PlayerCar, Status
from .world import SceneryObject, TrafficCar, World


@dataclass(frozen=True)
class ClearRect:
    x: float
    y: float
    w: float
    h: float


@dataclass(frozen=True)
class FillRect:
    x: float
    y: float
    w: float
    h: float
    color: Color
    alpha: int = 255


@dataclass(frozen=True)
class FillPolygon:
    points: Tuple[Point, ...]
    color: Color


@dataclass(frozen=True)
class DrawImage:
    name: str
    x: float
    y: float
    w: float
    h: float


@dataclass(frozen=True)
class DrawText:
    text: str
    x: float
    y: float
    size: int
    color: Color
    align: str = "left"


DrawCommand = Union[ClearRect, FillRect, FillPolygon, DrawImage, DrawText]

PLAYER_IMAGES = {
    Facing.STRAIGHT: "car_straight",
    Facing.LEFT: "car_left",
    Facing.RIGHT: "car_right",
}

CONTROLS_HINT = "ARROWS/AD: STEER   P: PAUSE   R: RESTART"


def _background(config: GameConfig) -> List[DrawCommand]:
    half = config.height / 2.0
    return [
        ClearRect(0, 0, config.width, config.height),
        FillRect(0, 0, config.width, half, config.sky_color),
        FillRect(0, half, config.width, config.height - half, config.grass_color),
    ]


def _tiled(name: str, handle: Ready, offset: float, y: float, config: GameConfig) -> List[DrawCommand]:
    if handle.width <= 0:
        return []
    commands: List[DrawCommand] = []
    x = (offset % handle.width) - handle.width
    while x < config.width:
        commands.append(DrawImage(name, x, y, handle.width, handle.height))
        x += handle.width
    return commands


def _parallax(
    session: GameSession, player: PlayerCar, config: GameConfig, assets: Mapping[str, AssetHandle]
) -> List[DrawCommand]:
    commands: List[DrawCommand] = []
    horizon = config.height / 2.0

    sky = handle_for(assets, "sky")
    if isinstance(sky, Ready):
        commands.extend(_tiled("sky", sky, -session.elapsed_time * config.sky_drift_speed, 0.0, config))

    skyline = handle_for(assets, "skyline")
    if isinstance(skyline, Ready):
        offset = -(player.x - config.width / 2.0) * config.skyline_parallax
        commands.extend(_tiled("skyline", skyline, offset, horizon - skyline.height, config))
    return commands


def _tree(tree: SceneryObject, camera: float, config: GameConfig, handle: AssetHandle) -> Optional[DrawCommand]:
    if not isinstance(handle, Ready):
        return None
    p = project(tree.depth, camera, config, tree.lateral_offset)
    if p is None:
        return None
    h = p.scale * config.tree_world_height
    w = h * handle.aspect
    return DrawImage("tree", p.x - w / 2.0, p.y - h, w, h)


def _traffic(car: TrafficCar, camera: float, config: GameConfig, handle: AssetHandle) -> Optional[DrawCommand]:
    if not isinstance(handle, Ready):
        return None
    box = traffic_car_box(car, camera, config)
    if box is None:
        return None
    return DrawImage("traffic_car", box.x, box.y, box.w, box.h)


def _objects(world: World, config: GameConfig, assets: Mapping[str, AssetHandle]) -> List[DrawCommand]:
    tree_handle = handle_for(assets, "tree")
    car_handle = handle_for(assets, "traffic_car")
    commands: List[DrawCommand] = []
    for obj in world.visible_objects():
        if isinstance(obj, TrafficCar):
            command = _traffic(obj, world.camera_position, config, car_handle)
        else:
            command = _tree(obj, world.camera_position, config, tree_handle)
        if command is not None:
            commands.append(command)
    return commands


def _player(player: PlayerCar, config: GameConfig, assets: Mapping[str, AssetHandle]) -> List[DrawCommand]:
    name = PLAYER_IMAGES[player.facing]
    if not is_ready(handle_for(assets, name)):
        return []
    return [
        DrawImage(
            name,
            player.x - config.player_width / 2.0,
            config.player_y,
            config.player_width,
            config.player_height,
        )
    ]


def _hud(session: GameSession, config: GameConfig) -> List[DrawCommand]:
    margin = 16
    return [
        DrawText(f"TIME {session.elapsed_time:6.1f}", margin, margin, 32, config.hud_color),
        DrawText(f"SCORE {session.score}", config.width - margin, margin, 32, config.hud_color, "right"),
        DrawText(CONTROLS_HINT, config.width / 2.0, margin, 18, config.hint_color, "center"),
    ]


def _overlay(session: GameSession, config: GameConfig) -> List[DrawCommand]:
    if session.status is Status.PAUSED:
        title, subtitle = "PAUSED", "Press P to resume"
    elif session.status is Status.CRASHED:
        title, subtitle = "CRASHED", f"Score {session.score}  -  press R to restart"
    else:
        return []
    cx = config.width / 2.0
    cy = config.height / 2.0
    return [
        FillRect(0, 0, config.width, config.height, config.overlay_color, alpha=120),
        DrawText(title, cx, cy - 40, 72, config.hud_color, "center"),
        DrawText(subtitle, cx, cy + 30, 28, config.hud_color, "center"),
    ]


def compose(
    world: World,
    session: GameSession,
    player: PlayerCar,
    config: GameConfig,
    assets: Mapping[str, AssetHandle],
) -> List[DrawCommand]:
    """Build one frame as a flat list of draw commands, back to front."""
    commands: List[DrawCommand] = []
    commands.extend(_background(config))
    commands.extend(_parallax(session, player, config, assets))
    for quad in road_quads(world.camera_position, config):
        commands.append(FillPolygon(quad.points, quad.color))
    commands.extend(_objects(world, config, assets))
    commands.extend(_player(player, config, assets))
    commands.extend(_hud(session, config))
    commands.extend(_overlay(session, config))
    return commands
