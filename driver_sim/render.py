from __future__ import annotations

import logging
import os
from typing import Any, Dict, Iterable, Optional

from .assets import ASSET_NAMES, AssetHandle, Ready
from .compositor import ClearRect, DrawImage, DrawText, FillPolygon, FillRect
from .viewport import letterbox

logger = logging.getLogger(__name__)

# Larger blits are off-screen anyway and would only cost memory.
MAX_IMAGE_FACTOR = 4


class PygameRenderer:
    def __init__(self, width: int, height: int, mode: str, asset_dir: Optional[str] = None) -> None:
        try:
            import pygame
        except ImportError as exc:
            raise RuntimeError("pygame is required for rendering") from exc

        self.pygame = pygame
        self.width = width
        self.height = height
        self.mode = mode

        pygame.init()
        pygame.font.init()

        self.screen = None
        if mode == "human":
            self.screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
            pygame.display.set_caption("Endless Driver")
        self.surface = pygame.Surface((width, height))

        self.clock = pygame.time.Clock()
        self.fonts: Dict[int, Any] = {}
        self.images: Dict[str, Any] = {}
        self._load_images(asset_dir)

    def close(self) -> None:
        self.pygame.quit()

    def tick(self, fps: int) -> None:
        if self.mode == "human":
            self.clock.tick(fps)

    def asset_handles(self) -> Dict[str, AssetHandle]:
        return {name: Ready(*image.get_size()) for name, image in self.images.items()}

    def draw(self, commands: Iterable[Any]) -> Optional[Any]:
        for command in commands:
            if isinstance(command, FillPolygon):
                self.pygame.draw.polygon(self.surface, command.color, command.points)
            elif isinstance(command, DrawImage):
                self._draw_image(command)
            elif isinstance(command, FillRect):
                self._fill_rect(command)
            elif isinstance(command, DrawText):
                self._draw_text(command)
            elif isinstance(command, ClearRect):
                self.surface.fill((0, 0, 0), self._rect(command.x, command.y, command.w, command.h))

        if self.mode == "human":
            self._present()
            return None
        return self._get_rgb_array()

    def _present(self) -> None:
        pg = self.pygame
        window_w, window_h = self.screen.get_size()
        x, y, w, h = letterbox(window_w, window_h, self.width, self.height)
        self.screen.fill((0, 0, 0))
        if w > 0 and h > 0:
            if (w, h) == (self.width, self.height):
                self.screen.blit(self.surface, (x, y))
            else:
                self.screen.blit(pg.transform.smoothscale(self.surface, (w, h)), (x, y))
        pg.display.flip()

    def _fill_rect(self, command: FillRect) -> None:
        pg = self.pygame
        rect = self._rect(command.x, command.y, command.w, command.h)
        if command.alpha >= 255:
            pg.draw.rect(self.surface, command.color, rect)
            return
        layer = pg.Surface(rect.size, pg.SRCALPHA)
        layer.fill((*command.color, command.alpha))
        self.surface.blit(layer, rect.topleft)

    def _draw_image(self, command: DrawImage) -> None:
        image = self.images.get(command.name)
        if image is None:
            return
        rect = self._rect(command.x, command.y, command.w, command.h)
        if rect.width <= 0 or rect.height <= 0:
            return
        if rect.width > self.width * MAX_IMAGE_FACTOR or rect.height > self.height * MAX_IMAGE_FACTOR:
            return
        if not rect.colliderect(self.surface.get_rect()):
            return
        if rect.size != image.get_size():
            image = self.pygame.transform.scale(image, rect.size)
        self.surface.blit(image, rect.topleft)

    def _draw_text(self, command: DrawText) -> None:
        font = self.fonts.get(command.size)
        if font is None:
            font = self.pygame.font.Font(None, command.size)
            self.fonts[command.size] = font
        text = font.render(command.text, True, command.color)
        x = command.x
        if command.align == "center":
            x -= text.get_width() / 2.0
        elif command.align == "right":
            x -= text.get_width()
        self.surface.blit(text, (int(x), int(command.y)))

    def _load_images(self, asset_dir: Optional[str]) -> None:
        for name in ASSET_NAMES:
            image = None
            if asset_dir:
                path = os.path.join(asset_dir, f"{name}.png")
                if os.path.exists(path):
                    image = self.pygame.image.load(path)
                    if self.screen is not None:
                        image = image.convert_alpha()
                else:
                    logger.warning("Missing image %s, drawing a placeholder", path)
            if image is None:
                image = self._placeholder(name)
            self.images[name] = image

    def _placeholder(self, name: str):
        if name.startswith("car_"):
            return self._player_sprite(name[len("car_"):])
        if name == "traffic_car":
            return self._traffic_sprite()
        if name == "tree":
            return self._tree_sprite()
        if name == "sky":
            return self._sky_sprite()
        return self._skyline_sprite()

    def _player_sprite(self, facing: str):
        pg = self.pygame
        w, h = 350, 188
        sprite = pg.Surface((w, h), pg.SRCALPHA)
        lean = {"left": -14, "right": 14}.get(facing, 0)

        for wx in (18, w - 58):
            pg.draw.rect(sprite, (20, 20, 20), (wx, h - 52, 40, 48))
        pg.draw.rect(sprite, (235, 38, 46), (24, 60, w - 48, h - 80), border_radius=18)
        pg.draw.rect(sprite, (190, 30, 38), (60 + lean, 18, w - 120, 60), border_radius=14)
        pg.draw.rect(sprite, (153, 230, 255), (80 + lean, 28, w - 160, 38), border_radius=8)
        pg.draw.rect(sprite, (255, 255, 255), (w // 2 - 14 + lean, 60, 28, h - 80))
        for lx in (40, w - 100):
            pg.draw.rect(sprite, (255, 200, 60), (lx, h - 54, 60, 16))
        return sprite

    def _traffic_sprite(self):
        pg = self.pygame
        w, h = 160, 120
        sprite = pg.Surface((w, h), pg.SRCALPHA)
        for wx in (8, w - 30):
            pg.draw.rect(sprite, (25, 25, 25), (wx, h - 30, 22, 28))
        pg.draw.rect(sprite, (242, 194, 51), (10, 40, w - 20, h - 54), border_radius=10)
        pg.draw.rect(sprite, (242, 194, 51), (30, 8, w - 60, 40), border_radius=8)
        pg.draw.rect(sprite, (179, 230, 255), (40, 16, w - 80, 22))
        pg.draw.rect(sprite, (25, 25, 25), (w // 2 - 8, 40, 16, h - 54))
        for lx in (18, w - 46):
            pg.draw.rect(sprite, (200, 20, 20), (lx, h - 40, 28, 10))
        return sprite

    def _tree_sprite(self):
        pg = self.pygame
        w, h = 120, 200
        sprite = pg.Surface((w, h), pg.SRCALPHA)
        pg.draw.rect(sprite, (101, 67, 33), (w // 2 - 10, h - 60, 20, 60))
        pg.draw.polygon(sprite, (16, 100, 30), [(w // 2, 0), (w, h - 50), (0, h - 50)])
        pg.draw.polygon(sprite, (24, 124, 40), [(w // 2, 30), (w - 14, h - 70), (14, h - 70)])
        return sprite

    def _sky_sprite(self):
        pg = self.pygame
        w, h = 640, 160
        sprite = pg.Surface((w, h), pg.SRCALPHA)
        for cx, cy, cw, ch in ((60, 40, 180, 50), (300, 80, 220, 60), (480, 20, 140, 40)):
            pg.draw.ellipse(sprite, (250, 250, 255, 220), (cx, cy, cw, ch))
            pg.draw.ellipse(sprite, (250, 250, 255, 220), (cx + cw // 4, cy - ch // 3, cw // 2, ch))
        return sprite

    def _skyline_sprite(self):
        pg = self.pygame
        w, h = 480, 90
        sprite = pg.Surface((w, h), pg.SRCALPHA)
        x = 0
        for bw, bh in ((40, 50), (60, 80), (35, 40), (70, 65), (45, 90), (55, 55), (80, 35), (50, 70), (45, 45)):
            pg.draw.rect(sprite, (70, 90, 120), (x, h - bh, bw, bh))
            x += bw + 4
        return sprite

    def _get_rgb_array(self):
        import numpy as np

        arr = self.pygame.surfarray.array3d(self.surface)
        return np.transpose(arr, (1, 0, 2))

    def _rect(self, x: float, y: float, w: float, h: float):
        return self.pygame.Rect(int(x), int(y), int(w), int(h))
