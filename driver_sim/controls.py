from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class InputSnapshot:
    left: bool = False
    right: bool = False
    pause: bool = False
    restart: bool = False

    def newly_pressed(self, previous: "InputSnapshot") -> "InputSnapshot":
        return InputSnapshot(
            left=self.left and not previous.left,
            right=self.right and not previous.right,
            pause=self.pause and not previous.pause,
            restart=self.restart and not previous.restart,
        )


IDLE = InputSnapshot()


def snapshot_from_keys(keys: Any, pygame: Any) -> InputSnapshot:
    """Build a snapshot from pygame.key.get_pressed()."""
    return InputSnapshot(
        left=bool(keys[pygame.K_LEFT] or keys[pygame.K_a]),
        right=bool(keys[pygame.K_RIGHT] or keys[pygame.K_d]),
        pause=bool(keys[pygame.K_p] or keys[pygame.K_ESCAPE]),
        restart=bool(keys[pygame.K_r] or keys[pygame.K_RETURN]),
    )


class FrameClock:
    """Turns monotonic timestamps (seconds) into per-frame deltas."""

    def __init__(self, max_dt: Optional[float] = None) -> None:
        self.max_dt = max_dt
        self.last_time: Optional[float] = None

    def reset(self) -> None:
        self.last_time = None

    def tick(self, now: float) -> float:
        if self.last_time is None:
            self.last_time = now
            return 0.0
        dt = max(0.0, now - self.last_time)
        self.last_time = now
        if self.max_dt is not None:
            dt = min(dt, self.max_dt)
        return dt
