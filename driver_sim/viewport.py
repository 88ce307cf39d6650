from __future__ import annotations

from typing import Tuple


def letterbox(window_w: int, window_h: int, logical_w: int, logical_h: int) -> Tuple[int, int, int, int]:
    """Largest rect with the logical aspect ratio, centred in the window."""
    if window_w <= 0 or window_h <= 0:
        return 0, 0, 0, 0
    aspect = logical_w / float(logical_h)
    if window_w / float(window_h) > aspect:
        h = window_h
        w = int(round(h * aspect))
    else:
        w = window_w
        h = int(round(w / aspect))
    return (window_w - w) // 2, (window_h - h) // 2, w, h


def to_logical(
    point: Tuple[float, float], box: Tuple[int, int, int, int], logical_w: int, logical_h: int
) -> Tuple[float, float]:
    x, y, w, h = box
    if w <= 0 or h <= 0:
        return 0.0, 0.0
    return (point[0] - x) * logical_w / float(w), (point[1] - y) * logical_h / float(h)
