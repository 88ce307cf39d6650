from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Union

ASSET_NAMES = (
    "car_straight",
    "car_left",
    "car_right",
    "traffic_car",
    "tree",
    "sky",
    "skyline",
)


@dataclass(frozen=True)
class Pending:
    pass


@dataclass(frozen=True)
class Ready:
    width: int
    height: int

    @property
    def aspect(self) -> float:
        return self.width / float(self.height) if self.height else 1.0


AssetHandle = Union[Pending, Ready]


def is_ready(handle: AssetHandle) -> bool:
    return isinstance(handle, Ready)


def handle_for(assets: Mapping[str, AssetHandle], name: str) -> AssetHandle:
    return assets.get(name, Pending())
