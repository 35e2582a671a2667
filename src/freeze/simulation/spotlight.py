"""Spotlight -- a stationary illumination zone.

Spotlights have no behaviour of their own.  They are switched on and off
from outside (player input, or the depleted-battery rule) and answer one
geometric question: is this point inside my radius?
"""

from __future__ import annotations

import math


class Spotlight:
    """Fixed circle of light with an on/off switch."""

    def __init__(self, index: int, position: tuple[float, float], radius: float) -> None:
        self._index = index
        self._position = (float(position[0]), float(position[1]))
        self._radius = float(radius)
        self.active = False

    @property
    def index(self) -> int:
        return self._index

    @property
    def position(self) -> tuple[float, float]:
        return self._position

    @property
    def radius(self) -> float:
        return self._radius

    def set_active(self, active: bool) -> None:
        self.active = bool(active)

    def contains(self, point: tuple[float, float]) -> bool:
        """Euclidean containment test, independent of the on/off state."""
        return math.hypot(point[0] - self._position[0], point[1] - self._position[1]) <= self._radius

    def illuminates(self, point: tuple[float, float]) -> bool:
        """True when the spotlight is on and *point* is inside it."""
        return self.active and self.contains(point)

    def to_dict(self) -> dict:
        return {
            "index": self._index,
            "position": {"x": self._position[0], "y": self._position[1]},
            "radius": self._radius,
            "active": self.active,
        }


def is_lit(point: tuple[float, float], spotlights: list[Spotlight]) -> bool:
    """Logical OR of ``illuminates`` over the whole field."""
    return any(s.illuminates(point) for s in spotlights)
