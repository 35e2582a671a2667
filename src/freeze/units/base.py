"""Base classes for the unit type system.

Role      -- which side of the chase a unit type plays
UnitType  -- abstract base every concrete type subclasses
"""

from __future__ import annotations

import random
from enum import Enum
from typing import ClassVar


class Role(Enum):
    """Which side of the chase a unit plays."""
    INMATE = "inmate"
    POLICE = "police"


class UnitType:
    """Abstract base for every unit type definition.

    Subclasses MUST set all ClassVar fields without defaults.  The registry
    in ``freeze.units`` collects the concrete subclasses at import time.
    """

    # -- identity --
    type_id: ClassVar[str]
    display_name: ClassVar[str]
    icon: ClassVar[str]
    role: ClassVar[Role]

    # -- movement --
    speed: ClassVar[float]             # base units/second
    speed_jitter: ClassVar[float] = 0.0  # uniform extra speed in [0, jitter)

    # -- body --
    size: ClassVar[float]  # collision radius

    # -- perception (police only) --
    vision_range: ClassVar[float] = 0.0
    vision_angle: ClassVar[float] = 0.0      # full cone width, degrees
    flashlight_range: ClassVar[float] = 0.0
    flashlight_angle: ClassVar[float] = 0.0  # full cone width, degrees

    # -- transport (police only) --
    capacity: ClassVar[int] = 0

    # -- helpers --

    @classmethod
    def roll_speed(cls, rng: random.Random) -> float:
        """Per-unit speed: base plus a uniform jitter drawn from *rng*."""
        if cls.speed_jitter <= 0:
            return cls.speed
        return cls.speed + rng.random() * cls.speed_jitter

    @classmethod
    def is_inmate(cls) -> bool:
        return cls.role is Role.INMATE

    @classmethod
    def is_police(cls) -> bool:
        return cls.role is Role.POLICE

    def __repr__(self) -> str:
        return f"<UnitType {self.type_id}>"
