from freeze.units.base import Role, UnitType


class RegularInmate(UnitType):
    """Baseline escapee."""
    type_id = "regular"
    display_name = "Inmate"
    icon = "I"
    role = Role.INMATE
    speed = 60.0
    speed_jitter = 30.0
    size = 8.0


class FastInmate(UnitType):
    """Small and quick; crosses a spotlight gap before it can be lit."""
    type_id = "fast"
    display_name = "Runner"
    icon = "R"
    role = Role.INMATE
    speed = 120.0
    speed_jitter = 30.0
    size = 6.0


class StrongInmate(UnitType):
    """Slow and large, so policemen collide with it from further away."""
    type_id = "strong"
    display_name = "Brute"
    icon = "B"
    role = Role.INMATE
    speed = 42.0
    speed_jitter = 18.0
    size = 12.0


class SneakyInmate(UnitType):
    type_id = "sneaky"
    display_name = "Sneak"
    icon = "S"
    role = Role.INMATE
    speed = 72.0
    speed_jitter = 18.0
    size = 7.0
