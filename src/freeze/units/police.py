from freeze.units.base import Role, UnitType


class PatrolOfficer(UnitType):
    """Foot patrol with a wide vision cone and a narrow flashlight.

    Slightly slower than a regular inmate at base speed; the chase speed
    multipliers in ``freeze.simulation.policeman`` make up the difference.
    """
    type_id = "patrol_officer"
    display_name = "Policeman"
    icon = "P"
    role = Role.POLICE
    speed = 48.0
    speed_jitter = 24.0
    size = 12.0
    vision_range = 450.0
    vision_angle = 90.0
    flashlight_range = 120.0
    flashlight_angle = 30.0
    capacity = 10
