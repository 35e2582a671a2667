"""Simulation subsystem -- clock, agents, spotlights, battery."""
from .battery import BatteryResource
from .engine import GameState, SimulationClock
from .inmate import InmateAgent, InmateState, opacity_for, plan_escape_route
from .policeman import Behavior, BehaviorKind, PolicemanAgent, arbitrate
from .router import NotificationRouter
from .spotlight import Spotlight, is_lit
from .timers import CountdownTimer
from .vision import angle_difference, heading_to, in_cone, nearest_in_cone

__all__ = [
    "Behavior",
    "BehaviorKind",
    "BatteryResource",
    "CountdownTimer",
    "GameState",
    "InmateAgent",
    "InmateState",
    "NotificationRouter",
    "PolicemanAgent",
    "SimulationClock",
    "Spotlight",
    "angle_difference",
    "arbitrate",
    "heading_to",
    "in_cone",
    "is_lit",
    "nearest_in_cone",
    "opacity_for",
    "plan_escape_route",
]
