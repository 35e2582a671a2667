"""InmateAgent -- an escapee walking a waypoint path toward the exit.

State machine
-------------
    wandering --(lit by any active spotlight)--> frozen
    frozen    --(no longer lit)---------------> wandering   (freeze_time -> 0)
    either    --(policeman collision)---------> captured

While frozen the inmate does not move and ``freeze_time`` grows by ``dt``
every lit tick.  Breaking the light resets it to zero, so only an unbroken
hold reaches ``freeze_threshold`` and makes the inmate catchable.

Captured is NOT stored here.  A policeman's ``captured_ids`` list is the
single owner; SimulationClock derives the captured state from it and stops
feeding light/motion updates to captured inmates.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from enum import Enum

from freeze.units import get_type

# Distance at which a waypoint counts as reached
_WAYPOINT_ARRIVE = 5.0

# Slack on the freeze threshold; summing 1/60 s ticks undershoots it
_FREEZE_EPSILON = 1e-9

_OPACITY_LIT = 1.0
_OPACITY_DARK = 0.2


class InmateState(Enum):
    WANDERING = "wandering"
    FROZEN = "frozen"
    CAPTURED = "captured"


def opacity_for(state: InmateState) -> float:
    """Display opacity.  Never consulted for gameplay."""
    if state is InmateState.WANDERING:
        return _OPACITY_DARK
    return _OPACITY_LIT


def plan_escape_route(
    start: tuple[float, float],
    rng: random.Random,
    field_width: float,
    field_height: float,
    exit_y: float,
) -> list[tuple[float, float]]:
    """Randomized top-to-bottom path of 3-5 waypoints ending below the field.

    The first waypoint drops into the field near the entry x, the middle
    ones zig-zag across the central two thirds, and the last sits past the
    bottom edge in the central third.
    """
    count = 3 + rng.randrange(3)
    left, span = field_width / 6.0, field_width * 4.0 / 6.0
    waypoints = [(
        start[0] + (rng.random() - 0.5) * (field_width / 6.0),
        field_height / 8.0 + rng.random() * (field_height / 8.0),
    )]
    for i in range(1, count - 1):
        waypoints.append((
            left + rng.random() * span,
            (field_height / count) * (i + 1) + (rng.random() - 0.5) * (field_height / 8.0),
        ))
    waypoints.append((
        field_width / 3.0 + rng.random() * (field_width / 3.0),
        exit_y,
    ))
    return waypoints


@dataclass
class InmateAgent:
    """A single inmate.  Positions are field units, speed is units/second."""

    inmate_id: str
    type_id: str
    position: tuple[float, float]
    waypoints: list[tuple[float, float]] = field(default_factory=list)
    speed: float = 60.0
    size: float = 8.0
    freeze_threshold: float = 5.0
    frozen: bool = False
    freeze_time: float = 0.0
    _waypoint_index: int = 0
    _reached_exit: bool = False

    @property
    def target(self) -> tuple[float, float]:
        """Current wander destination (the next waypoint)."""
        if self._waypoint_index < len(self.waypoints):
            return self.waypoints[self._waypoint_index]
        return self.position

    @property
    def state(self) -> InmateState:
        """Wandering or frozen.  Captured is decided by the owner of the inmate."""
        return InmateState.FROZEN if self.frozen else InmateState.WANDERING

    def apply_light(self, lit: bool, dt: float) -> None:
        """Freeze (and accumulate) while lit; thaw and reset the instant it is not."""
        if lit:
            self.frozen = True
            self.freeze_time += dt
        else:
            self.frozen = False
            self.freeze_time = 0.0

    def release_freeze(self) -> None:
        """Drop any freeze progress; used when a policeman takes the inmate."""
        self.frozen = False
        self.freeze_time = 0.0

    def advance(self, dt: float) -> None:
        """Walk toward the current waypoint.  No-op while frozen or gone."""
        if self.frozen or self._reached_exit:
            return
        if self._waypoint_index >= len(self.waypoints):
            self._reached_exit = True
            return

        tx, ty = self.waypoints[self._waypoint_index]
        dx = tx - self.position[0]
        dy = ty - self.position[1]
        dist = math.hypot(dx, dy)

        if dist <= _WAYPOINT_ARRIVE:
            self._waypoint_index += 1
            if self._waypoint_index >= len(self.waypoints):
                self._reached_exit = True
            return

        step = min(self.speed * dt, dist)
        self.position = (
            self.position[0] + (dx / dist) * step,
            self.position[1] + (dy / dist) * step,
        )

    def has_reached_exit(self) -> bool:
        return self._reached_exit

    def can_be_caught(self) -> bool:
        return self.frozen and self.freeze_time >= self.freeze_threshold - _FREEZE_EPSILON

    def to_dict(self, state: InmateState | None = None) -> dict:
        state = state or self.state
        utype = get_type(self.type_id)
        return {
            "inmate_id": self.inmate_id,
            "type_id": self.type_id,
            "display_name": utype.display_name if utype else self.type_id,
            "icon": utype.icon if utype else "?",
            "position": {"x": self.position[0], "y": self.position[1]},
            "target": {"x": self.target[0], "y": self.target[1]},
            "state": state.value,
            "freeze_time": round(self.freeze_time, 3),
            "freeze_progress": round(min(self.freeze_time / self.freeze_threshold, 1.0), 3),
            "opacity": opacity_for(state),
        }
