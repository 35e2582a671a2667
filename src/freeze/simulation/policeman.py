"""PolicemanAgent -- patrol, chase, capture, transport, drop off.

Architecture
------------
Behaviour is NOT a stored state machine.  Every tick the policeman gathers
its inputs and hands them to ``arbitrate()``, a pure function that picks the
highest-priority behaviour that applies:

  1. returning_to_drop_off -- captured_ids is full; perception is skipped
  2. vision_chase          -- nearest FROZEN inmate in the vision cone
  3. flashlight_chase      -- nearest inmate of any state in the flashlight
  4. spotlight_attention   -- a routed spotlight notification is still fresh
  5. patrol                -- wander between random points in patrol bounds

Higher priorities also move faster (see SPEED_MULTIPLIERS), so a policeman
visibly snaps toward whatever is most urgent.

The remembered chase ids (``_vision_target_id``/``_flashlight_target_id``)
only let a chase continue while its target is still valid; they are
re-checked against the world on every tick and never decide behaviour on
their own.  Returning is implied by a full list: drop-off is the only way
capacity is released, so nothing else has to remember the trip.

Captured inmates are held as ids.  The policeman moves them (follower
chain) but the inmate objects stay in SimulationClock's arena.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Mapping

from loguru import logger

from freeze.units import Role, require_type

from .timers import CountdownTimer
from .vision import heading_to, nearest_in_cone

if TYPE_CHECKING:
    from .inmate import InmateAgent


class BehaviorKind(Enum):
    PATROL = "patrol"
    VISION_CHASE = "vision_chase"
    FLASHLIGHT_CHASE = "flashlight_chase"
    SPOTLIGHT_ATTENTION = "spotlight_attention"
    RETURNING_TO_DROP_OFF = "returning_to_drop_off"


@dataclass(frozen=True)
class Behavior:
    """Result of one arbitration: what to do and at whom/where."""

    kind: BehaviorKind
    target_id: str | None = None
    point: tuple[float, float] | None = None


SPEED_MULTIPLIERS: dict[BehaviorKind, float] = {
    BehaviorKind.VISION_CHASE: 2.0,
    BehaviorKind.FLASHLIGHT_CHASE: 1.5,
    BehaviorKind.SPOTLIGHT_ATTENTION: 0.3,
    BehaviorKind.PATROL: 1.0,
    BehaviorKind.RETURNING_TO_DROP_OFF: 1.0,
}

ATTENTION_DURATION = 3.0          # seconds a spotlight notification holds attention
PATROL_INTERVAL = (2.0, 5.0)      # seconds between patrol re-rolls
FOLLOW_DISTANCE = 25.0            # spacing of the captured-inmate chain
_ARRIVE_DISTANCE = 5.0            # close enough to a patrol/chase point


def arbitrate(
    at_capacity: bool,
    vision_target_id: str | None,
    flashlight_target_id: str | None,
    attention_point: tuple[float, float] | None,
) -> Behavior:
    """Pick the behaviour for this tick.  Pure: same inputs, same answer."""
    if at_capacity:
        return Behavior(BehaviorKind.RETURNING_TO_DROP_OFF)
    if vision_target_id is not None:
        return Behavior(BehaviorKind.VISION_CHASE, target_id=vision_target_id)
    if flashlight_target_id is not None:
        return Behavior(BehaviorKind.FLASHLIGHT_CHASE, target_id=flashlight_target_id)
    if attention_point is not None:
        return Behavior(BehaviorKind.SPOTLIGHT_ATTENTION, point=attention_point)
    return Behavior(BehaviorKind.PATROL)


class PolicemanAgent:
    """One policeman.  Create once per session; never destroyed mid-session."""

    def __init__(
        self,
        policeman_id: str,
        position: tuple[float, float],
        rng: random.Random,
        *,
        type_id: str = "patrol_officer",
        speed: float | None = None,
        patrol_bounds: tuple[float, float, float, float] = (50.0, 50.0, 1150.0, 600.0),
        drop_off: tuple[float, float] = (1050.0, 400.0),
        drop_off_threshold: float = 10.0,
        attention_duration: float = ATTENTION_DURATION,
    ) -> None:
        utype = require_type(type_id, Role.POLICE)
        if not (utype.flashlight_range < utype.vision_range
                and utype.flashlight_angle < utype.vision_angle):
            raise ValueError(
                f"{type_id}: flashlight cone must be shorter and narrower than vision"
            )

        self.policeman_id = policeman_id
        self.type_id = type_id
        self._rng = rng
        self.position = (float(position[0]), float(position[1]))
        self.speed = speed if speed is not None else utype.roll_speed(rng)
        self.display_name = utype.display_name
        self.icon = utype.icon
        self.size = utype.size
        self.vision_range = utype.vision_range
        self.vision_angle = utype.vision_angle
        self.flashlight_range = utype.flashlight_range
        self.flashlight_angle = utype.flashlight_angle
        self.max_capacity = utype.capacity

        self.patrol_bounds = patrol_bounds
        self.drop_off = drop_off
        self.drop_off_threshold = drop_off_threshold
        self.attention_duration = attention_duration

        self.captured_ids: list[str] = []
        self.heading = 0.0
        self.behavior = Behavior(BehaviorKind.PATROL)
        self.patrol_timer = CountdownTimer()
        self.attention_timer = CountdownTimer()
        self._attention_point: tuple[float, float] | None = None
        self._vision_target_id: str | None = None
        self._flashlight_target_id: str | None = None

        self.target = self.position
        self._new_patrol_target()
        self.heading = heading_to(self.position, self.target)

    # -- queries -------------------------------------------------------------

    @property
    def at_capacity(self) -> bool:
        return len(self.captured_ids) >= self.max_capacity

    @property
    def is_returning(self) -> bool:
        return self.at_capacity

    @property
    def captured_count(self) -> int:
        return len(self.captured_ids)

    @property
    def attention_point(self) -> tuple[float, float] | None:
        return self._attention_point

    def distance_to(self, point: tuple[float, float]) -> float:
        return math.hypot(point[0] - self.position[0], point[1] - self.position[1])

    def at_drop_off(self) -> bool:
        return self.distance_to(self.drop_off) <= self.drop_off_threshold

    # -- external inputs -----------------------------------------------------

    def notify_spotlight(self, x: float, y: float) -> bool:
        """Turn toward a freshly lit spotlight.  Dropped while full or returning."""
        if self.at_capacity:
            return False
        self._attention_point = (float(x), float(y))
        self.attention_timer.reset(self.attention_duration)
        return True

    # -- per-tick ------------------------------------------------------------

    def perceive(self, candidates: Mapping[str, InmateAgent]) -> tuple[str | None, str | None]:
        """Return (vision_target_id, flashlight_target_id) for this tick.

        *candidates* holds only non-captured inmates.  A previous vision
        target stays valid while it is still frozen; a previous flashlight
        target stays valid until it is captured or removed.
        """
        vision = nearest_in_cone(
            self.position, self.heading, candidates.values(),
            self.vision_range, self.vision_angle, frozen_only=True,
        )
        if vision is not None:
            return vision.inmate_id, None
        prev = candidates.get(self._vision_target_id) if self._vision_target_id else None
        if prev is not None and prev.frozen:
            return prev.inmate_id, None

        flash = nearest_in_cone(
            self.position, self.heading, candidates.values(),
            self.flashlight_range, self.flashlight_angle,
        )
        if flash is not None:
            return None, flash.inmate_id
        if self._flashlight_target_id and self._flashlight_target_id in candidates:
            return None, self._flashlight_target_id
        return None, None

    def update(self, dt: float, candidates: Mapping[str, InmateAgent]) -> Behavior:
        """Capacity gate, perception, arbitration, then movement."""
        self.patrol_timer.tick(dt)
        self.attention_timer.tick(dt)
        if self.attention_timer.expired:
            self._attention_point = None

        if self.at_capacity:
            vision_id = flash_id = None
        else:
            vision_id, flash_id = self.perceive(candidates)

        previous = self.behavior
        behavior = arbitrate(self.at_capacity, vision_id, flash_id, self._attention_point)
        self._apply(behavior, previous, candidates)
        self.behavior = behavior

        if self.target != self.position:
            self.heading = heading_to(self.position, self.target)
        self._move(dt, behavior)
        return behavior

    def _apply(
        self,
        behavior: Behavior,
        previous: Behavior,
        candidates: Mapping[str, InmateAgent],
    ) -> None:
        kind = behavior.kind
        self._vision_target_id = behavior.target_id if kind is BehaviorKind.VISION_CHASE else None
        self._flashlight_target_id = (
            behavior.target_id if kind is BehaviorKind.FLASHLIGHT_CHASE else None
        )

        if kind is BehaviorKind.RETURNING_TO_DROP_OFF:
            if previous.kind is not kind:
                logger.info(
                    f"{self.policeman_id} at capacity ({self.captured_count}), "
                    "returning to drop-off"
                )
            self._clear_attention()
            self.target = self.drop_off
        elif kind in (BehaviorKind.VISION_CHASE, BehaviorKind.FLASHLIGHT_CHASE):
            # A chase promotes past any pending spotlight notification
            self._clear_attention()
            self.target = candidates[behavior.target_id].position
        elif kind is BehaviorKind.SPOTLIGHT_ATTENTION:
            self.target = behavior.point
        elif previous.kind is not BehaviorKind.PATROL or self.patrol_timer.expired:
            self._new_patrol_target()

    def _move(self, dt: float, behavior: Behavior) -> None:
        dx = self.target[0] - self.position[0]
        dy = self.target[1] - self.position[1]
        dist = math.hypot(dx, dy)
        step = self.speed * SPEED_MULTIPLIERS[behavior.kind] * dt

        if behavior.kind is BehaviorKind.RETURNING_TO_DROP_OFF:
            if dist > 0.0:
                step = min(step, dist)
                self.position = (self.position[0] + dx / dist * step,
                                 self.position[1] + dy / dist * step)
        elif dist > _ARRIVE_DISTANCE:
            step = min(step, dist)
            self.position = (self.position[0] + dx / dist * step,
                             self.position[1] + dy / dist * step)
        elif behavior.kind is BehaviorKind.PATROL:
            self._new_patrol_target()

        self.position = self._clamp(self.position)

    # -- capture and transport -----------------------------------------------

    def collides_with(self, inmate: InmateAgent) -> bool:
        return self.distance_to(inmate.position) < self.size + inmate.size

    def capture(self, inmate_id: str) -> bool:
        """Take ownership of *inmate_id*.  No-op when full or already held."""
        if self.at_capacity or inmate_id in self.captured_ids:
            return False
        self.captured_ids.append(inmate_id)
        if self._vision_target_id == inmate_id:
            self._vision_target_id = None
        if self._flashlight_target_id == inmate_id:
            self._flashlight_target_id = None
        return True

    def advance_followers(self, inmates: Mapping[str, InmateAgent]) -> None:
        """Place each captured inmate FOLLOW_DISTANCE behind the link ahead of it."""
        leader = self.position
        for inmate_id in self.captured_ids:
            inmate = inmates.get(inmate_id)
            if inmate is None:
                continue
            dx = leader[0] - inmate.position[0]
            dy = leader[1] - inmate.position[1]
            dist = math.hypot(dx, dy)
            if dist > 0.0:
                inmate.position = (leader[0] - dx / dist * FOLLOW_DISTANCE,
                                   leader[1] - dy / dist * FOLLOW_DISTANCE)
            leader = inmate.position

    def attempt_drop_off(self) -> list[str]:
        """Hand over every captured inmate if full and standing at the drop-off."""
        if not self.is_returning or not self.at_drop_off():
            return []
        delivered = self.captured_ids
        self.captured_ids = []
        self.behavior = Behavior(BehaviorKind.PATROL)
        self._new_patrol_target()
        logger.info(f"{self.policeman_id} dropped off {len(delivered)} inmates")
        return delivered

    # -- helpers -------------------------------------------------------------

    def _clear_attention(self) -> None:
        self._attention_point = None
        self.attention_timer.clear()

    def _new_patrol_target(self) -> None:
        min_x, min_y, max_x, max_y = self.patrol_bounds
        self.target = (
            min_x + self._rng.random() * (max_x - min_x),
            min_y + self._rng.random() * (max_y - min_y),
        )
        self.patrol_timer.reset(self._rng.uniform(*PATROL_INTERVAL))

    def _clamp(self, point: tuple[float, float]) -> tuple[float, float]:
        min_x, min_y, max_x, max_y = self.patrol_bounds
        return (min(max(point[0], min_x), max_x), min(max(point[1], min_y), max_y))

    def to_dict(self) -> dict:
        return {
            "policeman_id": self.policeman_id,
            "type_id": self.type_id,
            "display_name": self.display_name,
            "icon": self.icon,
            "position": {"x": self.position[0], "y": self.position[1]},
            "target": {"x": self.target[0], "y": self.target[1]},
            "heading": round(self.heading, 2),
            "behavior": self.behavior.kind.value,
            "behavior_target_id": self.behavior.target_id,
            "captured_count": self.captured_count,
            "max_capacity": self.max_capacity,
            "captured_ids": list(self.captured_ids),
        }
