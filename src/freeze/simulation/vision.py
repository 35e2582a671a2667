"""Cone perception for policemen.

A policeman has two cones sharing one heading:

  - Vision: long and wide, but only notices inmates that are frozen
    (standing lit in a spotlight).
  - Flashlight: short and narrow, notices any inmate.

Both pick the nearest qualifying inmate.  Angles use the 0=north
convention: ``heading = atan2(dx, dy)`` in degrees, clockwise.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from .inmate import InmateAgent


def heading_to(origin: tuple[float, float], point: tuple[float, float]) -> float:
    """Heading in degrees from *origin* toward *point* (0 = +y, clockwise)."""
    return math.degrees(math.atan2(point[0] - origin[0], point[1] - origin[1]))


def angle_difference(a: float, b: float) -> float:
    """Signed difference a - b normalized to [-180, 180)."""
    return (a - b + 180.0) % 360.0 - 180.0


def in_cone(
    origin: tuple[float, float],
    heading: float,
    point: tuple[float, float],
    cone_range: float,
    cone_angle: float,
) -> bool:
    """True if *point* is closer than *cone_range* and within ±cone_angle/2 of *heading*."""
    dx = point[0] - origin[0]
    dy = point[1] - origin[1]
    dist = math.hypot(dx, dy)
    if dist >= cone_range:
        return False
    if dist == 0.0:
        return True
    angle_to = math.degrees(math.atan2(dx, dy))
    return abs(angle_difference(angle_to, heading)) <= cone_angle / 2.0


def nearest_in_cone(
    origin: tuple[float, float],
    heading: float,
    candidates: Iterable[InmateAgent],
    cone_range: float,
    cone_angle: float,
    frozen_only: bool = False,
) -> InmateAgent | None:
    """Closest candidate inside the cone, or None.

    Callers pass only non-captured inmates.  Ties keep the first candidate.
    """
    best = None
    best_dist = math.inf
    for inmate in candidates:
        if frozen_only and not inmate.frozen:
            continue
        if not in_cone(origin, heading, inmate.position, cone_range, cone_angle):
            continue
        dist = math.hypot(inmate.position[0] - origin[0], inmate.position[1] - origin[1])
        if dist < best_dist:
            best = inmate
            best_dist = dist
    return best
