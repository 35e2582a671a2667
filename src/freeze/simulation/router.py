"""NotificationRouter -- single-consumer dispatch of spotlight activations.

Switching a spotlight on must not pull every idle policeman across the
field.  The router picks exactly one: the nearest policeman that is not
full (a full policeman is already walking to the drop-off).  When nobody is
eligible the notification is dropped.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from .policeman import PolicemanAgent


class NotificationRouter:
    """Routes "spotlight activated" to at most one policeman."""

    def __init__(self, policemen: list[PolicemanAgent]) -> None:
        # Shared with SimulationClock; later spawns are seen automatically
        self._policemen = policemen

    def eligible(self) -> list[PolicemanAgent]:
        return [p for p in self._policemen if not p.at_capacity and not p.is_returning]

    def notify_spotlight_activated(self, x: float, y: float) -> PolicemanAgent | None:
        """Deliver to the nearest eligible policeman.  Roster order breaks ties."""
        nearest = None
        nearest_dist = math.inf
        for p in self.eligible():
            dist = math.hypot(p.position[0] - x, p.position[1] - y)
            if dist < nearest_dist:
                nearest = p
                nearest_dist = dist

        if nearest is None:
            logger.debug(f"Spotlight at ({x:.0f}, {y:.0f}): no eligible policeman")
            return None
        nearest.notify_spotlight(x, y)
        logger.debug(
            f"Spotlight at ({x:.0f}, {y:.0f}) routed to {nearest.policeman_id} "
            f"({nearest_dist:.0f} away)"
        )
        return nearest
