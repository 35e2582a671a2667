"""CountdownTimer -- the one timer shape every agent uses.

Timers are plain values ticked by the simulation's ``dt``; nothing is
scheduled and nothing reads the wall clock, so a test can drive any timer
to expiry by calling ``tick`` with the right amounts.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class CountdownTimer:
    """Counts ``remaining`` down to zero.

    A timer created with no duration starts expired.
    """

    remaining: float = 0.0

    def tick(self, dt: float) -> None:
        if self.remaining > 0.0:
            self.remaining = max(0.0, self.remaining - dt)

    @property
    def expired(self) -> bool:
        return self.remaining <= 0.0

    def reset(self, duration: float) -> None:
        self.remaining = max(0.0, duration)

    def clear(self) -> None:
        self.remaining = 0.0
