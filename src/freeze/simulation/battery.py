"""BatteryResource -- the shared energy pool behind every spotlight.

Balancing rule
--------------
With no spotlight lit the battery recharges, faster for every inmate the
police have delivered.  With ``k`` spotlights lit it drains at

    single_drain * (1 + (k - 1) * multi_spotlight_multiplier)

so one light is cheap and each additional light costs more than the one
before it in aggregate.  The pool saturates at both ends: it never goes
below zero and never exceeds ``max``.

The battery does not switch spotlights off itself.  SimulationClock reads
``is_depleted()`` right after ``update()`` and forces every spotlight off on
the same tick.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class BatteryResource:
    """Saturating energy accumulator.  Rates are per second."""

    max: float = 100.0
    base_charge_rate: float = 30.0
    per_delivery_bonus: float = 6.0
    single_drain: float = 18.0
    multi_spotlight_multiplier: float = 1.5
    current: float | None = None

    def __post_init__(self) -> None:
        # A session starts with a full battery unless told otherwise
        if self.current is None:
            self.current = self.max
        self.current = min(max(self.current, 0.0), self.max)

    def charge_rate(self, delivered_count: int) -> float:
        return self.base_charge_rate + delivered_count * self.per_delivery_bonus

    def drain_rate(self, active_count: int) -> float:
        """Drain per second with *active_count* spotlights lit (0 when none)."""
        if active_count <= 0:
            return 0.0
        return self.single_drain * (1 + (active_count - 1) * self.multi_spotlight_multiplier)

    def update(self, active_count: int, delivered_count: int, dt: float) -> None:
        if active_count == 0:
            self.current = min(self.max, self.current + self.charge_rate(delivered_count) * dt)
        else:
            self.current = max(0.0, self.current - self.drain_rate(active_count) * dt)

    def is_depleted(self) -> bool:
        return self.current <= 0.0

    @property
    def percent(self) -> float:
        return self.current / self.max * 100.0

    def to_dict(self) -> dict:
        return {
            "current": round(self.current, 3),
            "max": self.max,
            "percent": round(self.percent, 1),
            "depleted": self.is_depleted(),
        }
