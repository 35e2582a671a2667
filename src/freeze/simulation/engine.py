"""SimulationClock -- fixed-order tick driving the whole spotlight game.

Architecture
------------
The clock is the authoritative owner of every piece of session state:
GameState, the BatteryResource, the spotlights, the inmate arena
(``inmate_id -> InmateAgent``) and the policeman roster.  Nothing else
mutates score, lives or battery.

One call to ``tick(dt)`` runs, in this order:

  1. spawner   -- new inmate when the spawn timer expires; the interval
                  shrinks by ``spawn_interval_decay`` down to a floor
  2. battery   -- charge or drain from the active count, then force every
                  spotlight off if the pool hit zero.  This happens BEFORE
                  the freeze test so an empty battery never leaves an
                  inmate frozen for one extra tick.
  3. inmates   -- freeze/thaw from the spotlights, walk, then resolve exit
                  (life lost) or caught-by-light (score)
  4. policemen -- in roster order: capacity gate + perception + movement,
                  capture collisions, follower chain, drop-off
  5. level     -- level follows score

Captured state is derived: an inmate is captured iff some policeman's
``captured_ids`` holds its id.  Captured inmates stay in the arena (they
still have positions to draw) but skip step 3 until delivered.

Player input arrives between ticks through ``toggle_spotlight``; an
off-to-on switch is routed synchronously to a single policeman by the
NotificationRouter.

Every discrete outcome is emitted as ``{"type": ..., "data": {...}}``.
Events are published on the EventBus (when one is attached) as they happen
and also returned from the next ``tick`` call.
"""

from __future__ import annotations

import random
from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING

from loguru import logger

from freeze.config import SimulationSettings, settings as default_settings
from freeze.units import Role, require_type

from .battery import BatteryResource
from .inmate import InmateAgent, InmateState, plan_escape_route
from .policeman import PolicemanAgent
from .router import NotificationRouter
from .spotlight import Spotlight, is_lit
from .timers import CountdownTimer

if TYPE_CHECKING:
    from freeze.comms.event_bus import EventBus


@dataclass
class GameState:
    """Aggregate counters shown on the HUD."""

    score: int = 0
    lives: int = 35
    level: int = 1
    is_playing: bool = True
    is_paused: bool = False
    delivered: int = 0


class SimulationClock:
    """Advances all agents once per tick and aggregates outcomes."""

    def __init__(
        self,
        config: SimulationSettings | None = None,
        event_bus: EventBus | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.config = config or default_settings
        cfg = self.config
        self._event_bus = event_bus
        self._rng = rng if rng is not None else random.Random(cfg.seed)

        self.state = GameState(lives=cfg.starting_lives)
        self.battery = BatteryResource(
            max=cfg.battery_max,
            base_charge_rate=cfg.battery_base_charge_rate,
            per_delivery_bonus=cfg.battery_per_delivery_bonus,
            single_drain=cfg.battery_single_drain,
            multi_spotlight_multiplier=cfg.battery_multi_spotlight_multiplier,
        )
        self._spotlights = [
            Spotlight(i, pos, cfg.spotlight_radius)
            for i, pos in enumerate(cfg.spotlight_positions)
        ]
        self._inmates: dict[str, InmateAgent] = {}
        self._policemen: list[PolicemanAgent] = []
        self.router = NotificationRouter(self._policemen)

        self._spawn_interval = cfg.spawn_interval
        self._spawn_timer = CountdownTimer()  # first inmate on the first tick
        self._inmate_seq = 0
        self._policeman_seq = 0
        self._battery_depleted = False
        self._pending: list[dict] = []

        for i in range(cfg.policeman_count):
            self.spawn_policeman(self._roster_position(i))

        logger.info(
            f"Simulation ready: {len(self._spotlights)} spotlights, "
            f"{len(self._policemen)} policemen, {self.state.lives} lives"
        )

    # -- read-only accessors -------------------------------------------------

    @property
    def event_bus(self) -> EventBus | None:
        return self._event_bus

    @property
    def spotlights(self) -> list[Spotlight]:
        return list(self._spotlights)

    @property
    def inmates(self) -> dict[str, InmateAgent]:
        return dict(self._inmates)

    @property
    def policemen(self) -> list[PolicemanAgent]:
        return list(self._policemen)

    @property
    def spawn_interval(self) -> float:
        return self._spawn_interval

    def active_spotlight_count(self) -> int:
        return sum(1 for s in self._spotlights if s.active)

    def captured_ids(self) -> set[str]:
        ids: set[str] = set()
        for p in self._policemen:
            ids.update(p.captured_ids)
        return ids

    def captor_of(self, inmate_id: str) -> PolicemanAgent | None:
        for p in self._policemen:
            if inmate_id in p.captured_ids:
                return p
        return None

    def inmate_state(self, inmate_id: str) -> InmateState | None:
        inmate = self._inmates.get(inmate_id)
        if inmate is None:
            return None
        if self.captor_of(inmate_id) is not None:
            return InmateState.CAPTURED
        return inmate.state

    def snapshot(self) -> dict:
        """Everything a renderer needs to redraw the scene.  No mutation."""
        captured = self.captured_ids()
        return {
            "state": asdict(self.state),
            "battery": self.battery.to_dict(),
            "spotlights": [s.to_dict() for s in self._spotlights],
            "inmates": [
                i.to_dict(InmateState.CAPTURED if iid in captured else i.state)
                for iid, i in self._inmates.items()
            ],
            "policemen": [p.to_dict() for p in self._policemen],
            "drop_off": {
                "x": self.config.drop_off_position[0],
                "y": self.config.drop_off_position[1],
            },
        }

    # -- external commands ---------------------------------------------------

    def toggle_spotlight(self, index: int, on: bool) -> bool:
        """Player input.  Returns True if the spotlight state changed.

        Ignored once the game is over; nothing drains events after that.
        """
        if not self.state.is_playing:
            return False
        if not 0 <= index < len(self._spotlights):
            logger.warning(f"toggle_spotlight: index {index} out of range")
            return False
        spotlight = self._spotlights[index]
        if on and self.battery.is_depleted():
            return False
        if spotlight.active == on:
            return False

        spotlight.set_active(on)
        self._emit("spotlight_toggled", {"index": index, "active": on})
        if on:
            x, y = spotlight.position
            self.router.notify_spotlight_activated(x, y)
        return True

    def pause(self) -> bool:
        """Toggle pause.  Returns the new paused flag."""
        self.state.is_paused = not self.state.is_paused
        logger.info("Simulation paused" if self.state.is_paused else "Simulation resumed")
        return self.state.is_paused

    def spawn_inmate(
        self,
        type_id: str | None = None,
        position: tuple[float, float] | None = None,
        waypoints: list[tuple[float, float]] | None = None,
    ) -> InmateAgent:
        cfg = self.config
        if type_id is None:
            kinds = list(cfg.inmate_type_weights)
            type_id = self._rng.choices(kinds, weights=[cfg.inmate_type_weights[k] for k in kinds])[0]
        utype = require_type(type_id, Role.INMATE)

        if position is None:
            position = (self._rng.uniform(*cfg.inmate_entry_x), cfg.inmate_entry_y)
        if waypoints is None:
            waypoints = plan_escape_route(
                position, self._rng, cfg.field_width, cfg.field_height, cfg.inmate_exit_y,
            )

        self._inmate_seq += 1
        inmate = InmateAgent(
            inmate_id=f"inmate-{self._inmate_seq}",
            type_id=type_id,
            position=(float(position[0]), float(position[1])),
            waypoints=list(waypoints),
            speed=utype.roll_speed(self._rng),
            size=utype.size,
            freeze_threshold=cfg.freeze_threshold,
        )
        self._inmates[inmate.inmate_id] = inmate
        self._emit("inmate_spawned", {"inmate_id": inmate.inmate_id, "type_id": type_id})
        return inmate

    def spawn_policeman(
        self,
        position: tuple[float, float],
        type_id: str | None = None,
        speed: float | None = None,
    ) -> PolicemanAgent:
        cfg = self.config
        self._policeman_seq += 1
        policeman = PolicemanAgent(
            f"policeman-{self._policeman_seq}",
            position,
            self._rng,
            type_id=type_id or cfg.policeman_type,
            speed=speed,
            patrol_bounds=cfg.patrol_bounds,
            drop_off=cfg.drop_off_position,
            drop_off_threshold=cfg.drop_off_threshold,
        )
        self._policemen.append(policeman)
        return policeman

    # -- tick ----------------------------------------------------------------

    def tick(self, dt: float) -> list[dict]:
        """Advance the simulation by *dt* seconds.

        Returns every event emitted since the previous tick (including
        spotlight toggles made between ticks).  Paused or finished games do
        not advance and return nothing.
        """
        if dt <= 0:
            logger.warning(f"tick: ignoring non-positive dt={dt}")
            return []
        if not self.state.is_playing or self.state.is_paused:
            return []

        self._tick_spawner(dt)
        self._tick_battery(dt)
        self._tick_inmates(dt)
        self._tick_policemen(dt)
        self._tick_level()

        events, self._pending = self._pending, []
        return events

    def _tick_spawner(self, dt: float) -> None:
        cfg = self.config
        if not cfg.auto_spawn:
            return
        self._spawn_timer.tick(dt)
        if not self._spawn_timer.expired:
            return
        self.spawn_inmate()
        if self._spawn_interval > cfg.spawn_interval_min:
            self._spawn_interval = max(
                cfg.spawn_interval_min, self._spawn_interval * cfg.spawn_interval_decay
            )
        self._spawn_timer.reset(self._spawn_interval)

    def _tick_battery(self, dt: float) -> None:
        self.battery.update(self.active_spotlight_count(), self.state.delivered, dt)
        if not self.battery.is_depleted():
            self._battery_depleted = False
            return
        for s in self._spotlights:
            s.set_active(False)
        if not self._battery_depleted:
            self._battery_depleted = True
            logger.info("Battery depleted, all spotlights forced off")
            self._emit("battery_depleted", {"spotlights_forced_off": len(self._spotlights)})

    def _tick_inmates(self, dt: float) -> None:
        cfg = self.config
        captured = self.captured_ids()
        for inmate_id, inmate in list(self._inmates.items()):
            if inmate_id in captured:
                continue

            inmate.apply_light(is_lit(inmate.position, self._spotlights), dt)
            inmate.advance(dt)

            if inmate.has_reached_exit():
                del self._inmates[inmate_id]
                self.state.lives -= 1
                self._emit("inmate_lost_at_exit", {
                    "inmate_id": inmate_id,
                    "position": {"x": inmate.position[0], "y": inmate.position[1]},
                    "lives": self.state.lives,
                })
                if self.state.lives <= 0:
                    self._game_over()
                continue

            if inmate.can_be_caught():
                del self._inmates[inmate_id]
                self.state.score += cfg.score_light_catch
                self._emit("inmate_caught_by_light", {
                    "inmate_id": inmate_id,
                    "position": {"x": inmate.position[0], "y": inmate.position[1]},
                    "score": self.state.score,
                })

    def _tick_policemen(self, dt: float) -> None:
        cfg = self.config
        for policeman in self._policemen:
            captured = self.captured_ids()
            candidates = {
                iid: i for iid, i in self._inmates.items() if iid not in captured
            }
            policeman.update(dt, candidates)

            for inmate_id, inmate in candidates.items():
                if policeman.at_capacity:
                    break
                if policeman.collides_with(inmate) and policeman.capture(inmate_id):
                    inmate.release_freeze()
                    self.state.score += cfg.score_police_capture
                    logger.debug(
                        f"{policeman.policeman_id} captured {inmate_id} "
                        f"({policeman.captured_count}/{policeman.max_capacity})"
                    )
                    self._emit("inmate_captured_by_policeman", {
                        "inmate_id": inmate_id,
                        "policeman_id": policeman.policeman_id,
                        "captured_count": policeman.captured_count,
                        "score": self.state.score,
                    })

            policeman.advance_followers(self._inmates)

            delivered = policeman.attempt_drop_off()
            if delivered:
                for inmate_id in delivered:
                    self._inmates.pop(inmate_id, None)
                self.state.delivered += len(delivered)
                self.state.score += len(delivered) * cfg.score_delivery
                self._emit("inmates_delivered", {
                    "policeman_id": policeman.policeman_id,
                    "count": len(delivered),
                    "inmate_ids": delivered,
                    "delivered_total": self.state.delivered,
                    "score": self.state.score,
                })

    def _tick_level(self) -> None:
        level = 1 + self.state.score // self.config.level_score_step
        if level > self.state.level:
            self.state.level = level
            logger.info(f"Level {level} reached at score {self.state.score}")
            self._emit("level_up", {"level": level})

    # -- helpers -------------------------------------------------------------

    def _game_over(self) -> None:
        if not self.state.is_playing:
            return
        self.state.is_playing = False
        logger.info(f"Game over, final score {self.state.score}")
        self._emit("game_over", {
            "score": self.state.score,
            "level": self.state.level,
            "delivered": self.state.delivered,
        })

    def _roster_position(self, i: int) -> tuple[float, float]:
        """Starting spot for the i-th policeman: spread across mid-field."""
        cfg = self.config
        x = cfg.field_width / 3.0 + i * cfg.field_width / 6.0 + self._rng.uniform(-50.0, 50.0)
        y = cfg.field_height * 3.0 / 8.0 + self._rng.uniform(-50.0, 50.0)
        min_x, min_y, max_x, max_y = cfg.patrol_bounds
        return (min(max(x, min_x), max_x), min(max(y, min_y), max_y))

    def _emit(self, event_type: str, data: dict) -> None:
        self._pending.append({"type": event_type, "data": data})
        if self._event_bus is not None:
            self._event_bus.publish(event_type, data)
