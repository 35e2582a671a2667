"""Headless runner: play a session with a scripted spotlight operator.

Usage:
    inmate-freeze --seconds 120 --seed 7 --policy greedy
    python -m freeze --policy idle

Prints a per-event tally and the final GameState.
"""

from __future__ import annotations

import argparse
import sys
from collections import Counter

from loguru import logger

from freeze.config import SimulationSettings
from freeze.simulation import SimulationClock

# Greedy operator keeps this much battery in reserve
_GREEDY_RESERVE = 20.0


def _greedy(clock: SimulationClock) -> None:
    """Light every spotlight that holds a free inmate, darken the rest."""
    if clock.battery.percent < _GREEDY_RESERVE:
        for s in clock.spotlights:
            clock.toggle_spotlight(s.index, False)
        return
    captured = clock.captured_ids()
    free = [i.position for iid, i in clock.inmates.items() if iid not in captured]
    for s in clock.spotlights:
        clock.toggle_spotlight(s.index, any(s.contains(p) for p in free))


def run(seconds: float, fps: int, policy: str, config: SimulationSettings) -> tuple[SimulationClock, Counter]:
    clock = SimulationClock(config)
    tally: Counter = Counter()
    dt = 1.0 / fps
    for _ in range(int(seconds * fps)):
        if policy == "greedy":
            _greedy(clock)
        for event in clock.tick(dt):
            tally[event["type"]] += 1
        if not clock.state.is_playing:
            break
    return clock, tally


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="inmate-freeze", description=__doc__.splitlines()[0])
    parser.add_argument("--seconds", type=float, default=60.0, help="simulated seconds to run")
    parser.add_argument("--fps", type=int, default=60, help="ticks per simulated second")
    parser.add_argument("--seed", type=int, default=None, help="RNG seed (overrides FREEZE_SEED)")
    parser.add_argument("--policy", choices=("idle", "greedy"), default="greedy")
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args(argv)

    logger.remove()
    logger.add(sys.stderr, level=args.log_level.upper())

    config = SimulationSettings()
    if args.seed is not None:
        config = config.model_copy(update={"seed": args.seed})

    clock, tally = run(args.seconds, args.fps, args.policy, config)
    state = clock.state
    print(f"Score {state.score}  Level {state.level}  Lives {state.lives}  "
          f"Delivered {state.delivered}  Battery {clock.battery.percent:.0f}%")
    for kind, count in sorted(tally.items()):
        print(f"  {kind:<30s} {count}")
    if not state.is_playing:
        print("GAME OVER")
    return 0


if __name__ == "__main__":
    sys.exit(main())
