"""Unit tests for NotificationRouter -- nearest eligible policeman only."""

from __future__ import annotations

import random

import pytest

from freeze.simulation.policeman import PolicemanAgent
from freeze.simulation.router import NotificationRouter

pytestmark = pytest.mark.unit


def _make_roster(*positions) -> list[PolicemanAgent]:
    rng = random.Random(2)
    return [PolicemanAgent(f"p{i}", pos, rng, speed=60.0) for i, pos in enumerate(positions)]


class TestRouting:
    def test_nearest_gets_notification(self):
        roster = _make_roster((100.0, 100.0), (600.0, 300.0), (1000.0, 500.0))
        router = NotificationRouter(roster)
        chosen = router.notify_spotlight_activated(650.0, 200.0)
        assert chosen is roster[1]
        assert roster[1].attention_point == (650.0, 200.0)
        assert roster[0].attention_point is None
        assert roster[2].attention_point is None

    def test_full_policeman_skipped(self):
        roster = _make_roster((100.0, 100.0), (600.0, 300.0))
        roster[1].captured_ids = [f"x{i}" for i in range(roster[1].max_capacity)]
        router = NotificationRouter(roster)
        assert router.notify_spotlight_activated(650.0, 200.0) is roster[0]
        assert roster[1].attention_point is None

    def test_nobody_eligible(self):
        roster = _make_roster((100.0, 100.0))
        roster[0].captured_ids = [f"x{i}" for i in range(roster[0].max_capacity)]
        router = NotificationRouter(roster)
        assert router.eligible() == []
        assert router.notify_spotlight_activated(650.0, 200.0) is None

    def test_tie_goes_to_roster_order(self):
        roster = _make_roster((400.0, 300.0), (600.0, 300.0))
        router = NotificationRouter(roster)
        assert router.notify_spotlight_activated(500.0, 300.0) is roster[0]
        assert roster[1].attention_point is None

    def test_sees_late_joiners(self):
        roster = _make_roster((100.0, 100.0))
        router = NotificationRouter(roster)
        roster.extend(_make_roster((500.0, 200.0)))
        assert router.notify_spotlight_activated(500.0, 200.0) is roster[1]
