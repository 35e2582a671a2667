"""Tests for the headless runner."""

import pytest

from freeze.__main__ import main, run
from freeze.config import SimulationSettings

pytestmark = pytest.mark.unit


class TestRun:
    def test_idle_session_loses_lives(self):
        cfg = SimulationSettings(seed=3, policeman_count=0)
        clock, tally = run(30.0, 20, "idle", cfg)
        assert tally["inmate_spawned"] > 0
        assert clock.active_spotlight_count() == 0
        assert clock.state.score == 0

    def test_greedy_operator_keeps_reserve(self):
        cfg = SimulationSettings(seed=3)
        clock, tally = run(60.0, 30, "greedy", cfg)
        assert tally["spotlight_toggled"] > 0
        assert tally["battery_depleted"] == 0
        assert clock.battery.current > 0.0


class TestMain:
    def test_prints_summary(self, capsys):
        assert main(["--seconds", "5", "--fps", "10", "--seed", "1", "--policy", "idle"]) == 0
        out = capsys.readouterr().out
        assert out.startswith("Score ")
        assert "inmate_spawned" in out
