"""Tests for SimulationSettings defaults, validation and env overrides."""

import pytest
from pydantic import ValidationError

from freeze.config import SimulationSettings

pytestmark = pytest.mark.unit


class TestDefaults:
    def test_field_and_spotlights(self):
        s = SimulationSettings()
        assert (s.field_width, s.field_height) == (1200.0, 800.0)
        assert len(s.spotlight_positions) == 6
        assert s.spotlight_positions[0] == (200.0, 300.0)
        assert s.spotlight_radius == 120.0

    def test_game_rules(self):
        s = SimulationSettings()
        assert s.starting_lives == 35
        assert s.freeze_threshold == 5.0
        assert (s.score_light_catch, s.score_police_capture, s.score_delivery) == (10, 5, 20)
        assert s.drop_off_position == (1050.0, 400.0)


class TestValidation:
    def test_spawn_floor_above_interval(self):
        with pytest.raises(ValidationError):
            SimulationSettings(spawn_interval=0.4, spawn_interval_min=0.5)

    def test_drop_off_outside_bounds(self):
        with pytest.raises(ValidationError):
            SimulationSettings(drop_off_position=(1190.0, 400.0))

    def test_inverted_patrol_bounds(self):
        with pytest.raises(ValidationError):
            SimulationSettings(patrol_bounds=(600.0, 50.0, 100.0, 600.0))

    def test_empty_type_weights(self):
        with pytest.raises(ValidationError):
            SimulationSettings(inmate_type_weights={})

    def test_negative_radius(self):
        with pytest.raises(ValidationError):
            SimulationSettings(spotlight_radius=-1.0)


class TestEnvironment:
    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("FREEZE_SPOTLIGHT_RADIUS", "150")
        monkeypatch.setenv("FREEZE_SEED", "42")
        s = SimulationSettings()
        assert s.spotlight_radius == 150.0
        assert s.seed == 42
