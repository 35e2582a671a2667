"""Unit tests for cone geometry -- heading convention, cones, nearest pick."""

from __future__ import annotations

import math

import pytest

from freeze.simulation.inmate import InmateAgent
from freeze.simulation.vision import angle_difference, heading_to, in_cone, nearest_in_cone

pytestmark = pytest.mark.unit


def _at_bearing(distance: float, bearing_deg: float) -> tuple[float, float]:
    rad = math.radians(bearing_deg)
    return (distance * math.sin(rad), distance * math.cos(rad))


def _make_inmate(inmate_id: str, position, frozen: bool = False) -> InmateAgent:
    return InmateAgent(inmate_id=inmate_id, type_id="regular", position=position,
                       waypoints=[(0.0, 10000.0)], frozen=frozen)


class TestHeading:
    def test_cardinal_headings(self):
        assert heading_to((0, 0), (0, 10)) == pytest.approx(0.0)
        assert heading_to((0, 0), (10, 0)) == pytest.approx(90.0)
        assert heading_to((0, 0), (0, -10)) == pytest.approx(180.0)
        assert heading_to((0, 0), (-10, 0)) == pytest.approx(-90.0)

    def test_angle_difference_wraps(self):
        assert angle_difference(350.0, 10.0) == pytest.approx(-20.0)
        assert angle_difference(10.0, 350.0) == pytest.approx(20.0)
        assert angle_difference(90.0, 90.0) == 0.0


class TestInCone:
    def test_dead_ahead(self):
        assert in_cone((0, 0), 0.0, (0, 100), 450.0, 90.0)

    def test_half_angle_edges(self):
        assert in_cone((0, 0), 0.0, _at_bearing(100, 44.0), 450.0, 90.0)
        assert not in_cone((0, 0), 0.0, _at_bearing(100, 46.0), 450.0, 90.0)
        assert in_cone((0, 0), 0.0, _at_bearing(100, -44.0), 450.0, 90.0)

    def test_range_is_strict(self):
        assert not in_cone((0, 0), 0.0, (0, 450), 450.0, 90.0)
        assert in_cone((0, 0), 0.0, (0, 449.9), 450.0, 90.0)

    def test_behind_is_outside(self):
        assert not in_cone((0, 0), 0.0, (0, -50), 450.0, 90.0)

    def test_across_north(self):
        assert in_cone((0, 0), 350.0, _at_bearing(50, 4.0), 120.0, 30.0)

    def test_origin_counts_as_inside(self):
        assert in_cone((5, 5), 123.0, (5, 5), 120.0, 30.0)


class TestNearestInCone:
    def test_picks_nearest(self):
        far = _make_inmate("far", (0, 300))
        near = _make_inmate("near", (0, 100))
        assert nearest_in_cone((0, 0), 0.0, [far, near], 450.0, 90.0) is near

    def test_frozen_only_filter(self):
        near = _make_inmate("near", (0, 100))
        far = _make_inmate("far", (0, 300), frozen=True)
        found = nearest_in_cone((0, 0), 0.0, [near, far], 450.0, 90.0, frozen_only=True)
        assert found is far

    def test_none_when_empty(self):
        behind = _make_inmate("behind", (0, -100), frozen=True)
        assert nearest_in_cone((0, 0), 0.0, [behind], 450.0, 90.0) is None
