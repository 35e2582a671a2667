"""Unit tests for Spotlight containment and illumination."""

from __future__ import annotations

import pytest

from freeze.simulation.inmate import InmateAgent
from freeze.simulation.spotlight import Spotlight, is_lit

pytestmark = pytest.mark.unit


def _make_spotlight(index: int = 0, position=(200.0, 300.0), radius: float = 120.0) -> Spotlight:
    return Spotlight(index, position, radius)


class TestContains:
    def test_center(self):
        assert _make_spotlight().contains((200.0, 300.0))

    def test_boundary_is_inside(self):
        assert _make_spotlight().contains((320.0, 300.0))

    def test_outside(self):
        assert not _make_spotlight().contains((320.5, 300.0))

    def test_independent_of_switch(self):
        s = _make_spotlight()
        assert not s.active
        assert s.contains((210.0, 310.0))


class TestIlluminates:
    def test_off_never_illuminates(self):
        assert not _make_spotlight().illuminates((200.0, 300.0))

    def test_on_illuminates_inside_only(self):
        s = _make_spotlight()
        s.set_active(True)
        assert s.illuminates((250.0, 300.0))
        assert not s.illuminates((500.0, 300.0))

    def test_is_lit_is_or_over_spotlights(self):
        a = _make_spotlight(0, (200.0, 300.0))
        b = _make_spotlight(1, (500.0, 300.0))
        b.set_active(True)
        assert is_lit((500.0, 350.0), [a, b])
        assert not is_lit((200.0, 300.0), [a, b])
        assert not is_lit((200.0, 300.0), [])

    def test_center_of_small_spotlight_freezes(self):
        s = _make_spotlight(radius=50.0)
        s.set_active(True)
        inmate = InmateAgent(inmate_id="i1", type_id="regular", position=(200.0, 300.0),
                             waypoints=[(200.0, 10000.0)])
        assert s.contains(inmate.position)
        inmate.apply_light(is_lit(inmate.position, [s]), 0.1)
        assert inmate.frozen


class TestImmutability:
    def test_position_and_radius_read_only(self):
        s = _make_spotlight()
        with pytest.raises(AttributeError):
            s.position = (0.0, 0.0)
        with pytest.raises(AttributeError):
            s.radius = 10.0

    def test_to_dict(self):
        d = _make_spotlight(3).to_dict()
        assert d == {
            "index": 3,
            "position": {"x": 200.0, "y": 300.0},
            "radius": 120.0,
            "active": False,
        }
