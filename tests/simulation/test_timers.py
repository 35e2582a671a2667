"""Unit tests for CountdownTimer."""

import pytest

from freeze.simulation.timers import CountdownTimer

pytestmark = pytest.mark.unit


class TestCountdownTimer:
    def test_default_is_expired(self):
        assert CountdownTimer().expired

    def test_counts_down_to_zero(self):
        t = CountdownTimer()
        t.reset(2.0)
        t.tick(1.5)
        assert not t.expired
        assert t.remaining == pytest.approx(0.5)
        t.tick(1.0)
        assert t.expired
        assert t.remaining == 0.0

    def test_clear(self):
        t = CountdownTimer(3.0)
        t.clear()
        assert t.expired

    def test_negative_reset_is_expired(self):
        t = CountdownTimer()
        t.reset(-1.0)
        assert t.expired
