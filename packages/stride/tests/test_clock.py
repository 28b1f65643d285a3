"""Tests for clock advancement, dt clamping, and TickContext generation."""

import math
import random

import pytest
from stride.clock import DEFAULT_MAX_DT, Clock
from stride.types import TickContext

_test_rng = random.Random(0)


def test_clock_initialization():
    """A fresh clock has no elapsed time and the default cap."""
    clock = Clock()
    assert clock.tick_number == 0
    assert clock.elapsed == 0.0
    assert clock.max_dt == DEFAULT_MAX_DT


def test_non_positive_cap_rejected():
    with pytest.raises(ValueError):
        Clock(max_dt=0.0)
    with pytest.raises(ValueError):
        Clock(max_dt=-1.0)


def test_advance_returns_clamped_dt():
    clock = Clock(max_dt=0.1)
    assert clock.advance(0.05) == pytest.approx(0.05)
    assert clock.advance(2.0) == pytest.approx(0.1)
    assert clock.tick_number == 2
    assert clock.elapsed == pytest.approx(0.15)


def test_negative_and_nan_dt_become_zero():
    clock = Clock()
    assert clock.advance(-0.5) == 0.0
    assert clock.advance(math.nan) == 0.0
    assert clock.elapsed == 0.0
    assert clock.tick_number == 2


def test_context_reflects_last_advance():
    clock = Clock(max_dt=0.1)
    clock.advance(0.02)
    clock.advance(0.03)
    ctx = clock.context(lambda: None, _test_rng)
    assert isinstance(ctx, TickContext)
    assert ctx.tick_number == 2
    assert ctx.dt == pytest.approx(0.03)
    assert ctx.elapsed == pytest.approx(0.05)
    assert ctx.random is _test_rng


def test_context_is_frozen():
    ctx = Clock().context(lambda: None, _test_rng)
    with pytest.raises(AttributeError):
        ctx.dt = 1.0  # type: ignore[misc]


def test_reset():
    clock = Clock()
    clock.advance(0.05)
    clock.reset()
    assert clock.tick_number == 0
    assert clock.elapsed == 0.0
    assert clock.dt == 0.0
