"""Tests for engine lifecycle, system ordering, and seeding."""

import pytest

from stride.engine import Engine
from stride.types import TickContext
from stride.world import World


def test_engine_init_defaults():
    engine = Engine()
    assert engine.clock.tick_number == 0
    assert isinstance(engine.world, World)
    assert isinstance(engine.seed, int)


def test_systems_run_in_order():
    engine = Engine()
    order = []
    engine.add_system(lambda w, c: order.append("first"))
    engine.add_system(lambda w, c: order.append("second"))
    engine.step(0.016)
    assert order == ["first", "second"]


def test_step_passes_clamped_dt():
    engine = Engine(max_dt=0.05)
    seen: list[TickContext] = []
    engine.add_system(lambda w, c: seen.append(c))
    engine.step(0.5)
    engine.step(0.01)
    assert seen[0].dt == pytest.approx(0.05)
    assert seen[1].dt == pytest.approx(0.01)
    assert seen[1].tick_number == 2
    assert seen[1].elapsed == pytest.approx(0.06)


def test_run_calls_hooks_once():
    engine = Engine()
    events = []
    engine.on_start(lambda w, c: events.append("start"))
    engine.add_system(lambda w, c: events.append("tick"))
    engine.on_stop(lambda w, c: events.append("stop"))
    engine.run(3, 0.02)
    assert events == ["start", "tick", "tick", "tick", "stop"]


def test_request_stop_halts_run():
    engine = Engine()
    ticks = []

    def stopper(world, ctx):
        ticks.append(ctx.tick_number)
        if ctx.tick_number == 2:
            ctx.request_stop()

    engine.add_system(stopper)
    engine.run(10, 0.02)
    assert ticks == [1, 2]
    assert engine.stop_requested


def test_request_stop_skips_later_systems():
    engine = Engine()
    calls = []
    engine.add_system(lambda w, c: c.request_stop())
    engine.add_system(lambda w, c: calls.append(1))
    engine.step(0.02)
    assert calls == []


def test_same_seed_same_sequence():
    def collect(seed):
        out = []
        engine = Engine(seed=seed)
        engine.add_system(lambda w, c: out.append(c.random.random()))
        engine.run(20, 0.02)
        return out

    assert collect(99) == collect(99)
    assert collect(99) != collect(100)
