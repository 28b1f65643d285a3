"""Tests for Wander: jitter bounds, persistent angle, and seeding."""
from __future__ import annotations

import random

import pytest

from stride_steer import vec
from stride_steer.kinematic import Kinematic
from stride_steer.wander import Wander, WanderConfig


class TestWander:
    """Circle-projection wander with an injected RNG."""

    def test_jitter_is_bounded(self) -> None:
        w = Wander(random.Random(1), WanderConfig(angle_smoothing=12.0))
        for _ in range(500):
            assert -12.0 < w.jitter() < 12.0

    def test_angle_persists_across_ticks(self) -> None:
        w = Wander(random.Random(2))
        me = Kinematic(velocity=(10.0, 0.0))
        w.compute(me)
        first = w.wander_angle
        w.compute(me)
        assert w.wander_angle != first
        assert abs(w.wander_angle - first) < w.config.angle_smoothing

    def test_same_seed_same_targets(self) -> None:
        me = Kinematic(position=(5.0, 5.0), velocity=(0.0, 20.0))
        a = Wander(random.Random(7))
        b = Wander(random.Random(7))
        for _ in range(20):
            assert a.wander_target(me) == b.wander_target(me)

    def test_instances_do_not_share_state(self) -> None:
        a = Wander(random.Random(3))
        b = Wander(random.Random(3))
        me = Kinematic(velocity=(1.0, 0.0))
        for _ in range(5):
            a.compute(me)
        assert b.wander_angle == 0.0

    def test_circle_center_follows_velocity(self) -> None:
        w = Wander(random.Random(0), WanderConfig(wander_distance=50.0))
        center = w.circle_center(Kinematic(position=(10.0, 0.0), velocity=(0.0, 3.0)))
        assert center == pytest.approx((10.0, 50.0))

    def test_circle_center_falls_back_to_orientation(self) -> None:
        w = Wander(random.Random(0), WanderConfig(wander_distance=50.0))
        center = w.circle_center(Kinematic(orientation=180.0))
        assert center == pytest.approx((-50.0, 0.0))

    def test_target_lies_on_circle(self) -> None:
        cfg = WanderConfig(wander_distance=40.0, wander_radius=15.0)
        w = Wander(random.Random(5), cfg)
        me = Kinematic(velocity=(1.0, 0.0))
        for _ in range(10):
            point = w.wander_target(me)
            assert vec.distance(point, (40.0, 0.0)) == pytest.approx(15.0)

    def test_output_magnitude_is_max_acceleration(self) -> None:
        w = Wander(random.Random(9), WanderConfig(max_acceleration=80.0))
        out = w.compute(Kinematic(velocity=(5.0, 5.0)))
        assert vec.magnitude(out.linear) == pytest.approx(80.0)

    def test_reset(self) -> None:
        w = Wander(random.Random(9))
        w.compute(Kinematic())
        w.reset(45.0)
        assert w.wander_angle == 45.0

    def test_negative_radius_rejected(self) -> None:
        with pytest.raises(ValueError):
            WanderConfig(wander_radius=-1.0)
