"""Tests for separation, alignment, cohesion and the flock step."""
from __future__ import annotations

import random

import pytest

from stride import World
from stride.clock import Clock
from stride_steer import vec
from stride_steer.flocking import Alignment, Cohesion, Flock, FlockConfig, Separation
from stride_steer.kinematic import Kinematic
from stride_steer.systems import Boid, Drift, make_flock_system, make_kinematic_system


@pytest.fixture
def config():
    return FlockConfig(max_speed=100.0, max_force=300.0)


class TestPartials:
    def test_separation_pushes_away_at_max_force(self, config) -> None:
        out = Separation(config).compute(Kinematic(), [Kinematic(position=(10.0, 0.0))])
        assert out.linear == pytest.approx((-300.0, 0.0))

    def test_separation_ignores_far_and_coincident(self, config) -> None:
        me = Kinematic()
        others = [Kinematic(position=(0.0, 0.0)), Kinematic(position=(100.0, 0.0))]
        assert Separation(config).compute(me, others).linear == (0.0, 0.0)

    def test_separation_weights_closer_neighbors(self, config) -> None:
        me = Kinematic()
        others = [Kinematic(position=(5.0, 0.0)), Kinematic(position=(0.0, -20.0))]
        out = Separation(config).compute(me, others)
        # the near neighbor on +x dominates the far one on -y
        assert out.linear[0] < 0.0
        assert abs(out.linear[0]) > abs(out.linear[1])

    def test_alignment_matches_neighbor_heading(self, config) -> None:
        out = Alignment(config).compute(
            Kinematic(), [Kinematic(position=(10.0, 0.0), velocity=(10.0, 0.0))]
        )
        assert out.linear == pytest.approx((80.0, 0.0))

    def test_alignment_clamped(self, config) -> None:
        out = Alignment(config).compute(
            Kinematic(velocity=(-200.0, 0.0)),
            [Kinematic(position=(10.0, 0.0), velocity=(10.0, 0.0))],
        )
        assert vec.magnitude(out.linear) == pytest.approx(210.0)

    def test_cohesion_pulls_toward_center(self, config) -> None:
        out = Cohesion(config).compute(Kinematic(), [Kinematic(position=(30.0, 0.0))])
        assert out.linear == pytest.approx((180.0, 0.0))

    def test_no_neighbors_zero(self, config) -> None:
        for behavior in (Separation(config), Alignment(config), Cohesion(config)):
            assert behavior.compute(Kinematic(), []).linear == (0.0, 0.0)


class TestFlock:
    def test_weights_blend(self, config) -> None:
        flock = Flock(config)
        me = Kinematic()
        neighbor = [Kinematic(position=(10.0, 0.0))]
        expected = (
            -300.0 * config.separation_weight + 180.0 * config.cohesion_weight,
            0.0,
        )
        assert flock.steer(me, neighbor).linear == pytest.approx(expected)

    def test_speed_reclamped(self, config) -> None:
        flock = Flock(config)
        rng = random.Random(4)
        boids = [
            Kinematic(
                position=(rng.uniform(0, 100), rng.uniform(0, 100)),
                velocity=(rng.uniform(-150, 150), rng.uniform(-150, 150)),
            )
            for _ in range(12)
        ]
        for _ in range(30):
            flock.step(boids, 0.05)
        for b in boids:
            assert b.speed <= config.max_speed + 1e-9

    def test_toroidal_wrap(self, config) -> None:
        flock = Flock(config)
        right = Kinematic(position=(799.0, 300.0), velocity=(100.0, 0.0))
        flock.step([right], 0.1)
        assert right.position == pytest.approx((9.0, 300.0))
        left = Kinematic(position=(1.0, 5.0), velocity=(-100.0, 0.0))
        flock.step([left], 0.1)
        assert left.position == pytest.approx((791.0, 5.0))

    def test_wrap_stays_inside_extent(self) -> None:
        flock = Flock(FlockConfig(extent=(800.0, 600.0)))
        assert flock.wrap((-1e-17, -1e-17)) == (0.0, 0.0)
        assert flock.wrap((800.0, 600.0)) == (0.0, 0.0)
        assert flock.wrap((-10.0, 610.0)) == pytest.approx((790.0, 10.0))

    def test_step_order_independent(self, config) -> None:
        flock = Flock(config)

        def make():
            return [
                Kinematic(position=(100.0, 100.0), velocity=(10.0, 0.0)),
                Kinematic(position=(110.0, 104.0), velocity=(0.0, 10.0)),
            ]

        a1, b1 = make()
        flock.step([a1, b1], 0.05)
        a2, b2 = make()
        flock.step([b2, a2], 0.05)
        assert a1.position == pytest.approx(a2.position)
        assert b1.position == pytest.approx(b2.position)

    def test_invalid_extent(self) -> None:
        with pytest.raises(ValueError):
            FlockConfig(extent=(0.0, 10.0))


class TestSystems:
    def test_flock_system_steps_tagged_agents(self, config) -> None:
        world = World()
        boid = Kinematic(position=(10.0, 10.0), velocity=(50.0, 0.0))
        loner = Kinematic(position=(10.0, 10.0), velocity=(50.0, 0.0))
        world.spawn(boid, Boid())
        world.spawn(loner)
        clock = Clock()
        clock.advance(0.1)
        make_flock_system(Flock(config))(world, clock.context(lambda: None, random.Random(0)))
        assert boid.position == pytest.approx((15.0, 10.0))
        assert loner.position == (10.0, 10.0)

    def test_kinematic_system_integrates_drift(self) -> None:
        world = World()
        kin = Kinematic(velocity=(1.0, 2.0), rotation=10.0)
        world.spawn(kin, Drift())
        clock = Clock()
        clock.advance(0.1)
        make_kinematic_system()(world, clock.context(lambda: None, random.Random(0)))
        assert kin.position == pytest.approx((0.1, 0.2))
        assert kin.orientation == pytest.approx(1.0)
