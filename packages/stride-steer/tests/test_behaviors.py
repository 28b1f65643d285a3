"""Tests for Kinematic integration and the steering behaviors."""
from __future__ import annotations

import pytest

from stride_steer.behaviors import (
    Align,
    AlignConfig,
    Arrive,
    ArriveConfig,
    Flee,
    OrientationMatching,
    PositionMatching,
    RotationMatching,
    VelocityMatching,
    face,
)
from stride_steer.kinematic import Kinematic, SteeringOutput, apply


class TestKinematic:
    """update(dt) integrates and keeps orientation in [0, 360)."""

    def test_position_integrates_velocity(self) -> None:
        k = Kinematic(position=(1.0, 1.0), velocity=(10.0, -5.0))
        k.update(0.5)
        assert k.position == pytest.approx((6.0, -1.5))

    def test_orientation_wraps_forward(self) -> None:
        k = Kinematic(orientation=350.0, rotation=20.0)
        k.update(1.0)
        assert k.orientation == pytest.approx(10.0)

    def test_orientation_wraps_backward(self) -> None:
        k = Kinematic(orientation=10.0, rotation=-30.0)
        k.update(1.0)
        assert k.orientation == pytest.approx(340.0)

    def test_orientation_always_in_range(self) -> None:
        for rotation in (-10000.0, -361.0, -0.001, 0.0, 0.001, 359.9, 7200.0):
            for dt in (0.0, 0.016, 0.1, 1.0, 3.7):
                k = Kinematic(orientation=123.0, rotation=rotation)
                k.update(dt)
                assert 0.0 <= k.orientation < 360.0

    def test_velocity_not_clamped(self) -> None:
        k = Kinematic(velocity=(1e6, 0.0))
        k.update(0.1)
        assert k.velocity == (1e6, 0.0)

    def test_apply_clamps_speed(self) -> None:
        k = Kinematic()
        apply(k, SteeringOutput((1000.0, 0.0), 90.0), 1.0, max_speed=50.0)
        assert k.velocity == pytest.approx((50.0, 0.0))
        assert k.position == pytest.approx((50.0, 0.0))
        assert k.rotation == pytest.approx(90.0)
        assert k.orientation == pytest.approx(90.0)

    def test_steering_output_is_frozen(self) -> None:
        with pytest.raises(AttributeError):
            SteeringOutput.ZERO.angular = 1.0  # type: ignore[misc]


class TestMatching:
    def test_position_matching_is_unnormalized(self) -> None:
        out = PositionMatching(max_acceleration=2.0).compute(
            Kinematic(), Kinematic(position=(3.0, 4.0))
        )
        assert out.linear == pytest.approx((6.0, 8.0))
        assert out.angular == 0.0

    def test_velocity_matching_clamps(self) -> None:
        me = Kinematic()
        target = Kinematic(velocity=(10.0, 0.0))
        assert VelocityMatching(100.0, 0.1).compute(me, target).linear == pytest.approx((100.0, 0.0))
        assert VelocityMatching(50.0, 0.1).compute(me, target).linear == pytest.approx((50.0, 0.0))

    def test_orientation_matching_takes_short_way(self) -> None:
        behavior = OrientationMatching(max_angular_acceleration=45.0)
        out = behavior.compute(Kinematic(orientation=10.0), Kinematic(orientation=350.0))
        assert out.angular == -45.0
        out = behavior.compute(Kinematic(orientation=350.0), Kinematic(orientation=10.0))
        assert out.angular == 45.0

    def test_orientation_matching_aligned_is_zero(self) -> None:
        out = OrientationMatching().compute(Kinematic(orientation=30.0), Kinematic(orientation=390.0))
        assert out.angular == 0.0

    def test_rotation_matching(self) -> None:
        behavior = RotationMatching(max_angular_acceleration=180.0, time_to_target=0.1)
        assert behavior.compute(Kinematic(), Kinematic(rotation=10.0)).angular == pytest.approx(100.0)
        assert behavior.compute(Kinematic(), Kinematic(rotation=100.0)).angular == pytest.approx(180.0)
        assert behavior.compute(Kinematic(), Kinematic(rotation=-100.0)).angular == pytest.approx(-180.0)

    def test_bad_time_to_target_rejected(self) -> None:
        with pytest.raises(ValueError):
            VelocityMatching(time_to_target=0.0)


class TestArrive:
    """Arrive decelerates inside slow_radius and stops inside target_radius."""

    def test_inside_target_radius_is_zero(self) -> None:
        behavior = Arrive(ArriveConfig(
            max_acceleration=100.0, max_speed=100.0,
            target_radius=5.0, slow_radius=50.0, time_to_target=0.1,
        ))
        out = behavior.compute(Kinematic(position=(0.0, 0.0)), Kinematic(position=(3.0, 0.0)))
        assert out.linear == (0.0, 0.0)
        assert out.angular == 0.0

    def test_far_target_full_acceleration(self) -> None:
        out = Arrive().compute(Kinematic(), Kinematic(position=(200.0, 0.0)))
        assert out.linear == pytest.approx((100.0, 0.0))

    def test_slow_radius_scales_speed(self) -> None:
        behavior = Arrive(ArriveConfig(max_acceleration=1e4, max_speed=200.0, slow_radius=100.0))
        out = behavior.compute(Kinematic(), Kinematic(position=(50.0, 0.0)))
        # desired speed 100, reached over 0.1s
        assert out.linear == pytest.approx((1000.0, 0.0))

    def test_brakes_when_too_fast(self) -> None:
        behavior = Arrive(ArriveConfig(max_acceleration=1e4, max_speed=200.0, slow_radius=100.0))
        out = behavior.compute(Kinematic(velocity=(300.0, 0.0)), Kinematic(position=(50.0, 0.0)))
        assert out.linear[0] < 0.0

    def test_reaches_target(self) -> None:
        me = Kinematic()
        target = Kinematic(position=(120.0, 40.0))
        behavior = Arrive()
        for _ in range(600):
            apply(me, behavior.compute(me, target), 1 / 60, max_speed=behavior.config.max_speed)
        dx = me.position[0] - 120.0
        dy = me.position[1] - 40.0
        assert (dx * dx + dy * dy) ** 0.5 < 15.0

    def test_invalid_config(self) -> None:
        with pytest.raises(ValueError):
            ArriveConfig(slow_radius=0.0)
        with pytest.raises(ValueError):
            ArriveConfig(target_radius=-1.0)


class TestAlign:
    def test_inside_target_radius_is_zero(self) -> None:
        out = Align(AlignConfig(target_radius=2.0)).compute(
            Kinematic(orientation=0.0), Kinematic(orientation=1.5)
        )
        assert out.angular == 0.0

    def test_large_turn_clamped(self) -> None:
        behavior = Align(AlignConfig(max_angular_acceleration=200.0, max_rotation=120.0))
        assert behavior.compute(Kinematic(), Kinematic(orientation=90.0)).angular == pytest.approx(200.0)
        assert behavior.compute(Kinematic(), Kinematic(orientation=270.0)).angular == pytest.approx(-200.0)

    def test_slow_radius_scales_rotation(self) -> None:
        behavior = Align(AlignConfig(
            max_angular_acceleration=1000.0, max_rotation=120.0, slow_radius=40.0,
        ))
        out = behavior.compute(Kinematic(orientation=0.0), Kinematic(orientation=350.0))
        # -10 degrees: target rotation -30, reached over 0.1s
        assert out.angular == pytest.approx(-300.0)

    def test_linear_is_zero(self) -> None:
        out = Align().compute(Kinematic(), Kinematic(orientation=120.0))
        assert out.linear == (0.0, 0.0)


class TestFlee:
    def test_points_away(self) -> None:
        out = Flee(max_acceleration=10.0).compute(
            Kinematic(position=(0.0, 0.0)), Kinematic(position=(3.0, 4.0))
        )
        assert out.linear == pytest.approx((-6.0, -8.0))

    def test_coincident_is_zero(self) -> None:
        out = Flee().compute(Kinematic(position=(1.0, 1.0)), Kinematic(position=(1.0, 1.0)))
        assert out.linear == (0.0, 0.0)


class TestFace:
    def test_orientation_looks_at_point(self) -> None:
        target = face(Kinematic(position=(0.0, 0.0)), (0.0, 10.0))
        assert target.position == (0.0, 10.0)
        assert target.orientation == pytest.approx(90.0)

    def test_same_point_keeps_orientation(self) -> None:
        target = face(Kinematic(orientation=42.0), (0.0, 0.0))
        assert target.orientation == 42.0
