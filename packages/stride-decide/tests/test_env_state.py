"""Tests for EnvironmentState queries and dt-driven timers."""
import pytest

from stride_decide.env_state import EnvironmentState
from stride_nav.environment import Environment, Rect
from stride_steer.kinematic import Kinematic


@pytest.fixture
def env():
    e = Environment(200, 100)
    e.add_room(Rect(0, 0, 100, 100))
    e.add_room(Rect(100, 0, 100, 100))
    e.add_obstacle(Rect(90, 40, 20, 20))
    return e


def make_state(env, position=(20.0, 20.0), velocity=(0.0, 0.0)):
    kin = Kinematic(position=position, velocity=velocity)
    state = EnvironmentState(kin, env)
    return kin, state


class TestQueries:
    def test_distance(self, env):
        _, state = make_state(env, position=(0.0, 0.0))
        assert state.distance_to((3.0, 4.0)) == pytest.approx(5.0)

    def test_near_obstacle(self, env):
        _, state = make_state(env, position=(70.0, 50.0))
        assert state.is_near_obstacle(40.0)
        assert not state.is_near_obstacle(10.0)

    def test_near_world_edge(self, env):
        _, state = make_state(env, position=(10.0, 50.0))
        assert state.is_near_obstacle(20.0)

    def test_open_space(self, env):
        _, state = make_state(env, position=(40.0, 50.0))
        assert not state.is_near_obstacle(30.0)

    def test_moving_fast(self, env):
        _, state = make_state(env, velocity=(150.0, 0.0))
        assert state.is_moving_fast(120.0)
        assert not state.is_moving_fast(200.0)

    def test_line_of_sight(self, env):
        _, state = make_state(env, position=(50.0, 50.0))
        assert not state.has_line_of_sight((150.0, 50.0))
        assert state.has_line_of_sight((150.0, 10.0))

    def test_rooms(self, env):
        _, state = make_state(env, position=(150.0, 20.0))
        assert state.room_index() == 1
        assert state.is_in_room(1)
        assert not state.is_in_room(0)


class TestSnapshot:
    def test_update_reads_kinematic(self, env):
        kin, state = make_state(env)
        kin.position = (60.0, 60.0)
        kin.velocity = (3.0, 4.0)
        assert state.position == (20.0, 20.0)
        state.update(0.1)
        assert state.position == (60.0, 60.0)
        assert state.speed == pytest.approx(5.0)


class TestTimers:
    def test_idle_accumulates_dt(self, env):
        _, state = make_state(env)
        for _ in range(29):
            state.update(0.1)
        assert not state.is_idle_for_too_long(3.0)
        state.update(0.2)
        assert state.is_idle_for_too_long(3.0)

    def test_movement_resets_idle(self, env):
        kin, state = make_state(env)
        for _ in range(40):
            state.update(0.1)
        kin.velocity = (50.0, 0.0)
        state.update(0.1)
        assert state.idle_time == 0.0
        assert not state.is_idle_for_too_long()

    def test_state_timer(self, env):
        _, state = make_state(env)
        state.update(0.5)
        state.update(0.25)
        assert state.time_in_state == pytest.approx(0.75)
        state.reset_state_timer()
        assert state.time_in_state == 0.0


class TestTargets:
    def test_no_target_means_change(self, env):
        kin, state = make_state(env, velocity=(50.0, 0.0))
        state.update(0.1)
        assert state.should_change_target()

    def test_far_target_kept(self, env):
        kin, state = make_state(env, velocity=(50.0, 0.0))
        state.update(0.1)
        state.set_target((80.0, 80.0))
        assert not state.should_change_target()

    def test_reached_target(self, env):
        kin, state = make_state(env, position=(75.0, 80.0), velocity=(50.0, 0.0))
        state.update(0.1)
        state.set_target((80.0, 80.0))
        assert state.should_change_target(reach=20.0)

    def test_idle_forces_change(self, env):
        _, state = make_state(env)
        state.set_target((80.0, 80.0))
        for _ in range(35):
            state.update(0.1)
        assert state.should_change_target()
