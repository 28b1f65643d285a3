"""Tests for the agent registry: spawn, components, and queries."""

from dataclasses import dataclass

import pytest

from stride.types import DeadEntityError
from stride.world import World


@dataclass
class Position:
    x: float
    y: float


@dataclass
class Health:
    hp: int


# --- Spawning ---

def test_ids_are_sequential():
    world = World()
    assert [world.spawn() for _ in range(3)] == [0, 1, 2]


def test_spawn_with_components():
    world = World()
    eid = world.spawn(Position(1.0, 2.0), Health(5))
    assert world.get(eid, Position) == Position(1.0, 2.0)
    assert world.get(eid, Health).hp == 5


def test_despawn_removes_agent():
    world = World()
    eid = world.spawn(Position(0.0, 0.0))
    world.despawn(eid)
    assert not world.alive(eid)
    assert not world.has(eid, Position)
    assert eid not in world.entities()


def test_despawn_unknown_is_safe():
    World().despawn(42)


# --- Components ---

def test_attach_replaces_same_type():
    world = World()
    eid = world.spawn(Health(1))
    world.attach(eid, Health(9))
    assert world.get(eid, Health).hp == 9


def test_attach_to_dead_raises():
    world = World()
    eid = world.spawn()
    world.despawn(eid)
    with pytest.raises(DeadEntityError):
        world.attach(eid, Health(1))


def test_get_missing_component_raises_key_error():
    world = World()
    eid = world.spawn()
    with pytest.raises(KeyError):
        world.get(eid, Health)


def test_get_dead_raises_dead_entity_error():
    world = World()
    with pytest.raises(DeadEntityError) as info:
        world.get(7, Health)
    assert info.value.entity_id == 7


def test_find_returns_none():
    world = World()
    eid = world.spawn()
    assert world.find(eid, Health) is None
    assert world.find(99, Health) is None


def test_detach():
    world = World()
    eid = world.spawn(Health(1))
    world.detach(eid, Health)
    assert not world.has(eid, Health)
    world.detach(eid, Health)


# --- Queries ---

def test_query_requires_all_types():
    world = World()
    a = world.spawn(Position(0.0, 0.0), Health(1))
    world.spawn(Position(1.0, 1.0))
    results = list(world.query(Position, Health))
    assert [eid for eid, _ in results] == [a]


def test_query_follows_spawn_order():
    world = World()
    ids = [world.spawn(Health(i)) for i in range(5)]
    assert [eid for eid, _ in world.query(Health)] == ids


def test_query_tolerates_despawn_during_iteration():
    world = World()
    ids = [world.spawn(Health(i)) for i in range(3)]
    seen = []
    for eid, (h,) in world.query(Health):
        seen.append(eid)
        world.despawn(ids[-1])
    assert seen == ids[:2]


def test_empty_query_yields_nothing():
    world = World()
    world.spawn(Health(1))
    assert list(world.query()) == []
