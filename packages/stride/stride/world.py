"""World - the agent registry.

Agents are plain integer ids. Everything an agent owns (its kinematic, its
path, its control policy) is attached as a component object, and other
agents refer to it by id only.
"""

from __future__ import annotations

from typing import Any, Iterator, TypeVar, cast

from stride.types import DeadEntityError, EntityId

T = TypeVar("T")


class World:
    def __init__(self) -> None:
        # eid -> {component type -> component}; dicts keep spawn order.
        self._agents: dict[EntityId, dict[type, Any]] = {}
        self._next_id: int = 0

    def spawn(self, *components: Any) -> EntityId:
        eid = self._next_id
        self._next_id += 1
        self._agents[eid] = {}
        for component in components:
            self.attach(eid, component)
        return eid

    def despawn(self, entity_id: EntityId) -> None:
        self._agents.pop(entity_id, None)

    def attach(self, entity_id: EntityId, component: Any) -> None:
        store = self._agents.get(entity_id)
        if store is None:
            raise DeadEntityError(
                entity_id,
                f"Cannot attach {type(component).__name__} to dead entity {entity_id}",
            )
        store[type(component)] = component

    def detach(self, entity_id: EntityId, component_type: type) -> None:
        store = self._agents.get(entity_id)
        if store is not None:
            store.pop(component_type, None)

    def get(self, entity_id: EntityId, component_type: type[T]) -> T:
        store = self._agents.get(entity_id)
        if store is None:
            raise DeadEntityError(entity_id, f"Entity {entity_id} is not alive")
        if component_type not in store:
            raise KeyError(
                f"Entity {entity_id} has no {component_type.__name__} component"
            )
        return cast(T, store[component_type])

    def find(self, entity_id: EntityId, component_type: type[T]) -> T | None:
        """Like :meth:`get` but returns None instead of raising."""
        store = self._agents.get(entity_id)
        if store is None:
            return None
        return cast("T | None", store.get(component_type))

    def has(self, entity_id: EntityId, component_type: type) -> bool:
        store = self._agents.get(entity_id)
        return store is not None and component_type in store

    def query(self, *types: type) -> Iterator[tuple[EntityId, tuple[Any, ...]]]:
        """Yield ``(eid, components)`` for agents holding every given type.

        Iteration follows spawn order, which is the update order of every
        system built on it.
        """
        if not types:
            return
        for eid, store in list(self._agents.items()):
            if eid not in self._agents:
                continue
            if all(t in store for t in types):
                yield eid, tuple(store[t] for t in types)

    def entities(self) -> frozenset[EntityId]:
        return frozenset(self._agents)

    def alive(self, entity_id: EntityId) -> bool:
        return entity_id in self._agents
