"""A* heuristics: ``h(vertex, goal, graph) -> float`` over vertex positions."""
from __future__ import annotations

import math
import random
from typing import Callable, Mapping

from stride_nav.graph import Graph

Heuristic = Callable[[int, int, Graph], float]


def _delta(vertex: int, goal: int, graph: Graph) -> tuple[float, float]:
    vx, vy = graph.position(vertex)
    gx, gy = graph.position(goal)
    return gx - vx, gy - vy


def zero(vertex: int, goal: int, graph: Graph) -> float:
    return 0.0


def euclidean(vertex: int, goal: int, graph: Graph) -> float:
    dx, dy = _delta(vertex, goal, graph)
    return math.hypot(dx, dy)


def manhattan(vertex: int, goal: int, graph: Graph) -> float:
    dx, dy = _delta(vertex, goal, graph)
    return abs(dx) + abs(dy)


def directional_bias(vertex: int, goal: int, graph: Graph) -> float:
    """Penalize vertical distance more than horizontal; never below 1.1x Euclidean."""
    dx, dy = _delta(vertex, goal, graph)
    biased = abs(dx) * 1.2 + abs(dy) * 2.0
    return max(biased, math.hypot(dx, dy) * 1.1)


def scaled(base: Heuristic, factor: float) -> Heuristic:
    """``factor * base``; factors above 1 make an admissible base inadmissible."""

    def h(vertex: int, goal: int, graph: Graph) -> float:
        return factor * base(vertex, goal, graph)

    return h


def make_inadmissible(rng: random.Random) -> Heuristic:
    """Euclidean overestimated by 1.5x-2.0x plus a perturbation in [0, 0.9].

    The factor grows with distance: 1.5 up to 50 units, 1.75 up to 100, 2.0
    beyond.
    """

    def inadmissible(vertex: int, goal: int, graph: Graph) -> float:
        dist = euclidean(vertex, goal, graph)
        if dist > 100.0:
            factor = 2.0
        elif dist > 50.0:
            factor = 1.75
        else:
            factor = 1.5
        return dist * factor + rng.randrange(10) / 10.0

    return inadmissible


def make_cluster(
    cluster_of: Mapping[int, int],
    cluster_costs: Mapping[tuple[int, int], float],
) -> Heuristic:
    """Cluster heuristic from precomputed inter-cluster costs.

    Same-cluster pairs and pairs with no recorded cost fall back to
    Euclidean. Costs are looked up in either direction.
    """

    def cluster(vertex: int, goal: int, graph: Graph) -> float:
        a = cluster_of.get(vertex)
        b = cluster_of.get(goal)
        if a is None or b is None or a == b:
            return euclidean(vertex, goal, graph)
        cost = cluster_costs.get((a, b))
        if cost is None:
            cost = cluster_costs.get((b, a))
        if cost is None:
            return euclidean(vertex, goal, graph)
        return cost

    return cluster
