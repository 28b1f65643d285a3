"""Dijkstra and A* over a :class:`Graph`, with per-run search metrics."""
from __future__ import annotations

import heapq
import logging
import math
from abc import ABC, abstractmethod

from stride_nav.graph import Graph
from stride_nav.heuristics import Heuristic, euclidean

logger = logging.getLogger(__name__)


class Pathfinder(ABC):
    """Best-first search with lazy deletion.

    Subclasses only choose the fringe priority. After every
    :meth:`find_path` call the instance holds the metrics of that run:

    - ``nodes_explored``: vertices popped from the fringe, stale duplicates
      included.
    - ``max_fringe_size``: largest fringe length seen after a push.
    - ``path_cost``: g-score of the goal, or ``inf`` when there is no path.

    Instances are not re-entrant; give each caller its own.
    """

    def __init__(self) -> None:
        self.nodes_explored = 0
        self.max_fringe_size = 0
        self.path_cost = 0.0

    @abstractmethod
    def priority(self, g: float, vertex: int, goal: int, graph: Graph) -> float:
        """Fringe key for a vertex reached with cost ``g``."""

    def find_path(self, graph: Graph, start: int, goal: int) -> list[int]:
        self.nodes_explored = 0
        self.max_fringe_size = 0
        self.path_cost = math.inf

        n = graph.vertex_count
        if not (0 <= start < n and 0 <= goal < n):
            logger.debug(f"find_path: vertex out of range (start={start}, goal={goal}, n={n})")
            return []

        g_score: dict[int, float] = {start: 0.0}
        came_from: dict[int, int] = {}
        closed: set[int] = set()
        # (priority, counter, vertex); the counter keeps pops FIFO among ties.
        fringe: list[tuple[float, int, int]] = [
            (self.priority(0.0, start, goal, graph), 0, start)
        ]
        counter = 1
        self.max_fringe_size = 1

        while fringe:
            _, _, current = heapq.heappop(fringe)
            self.nodes_explored += 1
            if current in closed:
                continue
            closed.add(current)

            if current == goal:
                self.path_cost = g_score[goal]
                return _reconstruct(came_from, start, goal)

            base = g_score[current]
            for neighbor, weight in graph.neighbors(current):
                if neighbor in closed:
                    continue
                tentative = base + weight
                if tentative < g_score.get(neighbor, math.inf):
                    g_score[neighbor] = tentative
                    came_from[neighbor] = current
                    heapq.heappush(
                        fringe,
                        (self.priority(tentative, neighbor, goal, graph), counter, neighbor),
                    )
                    counter += 1
                    if len(fringe) > self.max_fringe_size:
                        self.max_fringe_size = len(fringe)

        return []


def _reconstruct(came_from: dict[int, int], start: int, goal: int) -> list[int]:
    path = [goal]
    current = goal
    while current != start:
        current = came_from[current]
        path.append(current)
    path.reverse()
    return path


class Dijkstra(Pathfinder):
    """Uniform-cost search: the fringe is ordered by cost so far."""

    def priority(self, g: float, vertex: int, goal: int, graph: Graph) -> float:
        return g


class AStar(Pathfinder):
    """Fringe ordered by ``g + h(vertex, goal, graph)``.

    No admissibility is assumed. With an overestimating heuristic the
    returned path is valid but may cost more than Dijkstra's.
    """

    def __init__(self, heuristic: Heuristic = euclidean) -> None:
        super().__init__()
        self.heuristic = heuristic

    def priority(self, g: float, vertex: int, goal: int, graph: Graph) -> float:
        return g + self.heuristic(vertex, goal, graph)
