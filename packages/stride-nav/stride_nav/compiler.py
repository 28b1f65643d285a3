"""GridCompiler - turns an Environment into a navigation Graph."""
from __future__ import annotations

import logging
import math

from stride_nav.environment import Environment, Point
from stride_nav.graph import Graph

logger = logging.getLogger(__name__)

# (dx, dy) for the 8-neighborhood; orthogonal first.
NEIGHBOR_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, 0), (0, -1), (1, 0), (0, 1),
    (-1, -1), (-1, 1), (1, -1), (1, 1),
)


class GridCompiler:
    """Lays a square grid over the environment and links visible neighbors.

    Vertex ``row * cols + col`` sits at the cell center. An edge joins two
    8-adjacent centers iff both are walkable and the line between them has
    line of sight; its weight is the Euclidean distance.
    """

    def __init__(self, environment: Environment, cell_size: float) -> None:
        if cell_size <= 0:
            raise ValueError("cell_size must be positive")
        self.environment = environment
        self.cell_size = cell_size
        self.cols = int(environment.width // cell_size)
        self.rows = int(environment.height // cell_size)
        self._positions: list[Point] = [
            ((col + 0.5) * cell_size, (row + 0.5) * cell_size)
            for row in range(self.rows)
            for col in range(self.cols)
        ]

    @property
    def positions(self) -> tuple[Point, ...]:
        return tuple(self._positions)

    def compile(self) -> Graph:
        env = self.environment
        graph = Graph(len(self._positions))
        graph.set_positions(self._positions)
        walkable = [env.is_walkable(p) for p in self._positions]

        for row in range(self.rows):
            for col in range(self.cols):
                index = row * self.cols + col
                if not walkable[index]:
                    continue
                here = self._positions[index]
                for dx, dy in NEIGHBOR_OFFSETS:
                    n_row, n_col = row + dy, col + dx
                    if not (0 <= n_row < self.rows and 0 <= n_col < self.cols):
                        continue
                    neighbor = n_row * self.cols + n_col
                    if not walkable[neighbor]:
                        continue
                    there = self._positions[neighbor]
                    if env.has_line_of_sight(here, there):
                        graph.add_edge(index, neighbor, math.dist(here, there))

        logger.info(
            f"Compiled {self.cols}x{self.rows} grid: "
            f"{sum(walkable)} walkable vertices, {graph.edge_count} edges"
        )
        return graph

    def point_to_vertex(self, point: Point) -> int:
        """Nearest vertex by squared distance; lowest index wins ties."""
        best = -1
        best_sq = math.inf
        px, py = point
        for i, (x, y) in enumerate(self._positions):
            sq = (px - x) ** 2 + (py - y) ** 2
            if sq < best_sq:
                best_sq = sq
                best = i
        return best

    def vertex_to_point(self, vertex: int) -> Point:
        if 0 <= vertex < len(self._positions):
            return self._positions[vertex]
        return (0.0, 0.0)
