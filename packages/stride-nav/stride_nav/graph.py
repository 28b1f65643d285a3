"""Weighted directed graph with optional vertex positions and text persistence.

Text format, one record per line::

    <N>
    <from> <to> <weight>
    ...

The first line is the vertex count; each further line is one edge. Edges
are written per source vertex in insertion order and weights use Python's
shortest round-trip float repr, so save -> load -> save is byte-identical.
"""
from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Iterator

logger = logging.getLogger(__name__)

Edge = tuple[int, float]
Position = tuple[float, float]


class GraphFormatError(ValueError):
    """Raised when graph text cannot be parsed into a valid Graph."""


class Graph:
    """Adjacency-list digraph over vertices ``0..n-1``.

    Invalid edits are ignored and reported through the return value rather
    than raised; search code can treat the graph as read-only once built.
    """

    def __init__(self, vertex_count: int = 0) -> None:
        if vertex_count < 0:
            raise ValueError("vertex_count must not be negative")
        self._adjacency: list[list[Edge]] = [[] for _ in range(vertex_count)]
        self._positions: list[Position] = []

    @property
    def vertex_count(self) -> int:
        return len(self._adjacency)

    def __len__(self) -> int:
        return len(self._adjacency)

    @property
    def edge_count(self) -> int:
        return sum(len(edges) for edges in self._adjacency)

    def _valid(self, vertex: int) -> bool:
        return 0 <= vertex < len(self._adjacency)

    def add_edge(self, source: int, target: int, weight: float) -> bool:
        """Add ``source -> target``; False (and no change) if invalid."""
        if not (self._valid(source) and self._valid(target)):
            return False
        if not (weight > 0.0 and math.isfinite(weight)):
            return False
        self._adjacency[source].append((target, float(weight)))
        return True

    def neighbors(self, vertex: int) -> tuple[Edge, ...]:
        if not self._valid(vertex):
            return ()
        return tuple(self._adjacency[vertex])

    def edges(self) -> Iterator[tuple[int, int, float]]:
        for source, edges in enumerate(self._adjacency):
            for target, weight in edges:
                yield source, target, weight

    # -- Positions --

    def set_positions(self, positions: list[Position]) -> None:
        self._positions = [(float(x), float(y)) for x, y in positions]

    def has_position(self, vertex: int) -> bool:
        return 0 <= vertex < len(self._positions)

    def position(self, vertex: int) -> Position:
        """Position of ``vertex``, or the origin when none is recorded."""
        if not self.has_position(vertex):
            return (0.0, 0.0)
        return self._positions[vertex]

    @property
    def positions(self) -> tuple[Position, ...]:
        return tuple(self._positions)

    # -- Text persistence --

    def to_text(self) -> str:
        lines = [str(self.vertex_count)]
        lines.extend(f"{s} {t} {w!r}" for s, t, w in self.edges())
        return "\n".join(lines) + "\n"

    @classmethod
    def from_text(cls, text: str) -> Graph:
        lines = [line.strip() for line in text.splitlines()]
        lines = [line for line in lines if line]
        if not lines:
            raise GraphFormatError("empty graph text")
        try:
            count = int(lines[0])
        except ValueError:
            raise GraphFormatError(f"bad vertex count {lines[0]!r}") from None
        if count < 0:
            raise GraphFormatError(f"negative vertex count {count}")

        graph = cls(count)
        for lineno, line in enumerate(lines[1:], start=2):
            parts = line.split()
            if len(parts) != 3:
                raise GraphFormatError(f"line {lineno}: expected 3 fields, got {len(parts)}")
            try:
                source, target, weight = int(parts[0]), int(parts[1]), float(parts[2])
            except ValueError:
                raise GraphFormatError(f"line {lineno}: malformed edge {line!r}") from None
            if not graph.add_edge(source, target, weight):
                raise GraphFormatError(f"line {lineno}: invalid edge {line!r}")
        return graph


def save_graph(graph: Graph, path: str | Path) -> bool:
    try:
        Path(path).write_text(graph.to_text(), encoding="utf-8")
    except OSError as e:
        logger.error(f"Failed to save graph to {path}: {e}")
        return False
    return True


def load_graph(path: str | Path) -> Graph | None:
    """Load a graph file; None if it is unreadable or has invalid records."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Failed to open graph file {path}: {e}")
        return None
    try:
        graph = Graph.from_text(text)
    except GraphFormatError as e:
        logger.warning(f"Rejected graph file {path}: {e}")
        return None
    logger.info(f"Loaded graph {path}: {graph.vertex_count} vertices, {graph.edge_count} edges")
    return graph
