"""stride-nav - Navigation graphs, grid compilation, search and path following."""
from __future__ import annotations

from stride_nav import heuristics
from stride_nav.compiler import GridCompiler
from stride_nav.environment import Environment, Rect
from stride_nav.follower import FollowerConfig, PathFollower
from stride_nav.graph import Graph, GraphFormatError, load_graph, save_graph
from stride_nav.pathfinders import AStar, Dijkstra, Pathfinder

__all__ = [
    "AStar",
    "Dijkstra",
    "Environment",
    "FollowerConfig",
    "Graph",
    "GraphFormatError",
    "GridCompiler",
    "PathFollower",
    "Pathfinder",
    "Rect",
    "heuristics",
    "load_graph",
    "save_graph",
]
