"""
Platformer A* Package

A generic A* search with a lazy-deletion open set, plus a walkable tile
grid so enemies can plan routes through a level.

Key Features:
- A* over any hashable node type with caller-supplied successors,
  heuristic and goal test
- Dense handle index for visited nodes, stale frontier entries skipped on pop
- Tile grid to graph conversion with 4-way or 8-way movement
- Multiple heuristic functions
- Time and expansion budgets applied from outside the search loop
"""

from .visited_index import VisitedIndex, VisitedRecord
from .frontier import FrontierEntry, PriorityFrontier
from .astar import SearchStats, reconstruct_path, search
from .budget import SearchBudget
from .grid_node import GridNode
from .walkable_grid import (
    GridConfig,
    WalkableGrid,
    diagonal_heuristic,
    euclidean_heuristic,
    manhattan_heuristic,
)

__version__ = "1.0.0"
__author__ = "Platformer Pathfinding Team"

__all__ = [
    'VisitedIndex',
    'VisitedRecord',
    'FrontierEntry',
    'PriorityFrontier',
    'SearchStats',
    'search',
    'reconstruct_path',
    'SearchBudget',
    'GridNode',
    'GridConfig',
    'WalkableGrid',
    'manhattan_heuristic',
    'diagonal_heuristic',
    'euclidean_heuristic',
]
