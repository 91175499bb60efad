"""
Walkable grid for tile-level pathfinding
Turns a 2D walkability array into successors and heuristics for A* search
"""

import logging
import numpy as np
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from .astar import SearchStats, search
from .budget import SearchBudget
from .grid_node import GridNode

logger = logging.getLogger(__name__)

SQRT2 = float(np.sqrt(2.0))

ORTHOGONAL = [(1, 0), (-1, 0), (0, 1), (0, -1)]
DIAGONAL = [(1, 1), (1, -1), (-1, 1), (-1, -1)]


@dataclass
class GridConfig:
    """Configuration parameters for the walkable grid"""
    tile_size: float = 16.0  # world units per tile
    origin: Tuple[float, float] = (0.0, 0.0)  # world position of the grid corner
    allow_diagonal: bool = False
    corner_cutting: bool = False  # diagonal moves past a blocked corner
    heuristic: str = "auto"  # auto, manhattan, diagonal, euclidean
    boundary_margin: int = 0  # cells to avoid at grid boundaries
    time_limit: Optional[float] = None  # seconds
    max_expansions: Optional[int] = None
    max_adjust_steps: int = 10  # cells to walk when an endpoint is blocked


# Heuristic functions, in grid units
def manhattan_heuristic(node1: GridNode, node2: GridNode) -> float:
    """Manhattan distance heuristic"""
    return abs(node1.index[0] - node2.index[0]) + abs(node1.index[1] - node2.index[1])


def diagonal_heuristic(node1: GridNode, node2: GridNode) -> float:
    """
    Octile distance: diagonal steps cost sqrt(2), straight steps cost 1
    Admissible for 8-way movement
    """
    dx = abs(node1.index[0] - node2.index[0])
    dy = abs(node1.index[1] - node2.index[1])
    return SQRT2 * min(dx, dy) + abs(dx - dy)


def euclidean_heuristic(node1: GridNode, node2: GridNode) -> float:
    """Euclidean distance heuristic"""
    diff = np.array(node2.index) - np.array(node1.index)
    return float(np.linalg.norm(diff))


HEURISTICS: Dict[str, Callable[[GridNode, GridNode], float]] = {
    "manhattan": manhattan_heuristic,
    "diagonal": diagonal_heuristic,
    "euclidean": euclidean_heuristic,
}


class WalkableGrid:
    """
    Uniform grid of level cells

    walkable[row, col] is truthy for cells an entity can occupy. Grid
    indices are (x, y) = (col, row); world positions grow along the same
    axes and a cell's position is its centre.
    """

    def __init__(self, walkable: np.ndarray, config: GridConfig = None):
        self.config = config if config is not None else GridConfig()

        walkable = np.asarray(walkable, dtype=bool)
        if walkable.ndim != 2:
            raise ValueError(f"walkable must be a 2D array, got shape {walkable.shape}")
        if self.config.tile_size <= 0:
            raise ValueError(f"tile_size must be positive, got {self.config.tile_size}")
        if self.config.heuristic != "auto" and self.config.heuristic not in HEURISTICS:
            raise ValueError(f"Unknown heuristic '{self.config.heuristic}'")

        self.walkable = walkable
        self.height, self.width = walkable.shape

        self.tile_size = float(self.config.tile_size)
        self.inv_tile_size = 1.0 / self.tile_size
        self.origin = np.array(self.config.origin, dtype=float)

        self.directions = list(ORTHOGONAL)
        if self.config.allow_diagonal:
            self.directions.extend(DIAGONAL)

        self.grid_nodes: Dict[Tuple[int, int], GridNode] = {}

    @classmethod
    def from_tiles(cls, rows: Sequence[str], blocked: str = "#",
                   config: GridConfig = None) -> 'WalkableGrid':
        """
        Build a grid from text rows, one character per tile

        Characters in `blocked` are walls, anything else is open.
        """
        if not rows:
            raise ValueError("Level has no rows")
        width = len(rows[0])
        if width == 0:
            raise ValueError("Level rows are empty")
        for y, row in enumerate(rows):
            if len(row) != width:
                raise ValueError(f"Row {y} has width {len(row)}, expected {width}")

        walkable = np.array([[tile not in blocked for tile in row] for row in rows], dtype=bool)
        return cls(walkable, config)

    @property
    def shape(self) -> Tuple[int, int]:
        return self.width, self.height

    def coord_to_index(self, position) -> Tuple[int, int]:
        """Convert world coordinates to grid indices"""
        relative_pos = np.asarray(position, dtype=float) - self.origin
        index = np.floor(relative_pos * self.inv_tile_size).astype(int)
        return int(index[0]), int(index[1])

    def index_to_coord(self, index) -> np.ndarray:
        """Convert grid indices to world coordinates of the cell centre"""
        return (np.asarray(index, dtype=float) + 0.5) * self.tile_size + self.origin

    def is_valid_index(self, index) -> bool:
        """Check if grid index is within bounds"""
        margin = self.config.boundary_margin
        return (margin <= index[0] < self.width - margin and
                margin <= index[1] < self.height - margin)

    def is_walkable(self, index) -> bool:
        """Check if a cell is inside the grid and open"""
        if not self.is_valid_index(index):
            return False
        return bool(self.walkable[index[1], index[0]])

    def node_at(self, index) -> GridNode:
        """Get existing node or create new one"""
        key = (int(index[0]), int(index[1]))
        node = self.grid_nodes.get(key)
        if node is None:
            node = GridNode(key, self.index_to_coord(key), self.is_walkable(key))
            self.grid_nodes[key] = node
        return node

    def successors(self, node: GridNode) -> List[Tuple[GridNode, float]]:
        """Get walkable neighbours and their movement costs"""
        neighbors = []
        x, y = node.index

        for dx, dy in self.directions:
            neighbor_idx = (x + dx, y + dy)
            if not self.is_walkable(neighbor_idx):
                continue

            if dx != 0 and dy != 0:
                if not self.config.corner_cutting and not (
                        self.is_walkable((x + dx, y)) and self.is_walkable((x, y + dy))):
                    continue
                movement_cost = SQRT2
            else:
                movement_cost = 1.0

            neighbors.append((self.node_at(neighbor_idx), movement_cost))

        return neighbors

    def heuristic_name(self) -> str:
        name = self.config.heuristic
        if name == "auto":
            return "diagonal" if self.config.allow_diagonal else "manhattan"
        return name

    def heuristic_to(self, goal: GridNode) -> Callable[[GridNode], float]:
        """Single-argument heuristic estimating the distance to goal"""
        heuristic = HEURISTICS[self.heuristic_name()]
        return lambda node: heuristic(node, goal)

    def find_cells(self, start_index, goal_index,
                   stats: SearchStats = None,
                   budget: SearchBudget = None) -> Optional[Tuple[List[GridNode], float]]:
        """
        Search between two cells

        Returns (nodes, cost) with cost in tiles, or None if unreachable.
        Either endpoint outside the grid or inside a wall is unreachable.
        """
        if not self.is_walkable(start_index) or not self.is_walkable(goal_index):
            logger.debug("Endpoint not walkable: start=%s goal=%s", start_index, goal_index)
            return None

        start = self.node_at(start_index)
        goal = self.node_at(goal_index)

        successors = self.successors
        is_goal = lambda node: node == goal
        if budget is not None:
            budget.start()
            successors = budget.wrap(successors)
            is_goal = budget.wrap_goal(is_goal)

        return search(start, successors, self.heuristic_to(goal), is_goal, stats)

    def adjust_endpoint(self, position: np.ndarray, toward: np.ndarray) -> Optional[np.ndarray]:
        """
        Walk a blocked endpoint toward the other endpoint until it lands in
        an open cell. Returns None if no open cell is found in time.
        """
        if self.is_walkable(self.coord_to_index(position)):
            return position

        direction = toward - position
        norm = np.linalg.norm(direction)
        if norm == 0:
            return None
        direction = direction / norm

        adjusted = position.copy()
        for _ in range(self.config.max_adjust_steps):
            adjusted = adjusted + direction * self.tile_size
            if self.is_walkable(self.coord_to_index(adjusted)):
                return adjusted
        return None

    def find_path(self, start_pos, goal_pos) -> Tuple[bool, List[np.ndarray], dict]:
        """
        Plan a path between two world positions

        Args:
            start_pos: Starting position in world coordinates
            goal_pos: Goal position in world coordinates

        Returns:
            success: Whether path was found
            path: Cell-centre waypoints from start to goal
            stats: Search statistics, with an "error" entry on failure
        """
        start_pos = np.asarray(start_pos, dtype=float)
        goal_pos = np.asarray(goal_pos, dtype=float)

        start_idx = self.coord_to_index(start_pos)
        goal_idx = self.coord_to_index(goal_pos)
        if not self.is_valid_index(start_idx) or not self.is_valid_index(goal_idx):
            return False, [], {"error": "Start or end point outside grid bounds"}

        adj_start = self.adjust_endpoint(start_pos, goal_pos)
        adj_goal = self.adjust_endpoint(goal_pos, start_pos)
        if adj_start is None or adj_goal is None:
            logger.warning("Cannot adjust start/end points: start=%s goal=%s",
                           start_pos.tolist(), goal_pos.tolist())
            return False, [], {"error": "Cannot adjust start/end points"}

        start_idx = self.coord_to_index(adj_start)
        goal_idx = self.coord_to_index(adj_goal)
        logger.debug("Planning from cell %s to cell %s", start_idx, goal_idx)

        budget = SearchBudget(self.config.time_limit, self.config.max_expansions)
        stats = SearchStats()
        result = self.find_cells(start_idx, goal_idx, stats=stats, budget=budget)

        info = stats.as_dict()
        info["adjusted"] = (start_idx != self.coord_to_index(start_pos) or
                            goal_idx != self.coord_to_index(goal_pos))
        if result is None:
            info["error"] = budget.reason or "No path found"
            return False, [], info

        nodes, cost = result
        path_coords = [node.position.copy() for node in nodes]
        info["path_length"] = len(path_coords)
        info["cost"] = cost * self.tile_size
        return True, path_coords, info
