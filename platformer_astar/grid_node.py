"""
Grid Node class for tile-level pathfinding
Represents a single cell of the walkable grid built from level tiles
"""

import numpy as np
from typing import Optional, Tuple


class GridNode:
    """
    Represents a single cell in the 2D level grid

    Attributes:
        index: Grid coordinates (x, y), column then row
        position: World coordinates of the cell centre (x, y)
        walkable: Whether an entity may stand in this cell

    Search bookkeeping (cost, parent) lives in the search itself, so nodes
    can be shared between searches.
    """

    def __init__(self, index: Tuple[int, int],
                 position: Optional[np.ndarray] = None,
                 walkable: bool = True):
        self.index = (int(index[0]), int(index[1]))
        self.position = position if position is not None else np.array([0.0, 0.0])
        self.walkable = walkable

    @property
    def x(self) -> int:
        return self.index[0]

    @property
    def y(self) -> int:
        return self.index[1]

    def __eq__(self, other):
        """Equality comparison based on grid index"""
        if not isinstance(other, GridNode):
            return NotImplemented
        return self.index == other.index

    def __hash__(self):
        """Hash function for using nodes in sets/dictionaries"""
        return hash(self.index)

    def __repr__(self):
        return f"GridNode(index={self.index}, walkable={self.walkable})"
