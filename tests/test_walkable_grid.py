"""Tests for the walkable tile grid."""

import numpy as np
import pytest

from platformer_astar import budget as budget_module
from platformer_astar.astar import SearchStats
from platformer_astar.grid_node import GridNode
from platformer_astar.walkable_grid import (
    SQRT2,
    GridConfig,
    WalkableGrid,
    diagonal_heuristic,
    euclidean_heuristic,
    manhattan_heuristic,
)

LEVEL = [
    "....",
    ".##.",
    "....",
]


class TickingClock:
    """Stands in for the time module; every reading moves time forward"""

    def __init__(self, step):
        self.now = 1000.0
        self.step = step

    def time(self):
        self.now += self.step
        return self.now


class TestGridNode:
    """Test GridNode identity."""

    def test_equality_uses_index_only(self):
        a = GridNode((1, 2), np.array([24.0, 40.0]), True)
        b = GridNode((1, 2), np.array([0.0, 0.0]), False)

        assert a == b
        assert hash(a) == hash(b)
        assert a != GridNode((2, 1))
        assert a != (1, 2)

    def test_coordinates(self):
        node = GridNode(np.array([3, 4]))

        assert node.index == (3, 4)
        assert (node.x, node.y) == (3, 4)
        assert node.walkable


class TestConstruction:
    """Test building grids from arrays and tiles."""

    def test_from_tiles(self):
        grid = WalkableGrid.from_tiles(LEVEL)

        assert grid.shape == (4, 3)
        assert grid.is_walkable((0, 0))
        assert not grid.is_walkable((1, 1))
        assert not grid.is_walkable((2, 1))
        assert grid.is_walkable((3, 1))

    def test_custom_blocked_characters(self):
        grid = WalkableGrid.from_tiles([".X=", "..."], blocked="X=")

        assert not grid.is_walkable((1, 0))
        assert not grid.is_walkable((2, 0))
        assert grid.is_walkable((2, 1))

    @pytest.mark.parametrize("rows", [[], [""], ["...", ".."]])
    def test_bad_tiles(self, rows):
        with pytest.raises(ValueError):
            WalkableGrid.from_tiles(rows)

    def test_array_must_be_2d(self):
        with pytest.raises(ValueError, match="2D"):
            WalkableGrid(np.ones(5, dtype=bool))

    def test_tile_size_must_be_positive(self):
        with pytest.raises(ValueError, match="tile_size"):
            WalkableGrid(np.ones((2, 2)), GridConfig(tile_size=0))

    def test_unknown_heuristic(self):
        with pytest.raises(ValueError, match="heuristic"):
            WalkableGrid(np.ones((2, 2)), GridConfig(heuristic="bogus"))


class TestCoordinates:
    """Test world/grid conversion."""

    @pytest.fixture
    def grid(self):
        return WalkableGrid.from_tiles(LEVEL, config=GridConfig(tile_size=16.0, origin=(100.0, 0.0)))

    def test_index_to_coord_is_cell_centre(self, grid):
        assert np.allclose(grid.index_to_coord((1, 2)), [124.0, 40.0])

    def test_coord_to_index(self, grid):
        assert grid.coord_to_index([124.0, 40.0]) == (1, 2)
        assert grid.coord_to_index([100.0, 0.0]) == (0, 0)
        assert grid.coord_to_index([115.9, 15.9]) == (0, 0)
        assert grid.coord_to_index([99.0, 0.0]) == (-1, 0)

    def test_out_of_bounds_is_not_walkable(self, grid):
        assert not grid.is_valid_index((-1, 0))
        assert not grid.is_valid_index((4, 0))
        assert not grid.is_walkable((0, 3))

    def test_boundary_margin(self):
        grid = WalkableGrid(np.ones((5, 5)), GridConfig(boundary_margin=1))

        assert not grid.is_valid_index((0, 0))
        assert not grid.is_valid_index((4, 2))
        assert grid.is_valid_index((1, 1))
        assert grid.is_valid_index((3, 3))

    def test_nodes_are_cached(self, grid):
        node = grid.node_at((1, 1))

        assert grid.node_at((1, 1)) is node
        assert not node.walkable
        assert np.allclose(node.position, [124.0, 24.0])


class TestSuccessors:
    """Test neighbour generation."""

    def test_four_way(self):
        grid = WalkableGrid.from_tiles(LEVEL)

        neighbors = grid.successors(grid.node_at((0, 1)))

        assert sorted((n.index, c) for n, c in neighbors) == [((0, 0), 1.0), ((0, 2), 1.0)]

    def test_eight_way_open(self):
        grid = WalkableGrid(np.ones((3, 3)), GridConfig(allow_diagonal=True))

        neighbors = grid.successors(grid.node_at((1, 1)))

        assert len(neighbors) == 8
        diagonal_costs = [c for n, c in neighbors if n.x != 1 and n.y != 1]
        assert diagonal_costs == [SQRT2] * 4

    def test_no_corner_cutting(self):
        grid = WalkableGrid.from_tiles([".#", ".."], config=GridConfig(allow_diagonal=True))

        neighbors = grid.successors(grid.node_at((0, 0)))

        assert [n.index for n, _ in neighbors] == [(0, 1)]

    def test_corner_cutting(self):
        config = GridConfig(allow_diagonal=True, corner_cutting=True)
        grid = WalkableGrid.from_tiles([".#", ".."], config=config)

        neighbors = grid.successors(grid.node_at((0, 0)))

        assert sorted(n.index for n, _ in neighbors) == [(0, 1), (1, 1)]


class TestHeuristics:
    """Test heuristic functions."""

    def test_values(self):
        a, b = GridNode((0, 0)), GridNode((3, 4))

        assert manhattan_heuristic(a, b) == 7
        assert diagonal_heuristic(a, b) == pytest.approx(3 * SQRT2 + 1)
        assert euclidean_heuristic(a, b) == pytest.approx(5.0)

    def test_auto_selection(self):
        four = WalkableGrid(np.ones((2, 2)))
        eight = WalkableGrid(np.ones((2, 2)), GridConfig(allow_diagonal=True))
        fixed = WalkableGrid(np.ones((2, 2)), GridConfig(heuristic="euclidean"))

        assert four.heuristic_name() == "manhattan"
        assert eight.heuristic_name() == "diagonal"
        assert fixed.heuristic_name() == "euclidean"

    def test_heuristic_to_goal(self):
        grid = WalkableGrid(np.ones((5, 5)))
        h = grid.heuristic_to(grid.node_at((4, 4)))

        assert h(grid.node_at((1, 2))) == 5


class TestFindCells:
    """Test cell-to-cell searches."""

    def test_four_way_around_wall(self):
        grid = WalkableGrid.from_tiles(LEVEL)

        nodes, cost = grid.find_cells((0, 1), (3, 1))

        assert cost == 5
        assert nodes[0].index == (0, 1)
        assert nodes[-1].index == (3, 1)
        assert all(node.walkable for node in nodes)

    def test_eight_way_without_corner_cutting(self):
        grid = WalkableGrid.from_tiles(LEVEL, config=GridConfig(allow_diagonal=True))

        _, cost = grid.find_cells((0, 1), (3, 1))

        assert cost == pytest.approx(5.0)

    def test_eight_way_with_corner_cutting(self):
        config = GridConfig(allow_diagonal=True, corner_cutting=True)
        grid = WalkableGrid.from_tiles(LEVEL, config=config)

        nodes, cost = grid.find_cells((0, 1), (3, 1))

        assert cost == pytest.approx(1 + 2 * SQRT2)
        assert len(nodes) == 4

    def test_open_diagonal(self):
        grid = WalkableGrid(np.ones((5, 5)), GridConfig(allow_diagonal=True))

        nodes, cost = grid.find_cells((0, 0), (4, 4))

        assert cost == pytest.approx(4 * SQRT2)
        assert [n.index for n in nodes] == [(i, i) for i in range(5)]

    def test_same_cell(self):
        grid = WalkableGrid.from_tiles(LEVEL)

        assert grid.find_cells((0, 0), (0, 0)) == ([grid.node_at((0, 0))], 0)

    def test_walled_off(self):
        grid = WalkableGrid.from_tiles(["..#..", "..#.."])
        stats = SearchStats()

        assert grid.find_cells((0, 0), (4, 0), stats=stats) is None
        assert stats.nodes_expanded == 4

    def test_start_outside_grid(self):
        grid = WalkableGrid.from_tiles(["...", "..."])
        stats = SearchStats()

        assert grid.find_cells((-1, 0), (2, 0), stats=stats) is None
        assert stats.iterations == 0

    def test_start_inside_wall(self):
        grid = WalkableGrid.from_tiles(["#..", "..."])

        assert grid.find_cells((0, 0), (2, 0)) is None

    def test_goal_inside_wall(self):
        grid = WalkableGrid.from_tiles(["..#", "..."])

        assert grid.find_cells((0, 0), (2, 0)) is None


class TestFindPath:
    """Test world-space planning."""

    @pytest.fixture
    def grid(self):
        return WalkableGrid.from_tiles(LEVEL, config=GridConfig(tile_size=16.0))

    def test_path_found(self, grid):
        success, path, stats = grid.find_path([8.0, 24.0], [56.0, 24.0])

        assert success
        assert len(path) == 6
        assert np.allclose(path[0], [8.0, 24.0])
        assert np.allclose(path[-1], [56.0, 24.0])
        assert stats["path_length"] == 6
        assert stats["cost"] == pytest.approx(80.0)
        assert stats["adjusted"] is False
        assert "error" not in stats

    def test_positions_snap_to_cell_centres(self, grid):
        success, path, _ = grid.find_path([1.0, 1.0], [63.0, 1.0])

        assert success
        assert np.allclose(path[0], [8.0, 8.0])
        assert np.allclose(path[-1], [56.0, 8.0])

    def test_out_of_bounds(self, grid):
        success, path, stats = grid.find_path([8.0, 24.0], [200.0, 24.0])

        assert not success
        assert path == []
        assert stats["error"] == "Start or end point outside grid bounds"

    def test_blocked_start_is_adjusted(self):
        grid = WalkableGrid.from_tiles(["......", ".#....", "......"])

        success, path, stats = grid.find_path([24.0, 24.0], [88.0, 24.0])

        assert success
        assert stats["adjusted"] is True
        assert np.allclose(path[0], [40.0, 24.0])
        assert len(path) == 4

    def test_blocked_goal_is_adjusted(self):
        grid = WalkableGrid.from_tiles(["......", "....#.", "......"])

        success, path, stats = grid.find_path([8.0, 24.0], [72.0, 24.0])

        assert success
        assert stats["adjusted"] is True
        assert np.allclose(path[0], [8.0, 24.0])
        assert np.allclose(path[-1], [56.0, 24.0])
        assert len(path) == 4

    def test_blocked_start_without_adjustment(self):
        config = GridConfig(max_adjust_steps=0)
        grid = WalkableGrid.from_tiles(["......", ".#....", "......"], config=config)

        success, _, stats = grid.find_path([24.0, 24.0], [88.0, 24.0])

        assert not success
        assert stats["error"] == "Cannot adjust start/end points"

    def test_no_path(self):
        grid = WalkableGrid.from_tiles(["..#..", "..#.."])

        success, path, stats = grid.find_path([8.0, 8.0], [72.0, 8.0])

        assert not success
        assert path == []
        assert stats["error"] == "No path found"
        assert stats["nodes_expanded"] == 4

    def test_expansion_limit(self):
        grid = WalkableGrid(np.ones((10, 10)), GridConfig(max_expansions=1))

        success, _, stats = grid.find_path([8.0, 8.0], [152.0, 152.0])

        assert not success
        assert stats["error"] == "Expansion limit exceeded"

    def test_time_limit(self, monkeypatch):
        monkeypatch.setattr(budget_module, "time", TickingClock(step=1.0))
        grid = WalkableGrid(np.ones((10, 10)), GridConfig(time_limit=0.5))

        success, path, stats = grid.find_path([8.0, 8.0], [152.0, 152.0])

        assert not success
        assert path == []
        assert stats["error"] == "Time limit exceeded"
        assert stats["found"] is False
