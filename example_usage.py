#!/usr/bin/env python3
"""
Example usage of the platformer A* package
Demonstrates plain graph search, tile-level path planning and search budgets
"""

import logging
import time

import numpy as np

from platformer_astar import (
    GridConfig,
    SearchBudget,
    SearchStats,
    WalkableGrid,
    search,
)

LEVEL = [
    "........................",
    "....#########...........",
    "............#...........",
    "..######....#....####...",
    "............#.......#...",
    "#########...#.......#...",
    "............#########...",
    "........................",
]


def example_graph_search():
    """Search over a hand-written waypoint graph"""
    print("=== Waypoint Graph Example ===")

    edges = {
        "spawn": {"ledge": 5, "ladder": 1},
        "ladder": {"ledge": 1, "pit": 4},
        "ledge": {"door": 3},
        "pit": {"door": 1},
    }

    def successors(node):
        return list(edges.get(node, {}).items())

    result = search("spawn", successors, lambda node: 0, lambda node: node == "door")

    if result is not None:
        path, cost = result
        print(f"Path found: {' -> '.join(path)} (cost {cost})")
    else:
        print("No path found!")


def example_level_navigation():
    """Plan through a tile level with 4-way and 8-way movement"""
    print("\n=== Level Navigation Example ===")

    start_pos = np.array([8.0, 8.0])      # top-left tile
    goal_pos = np.array([296.0, 88.0])    # inside the right-hand room

    for name, config in [
        ("4-way", GridConfig(tile_size=16.0)),
        ("8-way", GridConfig(tile_size=16.0, allow_diagonal=True)),
    ]:
        grid = WalkableGrid.from_tiles(LEVEL, config=config)

        start_time = time.time()
        success, path, stats = grid.find_path(start_pos, goal_pos)
        planning_time = time.time() - start_time

        if success:
            print(f"{name}: path found")
            print(f"  Waypoints: {len(path)}")
            print(f"  Distance: {stats['cost']:.1f} px")
            print(f"  Planning time: {planning_time * 1000:.2f} ms")
            print(f"  Search stats: {stats}")
            print(f"  First waypoints: {[tuple(p) for p in path[:3]]}")
        else:
            print(f"{name}: no path found ({stats.get('error', 'Unknown error')})")


def example_budgeted_search():
    """Cap the work spent on an unbounded search space"""
    print("\n=== Budget Example ===")

    budget = SearchBudget(time_limit=0.05, max_expansions=1000)
    stats = SearchStats()

    # Every integer leads to two more; the goal does not exist
    def successors(n):
        return [(2 * n, 1), (2 * n + 1, 1)]

    result = search(1, budget.wrap(successors), lambda n: 0,
                    budget.wrap_goal(lambda n: n < 0), stats)

    print(f"Result: {result}")
    print(f"Stopped because: {budget.reason}")
    print(f"Nodes expanded: {stats.nodes_expanded}, discovered: {stats.nodes_discovered}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)

    example_graph_search()
    example_level_navigation()
    example_budgeted_search()

    print("\n=== Examples Complete ===")
