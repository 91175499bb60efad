"""
A* search over an arbitrary graph
The caller supplies successors, heuristic and goal test as plain callables
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Hashable, Iterable, Iterator, List, Optional, Tuple

from .frontier import FrontierEntry, PriorityFrontier
from .visited_index import VisitedIndex

logger = logging.getLogger(__name__)

Successors = Callable[[Hashable], Iterable[Tuple[Hashable, Any]]]
Heuristic = Callable[[Hashable], Any]
GoalTest = Callable[[Hashable], bool]


@dataclass
class SearchStats:
    """Counters filled in by one search call"""
    iterations: int = 0
    nodes_expanded: int = 0
    nodes_discovered: int = 0
    stale_skipped: int = 0
    time: float = 0.0
    found: bool = False

    def as_dict(self) -> dict:
        return {
            "iterations": self.iterations,
            "nodes_expanded": self.nodes_expanded,
            "nodes_discovered": self.nodes_discovered,
            "stale_skipped": self.stale_skipped,
            "time": self.time,
            "found": self.found,
        }


def _walk_back(visited: VisitedIndex, handle: Optional[int]) -> Iterator[Hashable]:
    # Only goes goal -> start
    while handle is not None:
        record = visited.record_at(handle)
        yield record.node
        handle = record.parent


def reconstruct_path(visited: VisitedIndex, goal_handle: int) -> List[Hashable]:
    """Path from the start node to the node behind goal_handle"""
    path = list(_walk_back(visited, goal_handle))
    path.reverse()
    return path


def search(start: Hashable,
           successors: Successors,
           heuristic: Heuristic,
           is_goal: GoalTest,
           stats: Optional[SearchStats] = None) -> Optional[Tuple[List[Hashable], Any]]:
    """
    Find a cheapest path from start to a node satisfying is_goal

    Args:
        start: Start node, any hashable value
        successors: Maps a node to (neighbor, edge_cost) pairs
        heuristic: Estimated remaining cost from a node
        is_goal: Goal predicate
        stats: Optional SearchStats to fill in

    Returns:
        (path, total_cost) with path running start -> goal, or None when
        the reachable space holds no goal

    The result is optimal only for an admissible and consistent heuristic,
    and the call terminates only if the reachable space is finite. Neither
    is checked.
    """
    if stats is None:
        stats = SearchStats()
    start_time = time.time()

    visited = VisitedIndex()
    frontier = PriorityFrontier()

    start_handle = visited.get_or_register(start, None, 0)
    frontier.push(FrontierEntry(0, 0, start_handle))

    try:
        while True:
            entry = frontier.pop_min()
            if entry is None:
                logger.debug("No path found after %d iterations, %d nodes expanded",
                             stats.iterations, stats.nodes_expanded)
                return None
            stats.iterations += 1

            record = visited.record_at(entry.handle)

            # A cheaper route to this node was queued after this entry
            if entry.cost_so_far > record.g_cost:
                stats.stale_skipped += 1
                continue

            current = record.node
            if is_goal(current):
                path = reconstruct_path(visited, entry.handle)
                stats.found = True
                logger.debug("Path found: %d nodes, cost %s, %d nodes expanded",
                             len(path), entry.cost_so_far, stats.nodes_expanded)
                return path, entry.cost_so_far

            stats.nodes_expanded += 1
            for successor, edge_cost in successors(current):
                new_g = entry.cost_so_far + edge_cost
                if not visited.try_improve(successor, entry.handle, new_g):
                    continue
                h = heuristic(successor)
                frontier.push(FrontierEntry(new_g + h, new_g, visited.handle_of(successor)))
    finally:
        stats.nodes_discovered = len(visited)
        stats.time = time.time() - start_time
