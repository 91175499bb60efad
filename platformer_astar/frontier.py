"""
Priority frontier (open set) for A* search
Min-heap of candidate entries with lazy removal of stale duplicates
"""

import heapq
from dataclasses import dataclass
from typing import Any, List, Optional


@dataclass(frozen=True)
class FrontierEntry:
    """
    A queued candidate

    Attributes:
        estimated_total_cost: f = g + h at the time of queuing
        cost_so_far: g at the time of queuing
        handle: VisitedIndex handle of the node
    """
    estimated_total_cost: Any
    cost_so_far: Any
    handle: int

    def __lt__(self, other: 'FrontierEntry') -> bool:
        """Lower f first, then lower g, then older handle"""
        if self.estimated_total_cost != other.estimated_total_cost:
            return self.estimated_total_cost < other.estimated_total_cost
        if self.cost_so_far != other.cost_so_far:
            return self.cost_so_far < other.cost_so_far
        return self.handle < other.handle


class PriorityFrontier:
    """
    Open set ordered by FrontierEntry

    Several entries may point at the same handle. Entries are never updated
    or removed in place; the caller discards stale ones when they are popped.
    """

    def __init__(self):
        self._heap: List[FrontierEntry] = []

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def push(self, entry: FrontierEntry):
        heapq.heappush(self._heap, entry)

    def pop_min(self) -> Optional[FrontierEntry]:
        """Remove and return the best entry, None when empty"""
        if not self._heap:
            return None
        return heapq.heappop(self._heap)

    def peek(self) -> Optional[FrontierEntry]:
        return self._heap[0] if self._heap else None
