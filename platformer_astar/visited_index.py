"""
Visited index for A* search
Arena of discovered nodes plus a hash index from node to its dense handle
"""

from dataclasses import dataclass
from typing import Any, Dict, Hashable, Iterator, List, Optional


@dataclass
class VisitedRecord:
    """
    Best known way of reaching a discovered node

    Attributes:
        node: The node itself
        parent: Handle of the predecessor, None for the start node
        g_cost: Lowest cost from start found so far
    """
    node: Hashable
    parent: Optional[int]
    g_cost: Any


class VisitedIndex:
    """
    Maps each discovered node to a stable integer handle

    Handles are assigned in insertion order and equal the record's position
    in the arena, so the frontier only has to carry integers. Records are
    never removed; their cost can only go down.
    """

    def __init__(self):
        self._records: List[VisitedRecord] = []
        self._handles: Dict[Hashable, int] = {}

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, node) -> bool:
        return node in self._handles

    def __iter__(self) -> Iterator[VisitedRecord]:
        return iter(self._records)

    def handle_of(self, node) -> Optional[int]:
        """Handle of a node, or None if it was never seen"""
        return self._handles.get(node)

    def get_or_register(self, node, parent: Optional[int] = None, g_cost=0) -> int:
        """Return the node's handle, registering it with parent/cost if new"""
        handle = self._handles.get(node)
        if handle is None:
            handle = len(self._records)
            self._records.append(VisitedRecord(node, parent, g_cost))
            self._handles[node] = handle
        return handle

    def try_improve(self, node, parent: Optional[int], g_cost) -> bool:
        """
        Record a path to node if it beats the stored one

        Returns True when the node is new or g_cost is strictly lower than
        the stored cost (the record is overwritten), False otherwise.
        """
        handle = self._handles.get(node)
        if handle is None:
            self.get_or_register(node, parent, g_cost)
            return True

        record = self._records[handle]
        if g_cost < record.g_cost:
            record.parent = parent
            record.g_cost = g_cost
            return True
        return False

    def record_at(self, handle: int) -> VisitedRecord:
        # A handle not produced by this index is a bug; let IndexError through
        return self._records[handle]

    def node_at(self, handle: int):
        return self._records[handle].node
