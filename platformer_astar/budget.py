"""
Search budget
Deadline and expansion cap enforced from outside the search loop
"""

import time
from dataclasses import dataclass, field
from typing import Optional

from .astar import GoalTest, Successors


@dataclass
class SearchBudget:
    """
    Limits for one search call

    Wrap the successor function with wrap() and the goal test with
    wrap_goal(); once a limit is hit the wrapped successors yield nothing,
    no goal matches, the frontier drains and search() returns None.
    """
    time_limit: Optional[float] = None  # seconds
    max_expansions: Optional[int] = None

    expansions: int = field(default=0, init=False)
    reason: Optional[str] = field(default=None, init=False)
    _start_time: Optional[float] = field(default=None, init=False, repr=False)

    def start(self):
        """Reset counters and start the clock"""
        self.expansions = 0
        self.reason = None
        self._start_time = time.time()

    @property
    def elapsed(self) -> float:
        if self._start_time is None:
            return 0.0
        return time.time() - self._start_time

    @property
    def exhausted(self) -> bool:
        return self.reason is not None

    def check(self) -> bool:
        """Return True while there is budget left, latching the reason once out"""
        if self.reason is not None:
            return False
        if self.max_expansions is not None and self.expansions >= self.max_expansions:
            self.reason = "Expansion limit exceeded"
        elif self.time_limit is not None and self.elapsed > self.time_limit:
            self.reason = "Time limit exceeded"
        return self.reason is None

    def wrap(self, successors: Successors) -> Successors:
        """Successor function that stops producing neighbours when out of budget"""
        if self._start_time is None:
            self.start()

        def limited(node):
            if not self.check():
                return []
            self.expansions += 1
            return successors(node)

        return limited

    def wrap_goal(self, is_goal: GoalTest) -> GoalTest:
        """Goal test that never matches once the budget is exhausted"""

        def limited(node):
            return self.check() and is_goal(node)

        return limited
