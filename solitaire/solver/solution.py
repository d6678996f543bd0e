"""
Solution Module - Result of a search run.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from .board import Board


@dataclass
class SolutionMetrics:
    """
    Performance metrics for a search run.

    Attributes:
        computation_time_ms: Time taken in milliseconds
        total_scenarios: Non-terminal boards processed by the engine
        max_depth: High-water mark of outstanding worklist batches
        pruned_branches: Children discarded by the strategy
        strategy_name: Name of strategy that drove the search
    """
    computation_time_ms: float = 0.0
    total_scenarios: int = 0
    max_depth: int = 0
    pruned_branches: int = 0
    strategy_name: str = ""


@dataclass
class Solution:
    """
    Result of a search run.

    Attributes:
        paths: One notation list per terminal board found, in discovery order
        boards: The terminal boards themselves (same order as paths)
        was_cancelled: True if a limit stopped the run before the worklist emptied
        metrics: Performance statistics
    """
    paths: List[List[str]] = field(default_factory=list)
    boards: List[Board] = field(default_factory=list)
    was_cancelled: bool = False
    metrics: SolutionMetrics = field(default_factory=SolutionMetrics)

    @property
    def solution_count(self) -> int:
        """Number of solutions found."""
        return len(self.paths)

    @property
    def has_solutions(self) -> bool:
        """Check if any solution was found."""
        return len(self.paths) > 0

    @property
    def shortest_path(self) -> Optional[List[str]]:
        if not self.paths:
            return None
        return min(self.paths, key=len)

    @property
    def longest_path(self) -> Optional[List[str]]:
        if not self.paths:
            return None
        return max(self.paths, key=len)

    def best(self) -> Optional[Board]:
        """
        Terminal board with the highest game score.

        Ties go to the shorter path, then to the earlier discovery.

        Returns:
            Best terminal board, or None if there are no solutions
        """
        if not self.boards:
            return None
        return max(
            self.boards,
            key=lambda b: (b.total_score, -len(b.path)),
        )
