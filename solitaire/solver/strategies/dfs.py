"""
Pruned Depth-First Strategy - Exhaustive DFS keeping the best children.

Every candidate is applied, children are sorted ascending by score and
only the top prune_fraction of them is pushed. Because the engine pops
from the end of a batch, the best child is explored first.
"""

import math
from fractions import Fraction
from typing import TYPE_CHECKING

from ..base import ExpansionStrategy
from ..board import Board
from ..factory import register_strategy

if TYPE_CHECKING:
    from ..engine import SearchEngine


@register_strategy
class PrunedDepthFirst(ExpansionStrategy):
    """
    Depth-first search over every candidate with score-based pruning.

    With the default prune_fraction of 0.4, a board with n children
    pushes n - ceil(n * 3/5) of them.
    """
    name = "dfs"
    description = "Exhaustive DFS, keeps the top-scoring fraction of children"

    def cut_index(self, count: int) -> int:
        """
        Number of lowest-scoring children to discard.

        Args:
            count: Number of children

        Returns:
            Index of the first retained child in ascending score order
        """
        keep = Fraction(self.config.prune_fraction).limit_denominator(1000)
        cut = math.ceil(count * (1 - keep))
        return min(cut, max(count - self.config.min_children, 0))

    def expand(self, board: Board, engine: 'SearchEngine') -> None:
        children = self.apply_candidates(board)
        if not children:
            return

        children.sort(key=lambda b: b.score())
        cut = self.cut_index(len(children))
        self.pruned_branches += cut
        engine.push_batch(children[cut:])
