"""
Base Strategy Module - Abstract base class for expansion strategies.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, TYPE_CHECKING

from .board import Board
from .candidate import Candidate, is_reversal
from .context import RunConfig

if TYPE_CHECKING:
    from .engine import SearchEngine


class ExpansionStrategy(ABC):
    """
    Abstract base class for expansion strategies.

    The engine hands a strategy one non-terminal board at a time; the
    strategy generates successors and pushes whatever it wants explored
    back onto the engine's worklist.

    Attributes:
        name: Short identifier for the strategy
        description: Human-readable description for the CLI
    """
    name: str = "base"
    description: str = "Base strategy"

    def __init__(self, config: Optional[RunConfig] = None):
        self.config = config or RunConfig()
        self.pruned_branches = 0

    @abstractmethod
    def expand(self, board: Board, engine: 'SearchEngine') -> None:
        """
        Expand a board and push successors onto the engine.

        Args:
            board: Non-terminal board popped by the engine
            engine: Engine whose worklist receives the successors
        """
        pass

    def find_candidates(self, board: Board) -> List[Candidate]:
        """
        Board candidates with immediate reversals removed.

        Args:
            board: Board to query

        Returns:
            Candidates to apply
        """
        candidates = board.find_candidates()
        if self.config.reject_reversals:
            candidates = [c for c in candidates if not is_reversal(board.last_move, c)]
        return candidates

    def apply_candidates(self, board: Board) -> List[Board]:
        """
        Apply every candidate of a board.

        Args:
            board: Parent board (left unchanged)

        Returns:
            Child boards in candidate order
        """
        return [board.apply(c) for c in self.find_candidates(board)]
