"""
Search Engine Module - LIFO worklist driver shared by every variant.

The worklist is a stack of batches; each batch is a list of sibling
boards. The engine always pops the last board of the most recently
pushed batch, so a strategy that pushes children sorted ascending by
score explores the best child first.
"""

import logging
import time
from typing import List, Optional, Sequence

from .board import Board
from .base import ExpansionStrategy
from .context import RunConfig, SearchContext
from .errors import StructuralError
from .factory import create_strategy
from .solution import Solution, SolutionMetrics

logger = logging.getLogger(__name__)


class SearchEngine:
    """
    Drives a search from one initial board.

    Attributes:
        board: Initial board
        strategy: Expansion strategy called for every non-terminal board
        config: Run configuration
        context: Cancellation and progress context
        solutions: Paths of terminal boards found so far
        solved_boards: The terminal boards, same order as solutions
        was_cancelled: True if a context limit ended the run
    """

    def __init__(self, board: Board, strategy: ExpansionStrategy,
                 config: Optional[RunConfig] = None,
                 context: Optional[SearchContext] = None):
        self.board = board
        self.strategy = strategy
        self.config = config or strategy.config
        self.context = context or SearchContext()
        self.solutions: List[List[str]] = []
        self.solved_boards: List[Board] = []
        self.was_cancelled = False

        self._stack: List[List[Board]] = [[board]]
        self._total_scenarios = 0
        self._max_depth = 0
        self._elapsed_ms = 0.0

    @property
    def total_scenarios(self) -> int:
        """Non-terminal boards processed so far."""
        return self._total_scenarios

    @property
    def max_depth(self) -> int:
        """Largest number of outstanding batches seen so far."""
        return self._max_depth

    @property
    def pending(self) -> int:
        """Outstanding batches on the worklist."""
        return len(self._stack)

    def push_batch(self, boards: Sequence[Board]) -> bool:
        """
        Push a batch of sibling boards.

        The batch is explored before any previously queued batch, and
        its last board is popped first.

        Args:
            boards: Boards to queue

        Returns:
            False if the batch was empty and nothing was pushed
        """
        if not boards:
            return False
        self._stack.append(list(boards))
        return True

    def push_single(self, board: Board) -> bool:
        """Push a batch of one board."""
        return self.push_batch([board])

    def _pop(self) -> Board:
        batch = self._stack[-1]
        board = batch.pop()
        if not batch:
            self._stack.pop()
        return board

    def run(self) -> List[List[str]]:
        """
        Run the search until the worklist is exhausted.

        Also stops at the first solution when the config asks for it, or
        when the context reports cancellation.

        Returns:
            Paths of all terminal boards found, in discovery order

        Raises:
            StructuralError: If the initial board fails verification, or a
                board turns out inconsistent during the search
        """
        violations = self.board.verify()
        if violations:
            logger.error(f"Initial board failed verification: {violations}")
            raise StructuralError(violations)

        logger.info(f"Search started: strategy={self.strategy.name}, config={self.config}")
        start = time.perf_counter()

        try:
            while self._stack:
                if self.context.is_cancelled(self._total_scenarios, len(self._stack)):
                    self.was_cancelled = True
                    logger.warning(
                        f"Search stopped after {self._total_scenarios} scenarios "
                        f"({self.context.elapsed_time():.1f}s)"
                    )
                    break

                self._max_depth = max(self._max_depth, len(self._stack))
                board = self._pop()

                if board.is_terminal():
                    self.solutions.append(list(board.path))
                    self.solved_boards.append(board)
                    logger.debug(f"Solution {len(self.solutions)}: {len(board.path)} moves")
                    if self.config.stop_at_first_solution:
                        break
                    continue

                self._total_scenarios += 1
                self.strategy.expand(board, self)

                if self._total_scenarios % self.context.progress_interval == 0:
                    self.context.report_progress(
                        self._total_scenarios,
                        f"{len(self.solutions)} solutions, {len(self._stack)} batches pending",
                    )
        except StructuralError as e:
            self._stack.clear()
            self.solutions.clear()
            self.solved_boards.clear()
            logger.error(f"Search aborted: {e}")
            raise
        finally:
            self._elapsed_ms = (time.perf_counter() - start) * 1000

        logger.info(
            f"Search finished: {len(self.solutions)} solutions, "
            f"{self._total_scenarios} scenarios, max depth {self._max_depth}, "
            f"{self._elapsed_ms:.1f}ms"
        )
        return list(self.solutions)

    def result(self) -> Solution:
        """
        Package the run's outcome.

        Returns:
            Solution with paths, terminal boards and metrics
        """
        return Solution(
            paths=[list(p) for p in self.solutions],
            boards=list(self.solved_boards),
            was_cancelled=self.was_cancelled,
            metrics=SolutionMetrics(
                computation_time_ms=self._elapsed_ms,
                total_scenarios=self._total_scenarios,
                max_depth=self._max_depth,
                pruned_branches=self.strategy.pruned_branches,
                strategy_name=self.strategy.name,
            ),
        )


def solve(board: Board, strategy: str = "dfs",
          config: Optional[RunConfig] = None,
          context: Optional[SearchContext] = None) -> Solution:
    """
    Search a board with a registered strategy.

    Args:
        board: Initial board
        strategy: Strategy name (e.g., "dfs", "hsd")
        config: Run configuration (defaults to RunConfig())
        context: Cancellation and progress context

    Returns:
        Solution of the run

    Raises:
        StructuralError: If the board is inconsistent
        ValueError: If the strategy name is unknown
    """
    config = config or RunConfig()
    engine = SearchEngine(board, create_strategy(strategy, config=config), config, context)
    engine.run()
    return engine.result()
