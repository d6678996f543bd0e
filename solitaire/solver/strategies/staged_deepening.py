"""
Staged Deepening Strategy - Fixed-horizon lookahead, one commitment per stage.

Each stage expands the full tree below a root for depth_bound rounds
without pruning, then keeps only the best board at the horizon. The
engine re-invokes the strategy on that board, so the search commits to a
single line of play and may miss solutions in exchange for a cost that
grows with depth instead of exponentially.
"""

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional, TYPE_CHECKING

from ..base import ExpansionStrategy
from ..board import Board
from ..factory import register_strategy

if TYPE_CHECKING:
    from ..engine import SearchEngine

logger = logging.getLogger(__name__)


class StagePhase(Enum):
    """Phases of a single staged-deepening stage."""
    EXPANDING = auto()  # Growing the frontier one round at a time
    SELECTING = auto()  # Horizon reached, picking the best board
    DONE = auto()       # Selected board ready, or frontier exhausted


@dataclass
class Stage:
    """
    State of one stage.

    Attributes:
        frontier: Boards at the current round
        depth_bound: Rounds to expand before selecting
        round: Rounds expanded so far
        phase: Current phase
        selected: Board chosen at the horizon (None until DONE, or if exhausted)
        boards_generated: Children produced across all rounds
    """
    frontier: List[Board]
    depth_bound: int
    round: int = 0
    phase: StagePhase = StagePhase.EXPANDING
    selected: Optional[Board] = None
    boards_generated: int = 0

    @property
    def is_exhausted(self) -> bool:
        """True if the stage finished without a board to commit to."""
        return self.phase == StagePhase.DONE and self.selected is None


@register_strategy
class StagedDeepening(ExpansionStrategy):
    """
    Heuristic staged deepening (HSD).

    A terminal board reached before the horizon ends the stage early and
    is selected, so a win inside the lookahead is never expanded away.
    """
    name = "hsd"
    description = "Staged deepening: full lookahead to a fixed depth, commit to the best board"

    def step(self, stage: Stage) -> Stage:
        """
        Advance a stage by one transition.

        Args:
            stage: Stage to advance (updated in place)

        Returns:
            The same stage
        """
        if stage.phase == StagePhase.EXPANDING:
            if stage.round >= stage.depth_bound or not stage.frontier:
                stage.phase = StagePhase.SELECTING if stage.frontier else StagePhase.DONE
                return stage

            children = []
            for board in stage.frontier:
                children.extend(self.apply_candidates(board))
            stage.boards_generated += len(children)
            stage.round += 1
            stage.frontier = children

            terminal = [b for b in children if b.is_terminal()]
            if terminal:
                stage.frontier = terminal
                stage.phase = StagePhase.SELECTING

        elif stage.phase == StagePhase.SELECTING:
            stage.selected = sorted(stage.frontier, key=lambda b: b.score())[-1]
            stage.phase = StagePhase.DONE

        return stage

    def run_stage(self, root: Board) -> Stage:
        """
        Run a complete stage from a root board.

        Args:
            root: Board to look ahead from

        Returns:
            Finished stage
        """
        stage = Stage(frontier=[root], depth_bound=self.config.depth_bound)
        while stage.phase != StagePhase.DONE:
            self.step(stage)
        logger.debug(
            f"Stage from depth {root.depth}: {stage.round} rounds, "
            f"{stage.boards_generated} boards, "
            f"{'exhausted' if stage.selected is None else 'selected score ' + str(stage.selected.score())}"
        )
        return stage

    def expand(self, board: Board, engine: 'SearchEngine') -> None:
        stage = self.run_stage(board)
        if stage.selected is not None:
            self.pruned_branches += max(len(stage.frontier) - 1, 0)
            engine.push_single(stage.selected)
