"""
Search Context Module - Run configuration and cooperative cancellation.
"""

import threading
import time
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Optional


@dataclass(frozen=True)
class RunConfig:
    """
    Tunable parameters of a single search run.

    Attributes:
        depth_bound: Lookahead rounds per staged-deepening stage
        prune_fraction: Fraction of children kept by pruned DFS (0 < f <= 1)
        stop_at_first_solution: End the run at the first terminal board
        reject_reversals: Drop candidates that immediately undo the last move
        min_children: Pruned DFS never keeps fewer children than this
    """
    depth_bound: int = 6
    prune_fraction: float = 0.4
    stop_at_first_solution: bool = False
    reject_reversals: bool = True
    min_children: int = 0

    def __post_init__(self):
        if self.depth_bound < 1:
            raise ValueError(f"depth_bound must be positive, got {self.depth_bound}")
        if not 0 < self.prune_fraction <= 1:
            raise ValueError(
                f"prune_fraction must be in (0, 1], got {self.prune_fraction}"
            )
        if self.min_children < 0:
            raise ValueError(f"min_children must not be negative, got {self.min_children}")

    def with_overrides(self, **kwargs: Any) -> 'RunConfig':
        """
        Copy with some fields replaced.

        Args:
            **kwargs: Field values to replace (None values are ignored)

        Returns:
            New RunConfig
        """
        changes = {k: v for k, v in kwargs.items() if v is not None}
        return replace(self, **changes)


@dataclass
class SearchContext:
    """
    Shared context passed to the engine for cancellation and progress.

    All limits are checked between engine iterations only; an expansion
    in progress always completes.

    Attributes:
        cancel_flag: Threading event for cancellation
        timeout_sec: Maximum computation time in seconds (None = no limit)
        max_scenarios: Stop after this many non-terminal boards (None = no limit)
        max_depth: Stop when this many batches are outstanding (None = no limit)
        start_time: When computation started
        progress_callback: Optional callback for progress updates
        progress_interval: Scenarios between progress reports
    """
    cancel_flag: threading.Event = field(default_factory=threading.Event)
    timeout_sec: Optional[float] = None
    max_scenarios: Optional[int] = None
    max_depth: Optional[int] = None
    start_time: float = field(default_factory=time.time)
    progress_callback: Optional[Callable[[int, str], None]] = None
    progress_interval: int = 10000

    def is_cancelled(self, scenarios: int = 0, depth: int = 0) -> bool:
        """
        Check if cancellation requested or a limit was reached.

        Args:
            scenarios: Scenarios processed so far
            depth: Outstanding batches on the worklist

        Returns:
            True if the engine should stop
        """
        if self.cancel_flag.is_set():
            return True
        if self.timeout_sec is not None and self.elapsed_time() > self.timeout_sec:
            return True
        if self.max_scenarios is not None and scenarios >= self.max_scenarios:
            return True
        if self.max_depth is not None and depth >= self.max_depth:
            return True
        return False

    def cancel(self) -> None:
        self.cancel_flag.set()

    def report_progress(self, scenarios: int, message: str = "") -> None:
        """
        Report progress to the caller.

        Args:
            scenarios: Scenarios processed so far
            message: Optional status message
        """
        if self.progress_callback:
            self.progress_callback(scenarios, message)

    def elapsed_time(self) -> float:
        """
        Get seconds elapsed since computation started.

        Returns:
            Elapsed time in seconds
        """
        return time.time() - self.start_time
