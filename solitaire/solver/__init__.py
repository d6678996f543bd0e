"""
Solver Package - Backtracking search framework for solitaire deals.

This package provides a generic search engine that works on any board
implementing the Board contract, driven by pluggable expansion
strategies selected by name.

Public API:
    - Card: Immutable playing card
    - Zone, Candidate: Move model and notation
    - Board, Column: Board contract and column container
    - RunConfig: Depth bound, prune fraction and stop-at-first-solution
    - SearchContext: Cancellation, limits and progress reporting
    - SearchEngine, solve(): Worklist driver
    - Solution, SolutionMetrics: Run results
    - StructuralError, DealError: Failure types
    - create_strategy(): Factory function
    - get_strategy_names(): List available strategies
    - get_strategy_info(): Get strategy metadata
    - Registry: Name-checked class registry shared with the variants

Usage:
    from solitaire.solver import RunConfig, solve
    from solitaire.variants import create_board

    board = create_board("freecell", cards)
    solution = solve(board, "dfs", RunConfig(stop_at_first_solution=True))

    for path in solution.paths:
        print(" ".join(path))
"""

# Core data structures
from .card import Card, full_deck, spider_deck
from .candidate import Candidate, Zone, is_reversal
from .board import Board, Column, verify_cards
from .errors import StructuralError, DealError
from .context import RunConfig, SearchContext
from .solution import Solution, SolutionMetrics

# Strategy framework
from .base import ExpansionStrategy
from .factory import (
    create_strategy,
    get_strategy_names,
    get_strategy_info,
    register_strategy,
    Registry,
)

# Import strategies to register them
from . import strategies

from .engine import SearchEngine, solve

__all__ = [
    # Data structures
    "Card",
    "full_deck",
    "spider_deck",
    "Candidate",
    "Zone",
    "is_reversal",
    "Board",
    "Column",
    "verify_cards",
    "StructuralError",
    "DealError",
    "RunConfig",
    "SearchContext",
    "Solution",
    "SolutionMetrics",
    # Strategy framework
    "ExpansionStrategy",
    "create_strategy",
    "get_strategy_names",
    "get_strategy_info",
    "register_strategy",
    "Registry",
    "SearchEngine",
    "solve",
]
