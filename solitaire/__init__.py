"""
Solitaire Solver - Backtracking search over card-solitaire deals.

Subpackages:
    - solver: Search engine, board contract, expansion strategies
    - variants: FreeCell, Klondike, Spider, Pyramid and TriPeaks boards
"""

__version__ = "0.1.0"
