"""
Strategies Package - Concrete expansion strategies.

Importing this package registers all strategies with the factory.
"""

from .dfs import PrunedDepthFirst
from .staged_deepening import StagedDeepening, Stage, StagePhase

__all__ = [
    "PrunedDepthFirst",
    "StagedDeepening",
    "Stage",
    "StagePhase",
]
