"""
Variants Package - Boards for the supported solitaire games.

Importing this package registers all variants with the registry.
"""

from .registry import (
    create_board,
    get_variant,
    get_variant_names,
    get_variant_info,
    register_variant,
)

from .freecell import FreeCellBoard
from .klondike import KlondikeBoard
from .spider import SpiderBoard
from .pyramid import PyramidBoard
from .tripeaks import TriPeaksBoard

__all__ = [
    "create_board",
    "get_variant",
    "get_variant_names",
    "get_variant_info",
    "register_variant",
    "FreeCellBoard",
    "KlondikeBoard",
    "SpiderBoard",
    "PyramidBoard",
    "TriPeaksBoard",
]
