"""
Variant Registry Module - Registry and factory for solitaire variants.
"""

import logging
from typing import Any, Dict, List, Sequence, Type

from ..solver.board import Board
from ..solver.card import Card
from ..solver.errors import DealError
from ..solver.factory import Registry, get_strategy_names

logger = logging.getLogger(__name__)


_VARIANTS: Registry[Board] = Registry(
    "variant",
    required=("description", "card_count", "default_strategy", "default_config", "build"),
)


def register_variant(cls: Type[Board]) -> Type[Board]:
    """
    Decorator to register a board class as a variant.

    The class must define name, description, card_count,
    default_strategy, default_config and a build() classmethod.

    Args:
        cls: Board class to register

    Returns:
        The same class (for decorator chaining)

    Raises:
        ValueError: If the class is incomplete, its name is taken, or its
            default strategy is not registered
    """
    if not issubclass(cls, Board):
        raise TypeError(f"{cls.__name__} is not a Board")
    strategy = getattr(cls, "default_strategy", None)
    if strategy is not None and strategy not in get_strategy_names():
        raise ValueError(
            f"Variant {cls.__name__} defaults to unknown strategy: {strategy}"
        )
    return _VARIANTS.register(cls)


def get_variant(name: str) -> Type[Board]:
    """
    Look up a variant class by name.

    Raises:
        ValueError: If variant name not found
    """
    return _VARIANTS.get(name)


def create_board(name: str, cards: Sequence[Card], **options: Any) -> Board:
    """
    Deal the initial board of a variant.

    Args:
        name: Variant name (e.g., "freecell", "klondike")
        cards: Deal order, as read from a deal file
        **options: Variant options (draw_count for Klondike, suits for Spider)

    Returns:
        Initial board

    Raises:
        ValueError: If variant name not found
        DealError: If the number of cards does not fit the variant
    """
    cls = get_variant(name)
    if len(cards) != cls.card_count:
        raise DealError(
            f"{name} needs {cls.card_count} cards, deal has {len(cards)}"
        )
    board = cls.build(list(cards), **options)
    logger.debug(f"Dealt {name} board from {len(cards)} cards")
    return board


def get_variant_names() -> List[str]:
    return _VARIANTS.names()


def get_variant_info() -> List[Dict[str, str]]:
    """
    Get name and description for all registered variants.

    Returns:
        List of dicts with 'name' and 'description' keys
    """
    return _VARIANTS.info()
