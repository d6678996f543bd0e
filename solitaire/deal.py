"""
Deal Module - Reading deals from text.

A deal is a list of card tokens ("Ad", "Tc", "10h") separated by
whitespace or commas, in the order the variant deals them. Lines may
carry '#' comments.
"""

import logging
import re
from pathlib import Path
from typing import Iterable, List, Union

from .solver.card import Card
from .solver.errors import DealError

logger = logging.getLogger(__name__)

_SEPARATORS = re.compile(r"[\s,]+")


def parse_card(token: str) -> Card:
    """
    Parse a single card token.

    Raises:
        DealError: If the token is not a card
    """
    try:
        return Card.parse(token)
    except ValueError as e:
        raise DealError(str(e)) from e


def parse_cards(tokens: Iterable[str]) -> List[Card]:
    """
    Parse card tokens, skipping empty ones.

    Args:
        tokens: Card texts

    Returns:
        Cards in token order

    Raises:
        DealError: On the first invalid token
    """
    return [parse_card(token) for token in tokens if token.strip()]


def read_deal(text: str) -> List[Card]:
    """
    Parse the contents of a deal file.

    Args:
        text: Deal text

    Returns:
        Cards in deal order

    Raises:
        DealError: If any token is not a card
    """
    tokens = []
    for line in text.splitlines():
        line = line.split("#", 1)[0]
        tokens.extend(_SEPARATORS.split(line))
    return parse_cards(tokens)


def load_deal(path: Union[str, Path]) -> List[Card]:
    """
    Load a deal from a file.

    Args:
        path: Deal file location

    Returns:
        Cards in deal order

    Raises:
        DealError: If the file cannot be read or holds an invalid token
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise DealError(f"Cannot read deal file {path}: {e}") from e

    cards = read_deal(text)
    logger.debug(f"Loaded {len(cards)} cards from {path}")
    return cards
