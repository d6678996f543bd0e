"""
Card Module - Immutable playing card value type.
"""

from dataclasses import dataclass
from typing import List

RANKS = "A23456789TJQK"
SUITS = "cdhs"
RED_SUITS = "dh"


@dataclass(frozen=True)
class Card:
    """
    A single playing card.

    Cards are plain values: two cards with the same rank and suit are
    equal and hash the same, so duplicates in a Spider deck compare equal.

    Attributes:
        rank: 1 (ace) to 13 (king)
        suit: One of 'c', 'd', 'h', 's'
    """
    rank: int
    suit: str

    def __post_init__(self):
        if not 1 <= self.rank <= 13:
            raise ValueError(f"Invalid rank: {self.rank}")
        if self.suit not in SUITS:
            raise ValueError(f"Invalid suit: {self.suit}")

    @classmethod
    def parse(cls, token: str) -> 'Card':
        """
        Parse a card from its text form.

        Accepts rank letter followed by suit letter ("Ad", "Tc", "Kh").
        "10" is accepted as an alternative for "T".

        Args:
            token: Card text

        Returns:
            Card instance

        Raises:
            ValueError: If the token is not a card
        """
        text = token.strip()
        if len(text) == 3 and text.startswith("10"):
            text = "T" + text[2]
        if len(text) != 2:
            raise ValueError(f"Invalid card: {token}")

        rank_char = text[0].upper()
        suit_char = text[1].lower()
        if rank_char not in RANKS or suit_char not in SUITS:
            raise ValueError(f"Invalid card: {token}")
        return cls(rank=RANKS.index(rank_char) + 1, suit=suit_char)

    @property
    def is_red(self) -> bool:
        return self.suit in RED_SUITS

    @property
    def is_ace(self) -> bool:
        return self.rank == 1

    @property
    def is_king(self) -> bool:
        return self.rank == 13

    def is_same_suit(self, other: 'Card') -> bool:
        return self.suit == other.suit

    def is_higher_with_different_color(self, other: 'Card') -> bool:
        """True if this card can take `other` in an alternating-colour run."""
        return self.rank == other.rank + 1 and self.is_red != other.is_red

    def is_higher_of_same_suit(self, other: 'Card') -> bool:
        """True if this card is one rank above `other` in the same suit."""
        return self.rank == other.rank + 1 and self.suit == other.suit

    def __str__(self) -> str:
        return RANKS[self.rank - 1] + self.suit

    def __repr__(self) -> str:
        return f"Card({self})"


def full_deck() -> List[Card]:
    """
    Build a standard 52-card deck.

    Returns:
        Cards ordered by suit (c, d, h, s), then rank
    """
    return [Card(rank, suit) for suit in SUITS for rank in range(1, 14)]


def spider_deck(suits: int = 4) -> List[Card]:
    """
    Build a 104-card Spider deck.

    Args:
        suits: Number of distinct suits (1, 2 or 4)

    Returns:
        List of 104 cards

    Raises:
        ValueError: If suits is not 1, 2 or 4
    """
    suit_sets = {1: "s", 2: "hs", 4: SUITS}
    if suits not in suit_sets:
        raise ValueError(f"Unsupported suit count: {suits}. Use 1, 2 or 4")

    chosen = suit_sets[suits]
    copies = 8 // len(chosen)
    return [
        Card(rank, suit)
        for _ in range(copies)
        for suit in chosen
        for rank in range(1, 14)
    ]
