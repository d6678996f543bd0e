"""
Candidate Module - A single legal move between two zones of a board.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Sequence, Tuple

from .card import Card


class Zone(Enum):
    """Areas of a solitaire layout that cards move between."""
    COLUMN = auto()
    FOUNDATION = auto()
    FREECELL = auto()
    DECKPILE = auto()   # waste
    DECK = auto()       # stock
    BOARD = auto()      # fixed layout grid (Pyramid, TriPeaks)
    REMOVE = auto()


# Single-character tokens for zones without a meaningful index
_ZONE_TOKENS = {
    Zone.FREECELL: "f",
    Zone.DECKPILE: "^",
    Zone.DECK: "^",
    Zone.BOARD: "b",
    Zone.FOUNDATION: "$",
    Zone.REMOVE: "r",
}

STOCK_ZONES = (Zone.DECK, Zone.DECKPILE)


def zone_token(zone: Zone, index: int) -> str:
    """
    Notation token for a zone.

    Args:
        zone: Zone to describe
        index: Zone index (used by COLUMN only)

    Returns:
        Column index as digits, or the zone's symbol
    """
    if zone == Zone.COLUMN:
        return str(index)
    return _ZONE_TOKENS[zone]


@dataclass(frozen=True)
class Candidate:
    """
    An immutable proposed move.

    The first card is the one nearest the point of contact: for a run
    moved between columns it is the bottom card of the run, the one that
    lands on the target.

    Attributes:
        cards: Cards moved (never empty)
        origin: Zone the cards come from
        from_index: Index within the origin zone (0 for DECK/DECKPILE)
        target: Zone the cards go to
        to_index: Index within the target zone (0 for DECK/DECKPILE)
    """
    cards: Tuple[Card, ...]
    origin: Zone
    from_index: int
    target: Zone
    to_index: int

    def __post_init__(self):
        if not self.cards:
            raise ValueError("Candidate must move at least one card")

    @classmethod
    def create(cls, cards: Sequence[Card], origin: Zone, from_index: int,
               target: Zone, to_index: int) -> 'Candidate':
        """
        Create a Candidate with the card list converted to a tuple.

        Args:
            cards: Cards moved, first card nearest the point of contact
            origin: Source zone
            from_index: Source index
            target: Destination zone
            to_index: Destination index

        Returns:
            Candidate instance
        """
        return cls(cards=tuple(cards), origin=origin, from_index=from_index,
                   target=target, to_index=to_index)

    @classmethod
    def column_to_column(cls, cards: Sequence[Card], src: int, dst: int) -> 'Candidate':
        return cls.create(cards, Zone.COLUMN, src, Zone.COLUMN, dst)

    @classmethod
    def column_to_foundation(cls, card: Card, src: int, foundation: int) -> 'Candidate':
        return cls.create([card], Zone.COLUMN, src, Zone.FOUNDATION, foundation)

    @classmethod
    def column_to_freecell(cls, card: Card, src: int, cell: int) -> 'Candidate':
        return cls.create([card], Zone.COLUMN, src, Zone.FREECELL, cell)

    @classmethod
    def freecell_to_column(cls, card: Card, cell: int, dst: int) -> 'Candidate':
        return cls.create([card], Zone.FREECELL, cell, Zone.COLUMN, dst)

    @classmethod
    def freecell_to_foundation(cls, card: Card, cell: int, foundation: int) -> 'Candidate':
        return cls.create([card], Zone.FREECELL, cell, Zone.FOUNDATION, foundation)

    @classmethod
    def deckpile_to_column(cls, card: Card, dst: int) -> 'Candidate':
        return cls.create([card], Zone.DECKPILE, 0, Zone.COLUMN, dst)

    @classmethod
    def deckpile_to_foundation(cls, card: Card, foundation: int) -> 'Candidate':
        return cls.create([card], Zone.DECKPILE, 0, Zone.FOUNDATION, foundation)

    @classmethod
    def foundation_to_column(cls, card: Card, foundation: int, dst: int) -> 'Candidate':
        return cls.create([card], Zone.FOUNDATION, foundation, Zone.COLUMN, dst)

    @classmethod
    def draw(cls, cards: Sequence[Card]) -> 'Candidate':
        """Stock to waste."""
        return cls.create(cards, Zone.DECK, 0, Zone.DECKPILE, 0)

    @classmethod
    def recycle(cls, cards: Sequence[Card]) -> 'Candidate':
        """Waste back to stock."""
        return cls.create(cards, Zone.DECKPILE, 0, Zone.DECK, 0)

    @classmethod
    def removal(cls, cards: Sequence[Card], origin: Zone, from_index: int = 0) -> 'Candidate':
        return cls.create(cards, origin, from_index, Zone.REMOVE, 0)

    @property
    def card(self) -> Card:
        """The card nearest the point of contact."""
        return self.cards[0]

    @property
    def card_count(self) -> int:
        """Number of cards moved."""
        return len(self.cards)

    def is_stock_move(self) -> bool:
        """True for a draw or a recycle between stock and waste."""
        return self.origin in STOCK_ZONES and self.target in STOCK_ZONES

    def notation(self) -> str:
        """
        Compact text form recorded in a board's path.

        Format is origin token, target token, ':' and the moved cards,
        e.g. "1$:Ac", "23:9s8h", "^^:Kd".

        Returns:
            Notation string

        Raises:
            ValueError: If the origin is REMOVE
        """
        if self.origin == Zone.REMOVE:
            raise ValueError("REMOVE is not a valid origin")
        cards = "".join(str(card) for card in self.cards)
        return (zone_token(self.origin, self.from_index)
                + zone_token(self.target, self.to_index)
                + ":" + cards)

    def __str__(self) -> str:
        return self.notation()


def is_reversal(previous: Optional[Candidate], candidate: Candidate) -> bool:
    """
    Check whether a candidate immediately undoes the previous move.

    Draws and recycles never count on either side: turning the stock
    over sends no card back where it came from.

    Args:
        previous: Move that produced the current board, None at the deal
        candidate: Proposed move

    Returns:
        True if the candidate moves the previous move's first card back
        to the zone that move took it from
    """
    if previous is None or previous.is_stock_move() or candidate.is_stock_move():
        return False
    return (candidate.card == previous.card
            and zone_token(candidate.target, candidate.to_index)
            == zone_token(previous.origin, previous.from_index))
