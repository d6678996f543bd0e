"""
Board Module - Abstract board contract and shared zone containers.

Every variant subclasses Board directly and composes Column containers
and the helper functions below. Boards are copy-on-apply: apply() never
mutates the receiver.
"""

import copy
from abc import ABC, abstractmethod
from collections import Counter
from typing import Iterable, List, Optional, Sequence

from .candidate import Candidate
from .card import Card, full_deck
from .errors import StructuralError


class Column:
    """
    A pile of cards with a face-up cut point.

    Cards below open_at are face down. Taking cards from the top turns
    the new top card face up when it would otherwise stay hidden.

    Attributes:
        cards: Cards from bottom (index 0) to top
        open_at: Index of the lowest face-up card
    """

    def __init__(self, cards: Optional[Iterable[Card]] = None, open_at: int = 0):
        self.cards: List[Card] = list(cards) if cards is not None else []
        self.open_at = open_at

    def copy(self) -> 'Column':
        return Column(self.cards, self.open_at)

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self):
        return iter(self.cards)

    def __getitem__(self, index):
        return self.cards[index]

    def __repr__(self) -> str:
        return f"Column({' '.join(str(c) for c in self.cards)}, open_at={self.open_at})"

    def is_empty(self) -> bool:
        return not self.cards

    def peek(self) -> Card:
        """Top card (raises IndexError on an empty column)."""
        return self.cards[-1]

    @property
    def face_up(self) -> List[Card]:
        return self.cards[self.open_at:]

    @property
    def hidden(self) -> int:
        """Number of face-down cards."""
        return min(self.open_at, len(self.cards))

    def add(self, cards: Sequence[Card]) -> None:
        self.cards.extend(cards)

    def take(self, count: int) -> List[Card]:
        """
        Remove the top cards and reveal the new top card if needed.

        Args:
            count: Number of cards to remove

        Returns:
            Removed cards, bottom to top
        """
        if count <= 0:
            return []
        taken = self.cards[len(self.cards) - count:]
        del self.cards[len(self.cards) - count:]
        if self.open_at >= len(self.cards):
            self.open_at = max(0, len(self.cards) - 1)
        return taken


def take_from_column(column: Column, cards: Sequence[Card], index: int) -> List[Card]:
    """
    Remove a candidate's cards from the top of a column.

    Args:
        column: Column to take from
        cards: Expected cards, bottom of the run first
        index: Column index (for the error message)

    Returns:
        Removed cards

    Raises:
        StructuralError: If the column top does not hold exactly these cards
    """
    count = len(cards)
    if count > len(column) or column.cards[len(column) - count:] != list(cards):
        moved = "".join(str(c) for c in cards)
        raise StructuralError([f"Cards {moved} not on top of column {index}"])
    return column.take(count)


def take_from_pile(pile: List[Card], card: Card, name: str) -> Card:
    """
    Remove the top card of a plain pile (stock, waste, foundation).

    Raises:
        StructuralError: If the pile is empty or its top is not `card`
    """
    if not pile or pile[-1] != card:
        raise StructuralError([f"Card {card} not on top of {name}"])
    return pile.pop()


def verify_cards(cards: Iterable[Card], expected: Iterable[Card]) -> List[str]:
    """
    Compare the cards on a board with the deck it was dealt from.

    Args:
        cards: Every card currently in any zone
        expected: The full deck for the variant

    Returns:
        Violation messages, empty when every card appears exactly as
        often as in the deck
    """
    expected = list(expected)
    actual = Counter(cards)
    wanted = Counter(expected)

    errors = []
    for card in dict.fromkeys(expected):
        missing = wanted[card] - actual[card]
        errors.extend(f"Missing card: {card}" for _ in range(max(missing, 0)))
    for card, count in actual.items():
        extra = count - wanted[card]
        errors.extend(f"Extra card: {card}" for _ in range(max(extra, 0)))
    return errors


class Board(ABC):
    """
    Abstract base class for a solitaire position.

    Subclasses define the zones, candidate generation, the win condition
    and the evaluation score. The base class handles path recording,
    score caching and copy-on-apply.

    Attributes:
        path: Notation tokens of the moves that led here
        last_move: Candidate that produced this board, None at the deal
        total_score: Game-score bookkeeping used to rank solutions
    """

    def __init__(self):
        self.path: List[str] = []
        self.last_move: Optional[Candidate] = None
        self.total_score: int = 0
        self._score: Optional[int] = None

    @abstractmethod
    def find_candidates(self) -> List[Candidate]:
        """
        List the legal moves from this position.

        Must not mutate the board. An empty list is a dead end.

        Returns:
            Candidates, possibly a draw or recycle fallback
        """
        pass

    @abstractmethod
    def _perform(self, candidate: Candidate) -> None:
        """Carry out a candidate on this (freshly cloned) board."""
        pass

    @abstractmethod
    def _calculate_score(self) -> int:
        """Heuristic evaluation, higher is better."""
        pass

    @abstractmethod
    def is_terminal(self) -> bool:
        """True when the position is won."""
        pass

    @abstractmethod
    def all_cards(self) -> List[Card]:
        """Every card held in any zone of the board."""
        pass

    @abstractmethod
    def _copy_zones(self) -> None:
        """Replace every mutable zone container with an owned copy."""
        pass

    def expected_cards(self) -> List[Card]:
        """The deck this board was dealt from."""
        return full_deck()

    def apply(self, candidate: Candidate) -> 'Board':
        """
        Produce the successor position for a candidate.

        Args:
            candidate: Move to perform

        Returns:
            New board with the move performed and recorded in its path

        Raises:
            StructuralError: If the candidate does not match this board
        """
        board = self.clone()
        board._perform(candidate)
        board.path.append(candidate.notation())
        board.last_move = candidate
        return board

    def score(self) -> int:
        """Evaluation score, computed once per instance."""
        if self._score is None:
            self._score = self._calculate_score()
        return self._score

    def verify(self) -> List[str]:
        """
        Check card conservation.

        Returns:
            Violation messages, empty if the board is consistent
        """
        return verify_cards(self.all_cards(), self.expected_cards())

    def clone(self) -> 'Board':
        """
        Deep copy of the position.

        Zones and path are copied; cards are shared since they are
        immutable. The copy starts without a cached score.
        """
        board = copy.copy(self)
        board.path = list(self.path)
        board._score = None
        board._copy_zones()
        return board

    @property
    def depth(self) -> int:
        """Number of moves applied since the deal."""
        return len(self.path)
