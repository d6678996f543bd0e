"""
FreeCell Board - Eight open columns, four free cells, four foundations.
"""

from typing import List, Optional, Sequence

from ..solver.board import Board, Column, take_from_column
from ..solver.candidate import Candidate, Zone
from ..solver.card import Card, SUITS
from ..solver.context import RunConfig
from ..solver.errors import StructuralError
from .registry import register_variant

COLUMNS = 8
FREECELLS = 4


def ordered_run_length(column: Column) -> int:
    """Length of the alternating-colour descending run at the top of a column."""
    cards = column.cards
    if not cards:
        return 0
    length = 1
    while (length < len(cards)
           and cards[-length - 1].is_higher_with_different_color(cards[-length])):
        length += 1
    return length


@register_variant
class FreeCellBoard(Board):
    """
    A FreeCell position.

    Attributes:
        columns: Eight columns, all cards face up
        freecells: Four cells, each holding a card or None
        foundations: One pile per suit, in SUITS order
    """
    name = "freecell"
    description = "FreeCell: 8 open columns, 4 free cells"
    card_count = 52
    default_strategy = "dfs"
    default_config = RunConfig(min_children=1)

    def __init__(self, columns: List[Column],
                 freecells: Optional[List[Optional[Card]]] = None,
                 foundations: Optional[List[List[Card]]] = None):
        super().__init__()
        self.columns = columns
        self.freecells = freecells if freecells is not None else [None] * FREECELLS
        self.foundations = foundations if foundations is not None else [[] for _ in SUITS]

    @classmethod
    def build(cls, cards: Sequence[Card], **options) -> 'FreeCellBoard':
        """
        Deal cards 0-27 into columns 0-3 (seven each) and 28-51 into
        columns 4-7 (six each), bottom card first.
        """
        columns = [Column() for _ in range(COLUMNS)]
        for i, card in enumerate(cards):
            at = i // 7 if i < 28 else (i - 28) // 6 + 4
            columns[at].cards.append(card)
        return cls(columns)

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def find_candidates(self) -> List[Candidate]:
        return (self._to_foundation_candidates()
                + self._freecell_to_column_candidates()
                + self._column_to_column_candidates()
                + self._column_to_freecell_candidates())

    def can_found(self, card: Card) -> bool:
        return len(self.foundations[SUITS.index(card.suit)]) == card.rank - 1

    def _first_empty_column(self) -> Optional[int]:
        return next((i for i, c in enumerate(self.columns) if c.is_empty()), None)

    def _accepts(self, column: Column, card: Card) -> bool:
        return not column.is_empty() and column.peek().is_higher_with_different_color(card)

    def max_movable(self, to_empty: bool) -> int:
        """
        Largest run that can move in one go.

        Args:
            to_empty: True if the target column is itself empty

        Returns:
            (free cells + 1) * 2 ** (empty columns other than the target)
        """
        free = self.freecells.count(None)
        empty = sum(1 for c in self.columns if c.is_empty())
        if to_empty:
            empty -= 1
        return (free + 1) * 2 ** empty

    def _to_foundation_candidates(self) -> List[Candidate]:
        candidates = []
        for i, column in enumerate(self.columns):
            if not column.is_empty() and self.can_found(column.peek()):
                card = column.peek()
                candidates.append(
                    Candidate.column_to_foundation(card, i, SUITS.index(card.suit)))
        for i, card in enumerate(self.freecells):
            if card is not None and self.can_found(card):
                candidates.append(
                    Candidate.freecell_to_foundation(card, i, SUITS.index(card.suit)))
        return candidates

    def _freecell_to_column_candidates(self) -> List[Candidate]:
        candidates = []
        empty_at = self._first_empty_column()
        for i, card in enumerate(self.freecells):
            if card is None:
                continue
            for j, column in enumerate(self.columns):
                if self._accepts(column, card) or j == empty_at:
                    candidates.append(Candidate.freecell_to_column(card, i, j))
        return candidates

    def _column_to_column_candidates(self) -> List[Candidate]:
        candidates = []
        empty_at = self._first_empty_column()
        for i, source in enumerate(self.columns):
            run = ordered_run_length(source)
            if run == 0:
                continue
            for j, target in enumerate(self.columns):
                if i == j:
                    continue
                if target.is_empty():
                    if j != empty_at:
                        continue
                    count = min(run, self.max_movable(to_empty=True))
                    if count == len(source):
                        count -= 1
                else:
                    count = self._fitting_length(source, run, target)
                    if count > self.max_movable(to_empty=False):
                        count = 0
                if count > 0:
                    candidates.append(
                        Candidate.column_to_column(source.cards[-count:], i, j))
        return candidates

    def _fitting_length(self, source: Column, run: int, target: Column) -> int:
        """Run length whose bottom card can sit on the target's top card, or 0."""
        top = target.peek()
        for count in range(1, run + 1):
            if top.is_higher_with_different_color(source.cards[-count]):
                return count
        return 0

    def _column_to_freecell_candidates(self) -> List[Candidate]:
        if None not in self.freecells:
            return []
        cell = self.freecells.index(None)
        return [
            Candidate.column_to_freecell(column.peek(), i, cell)
            for i, column in enumerate(self.columns)
            if not column.is_empty()
        ]

    # ------------------------------------------------------------------
    # Update board
    # ------------------------------------------------------------------

    def _perform(self, candidate: Candidate) -> None:
        if candidate.origin == Zone.COLUMN:
            take_from_column(self.columns[candidate.from_index], candidate.cards,
                             candidate.from_index)
        elif candidate.origin == Zone.FREECELL:
            if self.freecells[candidate.from_index] != candidate.card:
                raise StructuralError(
                    [f"Card {candidate.card} not in free cell {candidate.from_index}"])
            self.freecells[candidate.from_index] = None
        else:
            raise StructuralError([f"Unsupported origin: {candidate.origin.name}"])

        if candidate.target == Zone.COLUMN:
            self.columns[candidate.to_index].add(candidate.cards)
        elif candidate.target == Zone.FOUNDATION:
            self.foundations[candidate.to_index].append(candidate.card)
        elif candidate.target == Zone.FREECELL:
            if self.freecells[candidate.to_index] is not None:
                raise StructuralError([f"Free cell {candidate.to_index} is occupied"])
            self.freecells[candidate.to_index] = candidate.card
        else:
            raise StructuralError([f"Unsupported target: {candidate.target.name}"])

    # ------------------------------------------------------------------
    # Score board
    # ------------------------------------------------------------------

    def _calculate_score(self) -> int:
        founded = sum(len(f) for f in self.foundations)
        free = self.freecells.count(None)
        empty = sum(1 for c in self.columns if c.is_empty())
        return 100 * founded + 5 * free + 5 * empty - self.disorder()

    def disorder(self) -> int:
        """Cards lying above the lowest-ranked card of their column."""
        total = 0
        for column in self.columns:
            if column.is_empty():
                continue
            lowest = min(range(len(column)), key=lambda k: column.cards[k].rank)
            total += len(column) - 1 - lowest
        return total

    def is_terminal(self) -> bool:
        return sum(len(f) for f in self.foundations) == self.card_count

    # ------------------------------------------------------------------
    # Accessors/Helpers
    # ------------------------------------------------------------------

    def all_cards(self) -> List[Card]:
        cards = [card for column in self.columns for card in column]
        cards.extend(card for card in self.freecells if card is not None)
        cards.extend(card for pile in self.foundations for card in pile)
        return cards

    def _copy_zones(self) -> None:
        self.columns = [c.copy() for c in self.columns]
        self.freecells = list(self.freecells)
        self.foundations = [list(f) for f in self.foundations]
