"""
Spider Board - Ten columns built down by rank, runs removed by suit.
"""

from typing import List, Optional, Sequence

from ..solver.board import Board, Column, take_from_column
from ..solver.candidate import Candidate, Zone
from ..solver.card import Card, spider_deck
from ..solver.context import RunConfig
from ..solver.errors import StructuralError
from .registry import register_variant

COLUMN_SIZES = (6, 6, 6, 6, 5, 5, 5, 5, 5, 5)
RUN_LENGTH = 13
START_SCORE = 500


def same_suit_run(column: Column) -> List[Card]:
    """Face-up same-suit descending run at the top of a column, bottom first."""
    if column.is_empty():
        return []
    run = [column.peek()]
    for k in range(len(column) - 2, column.open_at - 1, -1):
        if not column.cards[k].is_higher_of_same_suit(run[0]):
            break
        run.insert(0, column.cards[k])
    return run


@register_variant
class SpiderBoard(Board):
    """
    A Spider position.

    Attributes:
        columns: Ten columns; cards below open_at are face down
        stock: Undealt cards, dealt ten at a time from the front
        completed: Removed K..A runs
        suits: Number of suits in the deck (1, 2 or 4)
    """
    name = "spider"
    description = "Spider: 10 columns, 104 cards, clear K-A runs of one suit"
    card_count = 104
    default_strategy = "hsd"
    default_config = RunConfig(min_children=1)

    def __init__(self, columns: List[Column], stock: List[Card],
                 completed: Optional[List[List[Card]]] = None, suits: int = 4):
        super().__init__()
        self.columns = columns
        self.stock = stock
        self.completed = completed if completed is not None else []
        self.suits = suits
        self.total_score = START_SCORE

    @classmethod
    def build(cls, cards: Sequence[Card], suits: int = 4, **options) -> 'SpiderBoard':
        """
        Deal 54 cards into columns of 6,6,6,6,5,5,5,5,5,5 (last card of each
        face up); the remaining 50 form the stock.
        """
        columns = []
        at = 0
        for size in COLUMN_SIZES:
            columns.append(Column(cards[at:at + size], open_at=size - 1))
            at += size
        return cls(columns, list(cards[at:]), suits=suits)

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def find_candidates(self) -> List[Candidate]:
        candidates = []
        empty_at = next((i for i, c in enumerate(self.columns) if c.is_empty()), None)

        for i, source in enumerate(self.columns):
            run = same_suit_run(source)
            if not run:
                continue
            bottom = run[0]
            if bottom.is_king and len(run) == len(source):
                continue
            for j, target in enumerate(self.columns):
                if i == j:
                    continue
                if target.is_empty():
                    if j == empty_at and len(run) < len(source):
                        candidates.append(Candidate.column_to_column(run, i, j))
                elif target.peek().rank == bottom.rank + 1:
                    candidates.append(Candidate.column_to_column(run, i, j))

        if self.stock and empty_at is None:
            candidates.append(self._deal_candidate())
        return candidates

    def _deal_candidate(self) -> Candidate:
        return Candidate.create(self.stock[:len(self.columns)], Zone.DECK, 0, Zone.COLUMN, 0)

    # ------------------------------------------------------------------
    # Update board
    # ------------------------------------------------------------------

    def _perform(self, candidate: Candidate) -> None:
        if candidate.origin == Zone.DECK:
            count = len(self.columns)
            if self.stock[:count] != list(candidate.cards):
                raise StructuralError(["Deal does not match the stock"])
            del self.stock[:count]
            for column, card in zip(self.columns, candidate.cards):
                column.add([card])
            for column in self.columns:
                self._remove_run(column)
            return

        if candidate.origin != Zone.COLUMN or candidate.target != Zone.COLUMN:
            raise StructuralError([f"Unsupported move: {candidate}"])

        take_from_column(self.columns[candidate.from_index], candidate.cards,
                         candidate.from_index)
        target = self.columns[candidate.to_index]
        target.add(candidate.cards)
        self.total_score -= 1
        self._remove_run(target)

    def _remove_run(self, column: Column) -> None:
        if len(same_suit_run(column)) >= RUN_LENGTH:
            self.completed.append(column.take(RUN_LENGTH))
            self.total_score += 100

    # ------------------------------------------------------------------
    # Score board
    # ------------------------------------------------------------------

    def _calculate_score(self) -> int:
        links = 0
        for column in self.columns:
            face_up = column.face_up
            links += sum(1 for a, b in zip(face_up, face_up[1:]) if a.is_higher_of_same_suit(b))
        empty = sum(1 for c in self.columns if c.is_empty())
        hidden = sum(c.hidden for c in self.columns)
        return 100 * len(self.completed) + 2 * links + 3 * empty - hidden

    def is_terminal(self) -> bool:
        return not self.stock and all(c.is_empty() for c in self.columns)

    # ------------------------------------------------------------------
    # Accessors/Helpers
    # ------------------------------------------------------------------

    def expected_cards(self) -> List[Card]:
        return spider_deck(self.suits)

    def all_cards(self) -> List[Card]:
        cards = [card for column in self.columns for card in column]
        cards.extend(self.stock)
        cards.extend(card for run in self.completed for card in run)
        return cards

    def _copy_zones(self) -> None:
        self.columns = [c.copy() for c in self.columns]
        self.stock = list(self.stock)
        self.completed = [list(run) for run in self.completed]
