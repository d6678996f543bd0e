"""
Pyramid Board - Remove kings and pairs totalling 13 until the pyramid is gone.
"""

from typing import List, Optional, Sequence, Set, Tuple

from ..solver.board import Board
from ..solver.candidate import Candidate, Zone
from ..solver.card import Card
from ..solver.context import RunConfig
from ..solver.errors import StructuralError
from .registry import register_variant

BOARD_SIZE = 28
ROWS = 7
RECYCLES = 3
# Bonus for clearing rows 1 (apex) to 7 (base)
ROW_SCORES = (500, 250, 150, 100, 75, 50, 25)
PAIR_SCORE = 5


def row_of(at: int) -> int:
    """1-based row of a pyramid position (row r starts at r*(r-1)/2)."""
    row = 1
    while (row * (row + 1)) // 2 <= at:
        row += 1
    return row


def row_positions(row: int) -> range:
    start = row * (row - 1) // 2
    return range(start, start + row)


@register_variant
class PyramidBoard(Board):
    """
    A Pyramid position.

    Attributes:
        board: 28 pyramid positions, None once removed
        stock: Draw pile, top card last
        waste: Drawn cards, top card last
        removed: Cards taken out of play
        recycles_left: Waste-to-stock recycles still allowed
    """
    name = "pyramid"
    description = "Pyramid: remove kings and pairs summing to 13"
    card_count = 52
    default_strategy = "dfs"
    default_config = RunConfig(min_children=1)

    def __init__(self, board: List[Optional[Card]], stock: List[Card],
                 waste: Optional[List[Card]] = None,
                 removed: Optional[List[Card]] = None,
                 recycles_left: int = RECYCLES):
        super().__init__()
        self.board = board
        self.stock = stock
        self.waste = waste if waste is not None else []
        self.removed = removed if removed is not None else []
        self.recycles_left = recycles_left

    @classmethod
    def build(cls, cards: Sequence[Card], **options) -> 'PyramidBoard':
        """Cards 0-27 form the pyramid row by row; 28-51 the stock (51 on top)."""
        return cls(list(cards[:BOARD_SIZE]), list(cards[BOARD_SIZE:]))

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def is_open(self, at: int) -> bool:
        """True if a pyramid position holds a card that nothing covers."""
        if self.board[at] is None:
            return False
        row = row_of(at)
        if row == ROWS:
            return True
        return self.board[at + row] is None and self.board[at + row + 1] is None

    def available(self) -> List[Tuple[Card, Zone, int]]:
        """Playable cards with their zone and index."""
        cards = [(self.board[at], Zone.BOARD, at)
                 for at in range(BOARD_SIZE) if self.is_open(at)]
        if self.stock:
            cards.append((self.stock[-1], Zone.DECK, 0))
        if self.waste:
            cards.append((self.waste[-1], Zone.DECKPILE, 0))
        return cards

    def find_candidates(self) -> List[Candidate]:
        open_cards = self.available()
        candidates = []
        for k, (card, zone, at) in enumerate(open_cards):
            if card.is_king:
                candidates.append(Candidate.removal([card], zone, at))
                continue
            for other, _, _ in open_cards[k + 1:]:
                if card.rank + other.rank == 13:
                    candidates.append(Candidate.removal([card, other], zone, at))
        if candidates:
            return candidates

        if self.stock:
            return [Candidate.draw([self.stock[-1]])]
        if self.waste and self.recycles_left > 0:
            return [Candidate.recycle(self.waste)]
        return []

    # ------------------------------------------------------------------
    # Update board
    # ------------------------------------------------------------------

    def _perform(self, candidate: Candidate) -> None:
        if candidate.target == Zone.REMOVE:
            rows = set()
            for card in candidate.cards:
                at = self._take(card)
                if at is not None:
                    rows.add(row_of(at))
                self.removed.append(card)
            self.total_score += PAIR_SCORE + self._cleared_row_bonus(rows)
        elif candidate.origin == Zone.DECK:
            if not self.stock or self.stock[-1] != candidate.card:
                raise StructuralError([f"Card {candidate.card} not on top of stock"])
            self.waste.append(self.stock.pop())
        elif candidate.origin == Zone.DECKPILE:
            if self.waste != list(candidate.cards) or self.recycles_left <= 0:
                raise StructuralError(["Recycle does not match the waste"])
            self.stock = list(reversed(self.waste))
            self.waste = []
            self.recycles_left -= 1
        else:
            raise StructuralError([f"Unsupported move: {candidate}"])

    def _take(self, card: Card) -> Optional[int]:
        """Remove an available card, returning its pyramid position if it had one."""
        for at in range(BOARD_SIZE):
            if self.board[at] == card and self.is_open(at):
                self.board[at] = None
                return at
        if self.stock and self.stock[-1] == card:
            self.stock.pop()
        elif self.waste and self.waste[-1] == card:
            self.waste.pop()
        else:
            raise StructuralError([f"Card {card} is not available"])
        return None

    def _cleared_row_bonus(self, rows: Set[int]) -> int:
        return sum(
            ROW_SCORES[row - 1]
            for row in rows
            if all(self.board[at] is None for at in row_positions(row))
        )

    # ------------------------------------------------------------------
    # Score board
    # ------------------------------------------------------------------

    def cleared(self) -> int:
        return sum(1 for card in self.board if card is None)

    def _calculate_score(self) -> int:
        return 10 * self.cleared() + self.recycles_left

    def is_terminal(self) -> bool:
        return all(card is None for card in self.board)

    # ------------------------------------------------------------------
    # Accessors/Helpers
    # ------------------------------------------------------------------

    def all_cards(self) -> List[Card]:
        cards = [card for card in self.board if card is not None]
        cards.extend(self.stock)
        cards.extend(self.waste)
        cards.extend(self.removed)
        return cards

    def _copy_zones(self) -> None:
        self.board = list(self.board)
        self.stock = list(self.stock)
        self.waste = list(self.waste)
        self.removed = list(self.removed)
