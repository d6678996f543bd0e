"""
TriPeaks Board - Clear three overlapping peaks by playing cards one rank
above or below the waste top.
"""

from typing import Dict, List, Optional, Sequence, Tuple

from ..solver.board import Board, take_from_pile
from ..solver.candidate import Candidate, Zone
from ..solver.card import Card
from ..solver.context import RunConfig
from ..solver.errors import StructuralError
from .registry import register_variant

BOARD_SIZE = 28
STOCK_END = 51
PEAKS = 3
PEAK_BONUS = 500
BOARD_BONUS = 5000


def _cover_map() -> Dict[int, Tuple[int, int]]:
    """Position -> the two positions lying on top of it (bottom row has none)."""
    covers = {}
    for i in range(3):
        covers[i] = (3 + 2 * i, 4 + 2 * i)
    for j in range(6):
        first = 9 + j + j // 2
        covers[3 + j] = (first, first + 1)
    for k in range(9):
        covers[9 + k] = (18 + k, 19 + k)
    return covers


COVERED_BY = _cover_map()


def is_adjacent(a: Card, b: Card) -> bool:
    """True if ranks differ by one, with king and ace adjacent."""
    return (a.rank - b.rank) % 13 in (1, 12)


@register_variant
class TriPeaksBoard(Board):
    """
    A TriPeaks position.

    Attributes:
        board: 28 layout positions (peaks 0-2, then rows of 6, 9 and 10)
        stock: Draw pile, top card last
        waste: Played and drawn cards, top card last
        streak: Consecutive layout plays since the last draw
        peaks_cleared: Peak cards played so far
    """
    name = "tripeaks"
    description = "TriPeaks: play layout cards one rank from the waste top"
    card_count = 52
    default_strategy = "dfs"
    default_config = RunConfig(prune_fraction=1.0)

    def __init__(self, board: List[Optional[Card]], stock: List[Card],
                 waste: List[Card], streak: int = 0, peaks_cleared: int = 0):
        super().__init__()
        self.board = board
        self.stock = stock
        self.waste = waste
        self.streak = streak
        self.peaks_cleared = peaks_cleared

    @classmethod
    def build(cls, cards: Sequence[Card], **options) -> 'TriPeaksBoard':
        """Cards 0-27 form the layout, 28-50 the stock (50 on top), 51 starts the waste."""
        return cls(list(cards[:BOARD_SIZE]), list(cards[BOARD_SIZE:STOCK_END]),
                   [cards[STOCK_END]])

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def is_open(self, at: int) -> bool:
        if self.board[at] is None:
            return False
        return all(self.board[k] is None for k in COVERED_BY.get(at, ()))

    def find_candidates(self) -> List[Candidate]:
        top = self.waste[-1]
        candidates = [
            Candidate.create([self.board[at]], Zone.BOARD, at, Zone.DECKPILE, 0)
            for at in range(BOARD_SIZE)
            if self.is_open(at) and is_adjacent(self.board[at], top)
        ]
        if candidates:
            return candidates
        if self.stock:
            return [Candidate.draw([self.stock[-1]])]
        return []

    # ------------------------------------------------------------------
    # Update board
    # ------------------------------------------------------------------

    def _perform(self, candidate: Candidate) -> None:
        if candidate.origin == Zone.DECK:
            self.waste.append(take_from_pile(self.stock, candidate.card, "stock"))
            self.streak = 0
            return

        at = candidate.from_index
        if candidate.origin != Zone.BOARD or self.board[at] != candidate.card \
                or not self.is_open(at):
            raise StructuralError([f"Card {candidate.card} is not open at {at}"])

        self.board[at] = None
        self.waste.append(candidate.card)
        self.streak += 1
        self.total_score += (self.streak * 2 - 1) * 100
        if at < PEAKS:
            self.peaks_cleared += 1
            self.total_score += (PEAK_BONUS * self.peaks_cleared
                                 if self.peaks_cleared < PEAKS else BOARD_BONUS)

    # ------------------------------------------------------------------
    # Score board
    # ------------------------------------------------------------------

    def cleared(self) -> int:
        return sum(1 for card in self.board if card is None)

    def _calculate_score(self) -> int:
        return 100 * self.cleared() + len(self.stock)

    def is_terminal(self) -> bool:
        return all(card is None for card in self.board)

    # ------------------------------------------------------------------
    # Accessors/Helpers
    # ------------------------------------------------------------------

    def all_cards(self) -> List[Card]:
        cards = [card for card in self.board if card is not None]
        cards.extend(self.stock)
        cards.extend(self.waste)
        return cards

    def _copy_zones(self) -> None:
        self.board = list(self.board)
        self.stock = list(self.stock)
        self.waste = list(self.waste)
