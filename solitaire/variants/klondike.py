"""
Klondike Board - Seven columns, a stock and waste, four foundations.

Scoring and draw rules follow the usual turn-three conventions:
draw or recycle only when nothing else can move, and never recycle
twice without some other move in between.
"""

from typing import List, Optional, Sequence

from ..solver.board import Board, Column, take_from_column, take_from_pile
from ..solver.candidate import Candidate, Zone
from ..solver.card import Card, SUITS
from ..solver.context import RunConfig
from ..solver.errors import StructuralError
from .registry import register_variant

COLUMNS = 7
STOCK_SIZE = 24


@register_variant
class KlondikeBoard(Board):
    """
    A Klondike position.

    Attributes:
        columns: Seven columns; cards below open_at are face down
        stock: Face-down draw pile, top card last
        waste: Face-up pile drawn to, top card last
        foundations: One pile per suit, in SUITS order
        draw_count: Cards turned per draw (1 or 3)
        state_changed: True if a non-draw move happened since the last recycle
    """
    name = "klondike"
    description = "Klondike: 7 columns, draw-pile with recycling"
    card_count = 52
    default_strategy = "dfs"
    default_config = RunConfig(min_children=1)

    def __init__(self, columns: List[Column], stock: List[Card],
                 waste: Optional[List[Card]] = None,
                 foundations: Optional[List[List[Card]]] = None,
                 draw_count: int = 3, state_changed: bool = True):
        super().__init__()
        if draw_count < 1:
            raise ValueError(f"draw_count must be positive, got {draw_count}")
        self.columns = columns
        self.stock = stock
        self.waste = waste if waste is not None else []
        self.foundations = foundations if foundations is not None else [[] for _ in SUITS]
        self.draw_count = draw_count
        self.state_changed = state_changed

    @classmethod
    def build(cls, cards: Sequence[Card], draw_count: int = 3, **options) -> 'KlondikeBoard':
        """
        Deal cards 0-23 to the stock (23 on top), then column i takes the
        next i+1 cards with only its last card face up.
        """
        stock = list(cards[:STOCK_SIZE])
        columns = []
        at = STOCK_SIZE
        for i in range(COLUMNS):
            columns.append(Column(cards[at:at + i + 1], open_at=i))
            at += i + 1
        return cls(columns, stock, draw_count=draw_count)

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def find_candidates(self) -> List[Candidate]:
        candidates = self._to_foundation_candidates() + self._movable_candidates()
        if candidates:
            return candidates

        candidates = self._foundation_to_column_candidates()
        if candidates:
            return candidates

        return self._draw_candidates()

    def foundation_of(self, card: Card) -> List[Card]:
        return self.foundations[SUITS.index(card.suit)]

    def can_found(self, card: Card) -> bool:
        return len(self.foundation_of(card)) == card.rank - 1

    def _to_foundation_candidates(self) -> List[Candidate]:
        candidates = []
        for i, column in enumerate(self.columns):
            if not column.is_empty() and self.can_found(column.peek()):
                card = column.peek()
                candidates.append(
                    Candidate.column_to_foundation(card, i, SUITS.index(card.suit)))
        if self.waste and self.can_found(self.waste[-1]):
            card = self.waste[-1]
            candidates.append(Candidate.deckpile_to_foundation(card, SUITS.index(card.suit)))
        return candidates

    def _movable_candidates(self) -> List[Candidate]:
        candidates = []
        empty_at = next((i for i, c in enumerate(self.columns) if c.is_empty()), None)

        for i, source in enumerate(self.columns):
            face_up = source.face_up
            for k, card in enumerate(face_up):
                if not self._is_run(face_up[k:]):
                    continue
                run = face_up[k:]
                for j, target in enumerate(self.columns):
                    if i == j:
                        continue
                    if target.is_empty():
                        # Only a king that leaves something behind is worth moving
                        if j == empty_at and card.is_king and len(source) > len(run):
                            candidates.append(Candidate.column_to_column(run, i, j))
                    elif target.peek().is_higher_with_different_color(card):
                        candidates.append(Candidate.column_to_column(run, i, j))

        if self.waste:
            card = self.waste[-1]
            for j, target in enumerate(self.columns):
                if target.is_empty():
                    if j == empty_at and card.is_king:
                        candidates.append(Candidate.deckpile_to_column(card, j))
                elif target.peek().is_higher_with_different_color(card):
                    candidates.append(Candidate.deckpile_to_column(card, j))
        return candidates

    @staticmethod
    def _is_run(cards: List[Card]) -> bool:
        return all(a.is_higher_with_different_color(b) for a, b in zip(cards, cards[1:]))

    def _foundation_to_column_candidates(self) -> List[Candidate]:
        """
        At most one foundation card brought back down, and only when it
        lets a stuck column top move onto it.
        """
        for at, pile in enumerate(self.foundations):
            if not pile:
                continue
            card = pile[-1]
            if not self._helps_uncover(card):
                continue
            for j, target in enumerate(self.columns):
                if not target.is_empty() and target.peek().is_higher_with_different_color(card):
                    return [Candidate.foundation_to_column(card, at, j)]
        return []

    def _helps_uncover(self, card: Card) -> bool:
        return any(
            not column.is_empty()
            and not self.can_found(column.peek())
            and card.is_higher_with_different_color(column.peek())
            for column in self.columns
        )

    def _draw_candidates(self) -> List[Candidate]:
        if self.stock:
            drawn = self.stock[-self.draw_count:]
            return [Candidate.draw(drawn)]
        if self.waste and self.state_changed:
            return [Candidate.recycle(self.waste)]
        return []

    # ------------------------------------------------------------------
    # Update board
    # ------------------------------------------------------------------

    def _perform(self, candidate: Candidate) -> None:
        origin, target = candidate.origin, candidate.target

        if origin == Zone.DECK and target == Zone.DECKPILE:
            # The first card listed is the one left on top of the waste
            count = candidate.card_count
            if self.stock[len(self.stock) - count:] != list(candidate.cards):
                raise StructuralError([f"Cards {candidate} not on top of stock"])
            del self.stock[len(self.stock) - count:]
            self.waste.extend(reversed(candidate.cards))
            return

        if origin == Zone.DECKPILE and target == Zone.DECK:
            if self.waste != list(candidate.cards):
                raise StructuralError(["Recycle does not match the waste"])
            self.stock = list(reversed(self.waste))
            self.waste = []
            self.state_changed = False
            return

        self.state_changed = True
        if origin == Zone.COLUMN:
            take_from_column(self.columns[candidate.from_index], candidate.cards,
                             candidate.from_index)
        elif origin == Zone.DECKPILE:
            take_from_pile(self.waste, candidate.card, "waste")
        elif origin == Zone.FOUNDATION:
            take_from_pile(self.foundations[candidate.from_index], candidate.card,
                           f"foundation {candidate.from_index}")
        else:
            raise StructuralError([f"Unsupported origin: {origin.name}"])

        if target == Zone.COLUMN:
            self.columns[candidate.to_index].add(candidate.cards)
            if origin == Zone.DECKPILE or (
                    origin == Zone.COLUMN and not self.columns[candidate.from_index].is_empty()):
                self.total_score += 5
        elif target == Zone.FOUNDATION:
            pile = self.foundations[candidate.to_index]
            pile.append(candidate.card)
            if origin == Zone.COLUMN and len(pile) == 1:
                self.total_score += 15
            elif origin == Zone.DECKPILE:
                self.total_score += 10
            else:
                self.total_score += 5
        else:
            raise StructuralError([f"Unsupported target: {target.name}"])

    # ------------------------------------------------------------------
    # Score board
    # ------------------------------------------------------------------

    def _calculate_score(self) -> int:
        founded = sum(len(f) for f in self.foundations)
        hidden = sum(c.hidden for c in self.columns)
        return 5 * founded - hidden - self.blockers()

    def blockers(self) -> int:
        """
        Cards covering the next card each foundation needs.

        Stock blockers are divided by draw_count since a draw turns
        several cards at once.
        """
        total = 0
        for suit, pile in zip(SUITS, self.foundations):
            if len(pile) == 13:
                continue
            needed = Card(len(pile) + 1, suit)
            if needed in self.stock:
                total += (len(self.stock) - 1 - self.stock.index(needed)) // self.draw_count
            elif needed in self.waste:
                total += len(self.waste) - 1 - self.waste.index(needed)
            else:
                for column in self.columns:
                    if needed in column.cards:
                        total += len(column) - 1 - column.cards.index(needed)
                        break
        return total

    def is_terminal(self) -> bool:
        return all(len(f) == 13 for f in self.foundations)

    # ------------------------------------------------------------------
    # Accessors/Helpers
    # ------------------------------------------------------------------

    def all_cards(self) -> List[Card]:
        cards = [card for column in self.columns for card in column]
        cards.extend(self.stock)
        cards.extend(self.waste)
        cards.extend(card for pile in self.foundations for card in pile)
        return cards

    def _copy_zones(self) -> None:
        self.columns = [c.copy() for c in self.columns]
        self.stock = list(self.stock)
        self.waste = list(self.waste)
        self.foundations = [list(f) for f in self.foundations]
