"""
Toy board and recording engine used by the engine and strategy tests.

A ToyBoard walks a fixed tree whose nodes are named by card tokens.
Every edge is a column-to-column candidate moving the child's card.
"""

from typing import Dict, Iterable, List, Optional

from solitaire.solver import Board, Candidate, Card, StructuralError, full_deck


class ToyBoard(Board):
    score_calls = 0

    def __init__(self, tree: Dict[str, List[str]], node: str = "As",
                 terminal: Iterable[str] = (), scores: Optional[Dict[str, int]] = None,
                 violations: Optional[List[str]] = None, exploding: Iterable[str] = ()):
        super().__init__()
        self.tree = tree
        self.node = node
        self.terminal = set(terminal)
        self.scores = scores or {}
        self.violations = violations or []
        self.exploding = set(exploding)

    def find_candidates(self) -> List[Candidate]:
        if self.node in self.exploding:
            raise StructuralError([f"Board at {self.node} is inconsistent"])
        return [
            Candidate.column_to_column([Card.parse(child)], 0, 1)
            for child in self.tree.get(self.node, [])
        ]

    def _perform(self, candidate: Candidate) -> None:
        self.node = str(candidate.card)

    def _calculate_score(self) -> int:
        ToyBoard.score_calls += 1
        return self.scores.get(self.node, 0)

    def is_terminal(self) -> bool:
        return self.node in self.terminal

    def verify(self) -> List[str]:
        return list(self.violations) or super().verify()

    def all_cards(self) -> List[Card]:
        return full_deck()

    def _copy_zones(self) -> None:
        pass


class RecordingEngine:
    """Stands in for SearchEngine and records what a strategy pushes."""

    def __init__(self):
        self.batches: List[List[Board]] = []

    def push_batch(self, boards) -> bool:
        if not boards:
            return False
        self.batches.append(list(boards))
        return True

    def push_single(self, board) -> bool:
        return self.push_batch([board])


def fan(count: int, scores: List[int]) -> ToyBoard:
    """Root with `count` dead-end children scored by `scores`."""
    children = [str(Card(rank, "h")) for rank in range(1, count + 1)]
    return ToyBoard(
        {"As": children},
        scores={child: score for child, score in zip(children, scores)},
    )
