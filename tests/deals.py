"""Fixed deals shared by the variant and command line tests."""

from solitaire.solver.card import Card, SUITS


def solvable_freecell_deal():
    """
    A deal that is won by playing every card straight to the foundations.

    Column 1 holds Ac..7c with Ac on top, column 0 holds 8c..Ad with 8c on
    top, and so on: each column's top is the next card needed once the
    columns before it are cleared.
    """
    order = [Card(rank, suit) for suit in SUITS for rank in range(1, 14)]
    blocks = [order[7:14], order[0:7], order[14:21], order[21:28],
              order[28:34], order[34:40], order[40:46], order[46:52]]
    deal = []
    for block in blocks:
        deal.extend(reversed(block))
    return deal
