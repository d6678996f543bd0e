"""
Errors Module - Exceptions raised by the solver and deal loading.
"""

from typing import List


class StructuralError(RuntimeError):
    """
    A board is structurally inconsistent.

    Raised when a deal fails verification (missing or duplicated cards)
    or when a candidate does not match the board it is applied to.
    Never retried: a run that hits this error is aborted.

    Attributes:
        violations: Human-readable violation messages
    """

    def __init__(self, violations: List[str]):
        self.violations = list(violations)
        super().__init__("; ".join(self.violations))


class DealError(ValueError):
    """A deal could not be parsed or does not fit the requested variant."""
