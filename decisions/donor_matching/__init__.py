"""Donor matching problem.

Ranks donors against a recipient blood type using a fixed ABO/Rh
compatibility matrix and donation-history heuristics.

Example:
    >>> from decisions.donor_matching import DonorMatcher
    >>> matcher = DonorMatcher()
    >>> top = matcher("A+", donors, clock)
    >>> [(m.donor.id, m.score, m.reasons) for m in top]
"""

from decisions.donor_matching.model import (
    COMPATIBILITY_MATRIX,
    can_supply,
    MatchConfig,
    DonorMatch,
)
from decisions.donor_matching.policy import DonorMatcher

__all__ = [
    "COMPATIBILITY_MATRIX",
    "can_supply",
    "MatchConfig",
    "DonorMatch",
    "DonorMatcher",
]
