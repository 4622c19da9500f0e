"""Donor matching model: compatibility matrix and scoring weights."""

from types import MappingProxyType
from typing import Mapping, NamedTuple, Tuple

import chex

from core.records import BLOOD_TYPES, Donor

# Blood compatibility: donor type -> recipient types it may supply.
# Universal donor: O- supplies every type; AB+ only supplies AB+.
COMPATIBILITY_MATRIX: Mapping[str, frozenset] = MappingProxyType({
    "O-": frozenset(BLOOD_TYPES),
    "O+": frozenset({"O+", "A+", "B+", "AB+"}),
    "A-": frozenset({"A-", "A+", "AB-", "AB+"}),
    "A+": frozenset({"A+", "AB+"}),
    "B-": frozenset({"B-", "B+", "AB-", "AB+"}),
    "B+": frozenset({"B+", "AB+"}),
    "AB-": frozenset({"AB-", "AB+"}),
    "AB+": frozenset({"AB+"}),
})


def can_supply(donor_type: str, recipient_type: str) -> bool:
    """Whether blood of `donor_type` may be given to `recipient_type`."""
    return recipient_type in COMPATIBILITY_MATRIX.get(donor_type, frozenset())


@chex.dataclass(frozen=True)
class MatchConfig:
    """Configuration for donor matching.

    Attributes:
        exact_match_points: Score for an identical blood type.
        compatible_points: Score for a compatible but different type.
        first_time_points: Score for a donor with no recorded donation.
        donation_interval_days: Minimum rest between donations.
        rested_points: Score for a donor past the donation interval.
        experienced_after: Donations above which a donor counts as experienced.
        experienced_points: Score for an experienced donor.
        previous_points: Score for a donor with at least one donation.
        availability_points: Flat score every candidate receives.
        max_matches: Number of ranked matches returned.
    """

    exact_match_points: float = 50.0
    compatible_points: float = 30.0
    first_time_points: float = 15.0
    donation_interval_days: float = 56.0
    rested_points: float = 20.0
    experienced_after: int = 5
    experienced_points: float = 15.0
    previous_points: float = 10.0
    availability_points: float = 15.0
    max_matches: int = 5

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.max_matches < 1:
            raise ValueError(f"max_matches must be >= 1, got {self.max_matches}")
        if self.donation_interval_days < 0:
            raise ValueError(
                f"donation_interval_days must be non-negative, "
                f"got {self.donation_interval_days}"
            )


class DonorMatch(NamedTuple):
    """A ranked donor candidate.

    Attributes:
        donor: Donor record.
        score: Match score in [0, 100].
        reasons: Reasons that contributed to the score, in scoring order.
    """

    donor: Donor
    score: float
    reasons: Tuple[str, ...]
