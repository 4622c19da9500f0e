"""Donor ranking policy."""

import logging
from typing import List, Mapping, Optional, Sequence

from core.bands import clamp
from core.collaborators import Clock, as_utc
from core.records import Donor

from .model import COMPATIBILITY_MATRIX, DonorMatch, MatchConfig

logger = logging.getLogger(__name__)


class DonorMatcher:
    """Rank eligible, compatible donors for a recipient blood type.

    Scoring is additive:
    1. Exact type match, or a smaller bonus for a compatible type
    2. Donation recency (first-time donors, donors past the rest interval)
    3. Donation history
    4. Flat availability bonus

    Donors who gave within the rest interval are still ranked; they only
    miss the recency bonus.

    Example:
        >>> matcher = DonorMatcher()
        >>> matches = matcher("AB+", donors, clock)
    """

    def __init__(
        self,
        config: Optional[MatchConfig] = None,
        compatibility: Mapping[str, frozenset] = COMPATIBILITY_MATRIX,
    ) -> None:
        """Initialize matcher.

        Args:
            config: Scoring weights; defaults to `MatchConfig()`.
            compatibility: Donor type -> recipient types it may supply.
        """
        self.config = config if config is not None else MatchConfig()
        self.compatibility = compatibility

    def is_candidate(self, donor: Donor, recipient_type: str) -> bool:
        """Eligible donor whose type may supply `recipient_type`."""
        if not donor.is_eligible:
            return False
        return recipient_type in self.compatibility.get(donor.blood_type, frozenset())

    def score(self, donor: Donor, recipient_type: str, clock: Clock) -> DonorMatch:
        """Score a single candidate (compatibility is not checked here)."""
        cfg = self.config
        points = 0.0
        reasons: List[str] = []

        if donor.blood_type == recipient_type:
            points += cfg.exact_match_points
            reasons.append("Exact blood type match")
        else:
            points += cfg.compatible_points
            reasons.append("Compatible blood type")

        if donor.last_donation_date is None:
            points += cfg.first_time_points
            reasons.append("First-time donor")
        else:
            rested = as_utc(clock.now()) - as_utc(donor.last_donation_date)
            days = rested.total_seconds() / 86400.0
            if days > cfg.donation_interval_days:
                points += cfg.rested_points
                reasons.append("Eligible donation window")

        if donor.total_donations > cfg.experienced_after:
            points += cfg.experienced_points
            reasons.append("Experienced donor")
        elif donor.total_donations > 0:
            points += cfg.previous_points
            reasons.append("Previous donor")

        points += cfg.availability_points
        reasons.append("Available for contact")

        return DonorMatch(donor=donor, score=clamp(points), reasons=tuple(reasons))

    def __call__(
        self,
        recipient_type: str,
        donors: Sequence[Donor],
        clock: Clock,
    ) -> List[DonorMatch]:
        """Rank donors for a recipient.

        Args:
            recipient_type: Recipient blood type.
            donors: Candidate donors, in retrieval order.
            clock: Source of the current time for donation recency.

        Returns:
            Up to `max_matches` matches by descending score; equal scores
            keep their input order.
        """
        matches = [
            self.score(donor, recipient_type, clock)
            for donor in donors
            if self.is_candidate(donor, recipient_type)
        ]
        # sorted() is stable, so ties keep input order
        ranked = sorted(matches, key=lambda m: m.score, reverse=True)
        logger.debug(
            "%d of %d donors compatible with %s",
            len(matches),
            len(donors),
            recipient_type,
        )
        return ranked[: self.config.max_matches]
