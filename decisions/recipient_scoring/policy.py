"""Scoring policies for recipient intake.

- PriorityScorer: additive, capped urgency ranking with factor breakdown
- RiskStratifier: additive clinical risk
- SurvivalEstimator: baseline survival minus penalties

All three are total over missing vitals: an absent reading omits its
contribution and never raises.
"""

import dataclasses
import logging
from typing import List, Optional

from core.bands import clamp, first_match, round_half_up
from core.collaborators import Clock, as_utc
from core.records import Recipient, VitalSigns

from .model import (
    Factor,
    IntakeAssessment,
    PriorityConfig,
    PriorityResult,
    RiskConfig,
    SurvivalConfig,
)

logger = logging.getLogger(__name__)


class PriorityScorer:
    """Urgency priority in [0, 100] from urgency level, vitals and wait time.

    Factors are evaluated in a fixed order (urgency, hemoglobin, blood
    pressure, heart rate, age, wait time) and each one present in the input
    is reported, even when it contributes nothing.

    Example:
        >>> scorer = PriorityScorer()
        >>> result = scorer(recipient, clock)
        >>> result.score, result.factors
    """

    def __init__(self, config: Optional[PriorityConfig] = None) -> None:
        """Initialize scorer.

        Args:
            config: Threshold tables; defaults to `PriorityConfig()`.
        """
        self.config = config if config is not None else PriorityConfig()

    def __call__(self, recipient: Recipient, clock: Clock) -> PriorityResult:
        """Score a recipient.

        Args:
            recipient: Recipient snapshot (vitals may be partial).
            clock: Source of the current time for the wait-time factor.

        Returns:
            Rounded, clamped score and the ordered factor breakdown.
        """
        cfg = self.config
        vitals = recipient.vitals
        contributions: List[Factor] = []

        urgency = recipient.urgency_level
        if urgency is None:
            urgency = cfg.default_urgency
        contributions.append(("Urgency", urgency * cfg.urgency_weight))

        if vitals.hemoglobin_level is not None:
            contributions.append(
                ("Hemoglobin", first_match(cfg.hemoglobin_bands, vitals.hemoglobin_level))
            )

        # Pressure is only assessed with both readings
        if vitals.systolic_bp is not None and vitals.diastolic_bp is not None:
            bp_points = 0.0
            for band in cfg.pressure_bands:
                if band.triggers(vitals.systolic_bp, vitals.diastolic_bp):
                    bp_points = float(band.points)
                    break
            contributions.append(("BP", bp_points))

        if vitals.heart_rate is not None:
            contributions.append(("HR", first_match(cfg.heart_rate_bands, vitals.heart_rate)))

        if vitals.age is not None:
            contributions.append(("Age", first_match(cfg.age_bands, vitals.age)))

        if recipient.admitted_at is not None:
            elapsed = as_utc(clock.now()) - as_utc(recipient.admitted_at)
            waited = elapsed.total_seconds() / 3600.0
            hours = max(0.0, waited)
            contributions.append(
                ("Wait time", min(cfg.wait_time_cap, hours / cfg.wait_time_hours * cfg.wait_time_cap))
            )

        total = sum(points for _, points in contributions)
        score = round_half_up(clamp(total))
        factors = tuple((label, round(points, 1)) for label, points in contributions)
        logger.debug("priority for recipient %s: %d %s", recipient.id, score, factors)
        return PriorityResult(score=score, factors=factors)


class RiskStratifier:
    """Clinical risk in [0, 100]; each table adds at most once.

    Example:
        >>> RiskStratifier()(VitalSigns(hemoglobin_level=6))
        40
    """

    def __init__(self, config: Optional[RiskConfig] = None) -> None:
        self.config = config if config is not None else RiskConfig()

    def __call__(self, vitals: VitalSigns) -> int:
        cfg = self.config
        risk = (
            first_match(cfg.hemoglobin_bands, vitals.hemoglobin_level)
            + first_match(cfg.systolic_bands, vitals.systolic_bp)
            + first_match(cfg.heart_rate_bands, vitals.heart_rate)
            + first_match(cfg.age_bands, vitals.age)
        )
        return round_half_up(clamp(risk))

    def level(self, risk: float) -> str:
        """Label a risk score as "High", "Medium" or "Low"."""
        if risk > self.config.high_level:
            return "High"
        if risk > self.config.medium_level:
            return "Medium"
        return "Low"


class SurvivalEstimator:
    """Survival probability in [0, 100]: baseline minus first-match penalties."""

    def __init__(self, config: Optional[SurvivalConfig] = None) -> None:
        self.config = config if config is not None else SurvivalConfig()

    def __call__(self, vitals: VitalSigns) -> int:
        cfg = self.config
        penalty = (
            first_match(cfg.hemoglobin_bands, vitals.hemoglobin_level)
            + first_match(cfg.systolic_bands, vitals.systolic_bp)
            + first_match(cfg.heart_rate_bands, vitals.heart_rate)
            + first_match(cfg.age_bands, vitals.age)
        )
        return round_half_up(clamp(cfg.baseline - penalty))


def score_intake(
    recipient: Recipient,
    clock: Clock,
    priority: Optional[PriorityScorer] = None,
    risk: Optional[RiskStratifier] = None,
    survival: Optional[SurvivalEstimator] = None,
) -> IntakeAssessment:
    """Attach priority, risk and survival scores to a recipient.

    Derived scores are written once: a recipient that already carries them
    is returned unchanged with an empty factor breakdown. Use
    `resubmit_vitals` to force a rescore.

    Args:
        recipient: Recipient snapshot at intake.
        clock: Source of the current time.
        priority: Priority scorer (default config when omitted).
        risk: Risk stratifier (default config when omitted).
        survival: Survival estimator (default config when omitted).

    Returns:
        IntakeAssessment with the scored recipient.
    """
    risk = risk if risk is not None else RiskStratifier()
    if recipient.is_scored:
        return IntakeAssessment(
            recipient=recipient,
            factors=(),
            risk_level=risk.level(recipient.risk_score or 0),
        )

    priority = priority if priority is not None else PriorityScorer()
    survival = survival if survival is not None else SurvivalEstimator()

    result = priority(recipient, clock)
    risk_score = risk(recipient.vitals)
    scored = dataclasses.replace(
        recipient,
        predicted_priority=result.score,
        risk_score=risk_score,
        survival_probability=survival(recipient.vitals),
    )
    logger.info(
        "scored recipient %s: priority=%d risk=%d survival=%d",
        scored.id,
        scored.predicted_priority,
        scored.risk_score,
        scored.survival_probability,
    )
    return IntakeAssessment(
        recipient=scored,
        factors=result.factors,
        risk_level=risk.level(risk_score),
    )


def resubmit_vitals(
    recipient: Recipient,
    vitals: VitalSigns,
    clock: Clock,
    priority: Optional[PriorityScorer] = None,
    risk: Optional[RiskStratifier] = None,
    survival: Optional[SurvivalEstimator] = None,
) -> IntakeAssessment:
    """Replace a recipient's vitals and recompute every derived score."""
    cleared = dataclasses.replace(
        recipient,
        vitals=vitals,
        predicted_priority=None,
        risk_score=None,
        survival_probability=None,
    )
    return score_intake(cleared, clock, priority=priority, risk=risk, survival=survival)
