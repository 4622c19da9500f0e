"""Recipient scoring problem.

This module scores recipients at intake with three deterministic,
auditable rule sets:
- Priority prediction (0-100) with an explainable factor breakdown
- Risk stratification (0-100) with a High/Medium/Low label
- Survival probability estimation (0-100)

Example:
    >>> from datetime import datetime, timezone
    >>> from core import FrozenClock, Recipient, VitalSigns
    >>> from decisions.recipient_scoring import score_intake
    >>> clock = FrozenClock(datetime(2024, 1, 1, tzinfo=timezone.utc))
    >>> recipient = Recipient(
    ...     id="r1", full_name="A. Patient", blood_type="O+",
    ...     vitals=VitalSigns(hemoglobin_level=6.5),
    ... )
    >>> assessment = score_intake(recipient, clock)
"""

from decisions.recipient_scoring.model import (
    Factor,
    Factors,
    PressureBand,
    PriorityConfig,
    RiskConfig,
    SurvivalConfig,
    PriorityResult,
    IntakeAssessment,
)
from decisions.recipient_scoring.policy import (
    PriorityScorer,
    RiskStratifier,
    SurvivalEstimator,
    score_intake,
    resubmit_vitals,
)

__all__ = [
    # Model
    "Factor",
    "Factors",
    "PressureBand",
    "PriorityConfig",
    "RiskConfig",
    "SurvivalConfig",
    "PriorityResult",
    "IntakeAssessment",
    # Policies
    "PriorityScorer",
    "RiskStratifier",
    "SurvivalEstimator",
    "score_intake",
    "resubmit_vitals",
]
