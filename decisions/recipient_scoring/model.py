"""Recipient scoring configuration and result types.

Three independent scores are computed from the same intake vitals:

- Priority: 0-100 urgency ranking with an explainable factor breakdown
- Risk: 0-100 clinical risk stratification
- Survival: 0-100 survival probability estimate (baseline minus penalties)

Every threshold table lives in a frozen config so it can be revised and
tested apart from the scoring logic.
"""

from typing import NamedTuple, Optional, Tuple

import chex

from core.bands import Band, OutsideBand, validate_bands
from core.records import Recipient

# Type aliases
Factor = Tuple[str, float]  # (label, contribution rounded to 1 decimal)
Factors = Tuple[Factor, ...]


class PressureBand(NamedTuple):
    """Blood pressure band over both readings.

    Triggers when `systolic <op> systolic_bound`, or when
    `diastolic <op> diastolic_bound` for bands that carry a diastolic bound.
    """

    op: str
    systolic_bound: float
    diastolic_bound: Optional[float]
    points: float

    def triggers(self, systolic: float, diastolic: float) -> bool:
        if self.op == "<":
            return systolic < self.systolic_bound or (
                self.diastolic_bound is not None and diastolic < self.diastolic_bound
            )
        return systolic > self.systolic_bound or (
            self.diastolic_bound is not None and diastolic > self.diastolic_bound
        )


@chex.dataclass(frozen=True)
class PriorityConfig:
    """Configuration for priority prediction.

    Attributes:
        default_urgency: Urgency level assumed when none was recorded.
        urgency_weight: Points per urgency level (levels run 1-10).
        hemoglobin_bands: Hemoglobin (g/dL) bands, first match wins.
        pressure_bands: Systolic/diastolic bands, first match wins.
        heart_rate_bands: Heart rate (bpm) bands, first match wins.
        age_bands: Age (years) bands, first match wins.
        wait_time_cap: Maximum wait-time contribution.
        wait_time_hours: Hours of waiting that earn the full wait-time cap.
    """

    default_urgency: int = 5
    urgency_weight: float = 2.5
    hemoglobin_bands: Tuple[Band, ...] = (
        Band("<", 6, 25),
        Band("<", 7, 22),
        Band("<", 8, 18),
        Band("<", 9, 15),
        Band("<", 10, 10),
        Band("<", 11, 5),
    )
    pressure_bands: Tuple[PressureBand, ...] = (
        PressureBand("<", 90, 60, 20),  # hypotension
        PressureBand("<", 100, 65, 15),
        PressureBand("<", 110, None, 10),
        PressureBand(">", 180, 120, 15),  # hypertensive crisis
    )
    heart_rate_bands: Tuple[OutsideBand, ...] = (
        OutsideBand(50, 120, 15),
        OutsideBand(55, 110, 10),
        OutsideBand(60, 100, 5),
    )
    age_bands: Tuple[Band, ...] = (
        Band("<", 5, 10),  # infants
        Band("<", 12, 8),  # children
        Band(">", 75, 9),
        Band(">", 65, 7),
        Band("<", 18, 5),  # teenagers
    )
    wait_time_cap: float = 5.0
    wait_time_hours: float = 24.0

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.urgency_weight < 0:
            raise ValueError(
                f"urgency_weight must be non-negative, got {self.urgency_weight}"
            )
        if self.wait_time_cap < 0:
            raise ValueError(
                f"wait_time_cap must be non-negative, got {self.wait_time_cap}"
            )
        if self.wait_time_hours <= 0:
            raise ValueError(
                f"wait_time_hours must be positive, got {self.wait_time_hours}"
            )
        validate_bands("hemoglobin", self.hemoglobin_bands)
        validate_bands("pressure", self.pressure_bands)
        validate_bands("age", self.age_bands)


@chex.dataclass(frozen=True)
class RiskConfig:
    """Configuration for risk stratification.

    Each table contributes at most once; tables are additive.
    """

    hemoglobin_bands: Tuple[Band, ...] = (Band("<", 7, 40), Band("<", 9, 25))
    systolic_bands: Tuple[Band, ...] = (Band("<", 90, 30),)
    heart_rate_bands: Tuple[OutsideBand, ...] = (OutsideBand(50, 120, 20),)
    age_bands: Tuple[Band, ...] = (Band("<", 5, 10), Band(">", 75, 10))
    high_level: float = 60.0
    medium_level: float = 30.0

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.medium_level > self.high_level:
            raise ValueError(
                f"medium_level ({self.medium_level}) must be <= high_level "
                f"({self.high_level})"
            )
        validate_bands("hemoglobin", self.hemoglobin_bands)
        validate_bands("systolic", self.systolic_bands)
        validate_bands("age", self.age_bands)


@chex.dataclass(frozen=True)
class SurvivalConfig:
    """Configuration for survival estimation.

    Band points are penalties subtracted from `baseline`.
    """

    baseline: float = 95.0
    hemoglobin_bands: Tuple[Band, ...] = (
        Band("<", 6, 30),
        Band("<", 7, 20),
        Band("<", 8, 10),
    )
    systolic_bands: Tuple[Band, ...] = (Band("<", 80, 25), Band("<", 90, 15))
    heart_rate_bands: Tuple[OutsideBand, ...] = (
        OutsideBand(45, 130, 20),
        OutsideBand(50, 120, 10),
    )
    age_bands: Tuple[Band, ...] = (
        Band(">", 80, 15),
        Band(">", 75, 10),
        Band("<", 5, 12),
    )

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.baseline < 0 or self.baseline > 100:
            raise ValueError(f"baseline must be in [0, 100], got {self.baseline}")
        validate_bands("hemoglobin", self.hemoglobin_bands)
        validate_bands("systolic", self.systolic_bands)
        validate_bands("age", self.age_bands)


class PriorityResult(NamedTuple):
    """Priority score with its audit trail.

    Attributes:
        score: Integer priority in [0, 100].
        factors: (label, contribution) pairs in evaluation order.
    """

    score: int
    factors: Factors


class IntakeAssessment(NamedTuple):
    """Outcome of intake scoring.

    Attributes:
        recipient: Recipient with derived scores attached.
        factors: Priority breakdown; empty when scores were already present.
        risk_level: "High", "Medium" or "Low".
    """

    recipient: Recipient
    factors: Factors
    risk_level: str
