"""Record types shared by every decision problem.

Records are immutable snapshots of what the persistence layer stores.
Nothing in this package writes them back; decisions return replaced copies
(via `dataclasses.replace`) for the caller to persist.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Tuple

# Blood types in order
BLOOD_TYPES = ("O-", "O+", "A-", "A+", "B-", "B+", "AB-", "AB+")

BucketKey = Tuple[str, str]  # (blood_type, component)

PENDING = "pending"
FULFILLED = "fulfilled"


@dataclass(frozen=True)
class VitalSigns:
    """Vitals captured at intake.

    Attributes:
        hemoglobin_level: Hemoglobin in g/dL.
        systolic_bp: Systolic blood pressure in mmHg.
        diastolic_bp: Diastolic blood pressure in mmHg.
        heart_rate: Heart rate in beats per minute.
        age: Age in years.
    """

    hemoglobin_level: Optional[float] = None
    systolic_bp: Optional[float] = None
    diastolic_bp: Optional[float] = None
    heart_rate: Optional[float] = None
    age: Optional[float] = None


@dataclass(frozen=True)
class Recipient:
    """Patient awaiting a blood product.

    `predicted_priority`, `risk_score` and `survival_probability` stay `None`
    until the recipient has been through intake scoring.
    """

    id: str
    full_name: str
    blood_type: str
    vitals: VitalSigns = field(default_factory=VitalSigns)
    urgency_level: int = 5
    admitted_at: Optional[datetime] = None
    predicted_priority: Optional[int] = None
    risk_score: Optional[int] = None
    survival_probability: Optional[int] = None
    status: str = PENDING

    @property
    def is_scored(self) -> bool:
        return self.predicted_priority is not None


@dataclass(frozen=True)
class Donor:
    id: str
    full_name: str
    blood_type: str
    is_eligible: bool = True
    last_donation_date: Optional[datetime] = None
    total_donations: int = 0


@dataclass(frozen=True)
class InventoryBucket:
    """Unit counts for one (blood_type, component) pair.

    Accounting keeps `total_units == available_units + reserved_units`.
    """

    blood_type: str
    component: str
    total_units: int = 0
    available_units: int = 0
    reserved_units: int = 0
    min_threshold: int = 10
    last_updated: Optional[datetime] = None

    @property
    def key(self) -> BucketKey:
        return (self.blood_type, self.component)

    @property
    def is_balanced(self) -> bool:
        return self.total_units == self.available_units + self.reserved_units


@dataclass(frozen=True)
class Order:
    id: str
    recipient_id: Optional[str]
    blood_type: str
    component: str
    units_requested: Optional[int]  # None only on historical records
    urgency: str = "routine"
    status: str = PENDING
    created_at: Optional[datetime] = None
    fulfilled_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        """Validate order."""
        if self.units_requested is not None and self.units_requested <= 0:
            raise ValueError(
                f"units_requested must be positive, got {self.units_requested}"
            )

    @property
    def key(self) -> BucketKey:
        return (self.blood_type, self.component)

    @property
    def is_pending(self) -> bool:
        return self.status == PENDING
