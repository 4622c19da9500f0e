"""Collaborators and record types shared by the decision problems."""

from core.collaborators import (
    Clock,
    RandomSource,
    SystemClock,
    FrozenClock,
    JaxRandomSource,
    FixedRandomSource,
    as_utc,
)
from core.bands import Band, OutsideBand, first_match, clamp, round_half_up
from core.records import (
    BLOOD_TYPES,
    BucketKey,
    PENDING,
    FULFILLED,
    VitalSigns,
    Recipient,
    Donor,
    InventoryBucket,
    Order,
)

__all__ = [
    # Collaborators
    "Clock",
    "RandomSource",
    "SystemClock",
    "FrozenClock",
    "JaxRandomSource",
    "FixedRandomSource",
    "as_utc",
    # Bands
    "Band",
    "OutsideBand",
    "first_match",
    "clamp",
    "round_half_up",
    # Records
    "BLOOD_TYPES",
    "BucketKey",
    "PENDING",
    "FULFILLED",
    "VitalSigns",
    "Recipient",
    "Donor",
    "InventoryBucket",
    "Order",
]
