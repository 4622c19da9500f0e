"""Threshold bands and score arithmetic.

A band table is an ordered tuple of bands; the first band that triggers
wins and later bands are not consulted. Missing readings (`None`) never
trigger a band.
"""

import math
from typing import NamedTuple, Optional, Sequence


class Band(NamedTuple):
    """Triggers when `value <op> bound`.

    Attributes:
        op: Either "<" or ">".
        bound: Threshold the reading is compared against.
        points: Contribution when the band triggers.
    """

    op: str
    bound: float
    points: float

    def triggers(self, value: Optional[float]) -> bool:
        if value is None:
            return False
        if self.op == "<":
            return value < self.bound
        return value > self.bound


class OutsideBand(NamedTuple):
    """Triggers when the reading falls outside `[low, high]`."""

    low: float
    high: float
    points: float

    def triggers(self, value: Optional[float]) -> bool:
        return value is not None and (value > self.high or value < self.low)


def validate_bands(name: str, bands: Sequence[Band]) -> None:
    """Raise ValueError if a band table uses an unknown comparison."""
    for band in bands:
        if band.op not in ("<", ">"):
            raise ValueError(f"{name} band op must be '<' or '>', got {band.op!r}")


def first_match(bands, value: Optional[float]) -> float:
    """Points of the first triggering band, 0.0 when none triggers."""
    for band in bands:
        if band.triggers(value):
            return float(band.points)
    return 0.0


def clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded up."""
    return int(math.floor(value + 0.5))
