"""Inventory accounting model.

Unit movements between the counters of an inventory bucket:

- Receipt of a donated unit: total +1, available +1
- Order creation (reservation): available -n, reserved +n
- Order fulfilment: reserved -n, total -n

Every movement keeps `total_units == available_units + reserved_units`.
Functions here never write anything; they return the replaced records and
an `InventoryDelta` the caller persists.
"""

import dataclasses
import logging
from datetime import datetime, timedelta
from typing import Dict, NamedTuple, Optional, Tuple

import chex

from core.collaborators import Clock
from core.records import FULFILLED, BucketKey, InventoryBucket, Order

logger = logging.getLogger(__name__)

# Shelf life in days by component
EXPIRY_DAYS: Dict[str, int] = {
    "Whole Blood": 35,
    "Plasma": 365,
    "Platelets": 5,
    "RBC": 42,
}
DEFAULT_EXPIRY_DAYS = 35
DEFAULT_MIN_THRESHOLD = 10


class InventoryError(ValueError):
    """Base class for recoverable inventory conditions."""


class InsufficientInventoryError(InventoryError):
    """Not enough units in a bucket to cover a request.

    Attributes:
        key: (blood_type, component) of the bucket.
        requested: Units requested.
        available: Units that could be drawn on.
    """

    def __init__(self, key: BucketKey, requested: int, available: int) -> None:
        self.key = key
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient inventory for {key[0]} {key[1]}. "
            f"Available: {available} units, Requested: {requested} units"
        )

    @property
    def shortfall(self) -> int:
        return self.requested - self.available


class OrderAlreadyFulfilledError(InventoryError):
    def __init__(self, order_id: str) -> None:
        self.order_id = order_id
        super().__init__(f"Order {order_id} already fulfilled")


class InventoryDelta(NamedTuple):
    """Signed change to apply to one bucket."""

    blood_type: str
    component: str
    total_units: int = 0
    available_units: int = 0
    reserved_units: int = 0

    @property
    def key(self) -> BucketKey:
        return (self.blood_type, self.component)


class BucketUpdate(NamedTuple):
    bucket: InventoryBucket
    delta: InventoryDelta


class Fulfillment(NamedTuple):
    order: Order
    bucket: InventoryBucket
    delta: InventoryDelta


def apply_delta(bucket: InventoryBucket, delta: InventoryDelta, now: datetime) -> InventoryBucket:
    """Return `bucket` with `delta` applied and `last_updated` set to `now`."""
    if bucket.key != delta.key:
        raise ValueError(f"delta for {delta.key} applied to bucket {bucket.key}")
    return dataclasses.replace(
        bucket,
        total_units=bucket.total_units + delta.total_units,
        available_units=bucket.available_units + delta.available_units,
        reserved_units=bucket.reserved_units + delta.reserved_units,
        last_updated=now,
    )


def _warn_if_unbalanced(bucket: InventoryBucket) -> None:
    if not bucket.is_balanced:
        logger.warning(
            "bucket %s %s is unbalanced: total=%d available=%d reserved=%d",
            bucket.blood_type,
            bucket.component,
            bucket.total_units,
            bucket.available_units,
            bucket.reserved_units,
        )


def requested_units(order: Order) -> int:
    """Units an order draws on stock.

    Raises:
        InventoryError: If the order carries no request size.
    """
    if order.units_requested is None:
        raise InventoryError(f"Order {order.id} has no units_requested")
    return order.units_requested


def reserve_for_order(
    bucket: Optional[InventoryBucket],
    order: Order,
    clock: Clock,
) -> BucketUpdate:
    """Move an order's units from available to reserved.

    Args:
        bucket: Bucket matching the order's (blood_type, component), or None
            when no such bucket exists.
        order: Newly created order.
        clock: Source of the update timestamp.

    Returns:
        Updated bucket and the delta to persist.

    Raises:
        InsufficientInventoryError: If the bucket is missing or has fewer
            available units than requested.
        InventoryError: If the order carries no request size.
    """
    n = requested_units(order)
    available = bucket.available_units if bucket is not None else 0
    if bucket is None or available < n:
        raise InsufficientInventoryError(order.key, n, available)
    _warn_if_unbalanced(bucket)

    delta = InventoryDelta(
        order.blood_type, order.component, available_units=-n, reserved_units=n
    )
    logger.info("reserved %d units of %s %s for order %s", n, *order.key, order.id)
    return BucketUpdate(bucket=apply_delta(bucket, delta, clock.now()), delta=delta)


def fulfill_order(
    order: Order,
    bucket: Optional[InventoryBucket],
    clock: Clock,
) -> Fulfillment:
    """Mark an order fulfilled and release its reserved units from stock.

    Raises:
        OrderAlreadyFulfilledError: If the order is already fulfilled.
        InsufficientInventoryError: If the bucket is missing or its reserved
            units cannot cover the order.
        InventoryError: If the order carries no request size.
    """
    if order.status == FULFILLED:
        raise OrderAlreadyFulfilledError(order.id)
    n = requested_units(order)
    reserved = bucket.reserved_units if bucket is not None else 0
    if bucket is None or reserved < n:
        raise InsufficientInventoryError(order.key, n, reserved)
    _warn_if_unbalanced(bucket)

    now = clock.now()
    delta = InventoryDelta(
        order.blood_type, order.component, total_units=-n, reserved_units=-n
    )
    fulfilled = dataclasses.replace(order, status=FULFILLED, fulfilled_at=now)
    return Fulfillment(order=fulfilled, bucket=apply_delta(bucket, delta, now), delta=delta)


def receive_unit(
    bucket: Optional[InventoryBucket],
    blood_type: str,
    component: str,
    clock: Clock,
) -> BucketUpdate:
    """Add one donated unit, creating the bucket when it does not exist yet."""
    if bucket is None:
        bucket = InventoryBucket(
            blood_type=blood_type,
            component=component,
            min_threshold=DEFAULT_MIN_THRESHOLD,
        )
    delta = InventoryDelta(blood_type, component, total_units=1, available_units=1)
    return BucketUpdate(bucket=apply_delta(bucket, delta, clock.now()), delta=delta)


def expiry_date(component: str, collected_at: datetime) -> datetime:
    """Expiry of a unit of `component` collected at `collected_at`."""
    days = EXPIRY_DAYS.get(component, DEFAULT_EXPIRY_DAYS)
    return collected_at + timedelta(days=days)


def bag_number(clock: Clock, existing_units: int) -> str:
    """Bag number for a new unit: "BG<epoch millis>-<sequence>"."""
    millis = int(clock.now().timestamp() * 1000)
    return f"BG{millis}-{existing_units + 1}"


@chex.dataclass(frozen=True)
class AdvisorConfig:
    """Configuration for inventory recommendations.

    Attributes:
        optimal_ratio: Stock below `min_threshold * optimal_ratio` is flagged.
        restock_ratio: Target stock recommended as `min_threshold * restock_ratio`.
        pending_order_limit: Pending orders above this raise an alert.
        critical_priority: Recipients above this priority are critical.
    """

    optimal_ratio: float = 1.5
    restock_ratio: float = 2.0
    pending_order_limit: int = 5
    critical_priority: float = 80.0

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.optimal_ratio < 1:
            raise ValueError(f"optimal_ratio must be >= 1, got {self.optimal_ratio}")
        if self.pending_order_limit < 0:
            raise ValueError(
                f"pending_order_limit must be non-negative, got {self.pending_order_limit}"
            )


class Recommendation(NamedTuple):
    priority: str  # "high" or "medium"
    title: str
    description: str
    action: str


class OperationsSummary(NamedTuple):
    """Dashboard counters plus the recommendation list.

    Attributes:
        critical_recipients: Recipients above the critical priority.
        stock_alerts: Buckets below their minimum threshold.
        optimization_score: Share of capacity not sitting idle, in percent.
        recommendations: InventoryAdvisor output.
    """

    critical_recipients: int
    stock_alerts: int
    optimization_score: int
    recommendations: Tuple[Recommendation, ...]


class FulfillmentSummary(NamedTuple):
    """Outcome of one auto-fulfil pass.

    Attributes:
        fulfilled: Orders fulfilled.
        skipped: Orders left pending.
        total: Pending orders considered.
        orders: Every considered order in processing order, fulfilled ones
            carrying their new status.
        inventory: Bucket snapshot after the pass.
        deltas: Changes to persist, one per fulfilled order.
    """

    fulfilled: int
    skipped: int
    total: int
    orders: Tuple[Order, ...]
    inventory: Dict[BucketKey, InventoryBucket]
    deltas: Tuple[InventoryDelta, ...]
