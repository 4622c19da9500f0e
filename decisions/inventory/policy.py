"""Inventory decision policies.

- InventoryAdvisor: rule-based operational recommendations
- summarize_operations: dashboard counters with the recommendations
- AutoFulfillScheduler: greedy, priority-ordered admission control over
  reserved stock
"""

import logging
from typing import Dict, List, Mapping, Optional, Sequence

from core.bands import round_half_up
from core.collaborators import Clock
from core.records import BucketKey, InventoryBucket, Order, Recipient

from .locks import BucketLocks
from .model import (
    AdvisorConfig,
    FulfillmentSummary,
    InventoryDelta,
    OperationsSummary,
    Recommendation,
    fulfill_order,
)
from .store import BucketStore

logger = logging.getLogger(__name__)


class InventoryAdvisor:
    """Emit recommendations from inventory, orders and recipients.

    Rules are independent and non-exclusive, and are emitted in a fixed
    order:
    1. Per bucket, in snapshot order: critical low stock, else below optimal
    2. Too many pending orders (one aggregate)
    3. Critical recipients waiting (one aggregate)

    Example:
        >>> advisor = InventoryAdvisor()
        >>> for rec in advisor(inventory, orders, recipients):
        ...     print(rec.priority, rec.title)
    """

    def __init__(self, config: Optional[AdvisorConfig] = None) -> None:
        self.config = config if config is not None else AdvisorConfig()

    def __call__(
        self,
        inventory: Sequence[InventoryBucket],
        orders: Sequence[Order],
        recipients: Sequence[Recipient],
    ) -> List[Recommendation]:
        cfg = self.config
        recommendations: List[Recommendation] = []

        for bucket in inventory:
            label = f"{bucket.blood_type} {bucket.component}"
            if bucket.available_units < bucket.min_threshold:
                recommendations.append(Recommendation(
                    priority="high",
                    title=f"Critical: Low {label}",
                    description=(
                        f"Only {bucket.available_units} units available "
                        f"(min: {bucket.min_threshold})"
                    ),
                    action=f"Initiate emergency procurement for {label}",
                ))
            elif bucket.available_units < bucket.min_threshold * cfg.optimal_ratio:
                target = bucket.min_threshold * cfg.restock_ratio
                recommendations.append(Recommendation(
                    priority="medium",
                    title=f"Warning: {label} below optimal",
                    description=(
                        f"Current: {bucket.available_units} units, "
                        f"recommend: {_format_units(target)}"
                    ),
                    action=f"Schedule donor drive for {bucket.blood_type}",
                ))

        pending = sum(1 for order in orders if order.is_pending)
        if pending > cfg.pending_order_limit:
            recommendations.append(Recommendation(
                priority="high",
                title=f"{pending} Pending Orders",
                description="Multiple orders awaiting fulfillment",
                action="Review and prioritize based on recipient urgency",
            ))

        critical = count_critical(recipients, cfg.critical_priority)
        if critical > 0:
            recommendations.append(Recommendation(
                priority="high",
                title=f"{critical} Critical Recipients",
                description="High-priority cases require immediate attention",
                action="Ensure blood availability for critical cases",
            ))

        return recommendations


def _format_units(units: float) -> str:
    # whole targets print without a decimal point or exponent
    if float(units).is_integer():
        return str(int(units))
    return str(units)


def count_critical(recipients: Sequence[Recipient], threshold: float) -> int:
    """Recipients whose predicted priority exceeds `threshold`."""
    return sum(
        1
        for r in recipients
        if r.predicted_priority is not None and r.predicted_priority > threshold
    )


def summarize_operations(
    inventory: Sequence[InventoryBucket],
    orders: Sequence[Order],
    recipients: Sequence[Recipient],
    advisor: Optional[InventoryAdvisor] = None,
) -> OperationsSummary:
    """Dashboard counters plus the advisor's recommendations.

    The optimization score is the share of total units that are not
    sitting available (i.e. reserved), as a rounded percentage; 0 when the
    inventory holds no units.
    """
    advisor = advisor if advisor is not None else InventoryAdvisor()
    capacity = sum(b.total_units for b in inventory)
    utilised = sum(b.total_units - b.available_units for b in inventory)
    score = round_half_up(utilised / capacity * 100) if capacity > 0 else 0
    return OperationsSummary(
        critical_recipients=count_critical(recipients, advisor.config.critical_priority),
        stock_alerts=sum(1 for b in inventory if b.available_units < b.min_threshold),
        optimization_score=score,
        recommendations=tuple(advisor(inventory, orders, recipients)),
    )


class AutoFulfillScheduler:
    """Greedy admission control of pending orders against reserved stock.

    1. Stable-sort pending orders by their recipient's predicted priority,
       highest first (missing or unscored recipients count as 0).
    2. Single pass: fulfil an order when its bucket's reserved units cover
       the full request, otherwise skip it.

    Skipped orders are never revisited in the same pass and orders are
    never partially fulfilled. Calling the scheduler runs the pass over a
    snapshot; `run` reads and writes the buckets through a store while
    holding their locks.

    Example:
        >>> scheduler = AutoFulfillScheduler(locks=shared_locks)
        >>> summary = scheduler.run(pending, recipients_by_id, store, clock)
        >>> summary.fulfilled, summary.skipped, summary.total
    """

    def __init__(self, locks: Optional[BucketLocks] = None) -> None:
        """Initialize scheduler.

        Args:
            locks: Lock registry shared with other inventory writers; a
                private registry is used when omitted.
        """
        self.locks = locks if locks is not None else BucketLocks()

    @staticmethod
    def priority_of(order: Order, recipients: Mapping[str, Recipient]) -> float:
        recipient = recipients.get(order.recipient_id) if order.recipient_id else None
        if recipient is None or recipient.predicted_priority is None:
            return 0
        return recipient.predicted_priority

    def __call__(
        self,
        orders: Sequence[Order],
        recipients: Mapping[str, Recipient],
        inventory: Sequence[InventoryBucket],
        clock: Clock,
    ) -> FulfillmentSummary:
        """Run one admission pass over an inventory snapshot.

        Nothing is locked or written. The snapshot must not be stale, so
        callers sharing buckets with other writers use `run` instead.

        Args:
            orders: Orders in retrieval order; only pending ones are considered.
            recipients: Recipients by id.
            inventory: Current buckets.
            clock: Source of `fulfilled_at`.

        Returns:
            Counts, the processed orders, the post-pass buckets and deltas.
        """
        pending = [order for order in orders if order.is_pending]
        ranked = sorted(
            pending, key=lambda order: self.priority_of(order, recipients), reverse=True
        )
        buckets: Dict[BucketKey, InventoryBucket] = {b.key: b for b in inventory}

        processed: List[Order] = []
        deltas: List[InventoryDelta] = []
        fulfilled = skipped = 0
        for order in ranked:
            bucket = buckets.get(order.key)
            if (
                bucket is None
                or order.units_requested is None
                or bucket.reserved_units < order.units_requested
            ):
                skipped += 1
                processed.append(order)
                continue
            result = fulfill_order(order, bucket, clock)
            buckets[order.key] = result.bucket
            deltas.append(result.delta)
            processed.append(result.order)
            fulfilled += 1

        logger.info(
            "auto-fulfill pass: %d fulfilled, %d skipped of %d pending",
            fulfilled,
            skipped,
            len(pending),
        )
        return FulfillmentSummary(
            fulfilled=fulfilled,
            skipped=skipped,
            total=len(pending),
            orders=tuple(processed),
            inventory=buckets,
            deltas=tuple(deltas),
        )

    def run(
        self,
        orders: Sequence[Order],
        recipients: Mapping[str, Recipient],
        store: BucketStore,
        clock: Clock,
    ) -> FulfillmentSummary:
        """Run one admission pass against `store` under the bucket locks.

        The buckets of every pending order are locked, then loaded, decided
        on and the changed ones saved before the locks are released, so two
        passes can never both draw on the same reserved units.

        Returns:
            As `__call__`; `inventory` holds the buckets loaded for the pass.
        """
        keys = sorted({order.key for order in orders if order.is_pending})
        with self.locks.hold(*keys):
            summary = self(orders, recipients, store.load(keys), clock)
            changed = dict.fromkeys(delta.key for delta in summary.deltas)
            if changed:
                store.save([summary.inventory[key] for key in changed])
        return summary
