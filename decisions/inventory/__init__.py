"""Inventory problem.

This module implements inventory accounting and the decisions built on it:
- Unit receipt, order reservation and order fulfilment as delta updates
- Rule-based operational recommendations and dashboard counters
- Greedy, priority-ordered auto-fulfilment of pending orders
- Per-bucket locks serialising read-modify-write passes through a bucket store

Example:
    >>> from decisions.inventory import AutoFulfillScheduler, MemoryBucketStore
    >>> store = MemoryBucketStore(inventory)
    >>> summary = AutoFulfillScheduler().run(orders, recipients_by_id, store, clock)
"""

from decisions.inventory.model import (
    EXPIRY_DAYS,
    InventoryError,
    InsufficientInventoryError,
    OrderAlreadyFulfilledError,
    InventoryDelta,
    BucketUpdate,
    Fulfillment,
    AdvisorConfig,
    Recommendation,
    OperationsSummary,
    FulfillmentSummary,
    apply_delta,
    requested_units,
    reserve_for_order,
    fulfill_order,
    receive_unit,
    expiry_date,
    bag_number,
)
from decisions.inventory.locks import BucketLocks
from decisions.inventory.store import (
    BucketStore,
    MemoryBucketStore,
    load_bucket,
    reserve_in_store,
    fulfill_in_store,
)
from decisions.inventory.policy import (
    InventoryAdvisor,
    AutoFulfillScheduler,
    count_critical,
    summarize_operations,
)

__all__ = [
    # Model
    "EXPIRY_DAYS",
    "InventoryError",
    "InsufficientInventoryError",
    "OrderAlreadyFulfilledError",
    "InventoryDelta",
    "BucketUpdate",
    "Fulfillment",
    "AdvisorConfig",
    "Recommendation",
    "OperationsSummary",
    "FulfillmentSummary",
    "apply_delta",
    "requested_units",
    "reserve_for_order",
    "fulfill_order",
    "receive_unit",
    "expiry_date",
    "bag_number",
    # Locks and storage
    "BucketLocks",
    "BucketStore",
    "MemoryBucketStore",
    "load_bucket",
    "reserve_in_store",
    "fulfill_in_store",
    # Policies
    "InventoryAdvisor",
    "AutoFulfillScheduler",
    "count_critical",
    "summarize_operations",
]
