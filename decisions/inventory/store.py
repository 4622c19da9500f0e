"""Bucket storage seam for locked read-modify-write updates.

The accounting functions in `model.py` are pure: they take a bucket
snapshot and return the replacement. A snapshot read before the bucket
lock is taken may already be stale, so writers that share buckets go
through a `BucketStore` here. The bucket is loaded, decided on and saved
while its lock is held.
"""

import logging
from typing import Dict, Iterable, Optional, Protocol, Sequence

from core.collaborators import Clock
from core.records import BucketKey, InventoryBucket, Order

from .locks import BucketLocks
from .model import BucketUpdate, Fulfillment, fulfill_order, reserve_for_order

logger = logging.getLogger(__name__)


class BucketStore(Protocol):
    """Persistence for inventory buckets, owned by the caller."""

    def load(self, keys: Sequence[BucketKey]) -> Sequence[InventoryBucket]:
        """Current buckets for `keys`; keys without a bucket are left out."""
        ...

    def save(self, buckets: Sequence[InventoryBucket]) -> None:
        """Replace the stored buckets with the same keys."""
        ...


class MemoryBucketStore:
    """In-process `BucketStore` backed by a dict.

    Example:
        >>> store = MemoryBucketStore([InventoryBucket("O-", "RBC")])
        >>> store.get(("O-", "RBC")).available_units
        0
    """

    def __init__(self, buckets: Iterable[InventoryBucket] = ()) -> None:
        self._buckets: Dict[BucketKey, InventoryBucket] = {b.key: b for b in buckets}

    def get(self, key: BucketKey) -> Optional[InventoryBucket]:
        return self._buckets.get(key)

    def load(self, keys: Sequence[BucketKey]) -> Sequence[InventoryBucket]:
        return [self._buckets[key] for key in dict.fromkeys(keys) if key in self._buckets]

    def save(self, buckets: Sequence[InventoryBucket]) -> None:
        for bucket in buckets:
            self._buckets[bucket.key] = bucket


def load_bucket(store: BucketStore, key: BucketKey) -> Optional[InventoryBucket]:
    for bucket in store.load([key]):
        if bucket.key == key:
            return bucket
    return None


def reserve_in_store(
    order: Order,
    store: BucketStore,
    locks: BucketLocks,
    clock: Clock,
) -> BucketUpdate:
    """Reserve an order's units, reading and writing the bucket under its lock.

    Raises:
        InsufficientInventoryError: As `reserve_for_order`; nothing is saved.
    """
    with locks.hold(order.key):
        update = reserve_for_order(load_bucket(store, order.key), order, clock)
        store.save([update.bucket])
    return update


def fulfill_in_store(
    order: Order,
    store: BucketStore,
    locks: BucketLocks,
    clock: Clock,
) -> Fulfillment:
    """Fulfil an order, reading and writing its bucket under the bucket lock.

    The returned order carries the fulfilled status; persisting it is left
    to the caller's order records.

    Raises:
        OrderAlreadyFulfilledError: As `fulfill_order`.
        InsufficientInventoryError: As `fulfill_order`; nothing is saved.
    """
    with locks.hold(order.key):
        result = fulfill_order(order, load_bucket(store, order.key), clock)
        store.save([result.bucket])
    logger.info("fulfilled order %s from %s %s", order.id, *order.key)
    return result
