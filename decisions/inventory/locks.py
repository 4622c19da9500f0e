"""Per-bucket locks for read-modify-write passes over inventory."""

import contextlib
import threading
from typing import Dict, Iterator

from core.records import BucketKey


class BucketLocks:
    """One `threading.Lock` per (blood_type, component) bucket.

    Reservation, fulfilment and auto-fulfil passes hold the locks of every
    bucket they read and write. Locks are taken in sorted key order so two
    passes over overlapping buckets cannot deadlock.

    The bucket must be read after the lock is taken; `reserve_in_store`,
    `fulfill_in_store` and `AutoFulfillScheduler.run` do this.

    Example:
        >>> locks = BucketLocks()
        >>> with locks.hold(("O-", "RBC")):
        ...     bucket = load_bucket(store, ("O-", "RBC"))
        ...     update = reserve_for_order(bucket, order, clock)
        ...     store.save([update.bucket])
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: Dict[BucketKey, threading.Lock] = {}

    def lock_for(self, key: BucketKey) -> threading.Lock:
        with self._guard:
            return self._locks.setdefault(key, threading.Lock())

    @contextlib.contextmanager
    def hold(self, *keys: BucketKey) -> Iterator[None]:
        """Hold the locks of `keys` for the duration of the block."""
        with contextlib.ExitStack() as stack:
            for key in sorted(set(keys)):
                stack.enter_context(self.lock_for(key))
            yield
