# core/collaborators.py
from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Protocol, Tuple

import jax
import numpy as np
from jaxtyping import Array, Float

PRNGKey = jax.Array  # alias for readability
Shape = Tuple[int, ...]


class Clock(Protocol):
    def now(self) -> datetime: ...


class RandomSource(Protocol):
    def uniform(self, low: float, high: float, shape: Shape = ()) -> Float[Array, "..."]: ...


def as_utc(instant: datetime) -> datetime:
    """Read a naive datetime as UTC; aware datetimes are returned unchanged."""
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant


class SystemClock:
    """Wall clock in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FrozenClock:
    """Clock pinned to a fixed instant; `advance` moves it forward."""

    def __init__(self, instant: datetime):
        self.instant = instant

    def now(self) -> datetime:
        return self.instant

    def advance(self, delta) -> None:
        self.instant = self.instant + delta


class JaxRandomSource:
    """Uniform draws from a `jax.random` key that is split on every call.

    Two sources built from the same seed yield the same sequence of draws.
    Without a seed the key is derived from the current time.
    """

    def __init__(self, seed: int | None = None):
        if seed is None:
            seed = time.time_ns() % (2**31)
        self.key: PRNGKey = jax.random.PRNGKey(seed)

    def uniform(self, low: float, high: float, shape: Shape = ()) -> Float[Array, "..."]:
        self.key, sub = jax.random.split(self.key)
        return jax.random.uniform(sub, shape, minval=low, maxval=high)


class FixedRandomSource:
    """Returns `value` for every draw, ignoring the requested range.

    Draws are float64, so a value such as 0.9 comes back exactly.
    """

    def __init__(self, value: float):
        self.value = value

    def uniform(self, low: float, high: float, shape: Shape = ()) -> Float[np.ndarray, "..."]:
        del low, high  # deterministic
        return np.full(shape, self.value, dtype=np.float64)
