"""Tests for clocks, random sources and band helpers."""

from datetime import datetime, timedelta, timezone

import jax.numpy as jnp
import numpy as np

from core import (
    Band,
    FixedRandomSource,
    FrozenClock,
    JaxRandomSource,
    OutsideBand,
    SystemClock,
    as_utc,
    clamp,
    first_match,
    round_half_up,
)

NOW = datetime(2024, 3, 4, 12, 0, tzinfo=timezone.utc)


# ============================================================================
# Clock Tests
# ============================================================================


def test_frozen_clock_is_pinned() -> None:
    """Test that a frozen clock always reports the same instant."""
    clock = FrozenClock(NOW)

    assert clock.now() == NOW
    assert clock.now() == NOW


def test_frozen_clock_advance() -> None:
    """Test that advance moves the clock forward."""
    clock = FrozenClock(NOW)
    clock.advance(timedelta(hours=3))

    assert clock.now() == NOW + timedelta(hours=3)


def test_system_clock_is_timezone_aware() -> None:
    """Test that the system clock reports UTC."""
    assert SystemClock().now().tzinfo is timezone.utc


def test_as_utc_reads_naive_as_utc() -> None:
    """Test that naive datetimes gain UTC and aware ones are kept."""
    naive = datetime(2024, 3, 4, 12, 0)
    other_zone = datetime(2024, 3, 4, 14, 0, tzinfo=timezone(timedelta(hours=2)))

    assert as_utc(naive) == NOW
    assert as_utc(naive).tzinfo is timezone.utc
    assert as_utc(other_zone) is other_zone


# ============================================================================
# Random Source Tests
# ============================================================================


def test_jax_source_reproducible() -> None:
    """Test that equal seeds yield equal draws."""
    a = JaxRandomSource(seed=11)
    b = JaxRandomSource(seed=11)

    assert jnp.array_equal(a.uniform(0.0, 1.0, (4,)), b.uniform(0.0, 1.0, (4,)))
    assert jnp.array_equal(a.uniform(0.0, 1.0, (4,)), b.uniform(0.0, 1.0, (4,)))


def test_jax_source_advances_key() -> None:
    """Test that successive draws differ."""
    source = JaxRandomSource(seed=11)

    first = source.uniform(0.0, 1.0, (4,))
    second = source.uniform(0.0, 1.0, (4,))

    assert not jnp.array_equal(first, second)


def test_jax_source_bounds() -> None:
    """Test that draws stay within the requested range."""
    draws = JaxRandomSource(seed=0).uniform(0.8, 1.2, (1000,))

    assert jnp.all(draws >= 0.8)
    assert jnp.all(draws < 1.2)


def test_unseeded_source_draws() -> None:
    """Test that a live source can be built without a seed."""
    assert JaxRandomSource().uniform(0.0, 1.0).shape == ()


def test_fixed_source_ignores_range() -> None:
    """Test that the fixed source returns its value at full precision."""
    draws = FixedRandomSource(0.9).uniform(0.0, 0.1, (3,))

    assert draws.dtype == np.float64
    assert [float(d) for d in draws] == [0.9, 0.9, 0.9]


# ============================================================================
# Band Tests
# ============================================================================


def test_first_match_order() -> None:
    """Test that the first triggering band wins."""
    bands = (Band("<", 6, 25), Band("<", 7, 22))

    assert first_match(bands, 5) == 25.0
    assert first_match(bands, 6.5) == 22.0
    assert first_match(bands, 7) == 0.0


def test_missing_reading_never_triggers() -> None:
    """Test that None readings contribute nothing."""
    assert first_match((Band(">", 75, 9), OutsideBand(50, 120, 15)), None) == 0.0


def test_outside_band() -> None:
    """Test both edges of an outside band."""
    band = OutsideBand(50, 120, 15)

    assert band.triggers(49)
    assert band.triggers(121)
    assert not band.triggers(50)
    assert not band.triggers(120)


def test_clamp_and_rounding() -> None:
    """Test score clamping and half-up rounding."""
    assert clamp(-5) == 0.0
    assert clamp(130) == 100.0
    assert round_half_up(12.5) == 13
    assert round_half_up(97.5) == 98
    assert round_half_up(12.49) == 12
