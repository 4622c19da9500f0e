"""Tests for the demand forecasting problem."""

from datetime import datetime, timezone

import numpy as np
import pytest

from core import (
    BLOOD_TYPES,
    FixedRandomSource,
    FrozenClock,
    InventoryBucket,
    JaxRandomSource,
    Order,
)
from decisions.demand_forecast import DemandForecaster, ForecastConfig

MONDAY = datetime(2024, 3, 4, 9, 0, tzinfo=timezone.utc)
SATURDAY = datetime(2024, 3, 9, 9, 0, tzinfo=timezone.utc)
SUNDAY = datetime(2024, 3, 10, 9, 0, tzinfo=timezone.utc)


def make_orders(blood_type: str, units: list) -> list:
    return [
        Order(
            id=f"{blood_type}-{i}",
            recipient_id=None,
            blood_type=blood_type,
            component="RBC",
            units_requested=n,
        )
        for i, n in enumerate(units)
    ]


# ============================================================================
# Configuration Tests
# ============================================================================


def test_config_default_values() -> None:
    """Test that config has the documented defaults."""
    config = ForecastConfig()

    assert config.history_window == 30
    assert config.default_demand == 5.0
    assert config.horizon_days == 7
    assert (config.jitter_low, config.jitter_high) == (0.8, 1.2)


def test_config_validation() -> None:
    """Test that config validates parameters."""
    with pytest.raises(ValueError, match="history_window"):
        ForecastConfig(history_window=0)

    with pytest.raises(ValueError, match="jitter_low"):
        ForecastConfig(jitter_low=1.5, jitter_high=1.0)


# ============================================================================
# Forecaster Tests
# ============================================================================


def test_mean_demand_defaults_without_history() -> None:
    """Test that types without orders fall back to the default demand."""
    rates = DemandForecaster().mean_demand(make_orders("A+", [2, 4]))

    assert rates.shape == (len(BLOOD_TYPES),)
    assert float(rates[BLOOD_TYPES.index("A+")]) == 3.0
    assert float(rates[BLOOD_TYPES.index("O-")]) == 5.0


def test_mean_demand_uses_last_window() -> None:
    """Test that only the last 30 matching orders are averaged."""
    orders = make_orders("O-", [100] + [2] * 30)

    rates = DemandForecaster().mean_demand(orders)

    assert float(rates[BLOOD_TYPES.index("O-")]) == 2.0


def test_mean_demand_counts_unsized_orders_as_default_units() -> None:
    """Test that a historical order without a size counts as one unit."""
    rates = DemandForecaster().mean_demand(make_orders("A+", [None, 3]))

    assert float(rates[BLOOD_TYPES.index("A+")]) == 2.0


def test_mean_demand_full_precision() -> None:
    """Test that means are float64, so 5/3 is not truncated."""
    rates = DemandForecaster().mean_demand(make_orders("A-", [1, 2, 2]))

    assert rates.dtype == np.float64
    assert float(rates[BLOOD_TYPES.index("A-")]) == 5 / 3


@pytest.mark.parametrize("day, factor", [(MONDAY, 1.1), (SATURDAY, 0.8), (SUNDAY, 0.8)])
def test_day_factor(day: datetime, factor: float) -> None:
    """Test weekend and weekday multipliers."""
    assert DemandForecaster().day_factor(FrozenClock(day)) == factor


def test_weekend_forecast_without_history() -> None:
    """Test 5 units x 0.8 x 7 days for every type."""
    forecast = DemandForecaster()([], [], FrozenClock(SATURDAY), FixedRandomSource(1.0))

    assert forecast.predictions == {t: 28 for t in BLOOD_TYPES}
    assert forecast.high_demand == BLOOD_TYPES
    assert forecast.insight.startswith("High demand predicted for O-, O+")


def test_weekday_forecast_from_history() -> None:
    """Test 2 units x 1.1 x 7 days rounds to 15, which is not high demand."""
    config = ForecastConfig(default_demand=1.0)
    orders = make_orders("B-", [1, 3])

    forecast = DemandForecaster(config)(orders, [], FrozenClock(MONDAY), FixedRandomSource(1.0))

    assert forecast.predictions["B-"] == 15
    assert forecast.predictions["AB+"] == 8  # 1 x 1.1 x 7 = 7.7
    assert forecast.high_demand == ()
    assert forecast.insight == "Demand levels appear normal. Monitor inventory closely."


def test_jitter_is_applied() -> None:
    """Test that the jitter draw scales the forecast."""
    config = ForecastConfig(default_demand=1.0)
    orders = make_orders("B-", [2, 2])

    forecast = DemandForecaster(config)(orders, [], FrozenClock(MONDAY), FixedRandomSource(1.2))

    assert forecast.predictions["B-"] == 18  # 2 x 1.1 x 1.2 x 7 = 18.48
    assert forecast.high_demand == ("B-",)
    assert forecast.insight == (
        "High demand predicted for B-. Consider increasing stock levels."
    )


def test_half_unit_forecast_rounds_up() -> None:
    """Test that 5/3 x 0.9 x 3 days is exactly 4.5 and rounds up to 5."""
    config = ForecastConfig(weekday_factor=1.0, horizon_days=3)
    orders = make_orders("A-", [1, 2, 2])

    forecast = DemandForecaster(config)(orders, [], FrozenClock(MONDAY), FixedRandomSource(0.9))

    assert forecast.predictions["A-"] == 5


def test_inventory_does_not_change_forecast() -> None:
    """Test that the inventory argument is not part of the projection."""
    forecaster = DemandForecaster()
    clock = FrozenClock(MONDAY)
    inventory = [InventoryBucket("O-", "RBC", total_units=50, available_units=50)]

    with_stock = forecaster([], inventory, clock, FixedRandomSource(1.0))
    without_stock = forecaster([], [], clock, FixedRandomSource(1.0))

    assert with_stock == without_stock


def test_forecast_deterministic_when_pinned() -> None:
    """Test identical forecasts under the same clock and seed."""
    orders = make_orders("A+", [1, 2, 3]) + make_orders("O-", [4, 6])
    clock = FrozenClock(MONDAY)

    first = DemandForecaster()(orders, [], clock, JaxRandomSource(seed=7))
    second = DemandForecaster()(orders, [], clock, JaxRandomSource(seed=7))

    assert first == second


def test_forecast_within_jitter_bounds() -> None:
    """Test that live jitter stays inside [0.8, 1.2]."""
    forecast = DemandForecaster()([], [], FrozenClock(SATURDAY), JaxRandomSource(seed=3))

    for units in forecast.predictions.values():
        # 5 x 0.8 x [0.8, 1.2] x 7 = [22.4, 33.6]
        assert 22 <= units <= 34


def test_fixed_source_shape() -> None:
    """Test that the fixed source returns one value per type."""
    draws = FixedRandomSource(1.0).uniform(0.8, 1.2, (len(BLOOD_TYPES),))

    assert np.all(draws == 1.0)
    assert draws.shape == (8,)
