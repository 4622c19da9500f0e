"""Demand forecasting policy."""

import logging
from typing import Optional, Sequence

import numpy as np

from core.bands import round_half_up
from core.collaborators import Clock, RandomSource
from core.records import BLOOD_TYPES, InventoryBucket, Order

from .model import DemandRates, Forecast, ForecastConfig, Jitter

logger = logging.getLogger(__name__)


class DemandForecaster:
    """Project per-type demand from recent order volume.

    forecast = mean_units x day_factor x jitter x horizon_days

    The day factor comes from the clock (weekend vs weekday) and the jitter
    is one uniform draw per blood type from the random source, so pinning
    both collaborators makes the forecast reproducible.

    Example:
        >>> forecaster = DemandForecaster()
        >>> forecast = forecaster(orders, inventory, clock, JaxRandomSource(seed=0))
    """

    def __init__(self, config: Optional[ForecastConfig] = None) -> None:
        self.config = config if config is not None else ForecastConfig()

    def mean_demand(self, orders: Sequence[Order]) -> DemandRates:
        """Mean units per order for each blood type, in `BLOOD_TYPES` order.

        Only the last `history_window` matching orders count, in the order
        given (the sequence is not re-sorted by time). Orders without a
        request size count as `default_units`. Means are float64.
        """
        cfg = self.config
        rates = []
        for blood_type in BLOOD_TYPES:
            units = [
                cfg.default_units if order.units_requested is None else order.units_requested
                for order in orders
                if order.blood_type == blood_type
            ][-cfg.history_window:]
            rates.append(np.mean(units) if units else cfg.default_demand)
        return np.asarray(rates, dtype=np.float64)

    def day_factor(self, clock: Clock) -> float:
        # weekday(): Monday is 0, Saturday 5, Sunday 6
        if clock.now().weekday() >= 5:
            return self.config.weekend_factor
        return self.config.weekday_factor

    def __call__(
        self,
        orders: Sequence[Order],
        inventory: Sequence[InventoryBucket],
        clock: Clock,
        rng: RandomSource,
    ) -> Forecast:
        """Forecast demand for every blood type.

        Args:
            orders: Historical orders, most relevant last.
            inventory: Current inventory; accepted for symmetry with the
                other decisions and not used.
            clock: Source of the current date.
            rng: Source of the jitter draws.

        Returns:
            Forecast with per-type units and an insight message.
        """
        del inventory  # not part of the projection
        cfg = self.config
        rates = self.mean_demand(orders)
        factor = self.day_factor(clock)
        draws = rng.uniform(cfg.jitter_low, cfg.jitter_high, (len(BLOOD_TYPES),))
        jitter: Jitter = np.asarray(draws, dtype=np.float64)

        predictions = {}
        for i, blood_type in enumerate(BLOOD_TYPES):
            expected = float(rates[i]) * factor * float(jitter[i]) * cfg.horizon_days
            predictions[blood_type] = round_half_up(expected)

        high_demand = tuple(
            blood_type
            for blood_type in BLOOD_TYPES
            if predictions[blood_type] > cfg.high_demand_units
        )
        if high_demand:
            insight = (
                f"High demand predicted for {', '.join(high_demand)}. "
                "Consider increasing stock levels."
            )
        else:
            insight = "Demand levels appear normal. Monitor inventory closely."

        logger.debug("forecast from %d orders: %s", len(orders), predictions)
        return Forecast(predictions=predictions, high_demand=high_demand, insight=insight)
