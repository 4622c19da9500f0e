"""Demand forecasting problem.

Projects 7-day demand for each of the 8 ABO/Rh blood types from recent
order volume, a weekday/weekend factor and a bounded random jitter.

Example:
    >>> from core import FrozenClock, JaxRandomSource
    >>> from decisions.demand_forecast import DemandForecaster
    >>> forecaster = DemandForecaster()
    >>> forecast = forecaster(orders, inventory, clock, JaxRandomSource(seed=42))
    >>> forecast.predictions["O-"], forecast.insight
"""

from decisions.demand_forecast.model import (
    ForecastConfig,
    Forecast,
    DemandRates,
    Jitter,
)
from decisions.demand_forecast.policy import DemandForecaster

__all__ = [
    "ForecastConfig",
    "Forecast",
    "DemandRates",
    "Jitter",
    "DemandForecaster",
]
