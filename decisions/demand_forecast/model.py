"""Demand forecast configuration and result type."""

from typing import Dict, NamedTuple, Tuple

import chex
import numpy as np
from jaxtyping import Float

# Type aliases (float64; jax draws are widened before use)
DemandRates = Float[np.ndarray, "n_blood_types"]  # mean units per order
Jitter = Float[np.ndarray, "n_blood_types"]


@chex.dataclass(frozen=True)
class ForecastConfig:
    """Configuration for demand forecasting.

    Attributes:
        history_window: Most recent matching orders averaged per type.
        default_demand: Mean units assumed for a type with no history.
        default_units: Units counted for an order without a request size.
        weekend_factor: Multiplier applied on Saturday and Sunday.
        weekday_factor: Multiplier applied Monday to Friday.
        jitter_low: Lower bound of the uniform jitter factor.
        jitter_high: Upper bound of the uniform jitter factor.
        horizon_days: Forecast horizon in days.
        high_demand_units: Forecasts above this are flagged as high demand.
    """

    history_window: int = 30
    default_demand: float = 5.0
    default_units: int = 1
    weekend_factor: float = 0.8
    weekday_factor: float = 1.1
    jitter_low: float = 0.8
    jitter_high: float = 1.2
    horizon_days: int = 7
    high_demand_units: float = 15.0

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.history_window < 1:
            raise ValueError(f"history_window must be >= 1, got {self.history_window}")
        if self.horizon_days < 1:
            raise ValueError(f"horizon_days must be >= 1, got {self.horizon_days}")
        if self.jitter_low > self.jitter_high:
            raise ValueError(
                f"jitter_low ({self.jitter_low}) must be <= jitter_high "
                f"({self.jitter_high})"
            )


class Forecast(NamedTuple):
    """Projected demand over the horizon.

    Attributes:
        predictions: Blood type -> forecast units.
        high_demand: Types whose forecast exceeds the high-demand level.
        insight: Human-readable summary.
    """

    predictions: Dict[str, int]
    high_demand: Tuple[str, ...]
    insight: str
