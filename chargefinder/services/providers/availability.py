"""Synthetic availability estimation.

None of the registries we read publish live occupancy, so free ports are
estimated from the port count. The numbers are a modelled approximation and
must never be presented as sensor data.
"""

from __future__ import annotations

import math
import random
from typing import Optional, Protocol


class AvailabilityEstimator(Protocol):
    def estimate(self, total_ports: int, is_operational: bool) -> int:
        ...


class RandomAvailabilityEstimator:
    """Estimate free ports as ``floor(total * rate)`` with ``rate`` drawn uniformly from a band."""

    def __init__(self, min_rate: float, max_rate: float, rng: Optional[random.Random] = None) -> None:
        if not 0.0 <= min_rate <= max_rate <= 1.0:
            raise ValueError(f"invalid availability band [{min_rate}, {max_rate}]")
        self.min_rate = min_rate
        self.max_rate = max_rate
        self._rng = rng or random.Random()

    def estimate(self, total_ports: int, is_operational: bool) -> int:
        if not is_operational or total_ports <= 0:
            return 0
        rate = self._rng.uniform(self.min_rate, self.max_rate)
        return min(total_ports, math.floor(total_ports * rate))


class FixedAvailabilityEstimator:
    """Deterministic estimator applying a constant rate."""

    def __init__(self, rate: float) -> None:
        if not 0.0 <= rate <= 1.0:
            raise ValueError(f"invalid availability rate {rate}")
        self.rate = rate

    def estimate(self, total_ports: int, is_operational: bool) -> int:
        if not is_operational or total_ports <= 0:
            return 0
        return math.floor(total_ports * self.rate)
