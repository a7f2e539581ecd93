"""Adapters turning external charging-station registries into canonical stations."""

from .availability import AvailabilityEstimator, FixedAvailabilityEstimator, RandomAvailabilityEstimator
from .base import ProviderError, StationProvider, fetch_json
from .nrel import NrelProvider
from .open_charge_map import OpenChargeMapProvider

__all__ = [
    "AvailabilityEstimator",
    "FixedAvailabilityEstimator",
    "RandomAvailabilityEstimator",
    "ProviderError",
    "StationProvider",
    "fetch_json",
    "NrelProvider",
    "OpenChargeMapProvider",
]
