"""Data models for EV Charge Finder."""

from .search import ALL_CONNECTORS, Location, SearchFilters
from .station import Station, StationStatus, StationUpdate, StationWithDistance
from .vehicle import BatteryState, ChargingRecommendation, Vehicle, VehicleUpdate

__all__ = [
    "ALL_CONNECTORS",
    "Location",
    "SearchFilters",
    "Station",
    "StationStatus",
    "StationUpdate",
    "StationWithDistance",
    "BatteryState",
    "ChargingRecommendation",
    "Vehicle",
    "VehicleUpdate",
]
