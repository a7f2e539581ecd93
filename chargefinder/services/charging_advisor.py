"""Battery-aware charging recommendations."""

from __future__ import annotations

from typing import List, Optional

from ..config import settings
from ..models.station import StationWithDistance
from ..models.vehicle import BatteryState, ChargingRecommendation, Vehicle


class ChargingAdvisor:
    """Pick stations for the vehicle from an already ranked list."""

    def __init__(
        self,
        low_threshold: Optional[int] = None,
        critical_threshold: Optional[int] = None,
    ) -> None:
        self.low_threshold = settings.low_battery_threshold if low_threshold is None else low_threshold
        self.critical_threshold = (
            settings.critical_battery_threshold if critical_threshold is None else critical_threshold
        )

    def battery_state(self, battery_level: int) -> BatteryState:
        if battery_level <= self.critical_threshold:
            return BatteryState.CRITICAL
        if battery_level <= self.low_threshold:
            return BatteryState.LOW
        return BatteryState.OK

    def recommend(self, vehicle: Vehicle, ranked: List[StationWithDistance]) -> ChargingRecommendation:
        """
        Build a recommendation for ``vehicle``.

        Args:
            vehicle: Current vehicle state
            ranked: Stations sorted nearest first, as produced by FilterRankEngine

        Returns:
            ChargingRecommendation with the nearest station, the nearest one
            with free ports and the number of stations within remaining range.
        """
        state = self.battery_state(vehicle.battery_level)

        nearest = ranked[0] if ranked else None
        nearest_available = next((station for station in ranked if station.available_ports > 0), None)
        reachable_count = sum(
            1 for station in ranked if station.distance is not None and station.distance <= vehicle.range_miles
        )

        return ChargingRecommendation(
            vehicle_id=vehicle.id,
            battery_level=vehicle.battery_level,
            range_miles=vehicle.range_miles,
            battery_state=state,
            alert=state is not BatteryState.OK,
            nearest_station=nearest,
            nearest_available_station=nearest_available,
            reachable_count=reachable_count,
            message=self._message(vehicle, state, nearest_available),
        )

    @staticmethod
    def _message(
        vehicle: Vehicle,
        state: BatteryState,
        nearest_available: Optional[StationWithDistance],
    ) -> str:
        if state is BatteryState.OK:
            return f"Battery at {vehicle.battery_level}%, {vehicle.range_miles} miles of range remaining."

        prefix = "Battery critically low" if state is BatteryState.CRITICAL else "Low battery"
        if nearest_available is None:
            return f"{prefix} ({vehicle.battery_level}%). No station with free ports found nearby."

        distance = (
            f" {nearest_available.distance:.1f} mi away" if nearest_available.distance is not None else ""
        )
        return (
            f"{prefix} ({vehicle.battery_level}%). Nearest available station: "
            f"{nearest_available.name}{distance}, {nearest_available.available_ports} ports free."
        )
