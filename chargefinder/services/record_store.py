"""In-memory vehicle and station records."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from ..models.station import Station, StationUpdate
from ..models.vehicle import Vehicle, VehicleUpdate
from .geo_service import GeoService
from .providers.normalization import derive_status

DEFAULT_VEHICLE_ID = "default-vehicle"


def _seed_stations() -> List[Station]:
    rows: List[Dict[str, Any]] = [
        {
            "id": "station-1",
            "name": "Tesla Supercharger",
            "address": "1234 Pine Street, Seattle, WA 98101",
            "latitude": "47.6118",
            "longitude": "-122.3236",
            "total_ports": 8,
            "available_ports": 6,
            "power_kw": 150,
            "price_per_kwh": "$0.42",
            "connector_types": ["Tesla", "CCS"],
            "amenities": ["24/7 Access", "Covered Parking", "Restrooms", "WiFi Available"],
            "access_24h": True,
            "network_provider": "Tesla",
        },
        {
            "id": "station-2",
            "name": "EVgo Fast Charging",
            "address": "567 2nd Avenue, Seattle, WA 98104",
            "latitude": "47.6042",
            "longitude": "-122.3310",
            "total_ports": 4,
            "available_ports": 1,
            "power_kw": 100,
            "price_per_kwh": "$0.35",
            "connector_types": ["CCS", "CHAdeMO"],
            "amenities": ["24/7 Access", "Restrooms"],
            "access_24h": True,
            "network_provider": "EVgo",
        },
        {
            "id": "station-3",
            "name": "ChargePoint Network",
            "address": "890 Union Street, Seattle, WA 98101",
            "latitude": "47.6097",
            "longitude": "-122.3331",
            "total_ports": 6,
            "available_ports": 0,
            "power_kw": 50,
            "price_per_kwh": "$0.28",
            "connector_types": ["Type 2", "CCS"],
            "amenities": ["Covered Parking", "WiFi Available", "Free Parking"],
            "access_24h": False,
            "network_provider": "ChargePoint",
        },
        {
            "id": "station-4",
            "name": "Electrify America",
            "address": "1010 3rd Avenue, Seattle, WA 98154",
            "latitude": "47.5999",
            "longitude": "-122.3284",
            "total_ports": 6,
            "available_ports": 4,
            "power_kw": 350,
            "price_per_kwh": "$0.48",
            "connector_types": ["CCS", "CHAdeMO"],
            "amenities": ["24/7 Access", "Covered Parking", "Restrooms", "WiFi Available"],
            "access_24h": True,
            "network_provider": "Electrify America",
        },
    ]
    return [
        Station(
            **row,
            is_operational=True,
            status=derive_status(True, row["available_ports"], row["total_ports"]),
        )
        for row in rows
    ]


def _seed_vehicle() -> Vehicle:
    return Vehicle(
        id=DEFAULT_VEHICLE_ID,
        name="Tesla Model Y",
        battery_level=25,
        battery_capacity=100,
        range_miles=47,
        location="Downtown Seattle",
        latitude="47.6062",
        longitude="-122.3321",
        is_connected=True,
    )


class MemoryRecordStore:
    """Process-local store for the current vehicle and a small set of seeded stations.

    One instance is created at application startup and handed to request
    handlers; nothing here is shared through module globals.
    """

    def __init__(self, seed: bool = True) -> None:
        self._vehicles: Dict[str, Vehicle] = {}
        self._stations: Dict[str, Station] = {}
        if seed:
            vehicle = _seed_vehicle()
            self._vehicles[vehicle.id] = vehicle
            for station in _seed_stations():
                self._stations[station.id] = station

    async def get_vehicle(self, vehicle_id: str) -> Optional[Vehicle]:
        return self._vehicles.get(vehicle_id)

    async def get_current_vehicle(self) -> Optional[Vehicle]:
        return self._vehicles.get(DEFAULT_VEHICLE_ID)

    async def add_vehicle(self, vehicle: Vehicle) -> Vehicle:
        self._vehicles[vehicle.id] = vehicle
        return vehicle

    async def update_vehicle(self, vehicle_id: str, updates: VehicleUpdate) -> Optional[Vehicle]:
        """Apply the fields set in ``updates`` and refresh ``last_updated``."""
        vehicle = self._vehicles.get(vehicle_id)
        if vehicle is None:
            return None

        changes = updates.model_dump(exclude_unset=True)
        changes["last_updated"] = datetime.now(timezone.utc)
        updated = Vehicle(**{**vehicle.model_dump(), **changes})
        self._vehicles[vehicle_id] = updated
        return updated

    async def list_stations(self) -> List[Station]:
        return list(self._stations.values())

    async def get_charging_station(self, station_id: str) -> Optional[Station]:
        return self._stations.get(station_id)

    async def add_charging_station(self, station: Station) -> Station:
        self._stations[station.id] = station
        return station

    async def update_charging_station(self, station_id: str, updates: StationUpdate) -> Optional[Station]:
        """
        Apply a partial update to a stored station.

        The status is derived again from the resulting port counts and
        operational flag so it never contradicts them.

        Raises:
            pydantic.ValidationError: if the update leaves the station invalid
                (e.g. more available ports than total ports).
        """
        station = self._stations.get(station_id)
        if station is None:
            return None

        merged = {**station.model_dump(), **updates.model_dump(exclude_unset=True)}
        merged["status"] = derive_status(
            merged["is_operational"],
            merged["available_ports"],
            merged["total_ports"],
        )
        updated = Station(**merged)
        self._stations[station_id] = updated
        return updated

    async def get_nearby_stations(self, latitude: float, longitude: float, radius_miles: float = 50) -> List[Station]:
        """Stored stations within ``radius_miles``, nearest first."""
        with_distance = []
        for station in self._stations.values():
            distance = GeoService.distance_miles(
                latitude,
                longitude,
                float(station.latitude),
                float(station.longitude),
            )
            if distance <= radius_miles:
                with_distance.append((station, distance))

        with_distance.sort(key=lambda item: item[1])
        return [station for station, _ in with_distance]
