"""Apply user search criteria to candidate stations and rank them by distance."""

from __future__ import annotations

import math
from typing import Callable, Iterable, List, Optional, Tuple

from ..config import settings
from ..models.search import ALL_CONNECTORS, Location, SearchFilters
from ..models.station import Station, StationWithDistance
from .geo_service import GeoService
from .providers.normalization import FAST_CHARGING_KW

StationPredicate = Callable[[Station], bool]


class FilterRankEngine:
    """Filter, annotate with distance and sort stations for presentation."""

    def __init__(self, average_speed_mph: Optional[float] = None) -> None:
        self.average_speed_mph = settings.average_speed_mph if average_speed_mph is None else average_speed_mph

    def apply(
        self,
        stations: Iterable[Station],
        filters: SearchFilters,
        origin: Location,
    ) -> List[StationWithDistance]:
        """
        Return the stations matching ``filters``, nearest first.

        Stations whose coordinates cannot be turned into a distance are kept
        and placed after every station with a known distance.
        """
        predicates = self._predicates(filters)
        matching = [station for station in stations if all(check(station) for check in predicates)]

        ranked = [self._with_distance(station, origin) for station in matching]
        ranked.sort(key=_distance_sort_key)
        return ranked

    def _predicates(self, filters: SearchFilters) -> List[StationPredicate]:
        predicates: List[StationPredicate] = []

        query = filters.query.strip().lower()
        if query:
            predicates.append(
                lambda station: query in station.name.lower()
                or query in station.address.lower()
                or query in station.network_provider.lower()
            )

        connector = filters.connector_type
        if connector and connector != ALL_CONNECTORS:
            predicates.append(lambda station: connector in station.connector_types)

        if filters.show_available_only:
            predicates.append(lambda station: station.available_ports > 0)

        if filters.show_fast_charging_only:
            predicates.append(lambda station: station.power_kw >= FAST_CHARGING_KW)

        if filters.show_24h_only:
            predicates.append(lambda station: station.access_24h)

        if filters.show_free_parking_only:
            predicates.append(
                lambda station: any("free parking" in amenity.lower() for amenity in station.amenities)
            )

        return predicates

    def _with_distance(self, station: Station, origin: Location) -> StationWithDistance:
        distance = station_distance(station, origin)
        eta_minutes = None
        if distance is not None and self.average_speed_mph > 0:
            eta_minutes = round(distance / self.average_speed_mph * 60)

        data = station.model_dump(exclude={"distance", "eta_minutes"})
        return StationWithDistance(**data, distance=distance, eta_minutes=eta_minutes)


def station_distance(station: Station, origin: Location) -> Optional[float]:
    """Miles from ``origin`` to the station, or None when its coordinates are unusable."""
    try:
        latitude = float(station.latitude)
        longitude = float(station.longitude)
    except (TypeError, ValueError):
        return None

    distance = GeoService.distance_miles(origin.latitude, origin.longitude, latitude, longitude)
    if not math.isfinite(distance):
        return None
    return distance


def _distance_sort_key(station: StationWithDistance) -> Tuple[bool, float]:
    if station.distance is None:
        return True, 0.0
    return False, station.distance
