"""Geolocation helpers shared by every component that measures distance."""

from math import asin, cos, pi, sin, sqrt

EARTH_RADIUS_MILES = 3959.0
EARTH_RADIUS_KM = 6371.0


class GeoService:
    """Service for geolocation calculations."""

    @staticmethod
    def deg2rad(degrees: float) -> float:
        """Convert decimal degrees to radians."""
        return degrees * (pi / 180)

    @staticmethod
    def haversine_distance(
        lat1: float,
        lon1: float,
        lat2: float,
        lon2: float,
        radius: float = EARTH_RADIUS_KM,
    ) -> float:
        """
        Calculate the great circle distance between two points
        on the earth (specified in decimal degrees).

        Returns distance in the unit of ``radius`` (kilometers by default).
        NaN inputs propagate to a NaN result.
        """
        lon1, lat1, lon2, lat2 = map(GeoService.deg2rad, [lon1, lat1, lon2, lat2])

        # Haversine formula
        dlon = lon2 - lon1
        dlat = lat2 - lat1
        a = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlon / 2) ** 2
        if a > 1.0:
            a = 1.0  # rounding near antipodes
        c = 2 * asin(sqrt(a))

        return c * radius

    @staticmethod
    def distance_miles(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
        """Great circle distance in miles."""
        return GeoService.haversine_distance(lat1, lon1, lat2, lon2, radius=EARTH_RADIUS_MILES)

    @staticmethod
    def distance_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
        """Great circle distance in kilometers."""
        return GeoService.haversine_distance(lat1, lon1, lat2, lon2, radius=EARTH_RADIUS_KM)
