"""Adapter for the NREL Alternative Fuel Stations API (United States)."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from ...config import settings
from ...models.station import Station, StationStatus
from .availability import AvailabilityEstimator, RandomAvailabilityEstimator
from .base import ProviderError, fetch_json
from .normalization import (
    FAST_CHARGING_KW,
    FREE,
    NREL_CONNECTOR_TYPES,
    dedupe,
    derive_status,
    estimate_price,
    facility_amenities,
    join_address,
    normalize_connectors,
    power_from_port_levels,
)

logger = logging.getLogger(__name__)


class NrelProvider:
    """Fetch nearby public electric stations from developer.nrel.gov.

    Radius is expressed in miles. Without an API key the provider is inert
    and always returns an empty list.
    """

    provider_id = "nrel"
    provider_name = "NREL Alternative Fuel Stations"

    # NREL status codes: E = open, P = planned, T = temporarily unavailable.
    _STATUS_HINTS = {
        "P": StationStatus.PLANNED,
        "T": StationStatus.TEMPORARILY_UNAVAILABLE,
    }

    def __init__(
        self,
        *,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        availability: Optional[AvailabilityEstimator] = None,
    ) -> None:
        self._api_key = (settings.nrel_api_key if api_key is None else api_key).strip()
        self._base_url = (base_url or settings.nrel_base_url).rstrip("/")
        self._timeout = settings.provider_timeout_seconds if timeout is None else timeout
        self._availability = availability or RandomAvailabilityEstimator(
            settings.nrel_availability_min,
            settings.nrel_availability_max,
        )
        if not self._api_key:
            logger.warning("NREL_API_KEY not configured; NREL station lookups are disabled")

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key)

    async def fetch_nearby(
        self,
        latitude: float,
        longitude: float,
        radius: float,
        limit: int,
    ) -> List[Station]:
        """Return canonical stations within ``radius`` miles, or ``[]`` on any failure."""
        if not self.is_configured:
            return []

        params = {
            "api_key": self._api_key,
            "fuel_type": "ELEC",
            "latitude": latitude,
            "longitude": longitude,
            "radius": radius,
            "limit": limit,
            "status": "E,P",
            "access": "public",
            "format": "json",
        }

        try:
            payload = await fetch_json(f"{self._base_url}/nearest.json", params=params, timeout=self._timeout)
        except ProviderError as exc:
            logger.warning("NREL lookup failed: %s", exc)
            return []

        records = payload.get("fuel_stations") if isinstance(payload, dict) else None
        if not isinstance(records, list):
            logger.warning("NREL returned an unexpected payload shape: %s", type(payload).__name__)
            return []

        stations: List[Station] = []
        for record in records:
            try:
                stations.append(self.transform(record))
            except (AttributeError, KeyError, TypeError, ValueError, ValidationError) as exc:
                logger.warning("Skipping malformed NREL record %s: %s", _record_id(record), exc)
        return stations

    def transform(self, record: Dict[str, Any]) -> Station:
        """Map one ``fuel_stations`` entry to a canonical station."""
        level1 = int(record.get("ev_level1_evse_num") or 0)
        level2 = int(record.get("ev_level2_evse_num") or 0)
        dc_fast = int(record.get("ev_dc_fast_num") or 0)
        total_ports = level1 + level2 + dc_fast

        status_code = str(record.get("status_code") or "").upper()
        is_operational = status_code == "E"
        available_ports = self._availability.estimate(total_ports, is_operational)

        power_kw = power_from_port_levels(level1, level2, dc_fast)
        access_24h = self._is_24h(record.get("access_days_time"))

        return Station(
            id=f"{self.provider_id}-{record['id']}",
            name=record.get("station_name") or "EV Charging Station",
            address=join_address(
                [
                    record.get("street_address"),
                    record.get("city"),
                    " ".join(part for part in (record.get("state"), record.get("zip")) if part),
                ]
            ),
            latitude=str(record["latitude"]),
            longitude=str(record["longitude"]),
            total_ports=total_ports,
            available_ports=available_ports,
            power_kw=power_kw,
            price_per_kwh=self._price(record.get("ev_pricing"), power_kw),
            connector_types=normalize_connectors(record.get("ev_connector_types") or [], NREL_CONNECTOR_TYPES),
            amenities=self._amenities(record, total_ports, power_kw, access_24h),
            is_operational=is_operational,
            access_24h=access_24h,
            network_provider=record.get("ev_network") or "Independent",
            status=derive_status(
                is_operational,
                available_ports,
                total_ports,
                self._STATUS_HINTS.get(status_code),
            ),
        )

    @staticmethod
    def _is_24h(access_days_time: Any) -> bool:
        if not access_days_time:
            return True
        hours = str(access_days_time).lower()
        return "24" in hours or "daily" in hours

    @staticmethod
    def _price(pricing_text: Optional[str], power_kw: float) -> str:
        text = (pricing_text or "").strip()
        if not text:
            return estimate_price(power_kw, "United States")
        if text.lower().startswith("free"):
            return FREE
        return text

    @staticmethod
    def _amenities(record: Dict[str, Any], total_ports: int, power_kw: float, access_24h: bool) -> List[str]:
        amenities = facility_amenities(record.get("facility_type"))
        if record.get("ev_workplace_charging"):
            amenities.append("Workplace Charging")
        if access_24h:
            amenities.append("24/7 Access")
        if record.get("cards_accepted"):
            amenities.append("Credit Cards Accepted")
        if "free parking" in (record.get("ev_pricing") or "").lower():
            amenities.append("Free Parking")
        if total_ports >= 4:
            amenities.extend(["Multiple Ports", "Covered Parking"])
        if power_kw >= FAST_CHARGING_KW:
            amenities.extend(["Fast Charging", "Pull-through Access"])
        return dedupe(amenities)


def _record_id(record: Any) -> Any:
    return record.get("id") if isinstance(record, dict) else None
