"""Adapter for the Open Charge Map POI API (worldwide)."""

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
    LEVEL2_FAST_KW,
    OCM_CONNECTOR_TYPES,
    dedupe,
    derive_status,
    estimate_price,
    facility_amenities,
    join_address,
    normalize_connectors,
    power_from_connection,
)

logger = logging.getLogger(__name__)


class OpenChargeMapProvider:
    """Fetch nearby points of interest from api.openchargemap.io.

    Radius is expressed in kilometers. The API key is optional.
    """

    provider_id = "ocm"
    provider_name = "Open Charge Map"

    # StatusType.ID: 30 = temporarily unavailable, 150 = planned for future date.
    _STATUS_HINTS = {
        30: StationStatus.TEMPORARILY_UNAVAILABLE,
        150: StationStatus.PLANNED,
    }

    def __init__(
        self,
        *,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        availability: Optional[AvailabilityEstimator] = None,
    ) -> None:
        self._api_key = (settings.ocm_api_key if api_key is None else api_key).strip()
        self._base_url = base_url or settings.ocm_base_url
        self._timeout = settings.provider_timeout_seconds if timeout is None else timeout
        self._availability = availability or RandomAvailabilityEstimator(
            settings.ocm_availability_min,
            settings.ocm_availability_max,
        )

    async def fetch_nearby(
        self,
        latitude: float,
        longitude: float,
        radius: float,
        limit: int,
    ) -> List[Station]:
        """Return canonical stations within ``radius`` km, or ``[]`` on any failure."""
        params: Dict[str, Any] = {
            "output": "json",
            "latitude": latitude,
            "longitude": longitude,
            "distance": radius,
            "distanceunit": "km",
            "maxresults": limit,
            "compact": "false",
            "includecomments": "false",
            "verbose": "false",
        }
        if self._api_key:
            params["key"] = self._api_key

        try:
            payload = await fetch_json(self._base_url, params=params, timeout=self._timeout)
        except ProviderError as exc:
            logger.warning("Open Charge Map lookup failed: %s", exc)
            return []

        if not isinstance(payload, list):
            logger.warning("Open Charge Map returned an unexpected payload shape: %s", type(payload).__name__)
            return []

        stations: List[Station] = []
        for record in payload:
            try:
                stations.append(self.transform(record))
            except (AttributeError, KeyError, TypeError, ValueError, ValidationError) as exc:
                record_id = record.get("ID") if isinstance(record, dict) else None
                logger.warning("Skipping malformed Open Charge Map record %s: %s", record_id, exc)
        return stations

    def transform(self, record: Dict[str, Any]) -> Station:
        """Map one POI entry to a canonical station."""
        address_info = record["AddressInfo"]
        connections = record.get("Connections") or []
        status_type = record.get("StatusType") or {}
        usage_type = record.get("UsageType") or {}
        operator = record.get("OperatorInfo") or {}
        data_provider = record.get("DataProvider") or {}
        country = (address_info.get("Country") or {}).get("Title")

        total_ports = sum(int(conn.get("Quantity") or 1) for conn in connections)
        if not total_ports:
            total_ports = int(record.get("NumberOfPoints") or 1)

        is_operational = status_type.get("IsOperational") is not False
        available_ports = self._availability.estimate(total_ports, is_operational)

        max_power = max(
            (
                power_from_connection(
                    conn.get("PowerKW"),
                    conn.get("Voltage"),
                    conn.get("Amps"),
                    _connection_title(conn),
                )
                for conn in connections
            ),
            default=0.0,
        )
        power_kw = max_power or LEVEL2_FAST_KW

        membership_required = bool(usage_type.get("IsMembershipRequired"))
        access_24h = not membership_required and is_operational

        operator_title = operator.get("Title")
        return Station(
            id=f"{self.provider_id}-{record['ID']}",
            name=address_info.get("Title") or f"{operator_title or 'EV'} Charging Station",
            address=join_address(
                [
                    address_info.get("AddressLine1"),
                    address_info.get("AddressLine2"),
                    address_info.get("Town"),
                    address_info.get("StateOrProvince"),
                    address_info.get("Postcode"),
                    country,
                ]
            ),
            latitude=str(address_info["Latitude"]),
            longitude=str(address_info["Longitude"]),
            total_ports=total_ports,
            available_ports=available_ports,
            power_kw=power_kw,
            price_per_kwh=self._price(usage_type, power_kw, country),
            connector_types=normalize_connectors(
                (_connection_title(conn) for conn in connections),
                OCM_CONNECTOR_TYPES,
            ),
            amenities=self._amenities(record, is_operational, membership_required),
            is_operational=is_operational,
            access_24h=access_24h,
            network_provider=operator_title or data_provider.get("Title") or "Independent",
            status=derive_status(
                is_operational,
                available_ports,
                total_ports,
                self._STATUS_HINTS.get(status_type.get("ID")),
            ),
        )

    @staticmethod
    def _price(usage_type: Dict[str, Any], power_kw: float, country: Optional[str]) -> str:
        if "free" in (usage_type.get("Title") or "").lower() or usage_type.get("IsPayAtLocation") is False:
            return FREE
        return estimate_price(power_kw, country)

    @staticmethod
    def _amenities(record: Dict[str, Any], is_operational: bool, membership_required: bool) -> List[str]:
        usage_type = record.get("UsageType") or {}
        amenities: List[str] = []

        if is_operational:
            amenities.append("Operational")
        if record.get("IsRecentlyVerified"):
            amenities.append("Recently Verified")
        if not membership_required:
            amenities.append("Public Access")
        if usage_type.get("IsPayAtLocation") is False:
            amenities.append("Free Charging")
        if "free parking" in (usage_type.get("Title") or "").lower():
            amenities.append("Free Parking")

        amenities.extend(facility_amenities((record.get("AddressInfo") or {}).get("Title")))

        # Only measured ratings count here; estimated power is not advertised.
        measured_power = max(
            (float(conn.get("PowerKW") or 0) for conn in record.get("Connections") or []),
            default=0.0,
        )
        if measured_power >= FAST_CHARGING_KW:
            amenities.extend(["Fast Charging", "DC Fast Charging"])
        elif measured_power >= LEVEL2_FAST_KW:
            amenities.append("Fast AC Charging")

        if (record.get("NumberOfPoints") or 0) > 2:
            amenities.append("Multiple Ports")

        return dedupe(amenities)


def _connection_title(connection: Dict[str, Any]) -> Optional[str]:
    return (connection.get("ConnectionType") or {}).get("Title")
