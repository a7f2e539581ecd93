"""Lookup tables and derivation rules shared by the provider adapters."""

from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from ...models.station import StationStatus

DEFAULT_CONNECTOR = "Type 2"
FAST_CHARGING_KW = 100
FAST_PRICING_KW = 50

NREL_CONNECTOR_TYPES: Dict[str, str] = {
    "CHADEMO": "CHAdeMO",
    "J1772COMBO": "CCS",
    "J1772": "Type 1",
    "TESLA": "Tesla",
    "NACS": "Tesla",
}

OCM_CONNECTOR_TYPES: Dict[str, str] = {
    "Type 1 (J1772)": "Type 1",
    "Type 2 (Socket Only)": "Type 2",
    "Type 2 (Tethered Connector)": "Type 2",
    "CHAdeMO": "CHAdeMO",
    "CCS (Type 1)": "CCS",
    "CCS (Type 2)": "CCS",
    "Tesla (Roadster)": "Tesla",
    "Tesla Supercharger": "Tesla",
    "Tesla Model S": "Tesla",
    "Tesla Destination": "Tesla",
    "NACS / Tesla Supercharger": "Tesla",
    "CEE Blue (Camping)": "CEE",
    "CEE Red (3-phase)": "CEE",
    "Schuko (EU Domestic)": "Schuko",
    "Type 3": "Type 3",
    "IEC 62196-3 Configuration AA": "CCS",
    "IEC 62196-3 Configuration BB": "CCS",
}

# Power classes (kW) used when a provider gives no wattage.
LEVEL1_KW = 1.4
LEVEL2_DEFAULT_KW = 7.0
LEVEL2_FAST_KW = 22.0
DC_FAST_KW = 50.0
DC_ULTRA_KW = 150.0

# Estimated tariffs: country -> (currency symbol, standard rate, fast rate).
REGION_PRICING: Dict[str, Tuple[str, float, float]] = {
    "United States": ("$", 0.25, 0.35),
    "Canada": ("CAD$", 0.30, 0.45),
    "United Kingdom": ("£", 0.35, 0.45),
    "Germany": ("€", 0.40, 0.55),
    "France": ("€", 0.35, 0.50),
    "Netherlands": ("€", 0.45, 0.65),
    "Norway": ("NOK", 2.5, 3.5),
    "Sweden": ("SEK", 3.0, 4.5),
    "India": ("₹", 8.0, 12.0),
    "China": ("¥", 1.2, 1.8),
    "Japan": ("¥", 25.0, 35.0),
    "Australia": ("AUD$", 0.40, 0.55),
}
DEFAULT_REGION = "United States"
FREE = "Free"

# Location keywords mapped to the amenities usually found there.
FACILITY_AMENITIES: List[Tuple[Tuple[str, ...], Tuple[str, ...]]] = [
    (("hotel", "inn", "motel"), ("Hotel", "Restrooms", "WiFi")),
    (("shopping", "mall"), ("Shopping", "Restrooms", "Food Court")),
    (("restaurant", "cafe"), ("Restaurant", "Restrooms")),
    (("hospital", "medical"), ("Medical Facility",)),
    (("university", "school", "college"), ("Educational Facility",)),
]


def normalize_connectors(raw_types: Iterable[Optional[str]], table: Mapping[str, str]) -> List[str]:
    """Map native connector names to canonical tags.

    Unknown names are kept as-is. Duplicates are dropped, order of first
    appearance is preserved, and an empty result falls back to Type 2.
    """
    connectors: List[str] = []
    for raw in raw_types:
        if not raw:
            continue
        value = str(raw).strip()
        canonical = table.get(value)
        if canonical is None:
            canonical = table.get(value.upper(), value)
        if canonical not in connectors:
            connectors.append(canonical)
    return connectors or [DEFAULT_CONNECTOR]


def power_from_port_levels(level1: int, level2: int, dc_fast: int) -> float:
    """Infer a power tier from port categories, fastest category first."""
    if dc_fast > 0:
        return DC_ULTRA_KW
    if level2 > 0:
        return LEVEL2_FAST_KW
    if level1 > 0:
        return LEVEL1_KW
    return LEVEL2_DEFAULT_KW


def power_from_connection(
    power_kw: Optional[float],
    voltage: Optional[float],
    amps: Optional[float],
    connector_title: Optional[str],
) -> float:
    """Best power estimate for a single connector.

    A measured rating wins, then voltage x current, then a guess from the
    connector family.
    """
    if power_kw:
        return float(power_kw)
    if voltage and amps:
        return float(round(voltage * amps / 1000))

    title = (connector_title or "").lower()
    if "tesla" in title and "supercharger" in title:
        return DC_ULTRA_KW
    if "chademo" in title or "ccs" in title:
        return DC_FAST_KW
    if "type 2" in title:
        return LEVEL2_FAST_KW
    return LEVEL2_DEFAULT_KW


def estimate_price(power_kw: float, region: Optional[str] = None) -> str:
    """Format an estimated tariff for ``region`` as '<symbol><rate>'."""
    symbol, standard, fast = REGION_PRICING.get(region or DEFAULT_REGION, REGION_PRICING[DEFAULT_REGION])
    rate = fast if power_kw > FAST_PRICING_KW else standard
    return f"{symbol}{rate:.2f}"


def facility_amenities(text: Optional[str]) -> List[str]:
    """Amenity tags suggested by keywords in a facility type or location title."""
    lowered = (text or "").lower()
    amenities: List[str] = []
    for keywords, tags in FACILITY_AMENITIES:
        if any(keyword in lowered for keyword in keywords):
            amenities.extend(tags)
    return amenities


def dedupe(values: Iterable[str]) -> List[str]:
    seen: List[str] = []
    for value in values:
        if value not in seen:
            seen.append(value)
    return seen


def derive_status(
    is_operational: bool,
    available_ports: int,
    total_ports: int,
    provider_hint: Optional[StationStatus] = None,
) -> StationStatus:
    """Resolve the station state.

    Provider-reported outages and planned sites take precedence over
    operational state, which takes precedence over occupancy.
    """
    if provider_hint is StationStatus.TEMPORARILY_UNAVAILABLE:
        return StationStatus.TEMPORARILY_UNAVAILABLE
    if provider_hint is StationStatus.PLANNED:
        return StationStatus.PLANNED
    if not is_operational or provider_hint is StationStatus.OUT_OF_SERVICE:
        return StationStatus.OUT_OF_SERVICE
    if available_ports == 0:
        return StationStatus.BUSY
    if available_ports == total_ports:
        return StationStatus.AVAILABLE
    return StationStatus.PARTIALLY_AVAILABLE


def join_address(parts: Iterable[Optional[str]]) -> str:
    """Join non-empty address parts into one display line."""
    return ", ".join(str(part).strip() for part in parts if part and str(part).strip())
