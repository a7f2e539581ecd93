"""Query station providers through an ordered escalation chain."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from ..config import settings
from ..models.station import Station
from .providers import NrelProvider, OpenChargeMapProvider, StationProvider

logger = logging.getLogger(__name__)

CoveragePredicate = Callable[[float, float], bool]


def bounding_box(min_lat: float, min_lon: float, max_lat: float, max_lon: float) -> CoveragePredicate:
    """Return a predicate accepting points inside the given box (edges included)."""

    def covers(latitude: float, longitude: float) -> bool:
        return min_lat <= latitude <= max_lat and min_lon <= longitude <= max_lon

    return covers


@dataclass
class EscalationStep:
    """One attempt in the chain.

    The radius sent to the provider is ``fixed_radius`` when set, otherwise
    the requested radius times ``radius_multiplier``.
    """

    name: str
    provider: StationProvider
    covers: Optional[CoveragePredicate] = None
    radius_multiplier: float = 1.0
    fixed_radius: Optional[float] = None

    def applies_to(self, latitude: float, longitude: float) -> bool:
        return self.covers is None or self.covers(latitude, longitude)

    def radius_for(self, requested_radius: float) -> float:
        if self.fixed_radius is not None:
            return self.fixed_radius
        return requested_radius * self.radius_multiplier


class StationAggregator:
    """Walk escalation steps until one yields stations.

    Results of the winning step are deduplicated by station id. Stations are
    never merged across providers: the same physical site reported by two
    registries carries two different ids.
    """

    def __init__(
        self,
        steps: Sequence[EscalationStep],
        *,
        default_radius: Optional[float] = None,
        default_limit: Optional[int] = None,
    ) -> None:
        self.steps: Tuple[EscalationStep, ...] = tuple(steps)
        self.default_radius = default_radius or settings.default_radius_miles
        self.default_limit = default_limit or settings.default_result_limit

    async def find_nearby(
        self,
        latitude: float,
        longitude: float,
        radius_miles: Optional[float] = None,
        limit: Optional[int] = None,
    ) -> List[Station]:
        """Return the first non-empty provider result, or ``[]`` when every step comes back empty."""
        requested_radius = radius_miles or self.default_radius
        result_limit = limit or self.default_limit
        attempted = set()

        for step in self.steps:
            if not step.applies_to(latitude, longitude):
                logger.debug("Skipping %s: (%s, %s) outside coverage", step.name, latitude, longitude)
                continue

            radius = step.radius_for(requested_radius)
            attempt = (id(step.provider), radius)
            if attempt in attempted:
                continue  # provider already queried with this radius
            attempted.add(attempt)

            stations = await step.provider.fetch_nearby(latitude, longitude, radius, result_limit)
            if stations:
                logger.info(
                    "Step %s returned %s stations (radius=%s)",
                    step.name,
                    len(stations),
                    radius,
                )
                return _dedupe_by_id(stations)

            logger.info("Step %s returned no stations (radius=%s); escalating", step.name, radius)

        return []


def _dedupe_by_id(stations: List[Station]) -> List[Station]:
    seen = set()
    unique: List[Station] = []
    for station in stations:
        if station.id in seen:
            continue
        seen.add(station.id)
        unique.append(station)
    return unique


def build_default_aggregator(
    primary: Optional[StationProvider] = None,
    secondary: Optional[StationProvider] = None,
) -> StationAggregator:
    """Wire the NREL (US) -> Open Charge Map -> wide Open Charge Map chain from settings."""
    primary = primary or NrelProvider()
    secondary = secondary or OpenChargeMapProvider()

    steps = [
        EscalationStep(
            name="primary",
            provider=primary,
            covers=bounding_box(*settings.primary_region),
        ),
        EscalationStep(
            name="secondary",
            provider=secondary,
            radius_multiplier=settings.secondary_radius_multiplier,
        ),
        EscalationStep(
            name="secondary-wide",
            provider=secondary,
            fixed_radius=settings.fallback_radius,
        ),
    ]
    return StationAggregator(steps)
