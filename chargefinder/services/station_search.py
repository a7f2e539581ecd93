"""End-to-end nearby search: candidate lookup followed by filtering and ranking."""

from __future__ import annotations

import logging
from typing import List, Optional

from ..models.search import Location, SearchFilters
from ..models.station import Station, StationWithDistance
from .aggregator import StationAggregator
from .filter_rank import FilterRankEngine
from .record_store import MemoryRecordStore

logger = logging.getLogger(__name__)


class StationSearchService:
    """Resolve candidates from live providers (or the seeded store) and rank them."""

    def __init__(
        self,
        aggregator: StationAggregator,
        engine: FilterRankEngine,
        store: MemoryRecordStore,
        use_seed_stations: bool = False,
    ) -> None:
        self.aggregator = aggregator
        self.engine = engine
        self.store = store
        self.use_seed_stations = use_seed_stations

    async def candidates(
        self,
        location: Location,
        radius_miles: Optional[float] = None,
        limit: Optional[int] = None,
    ) -> List[Station]:
        if self.use_seed_stations:
            radius = radius_miles or self.aggregator.default_radius
            return await self.store.get_nearby_stations(location.latitude, location.longitude, radius)
        return await self.aggregator.find_nearby(location.latitude, location.longitude, radius_miles, limit)

    async def search(
        self,
        location: Location,
        filters: SearchFilters,
        limit: Optional[int] = None,
    ) -> List[StationWithDistance]:
        """Return stations around ``location`` matching ``filters``, nearest first."""
        stations = await self.candidates(location, filters.distance, limit)
        ranked = self.engine.apply(stations, filters, location)
        logger.debug(
            "Search at (%s, %s): %s candidates, %s after filters",
            location.latitude,
            location.longitude,
            len(stations),
            len(ranked),
        )
        return ranked
