"""Station aggregation, ranking and recommendation services."""

from .aggregator import EscalationStep, StationAggregator, bounding_box, build_default_aggregator
from .charging_advisor import ChargingAdvisor
from .filter_rank import FilterRankEngine
from .geo_service import GeoService
from .record_store import MemoryRecordStore
from .station_search import StationSearchService

__all__ = [
    "EscalationStep",
    "StationAggregator",
    "bounding_box",
    "build_default_aggregator",
    "ChargingAdvisor",
    "FilterRankEngine",
    "GeoService",
    "MemoryRecordStore",
    "StationSearchService",
]
