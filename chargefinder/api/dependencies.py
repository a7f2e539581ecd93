"""FastAPI dependencies resolving the components owned by the application."""

from fastapi import Request

from ..services.charging_advisor import ChargingAdvisor
from ..services.record_store import MemoryRecordStore
from ..services.station_search import StationSearchService


def get_store(request: Request) -> MemoryRecordStore:
    return request.app.state.store


def get_station_search(request: Request) -> StationSearchService:
    return request.app.state.station_search


def get_advisor(request: Request) -> ChargingAdvisor:
    return request.app.state.advisor
