"""API routes for charging station search and records."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import ValidationError

from ..models.search import ALL_CONNECTORS, Location, SearchFilters
from ..models.station import Station, StationUpdate
from ..services.record_store import MemoryRecordStore
from ..services.station_search import StationSearchService
from .dependencies import get_station_search, get_store

router = APIRouter()


@router.get("")
async def list_stations(
    lat: Optional[float] = Query(None, ge=-90, le=90, description="Search origin latitude"),
    lng: Optional[float] = Query(None, ge=-180, le=180, description="Search origin longitude"),
    radius: Optional[float] = Query(None, gt=0, le=500, description="Search radius in miles"),
    limit: Optional[int] = Query(None, ge=1, le=100, description="Maximum stations requested per provider"),
    query: str = Query("", max_length=200, description="Matches name, address or network"),
    connector_type: str = Query(ALL_CONNECTORS, description="Canonical connector tag or 'all'"),
    available_only: bool = Query(False),
    fast_only: bool = Query(False, description="Only stations of 100 kW or more"),
    open_24h: bool = Query(False),
    free_parking: bool = Query(False),
    search: StationSearchService = Depends(get_station_search),
    store: MemoryRecordStore = Depends(get_store),
):
    """
    Find charging stations around a location.

    Without coordinates the stored stations are returned unranked.
    """
    if (lat is None) != (lng is None):
        raise HTTPException(status_code=422, detail="lat and lng must be provided together")

    if lat is None:
        stations = await store.list_stations()
        return {"stations": stations, "count": len(stations)}

    filters = SearchFilters(
        query=query,
        distance=radius,
        connector_type=connector_type,
        show_available_only=available_only,
        show_fast_charging_only=fast_only,
        show_24h_only=open_24h,
        show_free_parking_only=free_parking,
    )
    ranked = await search.search(Location(latitude=lat, longitude=lng), filters, limit)
    return {"stations": ranked, "count": len(ranked)}


@router.get("/{station_id}", response_model=Station)
async def get_station(station_id: str, store: MemoryRecordStore = Depends(get_store)):
    """Get a stored charging station."""
    station = await store.get_charging_station(station_id)
    if station is None:
        raise HTTPException(status_code=404, detail="Charging station not found")
    return station


@router.patch("/{station_id}", response_model=Station)
async def update_station(
    station_id: str,
    updates: StationUpdate,
    store: MemoryRecordStore = Depends(get_store),
):
    """Update a stored charging station."""
    try:
        station = await store.update_charging_station(station_id, updates)
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=exc.errors(include_url=False, include_context=False))
    if station is None:
        raise HTTPException(status_code=404, detail="Charging station not found")
    return station
