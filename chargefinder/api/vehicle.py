"""API routes for the current vehicle and charging recommendations."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..models.search import Location, SearchFilters
from ..models.vehicle import ChargingRecommendation, Vehicle, VehicleUpdate
from ..services.charging_advisor import ChargingAdvisor
from ..services.record_store import MemoryRecordStore
from ..services.station_search import StationSearchService
from .dependencies import get_advisor, get_station_search, get_store

router = APIRouter()


@router.get("/current", response_model=Vehicle)
async def get_current_vehicle(store: MemoryRecordStore = Depends(get_store)):
    """Get the connected vehicle."""
    vehicle = await store.get_current_vehicle()
    if vehicle is None:
        raise HTTPException(status_code=404, detail="No vehicle found")
    return vehicle


@router.get("/recommendation", response_model=ChargingRecommendation)
async def get_recommendation(
    lat: Optional[float] = Query(None, ge=-90, le=90, description="Defaults to the vehicle position"),
    lng: Optional[float] = Query(None, ge=-180, le=180, description="Defaults to the vehicle position"),
    radius: Optional[float] = Query(None, gt=0, le=500, description="Search radius in miles"),
    store: MemoryRecordStore = Depends(get_store),
    search: StationSearchService = Depends(get_station_search),
    advisor: ChargingAdvisor = Depends(get_advisor),
):
    """Recommend where to charge based on the vehicle's battery level."""
    vehicle = await store.get_current_vehicle()
    if vehicle is None:
        raise HTTPException(status_code=404, detail="No vehicle found")

    if (lat is None) != (lng is None):
        raise HTTPException(status_code=422, detail="lat and lng must be provided together")
    if lat is None:
        origin = Location(latitude=float(vehicle.latitude), longitude=float(vehicle.longitude))
    else:
        origin = Location(latitude=lat, longitude=lng)

    ranked = await search.search(origin, SearchFilters(distance=radius))
    return advisor.recommend(vehicle, ranked)


@router.patch("/{vehicle_id}", response_model=Vehicle)
async def update_vehicle(
    vehicle_id: str,
    updates: VehicleUpdate,
    store: MemoryRecordStore = Depends(get_store),
):
    """Update vehicle state (battery level, position, ...)."""
    vehicle = await store.update_vehicle(vehicle_id, updates)
    if vehicle is None:
        raise HTTPException(status_code=404, detail="Vehicle not found")
    return vehicle
