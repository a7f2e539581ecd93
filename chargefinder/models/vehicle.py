"""Vehicle and recommendation models."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from .station import StationWithDistance


class Vehicle(BaseModel):
    """Live state of the user's vehicle."""

    id: str
    name: str
    battery_level: int = Field(ge=0, le=100)
    battery_capacity: int = Field(default=100, gt=0)
    range_miles: int = Field(ge=0)
    location: str
    latitude: str
    longitude: str
    is_connected: bool = True
    last_updated: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class VehicleUpdate(BaseModel):
    """Partial update payload for the vehicle record."""

    name: Optional[str] = None
    battery_level: Optional[int] = Field(default=None, ge=0, le=100)
    battery_capacity: Optional[int] = Field(default=None, gt=0)
    range_miles: Optional[int] = Field(default=None, ge=0)
    location: Optional[str] = None
    latitude: Optional[str] = None
    longitude: Optional[str] = None
    is_connected: Optional[bool] = None


class BatteryState(str, Enum):
    OK = "ok"
    LOW = "low"
    CRITICAL = "critical"


class ChargingRecommendation(BaseModel):
    """Advice derived from the battery state and a ranked station list."""

    vehicle_id: str
    battery_level: int
    range_miles: int
    battery_state: BatteryState
    alert: bool
    nearest_station: Optional[StationWithDistance] = None
    nearest_available_station: Optional[StationWithDistance] = None
    reachable_count: int = 0
    message: str
