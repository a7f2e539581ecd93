"""Canonical charging station models shared by every provider."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class StationStatus(str, Enum):
    """Derived station state exposed to clients."""

    AVAILABLE = "available"
    PARTIALLY_AVAILABLE = "partially-available"
    BUSY = "busy"
    OUT_OF_SERVICE = "out-of-service"
    TEMPORARILY_UNAVAILABLE = "temporarily-unavailable"
    PLANNED = "planned"


class Station(BaseModel):
    """Provider-agnostic charging station.

    Coordinates are kept as the decimal-degree strings received from the
    provider and are only parsed when a distance has to be computed.
    """

    id: str = Field(min_length=1, description="Provider-namespaced identifier, e.g. 'nrel-1234'")
    name: str
    address: str
    latitude: str
    longitude: str
    total_ports: int = Field(ge=0)
    available_ports: int = Field(ge=0)
    power_kw: float = Field(ge=0)
    price_per_kwh: str
    connector_types: List[str] = Field(min_length=1)
    amenities: List[str] = Field(default_factory=list)
    is_operational: bool = True
    access_24h: bool = True
    network_provider: str = "Independent"
    status: StationStatus

    @field_validator("latitude", "longitude")
    @classmethod
    def _ensure_decimal_degrees(cls, value: str) -> str:
        float(value)
        return value

    @model_validator(mode="after")
    def _ensure_port_counts(self) -> "Station":
        if self.available_ports > self.total_ports:
            raise ValueError(
                f"available_ports ({self.available_ports}) exceeds total_ports ({self.total_ports})"
            )
        return self


class StationWithDistance(Station):
    """Station annotated with request-scoped ranking data."""

    distance: Optional[float] = Field(default=None, description="Distance from the search origin in miles")
    eta_minutes: Optional[int] = Field(default=None, description="Estimated drive time at average city speed")


class StationUpdate(BaseModel):
    """Partial update payload for a stored station."""

    name: Optional[str] = None
    address: Optional[str] = None
    total_ports: Optional[int] = Field(default=None, ge=0)
    available_ports: Optional[int] = Field(default=None, ge=0)
    power_kw: Optional[float] = Field(default=None, ge=0)
    price_per_kwh: Optional[str] = None
    connector_types: Optional[List[str]] = Field(default=None, min_length=1)
    amenities: Optional[List[str]] = None
    is_operational: Optional[bool] = None
    access_24h: Optional[bool] = None
    network_provider: Optional[str] = None
