"""Search request models."""

from typing import Optional

from pydantic import BaseModel, Field

ALL_CONNECTORS = "all"


class Location(BaseModel):
    """A point in decimal degrees."""

    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class SearchFilters(BaseModel):
    """User-selected criteria applied on top of a nearby station search."""

    query: str = ""
    distance: Optional[float] = Field(default=None, gt=0, description="Search radius in miles")
    connector_type: str = ALL_CONNECTORS
    show_available_only: bool = False
    show_fast_charging_only: bool = False
    show_24h_only: bool = False
    show_free_parking_only: bool = False
