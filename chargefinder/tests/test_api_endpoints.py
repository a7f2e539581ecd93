"""Integration tests for API endpoints."""

import pytest
from httpx import AsyncClient

from chargefinder.models.station import StationStatus


@pytest.mark.asyncio
async def test_root_endpoint(client: AsyncClient):
    """Test the root endpoint."""
    response = await client.get("/")

    assert response.status_code == 200
    data = response.json()
    assert "name" in data
    assert "version" in data
    assert data["status"] == "operational"


@pytest.mark.asyncio
async def test_health_check(client: AsyncClient):
    """Test health check endpoint."""
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


@pytest.mark.asyncio
async def test_list_stations_without_location_returns_stored_stations(client: AsyncClient):
    """Without coordinates the seeded stations are listed."""
    response = await client.get("/api/stations")

    assert response.status_code == 200
    data = response.json()
    assert data["count"] == 4
    assert {station["id"] for station in data["stations"]} == {"station-1", "station-2", "station-3", "station-4"}


@pytest.mark.asyncio
async def test_nearby_search_ranks_provider_results(client: AsyncClient, primary_provider, station_factory):
    """Provider stations come back nearest first with distance and ETA."""
    primary_provider._responses = [
        [
            station_factory(id="nrel-far", latitude="47.7066", longitude="-122.3257"),
            station_factory(id="nrel-near", latitude="47.6118", longitude="-122.3236"),
        ]
    ]

    response = await client.get("/api/stations", params={"lat": 47.6062, "lng": -122.3321, "radius": 10})

    assert response.status_code == 200
    data = response.json()
    assert [station["id"] for station in data["stations"]] == ["nrel-near", "nrel-far"]
    assert data["stations"][0]["distance"] < data["stations"][1]["distance"]
    assert data["stations"][0]["eta_minutes"] is not None
    assert primary_provider.calls[0][2] == 10


@pytest.mark.asyncio
async def test_nearby_search_applies_filters(client: AsyncClient, primary_provider, station_factory):
    """Query parameters map onto the search filters."""
    primary_provider._responses = [
        [
            station_factory(id="nrel-busy", available_ports=0, status=StationStatus.BUSY),
            station_factory(id="nrel-open", available_ports=4, status=StationStatus.AVAILABLE),
        ]
    ]

    response = await client.get(
        "/api/stations",
        params={"lat": 47.6062, "lng": -122.3321, "available_only": "true"},
    )

    assert response.status_code == 200
    stations = response.json()["stations"]
    assert [station["id"] for station in stations] == ["nrel-open"]
    assert stations[0]["status"] == "available"


@pytest.mark.asyncio
async def test_nearby_search_with_no_results(client: AsyncClient):
    """Every provider empty yields an empty list, not an error."""
    response = await client.get("/api/stations", params={"lat": 51.5, "lng": -0.1})

    assert response.status_code == 200
    assert response.json() == {"stations": [], "count": 0}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "params",
    [{"lat": 95, "lng": 0}, {"lat": 47.6}, {"lat": 47.6, "lng": -122.3, "radius": 0}],
)
async def test_nearby_search_rejects_invalid_coordinates(client: AsyncClient, params):
    """Out-of-range or incomplete coordinates are rejected."""
    response = await client.get("/api/stations", params=params)

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_get_station(client: AsyncClient):
    """Test getting a stored station."""
    response = await client.get("/api/stations/station-1")

    assert response.status_code == 200
    assert response.json()["name"] == "Tesla Supercharger"

    missing = await client.get("/api/stations/unknown")
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_update_station_rederives_status(client: AsyncClient):
    """Patching port counts updates the derived status."""
    response = await client.patch("/api/stations/station-3", json={"available_ports": 3})

    assert response.status_code == 200
    assert response.json()["status"] == "partially-available"


@pytest.mark.asyncio
async def test_update_station_rejects_invalid_port_counts(client: AsyncClient):
    """More available ports than total ports is refused."""
    response = await client.patch("/api/stations/station-1", json={"available_ports": 50})

    assert response.status_code == 422

    missing = await client.patch("/api/stations/unknown", json={"name": "x"})
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_current_vehicle(client: AsyncClient):
    """Test getting the connected vehicle."""
    response = await client.get("/api/vehicle/current")

    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Tesla Model Y"
    assert data["battery_level"] == 25


@pytest.mark.asyncio
async def test_update_vehicle(client: AsyncClient):
    """Test updating the battery level."""
    response = await client.patch("/api/vehicle/default-vehicle", json={"battery_level": 90})

    assert response.status_code == 200
    assert response.json()["battery_level"] == 90

    invalid = await client.patch("/api/vehicle/default-vehicle", json={"battery_level": 120})
    assert invalid.status_code == 422

    missing = await client.patch("/api/vehicle/unknown", json={"battery_level": 50})
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_recommendation_uses_vehicle_position(client: AsyncClient, primary_provider, station_factory):
    """The recommendation searches around the vehicle when no location is given."""
    primary_provider._responses = [[station_factory(id="nrel-1", name="Pike Place Chargers")]]

    response = await client.get("/api/vehicle/recommendation")

    assert response.status_code == 200
    data = response.json()
    assert data["battery_state"] == "low"
    assert data["alert"] is True
    assert data["nearest_available_station"]["id"] == "nrel-1"
    assert data["reachable_count"] == 1
    assert primary_provider.calls[0][:2] == (47.6062, -122.3321)
