"""Shared fixtures for the test suite."""

from typing import Any, Dict, List, Optional, Tuple

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from chargefinder.main import create_app
from chargefinder.models.station import Station, StationStatus
from chargefinder.services.aggregator import StationAggregator, build_default_aggregator
from chargefinder.services.record_store import MemoryRecordStore


class FakeProvider:
    """Provider double recording every call and returning canned stations."""

    def __init__(self, provider_id: str, responses: Optional[List[List[Station]]] = None):
        self.provider_id = provider_id
        self._responses = list(responses or [])
        self.calls: List[Tuple[float, float, float, int]] = []

    async def fetch_nearby(self, latitude: float, longitude: float, radius: float, limit: int) -> List[Station]:
        self.calls.append((latitude, longitude, radius, limit))
        if self._responses:
            return self._responses.pop(0)
        return []


def make_station(**overrides: Any) -> Station:
    """Build a valid station, overriding any field."""
    data: Dict[str, Any] = {
        "id": "test-1",
        "name": "Test Station",
        "address": "1 Main Street, Seattle, WA 98101",
        "latitude": "47.6062",
        "longitude": "-122.3321",
        "total_ports": 4,
        "available_ports": 2,
        "power_kw": 50,
        "price_per_kwh": "$0.25",
        "connector_types": ["CCS"],
        "amenities": [],
        "is_operational": True,
        "access_24h": True,
        "network_provider": "Independent",
        "status": StationStatus.PARTIALLY_AVAILABLE,
    }
    data.update(overrides)
    return Station(**data)


@pytest.fixture
def station_factory():
    return make_station


@pytest.fixture
def provider_factory():
    return FakeProvider


@pytest.fixture
def store() -> MemoryRecordStore:
    return MemoryRecordStore()


@pytest.fixture
def primary_provider() -> FakeProvider:
    return FakeProvider("nrel")


@pytest.fixture
def secondary_provider() -> FakeProvider:
    return FakeProvider("ocm")


@pytest.fixture
def aggregator(primary_provider, secondary_provider) -> StationAggregator:
    return build_default_aggregator(primary=primary_provider, secondary=secondary_provider)


@pytest_asyncio.fixture
async def client(store, aggregator):
    """HTTP client bound to an app wired with fake providers."""
    app = create_app(store=store, aggregator=aggregator, use_seed_stations=False)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as http_client:
        yield http_client
