"""Tests for the provider escalation chain."""

import pytest

from chargefinder.config import settings
from chargefinder.services.aggregator import (
    EscalationStep,
    StationAggregator,
    bounding_box,
    build_default_aggregator,
)

SEATTLE = (47.6, -122.3)
LONDON = (51.5, -0.1)


def test_bounding_box_includes_edges():
    covers = bounding_box(24.5, -125.0, 49.5, -66.9)

    assert covers(*SEATTLE)
    assert covers(24.5, -125.0)
    assert not covers(*LONDON)


@pytest.mark.asyncio
async def test_primary_result_is_returned_without_escalation(
    aggregator, primary_provider, secondary_provider, station_factory
):
    primary_provider._responses = [[station_factory(id="nrel-1")]]

    stations = await aggregator.find_nearby(*SEATTLE, radius_miles=10, limit=5)

    assert [station.id for station in stations] == ["nrel-1"]
    assert primary_provider.calls == [(47.6, -122.3, 10, 5)]
    assert secondary_provider.calls == []


@pytest.mark.asyncio
async def test_empty_primary_escalates_to_secondary_with_expanded_radius(
    aggregator, primary_provider, secondary_provider, station_factory
):
    expected = [station_factory(id="ocm-1"), station_factory(id="ocm-2")]
    secondary_provider._responses = [expected]

    stations = await aggregator.find_nearby(*SEATTLE, radius_miles=10, limit=5)

    assert stations == expected
    assert primary_provider.calls[0][2] == 10
    assert secondary_provider.calls[0][2] == pytest.approx(10 * settings.secondary_radius_multiplier)


@pytest.mark.asyncio
async def test_location_outside_primary_region_skips_primary(
    aggregator, primary_provider, secondary_provider, station_factory
):
    secondary_provider._responses = [[station_factory(id="ocm-7")]]

    stations = await aggregator.find_nearby(*LONDON, radius_miles=10)

    assert [station.id for station in stations] == ["ocm-7"]
    assert primary_provider.calls == []
    assert len(secondary_provider.calls) == 1


@pytest.mark.asyncio
async def test_secondary_is_retried_with_fallback_radius(
    aggregator, primary_provider, secondary_provider, station_factory
):
    secondary_provider._responses = [[], [station_factory(id="ocm-9")]]

    stations = await aggregator.find_nearby(*LONDON, radius_miles=5)

    assert [station.id for station in stations] == ["ocm-9"]
    radii = [call[2] for call in secondary_provider.calls]
    assert radii == [pytest.approx(5 * settings.secondary_radius_multiplier), settings.fallback_radius]


@pytest.mark.asyncio
async def test_all_steps_empty_returns_empty_list(aggregator, primary_provider, secondary_provider):
    stations = await aggregator.find_nearby(*SEATTLE)

    assert stations == []
    assert len(primary_provider.calls) == 1
    assert len(secondary_provider.calls) == 2


@pytest.mark.asyncio
async def test_default_radius_and_limit_apply(aggregator, primary_provider):
    await aggregator.find_nearby(*SEATTLE)

    assert primary_provider.calls[0][2] == settings.default_radius_miles
    assert primary_provider.calls[0][3] == settings.default_result_limit


@pytest.mark.asyncio
async def test_provider_is_not_queried_twice_with_same_radius(provider_factory):
    provider = provider_factory("ocm")
    aggregator = StationAggregator(
        [
            EscalationStep(name="secondary", provider=provider, radius_multiplier=2.0),
            EscalationStep(name="secondary-wide", provider=provider, fixed_radius=100),
        ]
    )

    assert await aggregator.find_nearby(*LONDON, radius_miles=50) == []
    assert [call[2] for call in provider.calls] == [100]


@pytest.mark.asyncio
async def test_duplicate_ids_within_a_result_are_collapsed(provider_factory, station_factory):
    provider = provider_factory(
        "ocm",
        [[station_factory(id="ocm-1"), station_factory(id="ocm-1", name="Copy"), station_factory(id="ocm-2")]],
    )
    aggregator = StationAggregator([EscalationStep(name="only", provider=provider)])

    stations = await aggregator.find_nearby(*LONDON)

    assert [station.id for station in stations] == ["ocm-1", "ocm-2"]
    assert stations[0].name == "Test Station"


@pytest.mark.asyncio
async def test_same_site_from_two_providers_is_not_merged(provider_factory, station_factory):
    # Two registries describing one physical site stay two entries.
    first = provider_factory("nrel", [[station_factory(id="nrel-5"), station_factory(id="ocm-5")]])
    aggregator = StationAggregator([EscalationStep(name="mixed", provider=first)])

    stations = await aggregator.find_nearby(*SEATTLE)

    assert len(stations) == 2


def test_build_default_aggregator_wires_three_steps(primary_provider, secondary_provider):
    aggregator = build_default_aggregator(primary=primary_provider, secondary=secondary_provider)

    assert [step.name for step in aggregator.steps] == ["primary", "secondary", "secondary-wide"]
    assert aggregator.steps[0].provider is primary_provider
    assert aggregator.steps[2].fixed_radius == settings.fallback_radius
