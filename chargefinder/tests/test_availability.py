"""Tests for synthetic availability estimators."""

import random

import pytest

from chargefinder.services.providers.availability import FixedAvailabilityEstimator, RandomAvailabilityEstimator


def test_random_estimate_stays_in_band():
    estimator = RandomAvailabilityEstimator(0.6, 0.9, rng=random.Random(42))

    for _ in range(200):
        assert 6 <= estimator.estimate(10, True) <= 9


@pytest.mark.parametrize("total, operational", [(10, False), (0, True)])
def test_no_free_ports_when_offline_or_empty(total, operational):
    estimator = RandomAvailabilityEstimator(0.6, 0.9, rng=random.Random(1))

    assert estimator.estimate(total, operational) == 0


def test_fixed_estimate_floors():
    assert FixedAvailabilityEstimator(0.5).estimate(5, True) == 2
    assert FixedAvailabilityEstimator(1.0).estimate(4, True) == 4
