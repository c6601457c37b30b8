"""Shared fixtures for the country refresh tests."""

from datetime import datetime, timezone

import pytest

from countries.snapshot import SnapshotSlot


@pytest.fixture(autouse=True)
def isolated_cache(settings, tmp_path):
    """Point the summary image cache at a per-test directory."""
    settings.ENVIRONMENT = "development"
    settings.CACHE_DIR = str(tmp_path / "cache")
    return tmp_path / "cache"


@pytest.fixture
def slot(tmp_path):
    return SnapshotSlot(tmp_path / "slot" / "summary.png")


@pytest.fixture
def as_of():
    return datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def country_entries():
    return [
        {
            "name": "Nigeria",
            "capital": "Abuja",
            "region": "Africa",
            "population": 206139589,
            "flag": "https://flagcdn.com/ng.svg",
            "currencies": [{"code": "NGN", "name": "Nigerian naira", "symbol": "₦"}],
        },
        {
            "name": "Ghana",
            "capital": "Accra",
            "region": "Africa",
            "population": 31072940,
            "flag": "https://flagcdn.com/gh.svg",
            "currencies": [{"code": "GHS", "name": "Ghanaian cedi", "symbol": "₵"}],
        },
        {
            "name": "Germany",
            "capital": "Berlin",
            "region": "Europe",
            "population": 83240525,
            "flag": "https://flagcdn.com/de.svg",
            "currencies": [{"code": "EUR", "name": "Euro", "symbol": "€"}],
        },
        {
            "name": "Antarctica",
            "region": "Polar",
            "population": 1000,
        },
    ]


@pytest.fixture
def rates():
    return {"USD": 1.0, "NGN": 1600.0, "GHS": 15.5, "EUR": 0.92}
