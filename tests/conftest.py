"""
Shared pytest fixtures and configuration.

conftest.py is auto-loaded by pytest — fixtures defined here are available
to all test files without explicit imports.
"""

import os
import sys

import pytest

# Add the service directory to the path so tests can import service modules
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "service"))

from enrichment.lookup import LocationResult, LookupService  # noqa: E402

LOCAL_ADDRESS = "192.0.2.10"

PARIS = LocationResult(
    city="Paris",
    country_name="France",
    country_code="FR",
    latitude=48.8534,
    longitude=2.3488,
)


class FakeLookupService(LookupService):
    """In-memory lookup keyed by IP. Records every queried address."""

    def __init__(self, locations=None, failing=()):
        self.locations = dict(locations or {})
        self.failing = set(failing)
        self.queries = []
        self.closed = False

    def get_location(self, ip):
        self.queries.append(ip)
        if ip in self.failing:
            raise RuntimeError(f"lookup backend failed for {ip}")
        return self.locations.get(ip)

    def close(self):
        self.closed = True


@pytest.fixture
def fake_lookup():
    return FakeLookupService({"10.0.0.5": PARIS})


@pytest.fixture
def fixed_local_address(monkeypatch):
    """Pin the resolved host address so header stamping is deterministic."""
    monkeypatch.setattr("enrichment.geo_ip.resolve_local_address", lambda: LOCAL_ADDRESS)
    return LOCAL_ADDRESS
