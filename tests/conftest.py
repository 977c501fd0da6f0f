from typing import Any, Dict, List

import pytest
from fastapi.testclient import TestClient

from country_api.app.core.config import settings
from country_api.app.core.db import InMemoryRecordStore
from country_api.app.main import create_app
from country_api.app.repositories.country_repository import CountryRepository
from country_api.app.repositories.neighbor_repository import NeighborRepository
from country_api.app.services.listing_service import CountryListingService
from country_api.app.services.neighbor_service import NeighborService


@pytest.fixture
def store():
    return InMemoryRecordStore()


@pytest.fixture
def country_repo(store):
    return CountryRepository(store)


@pytest.fixture
def neighbor_repo(store):
    return NeighborRepository(store)


@pytest.fixture
def listing_service(country_repo):
    return CountryListingService(country_repo)


@pytest.fixture
def neighbor_service(country_repo, neighbor_repo):
    return NeighborService(country_repo, neighbor_repo)


@pytest.fixture
def put_countries(store):
    """Write countries with known identifiers straight into the store."""

    def _put(*countries: Dict[str, Any]) -> List[Dict[str, Any]]:
        records = []
        for country in countries:
            record = {"capital": "C", "region": "R", "currency": "X", **country}
            records.append(record)
        store.batch_put(settings.country_table, records)
        return records

    return _put


@pytest.fixture
def client(store):
    return TestClient(create_app(store))
