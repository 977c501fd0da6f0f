"""
FastAPI dependencies.

The record store is created once by ``create_app`` and kept on
``app.state``; repositories and services are cheap wrappers built per
request around it.
"""

from fastapi import Depends, Request

from country_api.app.core.db import RecordStore
from country_api.app.repositories.country_repository import CountryRepository
from country_api.app.repositories.neighbor_repository import NeighborRepository
from country_api.app.services.country_service import CountryService
from country_api.app.services.listing_service import CountryListingService
from country_api.app.services.neighbor_service import NeighborService


def get_store(request: Request) -> RecordStore:
    return request.app.state.store


def get_country_repository(store: RecordStore = Depends(get_store)) -> CountryRepository:
    return CountryRepository(store)


def get_neighbor_repository(store: RecordStore = Depends(get_store)) -> NeighborRepository:
    return NeighborRepository(store)


def get_country_service(
    countries: CountryRepository = Depends(get_country_repository),
) -> CountryService:
    return CountryService(countries)


def get_listing_service(
    countries: CountryRepository = Depends(get_country_repository),
) -> CountryListingService:
    return CountryListingService(countries)


def get_neighbor_service(
    countries: CountryRepository = Depends(get_country_repository),
    neighbors: NeighborRepository = Depends(get_neighbor_repository),
) -> NeighborService:
    return NeighborService(countries, neighbors)
