"""
Country endpoints for API v1.

These routes expose bulk creation, lookup by identifier, the paginated
listing and the neighbor relations of a country.  Response bodies keep
the field names existing clients rely on (``has_next``, ``per_page``,
``neighborId`` ...), so handlers build them explicitly instead of
going through a ``response_model``.
"""

import json
import logging
import math
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import JSONResponse

from country_api.app.api.deps import get_country_service, get_listing_service, get_neighbor_service
from country_api.app.core.exceptions import CountryApiError, NotFoundError, ValidationError
from country_api.app.schemas.neighbor import NeighborAddRequest
from country_api.app.services.country_service import CountryService
from country_api.app.services.listing_service import CountryListingService
from country_api.app.services.neighbor_service import NeighborService

router = APIRouter()
logger = logging.getLogger(__name__)


def _reject_constant(name: str):
    raise ValueError(f"non-finite number {name} is not allowed")


def _parse_finite_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"number {text} is out of range")
    return value


def parse_json_body(raw: bytes):
    """Decode a request body, refusing ``NaN`` and ``Infinity``."""
    try:
        return json.loads(raw, parse_constant=_reject_constant, parse_float=_parse_finite_float)
    except ValueError as exc:
        raise ValidationError(f"invalid request body format: {exc}") from exc


@router.post("/countries", status_code=status.HTTP_201_CREATED)
async def add_countries(
    request: Request,
    service: CountryService = Depends(get_country_service),
):
    """Create one or more countries from a JSON array.

    Every element gets a fresh ``countryID``.  Any failure, including
    an unparseable body or a country missing a required attribute,
    is reported as HTTP 500 with ``message`` and ``error``.
    """
    try:
        raw = await request.body()
        if not raw:
            raise ValidationError("Request body is missing")
        payload = parse_json_body(raw)
        created = await service.create_countries(payload)
    except CountryApiError as exc:
        logger.error("Error in add_countries: %s", exc)
        error = "; ".join(exc.errors) if isinstance(exc, ValidationError) else str(exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Internal Server Error", "error": error},
        )
    return JSONResponse(status_code=status.HTTP_201_CREATED, content=created)


@router.get("/countries")
async def list_countries(
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    sort_by: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    service: CountryListingService = Depends(get_listing_service),
):
    """Return one page of countries.

    - **page**, **limit**: pagination; invalid values fall back to 1 and 10.
    - **sort_by**: `a_to_z`, `z_to_a`, `population_high_to_low`,
      `population_low_to_high`, `area_high_to_low`, `area_low_to_high`.
    - **search**: case-insensitive text matched against name, region
      and subregion.
    """
    try:
        result = await service.list_countries(page=page, limit=limit, sort_by=sort_by, search=search)
    except Exception:
        logger.exception("Error fetching countries")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Internal Server Error", "data": {}},
        )
    return {"message": "Country list", "data": result.model_dump()}


@router.get("/countries/{id}")
async def get_country(id: str, service: CountryService = Depends(get_country_service)):
    """Retrieve a single country by its identifier."""
    try:
        return await service.get_country(id)
    except NotFoundError:
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": "not found"})


@router.get("/countries/{countryID}/neighbour")
async def get_country_neighbors(countryID: str, service: NeighborService = Depends(get_neighbor_service)):
    """List the neighbors of a country.

    A country without relations yields an empty list, not a 404.
    """
    try:
        neighbors = await service.get_neighbors(countryID)
    except NotFoundError:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"message": "Country not found", "data": {}},
        )
    if not neighbors:
        return {"message": "Country neighbours", "data": {"countries": []}}
    return {
        "message": "Neighbour countries list",
        "data": {"countries": [neighbor.model_dump() for neighbor in neighbors]},
    }


@router.post("/countries/{countryID}/neighbour")
async def add_country_neighbors(
    countryID: str,
    body: NeighborAddRequest,
    service: NeighborService = Depends(get_neighbor_service),
):
    """Add neighbors to a country.

    Responds 200 when at least one neighbor was added (rejected ones
    are listed in ``errors``) and 400 when none was.
    """
    proposed = body.candidate_ids()
    try:
        result = await service.add_neighbors(countryID, proposed)
    except NotFoundError:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"message": "Country not found", "data": {}},
        )
    if not result.succeeded:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": "Failed to add neighbors", "data": {"neighbors": [], "errors": result.errors}},
        )
    return {
        "message": "Neighbors added successfully",
        "data": {"neighbors": result.added},
        "errors": result.errors,
    }
