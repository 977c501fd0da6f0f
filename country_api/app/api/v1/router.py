"""
Top‑level router for version 1 of the API.

This router aggregates the domain routers.  The country router
defines its own ``/countries`` paths internally, so it is included
without a prefix.
"""

from fastapi import APIRouter

from .endpoints import countries, info

router = APIRouter()

router.include_router(info.router, tags=["info"])
router.include_router(countries.router, tags=["countries"])
