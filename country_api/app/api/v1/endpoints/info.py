"""
Information endpoint for API v1.

Returns the service name and version so clients and load balancers
can check that the API is up.
"""

from typing import Any, Dict

from fastapi import APIRouter

from country_api.app.core.config import settings

router = APIRouter()


@router.get("/")
async def get_info() -> Dict[str, Any]:
    """Return the service name and version."""
    return {"message": settings.project_name, "version": settings.api_version}
