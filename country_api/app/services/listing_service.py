"""
Paginated, sortable and searchable country listing.

The whole collection is fetched with one snapshot read and filtered,
sorted and windowed in memory.  There is no streaming read, so memory
use grows with the size of the collection.

Query parameters arrive as raw strings.  ``page`` and ``limit`` that
are missing, non-numeric or not positive fall back to the configured
defaults instead of raising; unknown ``sort_by`` values fall back to
``a_to_z``.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, Optional, Tuple

from country_api.app.core.config import settings
from country_api.app.repositories.country_repository import CountryRepository
from country_api.app.schemas.country import CountryPage


logger = logging.getLogger(__name__)

DEFAULT_SORT = "a_to_z"

# sort_by value -> (field, descending)
SORT_OPTIONS: Dict[str, Tuple[str, bool]] = {
    "a_to_z": ("name", False),
    "z_to_a": ("name", True),
    "population_high_to_low": ("population", True),
    "population_low_to_high": ("population", False),
    "area_high_to_low": ("area", True),
    "area_low_to_high": ("area", False),
}

NUMERIC_FIELDS = {"population", "area"}
SEARCH_FIELDS = ("name", "region", "subregion")


def parse_positive_int(value: Any, default: int) -> int:
    """Return ``value`` as a positive int, or ``default`` if it is not one."""
    if value is None or isinstance(value, bool):
        return default
    try:
        number = int(str(value).strip())
    except ValueError:
        return default
    return number if number > 0 else default


def resolve_sort(sort_by: Optional[str]) -> Tuple[str, bool]:
    return SORT_OPTIONS.get(sort_by or DEFAULT_SORT, SORT_OPTIONS[DEFAULT_SORT])


def _comparable(record: Dict[str, Any], field: str) -> Optional[Any]:
    value = record.get(field)
    if field in NUMERIC_FIELDS:
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            try:
                value = float(value)
            except ValueError:
                return None
        if isinstance(value, float):
            # NaN has no ordering; treat it as absent to keep the key total.
            return None if math.isnan(value) else value
        return None
    return value if isinstance(value, str) else None


def sort_key(field: str):
    """Build a total sort key for ``field``.

    Records without a usable value sort below every present value, so
    they come first ascending and last descending.
    """

    def key(record: Dict[str, Any]) -> tuple:
        value = _comparable(record, field)
        if value is None:
            return (0, 0)
        return (1, value)

    return key


def matches_search(record: Dict[str, Any], search: str) -> bool:
    """Case-insensitive literal substring match on name, region and subregion."""
    needle = search.casefold()
    for field in SEARCH_FIELDS:
        value = record.get(field)
        if isinstance(value, str) and needle in value.casefold():
            return True
    return False


class CountryListingService:
    """Produce one page of the filtered and sorted country collection."""

    def __init__(self, countries: CountryRepository) -> None:
        self.countries = countries

    async def list_countries(
        self,
        page: Any = None,
        limit: Any = None,
        sort_by: Optional[str] = None,
        search: Optional[str] = None,
    ) -> CountryPage:
        page_number = parse_positive_int(page, settings.default_page)
        per_page = parse_positive_int(limit, settings.default_limit)
        field, descending = resolve_sort(sort_by)

        records = self.countries.get_all()
        if search:
            records = [record for record in records if matches_search(record, search)]
        records.sort(key=sort_key(field), reverse=descending)

        total = len(records)
        pages = math.ceil(total / per_page)
        start = (page_number - 1) * per_page
        window = records[start:start + per_page]
        logger.debug(
            "Listing page %d/%d (%d per page, sort %s %s, search %r): %d of %d",
            page_number, pages, per_page, field, "desc" if descending else "asc", search, len(window), total,
        )
        return CountryPage(
            list=window,
            has_next=page_number < pages,
            has_prev=page_number > 1,
            page=page_number,
            pages=pages,
            per_page=per_page,
            total=total,
        )
