"""Thin service wrapper for creating and fetching countries."""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from country_api.app.core.exceptions import ValidationError
from country_api.app.repositories.country_repository import CountryRepository


class CountryService:
    """Create countries in bulk and look them up by identifier."""

    def __init__(self, countries: CountryRepository) -> None:
        self.countries = countries

    async def create_countries(self, payload: Any) -> List[Dict[str, Any]]:
        """Create every country in ``payload``.

        ``payload`` must be a JSON array; anything else is rejected with
        ``ValidationError`` before any write.
        """
        if not isinstance(payload, list):
            raise ValidationError("Request body should be an array of countries.")
        created = self.countries.create(payload)
        logging.getLogger(__name__).info(
            "Stored countries %s", ", ".join(record["countryID"] for record in created)
        )
        return created

    async def get_country(self, country_id: str) -> Dict[str, Any]:
        return self.countries.get_by_id(country_id)
