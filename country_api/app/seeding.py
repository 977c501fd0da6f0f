"""
Load countries and neighbor relations from a fixture.

A fixture is a JSON object::

    {
        "countries": [{"name": "Kenya", "capital": "Nairobi", ...}, ...],
        "neighbors": [["Kenya", "Uganda"], ...]
    }

Neighbor pairs refer to countries by name since identifiers are only
assigned on creation.  Pairs are linked in the given direction only.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Tuple

from country_api.app.core.db import RecordStore
from country_api.app.core.exceptions import ValidationError
from country_api.app.repositories.country_repository import CountryRepository
from country_api.app.repositories.neighbor_repository import NeighborRepository
from country_api.app.services.country_service import CountryService
from country_api.app.services.neighbor_service import NeighborService


logger = logging.getLogger(__name__)


def load_fixture(path: str) -> Dict[str, Any]:
    with Path(path).open(encoding="utf-8") as fh:
        data = json.load(fh)
    if not isinstance(data, dict):
        raise ValidationError("Fixture must be a JSON object")
    return data


async def seed(store: RecordStore, fixture: Dict[str, Any]) -> Tuple[int, List[str], List[str]]:
    """Create the fixture's countries, then link its neighbor pairs.

    Returns the number of countries created, the added relations as
    ``"A -> B"`` strings and the rejection messages.
    """
    countries = CountryRepository(store)
    created = await CountryService(countries).create_countries(fixture.get("countries", []))
    ids_by_name = {record["name"]: record["countryID"] for record in created}

    neighbor_service = NeighborService(countries, NeighborRepository(store))
    added: List[str] = []
    errors: List[str] = []
    for pair in fixture.get("neighbors", []):
        if not isinstance(pair, (list, tuple)) or len(pair) != 2:
            errors.append(f"malformed neighbor pair: {pair!r}")
            continue
        source, target = pair
        if source not in ids_by_name:
            errors.append(f"unknown country: {source}")
            continue
        result = await neighbor_service.add_neighbors(ids_by_name[source], [ids_by_name.get(target, target)])
        added.extend(f"{source} -> {target}" for _ in result.added)
        errors.extend(result.errors)
    logger.info("Seeded %d countries and %d relations", len(created), len(added))
    return len(created), added, errors
