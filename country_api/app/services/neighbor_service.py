"""
Neighbor relation management.

Relations are directed: adding ``(A, B)`` never creates ``(B, A)``.
Adding a batch of neighbors validates the source country once (a
missing source aborts the whole batch) and then handles each candidate
on its own, so one bad identifier does not block the others.  Each
candidate yields an ``Added`` or ``Rejected`` outcome; the outcomes
are partitioned into ``added`` and ``errors`` at the end.

The duplicate check and the write are not locked.  Two concurrent
requests for the same pair may both write it, which is harmless since
the write overwrites an identical record.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Set, Union

from country_api.app.core.exceptions import DataIntegrityError, NotFoundError
from country_api.app.repositories.country_repository import CountryRepository
from country_api.app.repositories.neighbor_repository import NeighborRepository
from country_api.app.schemas.country import NeighborCountry
from country_api.app.schemas.neighbor import Added, NeighborAdditionResult, Rejected


logger = logging.getLogger(__name__)

Outcome = Union[Added, Rejected]


class NeighborService:
    """Read and extend the neighbor list of a country."""

    def __init__(self, countries: CountryRepository, neighbors: NeighborRepository) -> None:
        self.countries = countries
        self.neighbors = neighbors

    async def get_neighbors(self, country_id: str) -> List[NeighborCountry]:
        """Return the neighbors of ``country_id`` in their public shape.

        Raises ``NotFoundError`` if the country itself does not exist and
        ``DataIntegrityError`` if a stored relation points at a country
        that is gone.
        """
        self.countries.get_by_id(country_id)
        neighbor_ids = self.neighbors.list_by_country(country_id)
        result = []
        for neighbor_id in neighbor_ids:
            try:
                record = self.countries.get_by_id(neighbor_id)
            except NotFoundError:
                logger.error("Relation %s -> %s references a missing country", country_id, neighbor_id)
                raise DataIntegrityError(
                    f"Neighbor {neighbor_id} of country {country_id} does not exist"
                ) from None
            result.append(NeighborCountry.from_record(record))
        return result

    async def add_neighbors(self, country_id: str, proposed: Iterable[Any]) -> NeighborAdditionResult:
        """Add every valid, not yet linked candidate as a neighbor of ``country_id``.

        Raises ``NotFoundError`` if ``country_id`` does not exist; nothing
        is processed in that case.  Candidates that are not non-empty
        strings are rejected like unknown identifiers.
        """
        self.countries.get_by_id(country_id)
        valid_ids = set(self.countries.get_all_ids())

        outcomes = [self._add_one(country_id, neighbor_id, valid_ids) for neighbor_id in proposed]

        result = NeighborAdditionResult()
        for outcome in outcomes:
            if isinstance(outcome, Added):
                result.added.append(outcome.neighbor_id)
            else:
                result.errors.append(outcome.reason)
        logger.info(
            "Country %s: added %d neighbors, rejected %d", country_id, len(result.added), len(result.errors)
        )
        return result

    def _add_one(self, country_id: str, neighbor_id: Any, valid_ids: Set[str]) -> Outcome:
        if not isinstance(neighbor_id, str) or neighbor_id not in valid_ids:
            return Rejected(neighbor_id, f"invalid neighbor country id: {neighbor_id}")
        if neighbor_id == country_id:
            return Rejected(neighbor_id, f"country {neighbor_id} cannot be its own neighbor")
        if self.neighbors.get(country_id, neighbor_id) is not None:
            return Rejected(neighbor_id, f"neighbor {neighbor_id} already exists for this country")
        self.neighbors.add(country_id, neighbor_id)
        return Added(neighbor_id)
