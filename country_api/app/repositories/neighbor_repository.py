"""
Repository for neighbor relations.

Relations live in a compound-key collection: the partition key is the
source country (``countryID``) and the sort key the neighbor
(``neighborId``).  The record carries nothing but its key, so its
existence is the relation.  Writes overwrite; callers check for
duplicates first.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from country_api.app.core.config import settings
from country_api.app.core.db import RecordStore


class NeighborRepository:
    """Read and write directed neighbor relations."""

    def __init__(self, store: RecordStore, table: str = settings.neighbor_table) -> None:
        self.store = store
        self.table = table

    def get(self, country_id: str, neighbor_id: str) -> Optional[Dict[str, str]]:
        """Return the relation record, or ``None`` if it does not exist."""
        return self.store.get(self.table, {"countryID": country_id, "neighborId": neighbor_id})

    def list_by_country(self, country_id: str) -> List[str]:
        """Return the neighbor identifiers of one country (possibly empty)."""
        return [item["neighborId"] for item in self.store.query(self.table, country_id)]

    def add(self, country_id: str, neighbor_id: str) -> None:
        self.store.put(self.table, {"countryID": country_id, "neighborId": neighbor_id})
