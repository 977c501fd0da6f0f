"""
Pydantic models for neighbor relations.

A relation has no payload beyond its compound key; the request schema
only carries the identifiers to link.
"""

from dataclasses import dataclass, field
from typing import Any, List

from pydantic import BaseModel


class NeighborAddRequest(BaseModel):
    """Body of ``POST /countries/{countryID}/neighbour``.

    Only the envelope is strict.  Elements are checked one by one by
    the neighbor service, so a malformed element is reported in
    ``errors`` instead of failing the whole request.
    """

    neighbors: List[Any]

    def candidate_ids(self) -> List[Any]:
        """Return each element's ``neighborId``, or ``None`` where there is none."""
        return [item.get("neighborId") if isinstance(item, dict) else None for item in self.neighbors]


@dataclass(frozen=True)
class Added:
    """Outcome of a candidate that was written."""

    neighbor_id: str


@dataclass(frozen=True)
class Rejected:
    """Outcome of a candidate that was skipped, with the reason."""

    neighbor_id: str
    reason: str


@dataclass
class NeighborAdditionResult:
    """Partition of the per-candidate outcomes of one batch."""

    added: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return bool(self.added)
