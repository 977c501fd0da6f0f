"""
Pydantic models for country data.

``CountryCreate`` validates one element of a creation request.  Only
``name``, ``capital``, ``region`` and ``currency`` are required; any
other attribute supplied by the client is kept and stored with the
record.  ``CountryPage`` is the window returned by the listing
service.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CountryCreate(BaseModel):
    """Schema for one country in a creation request."""

    model_config = ConfigDict(extra="allow")

    name: str = Field(..., min_length=1, examples=["Kenya"])
    capital: str = Field(..., min_length=1, examples=["Nairobi"])
    region: str = Field(..., min_length=1, examples=["Africa"])
    currency: str = Field(..., min_length=1, examples=["KES"])
    subregion: Optional[str] = Field(None, examples=["Eastern Africa"])
    population: Optional[int] = Field(None, examples=[53771300])
    area: Optional[float] = Field(None, allow_inf_nan=False, examples=[580367.0])


class NeighborCountry(BaseModel):
    """Public projection of a neighbor country."""

    id: str
    name: str
    currency: str
    capital: str
    region: str

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "NeighborCountry":
        return cls(
            id=record["countryID"],
            name=record["name"],
            currency=record["currency"],
            capital=record["capital"],
            region=record["region"],
        )


class CountryPage(BaseModel):
    """One page of the country listing."""

    list: List[Dict[str, Any]]
    has_next: bool
    has_prev: bool
    page: int
    pages: int
    per_page: int
    total: int
