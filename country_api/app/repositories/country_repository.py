"""
Repository for country records.

Countries are stored in a single-key collection keyed by
``countryID``.  Identifiers are generated here on creation and are
never taken from the caller.
"""

from __future__ import annotations

import logging
import math
import uuid
from typing import Any, Dict, List, Sequence

from pydantic import ValidationError as PydanticValidationError

from country_api.app.core.config import settings
from country_api.app.core.db import RecordStore
from country_api.app.core.exceptions import NotFoundError, ValidationError
from country_api.app.schemas.country import CountryCreate


logger = logging.getLogger(__name__)


def _format_errors(index: int, exc: PydanticValidationError) -> List[str]:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "country"
        messages.append(f"Validation error for country {index}: {location}: {error['msg']}")
    return messages


def _non_finite(value: Any, path: str) -> List[str]:
    """Return the paths of NaN or infinite numbers nested in ``value``."""
    if isinstance(value, float):
        return [] if math.isfinite(value) else [path]
    if isinstance(value, dict):
        return [bad for key, item in value.items() for bad in _non_finite(item, f"{path}.{key}")]
    if isinstance(value, (list, tuple)):
        return [bad for i, item in enumerate(value) for bad in _non_finite(item, f"{path}.{i}")]
    return []


class CountryRepository:
    """Read and write country records."""

    key_attribute = "countryID"

    def __init__(self, store: RecordStore, table: str = settings.country_table) -> None:
        self.store = store
        self.table = table

    def create(self, countries: Sequence[Any]) -> List[Dict[str, Any]]:
        """Validate, assign identifiers and store a batch of countries.

        Validation is all-or-nothing: if any element is invalid a
        ``ValidationError`` listing every problem is raised and nothing
        is written.  The batch itself is written atomically.
        """
        errors: List[str] = []
        validated: List[CountryCreate] = []
        for index, raw in enumerate(countries):
            try:
                validated.append(CountryCreate.model_validate(raw))
            except PydanticValidationError as exc:
                errors.extend(_format_errors(index, exc))
                continue
            errors.extend(
                f"Validation error for country {index}: {path}: number must be finite"
                for path in _non_finite(validated[-1].model_dump(exclude_unset=True), "country")
            )
        if errors:
            raise ValidationError("One or more countries failed validation.", errors)

        records = [
            {**country.model_dump(exclude_unset=True), self.key_attribute: str(uuid.uuid4())}
            for country in validated
        ]
        self.store.batch_put(self.table, records)
        logger.info("Created %d countries", len(records))
        return records

    def get_by_id(self, country_id: str) -> Dict[str, Any]:
        """Return the country stored under ``country_id``.

        Raises ``NotFoundError`` if there is none.
        """
        if not country_id:
            raise NotFoundError("Country id is empty")
        record = self.store.get(self.table, {self.key_attribute: country_id})
        if record is None:
            raise NotFoundError(f"Country {country_id} not found")
        return record

    def get_all(self) -> List[Dict[str, Any]]:
        return self.store.scan(self.table)

    def get_all_ids(self) -> List[str]:
        items = self.store.scan(self.table, projection=[self.key_attribute])
        return [item[self.key_attribute] for item in items if self.key_attribute in item]
