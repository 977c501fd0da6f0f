"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service starts with a local SQLite file and the public paths
``/countries`` and ``/countries/{id}/neighbour``.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Country API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Path to the SQLite file backing the record store.  A relative
    # path is resolved against the project root by ``core.db``.
    database_url: str = os.getenv("DATABASE_URL", "countries.db")

    # Collection names.  Country records are keyed by ``countryID``;
    # neighbor relations by ``countryID`` + ``neighborId``.
    country_table: str = os.getenv("COUNTRY_TABLE", "CountryTable")
    neighbor_table: str = os.getenv("NEIGHBOR_TABLE", "NeighborsTable")

    # Routes are mounted under this prefix.  Empty keeps the paths
    # clients already use.
    api_prefix: str = os.getenv("API_PREFIX", "")

    default_page: int = int(os.getenv("DEFAULT_PAGE", "1"))
    default_limit: int = int(os.getenv("DEFAULT_LIMIT", "10"))

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8000"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()
