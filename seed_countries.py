#!/usr/bin/env python3
"""
Seed the Country API SQLite database from a JSON fixture.

Usage:
    python seed_countries.py --file ./fixtures/countries.json
    python seed_countries.py --db ./countries.db --file ./fixtures/countries.json

See ``country_api.app.seeding`` for the fixture format.
"""

import argparse
import asyncio
import sys

from country_api.app.core.config import settings
from country_api.app.core.db import init_db
from country_api.app.core.exceptions import CountryApiError
from country_api.app.core.logging_config import setup_logging
from country_api.app.seeding import load_fixture, seed


def main():
    ap = argparse.ArgumentParser(description="Seed countries and neighbor relations (SQLite).")
    ap.add_argument("--db", default=settings.database_url, help="Path to SQLite DB file (default: %(default)s)")
    ap.add_argument("--file", required=True, help="JSON fixture with 'countries' and 'neighbors'")
    args = ap.parse_args()

    setup_logging(settings)
    try:
        store = init_db(args.db)
        created, added, errors = asyncio.run(seed(store, load_fixture(args.file)))
    except (OSError, ValueError, CountryApiError) as exc:
        print(f"[!] Seeding failed: {exc}", file=sys.stderr)
        sys.exit(1)

    print(f"[+] Created {created} countries, linked {len(added)} neighbor pairs")
    for error in errors:
        print(f"[-] {error}")


if __name__ == "__main__":
    main()
