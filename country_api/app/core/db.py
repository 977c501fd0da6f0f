"""
Record store used by the repositories.

The store is a small key-value/document abstraction: every collection
("table") has a hash key and an optional range key, items are plain
JSON-compatible dicts, and the supported operations are point reads
and writes, deletes, full scans with an optional filter, partition
queries and atomic batch writes.

Two implementations share the ``RecordStore`` contract:

* ``SQLiteRecordStore`` persists each collection in its own SQLite
  table with the item stored as JSON text.  A new connection is
  opened for every operation and closed afterwards.
* ``InMemoryRecordStore`` keeps everything in dicts.  It is used by the
  test suite and anywhere a throwaway store is handy.

Stores are constructed explicitly at startup and handed to the
repositories; there is no module-level client.
"""

from __future__ import annotations

import copy
import json
import logging
import os
import re
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Sequence

from .config import settings
from .exceptions import StorageError


logger = logging.getLogger(__name__)

Item = Dict[str, Any]
Predicate = Callable[[Item], bool]

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


@dataclass(frozen=True)
class TableSchema:
    """Key scheme of one collection.

    ``hash_key`` names the partition attribute; ``range_key`` names the
    sort attribute for collections with compound keys.
    """

    name: str
    hash_key: str
    range_key: Optional[str] = None

    def key_of(self, item: Item) -> tuple:
        """Extract ``(hash, range)`` from an item or key dict.

        Raises ``StorageError`` if a key attribute is missing or not a
        string.
        """
        hash_value = item.get(self.hash_key)
        if not isinstance(hash_value, str) or not hash_value:
            raise StorageError(f"{self.name}: missing key attribute '{self.hash_key}'")
        if self.range_key is None:
            return hash_value, ""
        range_value = item.get(self.range_key)
        if not isinstance(range_value, str) or not range_value:
            raise StorageError(f"{self.name}: missing key attribute '{self.range_key}'")
        return hash_value, range_value


def default_schemas() -> List[TableSchema]:
    """Return the two collections used by the service."""
    return [
        TableSchema(name=settings.country_table, hash_key="countryID"),
        TableSchema(name=settings.neighbor_table, hash_key="countryID", range_key="neighborId"),
    ]


def get_database_path(database_url: Optional[str] = None) -> str:
    """Compute the path to the SQLite database file.

    An absolute path is used directly; anything else is resolved
    relative to the project root.
    """
    db_url = database_url or settings.database_url
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / db_url).resolve())


def _project(item: Item, projection: Optional[Sequence[str]]) -> Item:
    if projection is None:
        return item
    return {name: item[name] for name in projection if name in item}


class RecordStore:
    """Contract shared by all record store implementations."""

    def __init__(self, schemas: Iterable[TableSchema]) -> None:
        self._schemas: Dict[str, TableSchema] = {schema.name: schema for schema in schemas}

    def schema(self, table: str) -> TableSchema:
        try:
            return self._schemas[table]
        except KeyError:
            raise StorageError(f"Unknown table: {table}") from None

    def create_tables(self) -> None:
        """Prepare backing storage for every known collection."""

    def get(self, table: str, key: Item) -> Optional[Item]:
        raise NotImplementedError

    def put(self, table: str, item: Item) -> None:
        raise NotImplementedError

    def delete(self, table: str, key: Item) -> bool:
        raise NotImplementedError

    def scan(
        self,
        table: str,
        predicate: Optional[Predicate] = None,
        projection: Optional[Sequence[str]] = None,
    ) -> List[Item]:
        raise NotImplementedError

    def query(self, table: str, partition_value: str) -> List[Item]:
        raise NotImplementedError

    def batch_put(self, table: str, items: Sequence[Item]) -> None:
        raise NotImplementedError


class SQLiteRecordStore(RecordStore):
    """Record store persisted in a SQLite database file."""

    def __init__(self, database_path: str, schemas: Optional[Iterable[TableSchema]] = None) -> None:
        super().__init__(schemas if schemas is not None else default_schemas())
        for name in self._schemas:
            if not _IDENTIFIER.match(name):
                raise StorageError(f"Invalid table name: {name!r}")
        self.database_path = database_path

    def get_connection(self) -> sqlite3.Connection:
        """Create and return a new SQLite connection.

        Rows are returned as ``sqlite3.Row`` so columns can be accessed
        by name.
        """
        conn = sqlite3.connect(self.database_path)
        conn.row_factory = sqlite3.Row
        return conn

    @contextmanager
    def _cursor(self) -> Iterator[sqlite3.Cursor]:
        """Yield a cursor, commit on success and always close the connection.

        Any ``sqlite3.Error`` raised inside the block is rolled back and
        re-raised as ``StorageError``.
        """
        try:
            conn = self.get_connection()
        except sqlite3.Error as exc:
            raise StorageError(f"Cannot open database {self.database_path}: {exc}") from exc
        try:
            yield conn.cursor()
            conn.commit()
        except sqlite3.Error as exc:
            conn.rollback()
            logger.error("SQLite operation failed: %s", exc)
            raise StorageError(str(exc)) from exc
        finally:
            conn.close()

    def create_tables(self) -> None:
        with self._cursor() as cursor:
            for name in self._schemas:
                cursor.execute(
                    f"""
                    CREATE TABLE IF NOT EXISTS {name} (
                        hash_key TEXT NOT NULL,
                        range_key TEXT NOT NULL DEFAULT '',
                        item TEXT NOT NULL,
                        PRIMARY KEY (hash_key, range_key)
                    )
                    """
                )
        logger.info("Record store ready at %s", self.database_path)

    def get(self, table: str, key: Item) -> Optional[Item]:
        schema = self.schema(table)
        hash_value, range_value = schema.key_of(key)
        with self._cursor() as cursor:
            row = cursor.execute(
                f"SELECT item FROM {schema.name} WHERE hash_key = ? AND range_key = ?",
                (hash_value, range_value),
            ).fetchone()
        if row is None:
            return None
        return json.loads(row["item"])

    def put(self, table: str, item: Item) -> None:
        self.batch_put(table, [item])

    def delete(self, table: str, key: Item) -> bool:
        schema = self.schema(table)
        hash_value, range_value = schema.key_of(key)
        with self._cursor() as cursor:
            cursor.execute(
                f"DELETE FROM {schema.name} WHERE hash_key = ? AND range_key = ?",
                (hash_value, range_value),
            )
            return cursor.rowcount > 0

    def scan(
        self,
        table: str,
        predicate: Optional[Predicate] = None,
        projection: Optional[Sequence[str]] = None,
    ) -> List[Item]:
        schema = self.schema(table)
        with self._cursor() as cursor:
            rows = cursor.execute(f"SELECT item FROM {schema.name}").fetchall()
        items = [json.loads(row["item"]) for row in rows]
        if predicate is not None:
            items = [item for item in items if predicate(item)]
        return [_project(item, projection) for item in items]

    def query(self, table: str, partition_value: str) -> List[Item]:
        schema = self.schema(table)
        with self._cursor() as cursor:
            rows = cursor.execute(
                f"SELECT item FROM {schema.name} WHERE hash_key = ? ORDER BY range_key",
                (partition_value,),
            ).fetchall()
        return [json.loads(row["item"]) for row in rows]

    def batch_put(self, table: str, items: Sequence[Item]) -> None:
        schema = self.schema(table)
        # Resolve every key before touching the database so a bad item
        # aborts the whole batch.
        rows = []
        for item in items:
            hash_value, range_value = schema.key_of(item)
            try:
                body = json.dumps(item, allow_nan=False)
            except (TypeError, ValueError) as exc:
                raise StorageError(f"{schema.name}: item is not serializable: {exc}") from exc
            rows.append((hash_value, range_value, body))
        if not rows:
            return
        with self._cursor() as cursor:
            cursor.executemany(
                f"INSERT OR REPLACE INTO {schema.name} (hash_key, range_key, item) VALUES (?, ?, ?)",
                rows,
            )


class InMemoryRecordStore(RecordStore):
    """Dict-backed record store with the same semantics as the SQLite one."""

    def __init__(self, schemas: Optional[Iterable[TableSchema]] = None) -> None:
        super().__init__(schemas if schemas is not None else default_schemas())
        self._tables: Dict[str, Dict[tuple, Item]] = {name: {} for name in self._schemas}

    def get(self, table: str, key: Item) -> Optional[Item]:
        schema = self.schema(table)
        item = self._tables[schema.name].get(schema.key_of(key))
        return copy.deepcopy(item) if item is not None else None

    def put(self, table: str, item: Item) -> None:
        self.batch_put(table, [item])

    def delete(self, table: str, key: Item) -> bool:
        schema = self.schema(table)
        return self._tables[schema.name].pop(schema.key_of(key), None) is not None

    def scan(
        self,
        table: str,
        predicate: Optional[Predicate] = None,
        projection: Optional[Sequence[str]] = None,
    ) -> List[Item]:
        schema = self.schema(table)
        items = [copy.deepcopy(item) for item in self._tables[schema.name].values()]
        if predicate is not None:
            items = [item for item in items if predicate(item)]
        return [_project(item, projection) for item in items]

    def query(self, table: str, partition_value: str) -> List[Item]:
        schema = self.schema(table)
        matches = [
            (key[1], item) for key, item in self._tables[schema.name].items() if key[0] == partition_value
        ]
        matches.sort(key=lambda pair: pair[0])
        return [copy.deepcopy(item) for _, item in matches]

    def batch_put(self, table: str, items: Sequence[Item]) -> None:
        schema = self.schema(table)
        staged = [(schema.key_of(item), copy.deepcopy(item)) for item in items]
        self._tables[schema.name].update(staged)


def init_db(database_url: Optional[str] = None) -> SQLiteRecordStore:
    """Build the SQLite record store from settings and create its tables."""
    store = SQLiteRecordStore(get_database_path(database_url))
    store.create_tables()
    return store
