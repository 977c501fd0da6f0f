import sqlite3

import pytest

from country_api.app.core.db import (
    InMemoryRecordStore,
    SQLiteRecordStore,
    TableSchema,
    get_database_path,
)
from country_api.app.core.exceptions import StorageError


SCHEMAS = [
    TableSchema(name="Things", hash_key="id"),
    TableSchema(name="Links", hash_key="src", range_key="dst"),
]


@pytest.fixture(params=["memory", "sqlite"])
def store(request, tmp_path):
    if request.param == "memory":
        return InMemoryRecordStore(SCHEMAS)
    sqlite_store = SQLiteRecordStore(str(tmp_path / "store.db"), SCHEMAS)
    sqlite_store.create_tables()
    return sqlite_store


class TestPointOperations:
    def test_get_missing_returns_none(self, store):
        assert store.get("Things", {"id": "nope"}) is None

    def test_put_then_get(self, store):
        store.put("Things", {"id": "a", "name": "Alpha", "size": 3})
        assert store.get("Things", {"id": "a"}) == {"id": "a", "name": "Alpha", "size": 3}

    def test_put_overwrites(self, store):
        store.put("Things", {"id": "a", "name": "Alpha"})
        store.put("Things", {"id": "a", "name": "Alpha 2"})
        assert store.get("Things", {"id": "a"})["name"] == "Alpha 2"
        assert len(store.scan("Things")) == 1

    def test_compound_key(self, store):
        store.put("Links", {"src": "a", "dst": "b"})
        assert store.get("Links", {"src": "a", "dst": "b"}) == {"src": "a", "dst": "b"}
        assert store.get("Links", {"src": "b", "dst": "a"}) is None

    def test_missing_key_attribute(self, store):
        with pytest.raises(StorageError):
            store.put("Links", {"src": "a"})
        with pytest.raises(StorageError):
            store.get("Things", {})

    def test_unknown_table(self, store):
        with pytest.raises(StorageError):
            store.get("Other", {"id": "a"})

    def test_delete(self, store):
        store.put("Things", {"id": "a"})
        assert store.delete("Things", {"id": "a"}) is True
        assert store.delete("Things", {"id": "a"}) is False
        assert store.get("Things", {"id": "a"}) is None


class TestCollectionOperations:
    def test_scan_with_predicate_and_projection(self, store):
        store.batch_put("Things", [{"id": "a", "n": 1}, {"id": "b", "n": 2}, {"id": "c", "n": 3}])
        big = store.scan("Things", predicate=lambda item: item["n"] > 1)
        assert sorted(item["id"] for item in big) == ["b", "c"]
        ids = store.scan("Things", projection=["id"])
        assert sorted(ids, key=lambda item: item["id"]) == [{"id": "a"}, {"id": "b"}, {"id": "c"}]

    def test_query_partition_in_sort_key_order(self, store):
        store.batch_put(
            "Links",
            [{"src": "a", "dst": "z"}, {"src": "a", "dst": "m"}, {"src": "b", "dst": "a"}],
        )
        assert [item["dst"] for item in store.query("Links", "a")] == ["m", "z"]
        assert store.query("Links", "c") == []

    def test_batch_put_rejects_whole_batch_on_bad_item(self, store):
        with pytest.raises(StorageError):
            store.batch_put("Things", [{"id": "a"}, {"name": "no key"}])
        assert store.scan("Things") == []

    def test_batch_put_empty_is_noop(self, store):
        store.batch_put("Things", [])
        assert store.scan("Things") == []


def test_in_memory_store_returns_copies():
    store = InMemoryRecordStore(SCHEMAS)
    store.put("Things", {"id": "a", "tags": ["x"]})
    item = store.get("Things", {"id": "a"})
    item["tags"].append("y")
    assert store.get("Things", {"id": "a"})["tags"] == ["x"]


def test_sqlite_store_wraps_sqlite_errors(tmp_path):
    store = SQLiteRecordStore(str(tmp_path / "store.db"), SCHEMAS)
    # Tables were never created.
    with pytest.raises(StorageError) as excinfo:
        store.get("Things", {"id": "a"})
    assert isinstance(excinfo.value.__cause__, sqlite3.Error)


def test_sqlite_store_rejects_unsafe_table_names(tmp_path):
    with pytest.raises(StorageError):
        SQLiteRecordStore(str(tmp_path / "store.db"), [TableSchema(name="x; DROP TABLE y", hash_key="id")])


def test_sqlite_store_persists_across_instances(tmp_path):
    path = str(tmp_path / "store.db")
    first = SQLiteRecordStore(path, SCHEMAS)
    first.create_tables()
    first.put("Things", {"id": "a", "name": "Alpha"})
    second = SQLiteRecordStore(path, SCHEMAS)
    assert second.get("Things", {"id": "a"}) == {"id": "a", "name": "Alpha"}


def test_database_path_resolution(tmp_path):
    absolute = str(tmp_path / "x.db")
    assert get_database_path(absolute) == absolute
    assert get_database_path("relative.db").endswith("relative.db")


def test_sqlite_store_refuses_non_finite_numbers(tmp_path):
    store = SQLiteRecordStore(str(tmp_path / "store.db"), SCHEMAS)
    store.create_tables()
    with pytest.raises(StorageError):
        store.put("Things", {"id": "a", "size": float("nan")})
    assert store.scan("Things") == []
