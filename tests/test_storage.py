"""Tests for the key-value storage backends."""

import sqlite3

import pytest

from conftest import make_draft
from custom_vocabulary import (
    MemoryStorage,
    PersistenceError,
    SQLiteStorage,
    VocabularyStore,
)
from custom_vocabulary.storage import SCHEMA_VERSION


@pytest.fixture(params=["memory", "sqlite"])
def backend(request):
    if request.param == "memory":
        yield MemoryStorage()
    else:
        with SQLiteStorage(":memory:") as s:
            yield s


class TestKeyValueContract:
    def test_get_missing(self, backend):
        assert backend.get("nope") is None

    def test_set_and_get(self, backend):
        backend.set("a", "1")
        assert backend.get("a") == "1"

    def test_set_overwrites(self, backend):
        backend.set("a", "1")
        backend.set("a", "2")
        assert backend.get("a") == "2"
        assert backend.slots() == ["a"]

    def test_delete(self, backend):
        backend.set("a", "1")
        assert backend.delete("a") is True
        assert backend.delete("a") is False
        assert backend.get("a") is None

    def test_slots_sorted(self, backend):
        backend.set("b", "x")
        backend.set("a", "y")
        assert backend.slots() == ["a", "b"]


class TestSQLiteStorage:
    def test_persists_across_connections(self, tmp_path):
        db = tmp_path / "vocab.db"
        with SQLiteStorage(db) as s:
            s.set("slot", "value")
        with SQLiteStorage(db) as s:
            assert s.get("slot") == "value"

    def test_creates_parent_directory(self, tmp_path):
        db = tmp_path / "nested" / "dir" / "vocab.db"
        with SQLiteStorage(db) as s:
            assert s.path == str(db)
        assert db.exists()

    def test_schema_version_recorded(self, tmp_path):
        db = tmp_path / "vocab.db"
        SQLiteStorage(db).close()
        conn = sqlite3.connect(db)
        row = conn.execute(
            "SELECT value FROM meta WHERE key = 'schema_version'"
        ).fetchone()
        conn.close()
        assert row[0] == SCHEMA_VERSION

    def test_incompatible_schema_version(self, tmp_path):
        db = tmp_path / "vocab.db"
        SQLiteStorage(db).close()
        conn = sqlite3.connect(db)
        conn.execute("UPDATE meta SET value = '0.1' WHERE key = 'schema_version'")
        conn.commit()
        conn.close()
        with pytest.raises(PersistenceError, match="schema version"):
            SQLiteStorage(db)

    def test_store_round_trip(self, tmp_path):
        db = tmp_path / "vocab.db"
        with SQLiteStorage(db) as s:
            word = VocabularyStore(s).add_word(make_draft())
        with SQLiteStorage(db) as s:
            assert VocabularyStore(s).get_custom_words() == (word,)

    def test_write_after_close_raises(self):
        s = SQLiteStorage(":memory:")
        s.close()
        with pytest.raises(PersistenceError):
            s.set("a", "1")

    def test_not_a_database(self, tmp_path):
        db = tmp_path / "vocab.db"
        db.write_bytes(b"this is not an sqlite file" * 200)
        with pytest.raises(PersistenceError, match="vocab.db"):
            SQLiteStorage(db)
