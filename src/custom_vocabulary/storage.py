"""Key-value persistence backends for custom-vocabulary."""

from __future__ import annotations

import logging
import sqlite3
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from custom_vocabulary.exceptions import PersistenceError

logger = logging.getLogger(__name__)

SCHEMA_VERSION = "1.0"

# Named slots
WORDS_SLOT = "custom-vocabulary"
RESULTS_SLOT = "quiz-results"


class KeyValueStorage(ABC):
    """Text values stored under named slots."""

    @abstractmethod
    def get(self, slot: str) -> str | None:
        """Return the value stored under *slot*, or None."""

    @abstractmethod
    def set(self, slot: str, value: str) -> None:
        """Store *value* under *slot*, replacing any previous value."""

    @abstractmethod
    def delete(self, slot: str) -> bool:
        """Remove *slot*. Returns True if it existed."""

    @abstractmethod
    def slots(self) -> list[str]:
        """Names of all stored slots."""

    def close(self) -> None:
        """Release any underlying resources."""

    def __enter__(self) -> KeyValueStorage:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()


class MemoryStorage(KeyValueStorage):
    """Dictionary-backed storage, lost when the process exits."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, slot: str) -> str | None:
        return self._data.get(slot)

    def set(self, slot: str, value: str) -> None:
        self._data[slot] = value

    def delete(self, slot: str) -> bool:
        return self._data.pop(slot, None) is not None

    def slots(self) -> list[str]:
        return sorted(self._data)


# ---------------------------------------------------------------------------
# SQLite backend
# ---------------------------------------------------------------------------

_DDL = """
CREATE TABLE IF NOT EXISTS meta (
    key TEXT NOT NULL,
    value TEXT,
    UNIQUE (key)
);

CREATE TABLE IF NOT EXISTS slots (
    name TEXT NOT NULL,
    value TEXT NOT NULL,
    updated_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%f', 'now')),
    UNIQUE (name)
);
"""


def connect(db_path: str | Path) -> sqlite3.Connection:
    """Open a connection with row factory and pragmas set."""
    db_path_str = str(db_path)
    if db_path_str != ":memory:":
        Path(db_path_str).expanduser().parent.mkdir(parents=True, exist_ok=True)
        db_path_str = str(Path(db_path_str).expanduser())
    try:
        conn = sqlite3.connect(db_path_str)
    except sqlite3.Error as e:
        raise PersistenceError(f"Cannot open database {db_path_str!r}: {e}") from e
    if db_path_str != ":memory:":
        try:
            conn.execute("PRAGMA journal_mode = WAL")
        except sqlite3.DatabaseError as e:
            conn.close()
            raise PersistenceError(
                f"Cannot open database {db_path_str!r}: {e}"
            ) from e
    conn.row_factory = sqlite3.Row
    return conn


def init_db(conn: sqlite3.Connection) -> None:
    """Create tables if they don't exist. Set schema version."""
    conn.executescript(_DDL)
    conn.execute(
        "INSERT OR IGNORE INTO meta (key, value) VALUES ('schema_version', ?)",
        (SCHEMA_VERSION,),
    )
    conn.execute(
        "INSERT OR IGNORE INTO meta (key, value) "
        "VALUES ('created_at', strftime('%Y-%m-%dT%H:%M:%f', 'now'))",
    )
    conn.commit()


def check_schema_version(conn: sqlite3.Connection) -> None:
    """Verify the database schema version is compatible."""
    try:
        row = conn.execute(
            "SELECT value FROM meta WHERE key = 'schema_version'"
        ).fetchone()
    except sqlite3.OperationalError:
        # meta table doesn't exist - uninitialized DB
        return
    except sqlite3.DatabaseError as e:
        raise PersistenceError(f"Cannot read database: {e}") from e
    if row is None:
        return
    version = row[0]
    if version != SCHEMA_VERSION:
        raise PersistenceError(
            f"Incompatible schema version: {version} "
            f"(expected {SCHEMA_VERSION})"
        )


class SQLiteStorage(KeyValueStorage):
    """Slots persisted in a single SQLite table."""

    def __init__(self, db_path: str | Path = ":memory:") -> None:
        self._db_path = str(db_path)
        self._conn = connect(db_path)
        try:
            check_schema_version(self._conn)
            init_db(self._conn)
        except sqlite3.Error as e:
            self._conn.close()
            raise PersistenceError(
                f"Cannot initialize database {self._db_path!r}: {e}"
            ) from e
        except PersistenceError:
            self._conn.close()
            raise
        logger.debug(f"Opened slot storage at {self._db_path}")

    @property
    def path(self) -> str:
        return self._db_path

    def get(self, slot: str) -> str | None:
        row = self._conn.execute(
            "SELECT value FROM slots WHERE name = ?", (slot,)
        ).fetchone()
        return row["value"] if row else None

    def set(self, slot: str, value: str) -> None:
        try:
            with self._conn:
                self._conn.execute(
                    "INSERT INTO slots (name, value) VALUES (?, ?) "
                    "ON CONFLICT (name) DO UPDATE SET value = excluded.value, "
                    "updated_at = strftime('%Y-%m-%dT%H:%M:%f', 'now')",
                    (slot, value),
                )
        except sqlite3.Error as e:
            raise PersistenceError(f"Failed to write slot {slot!r}: {e}") from e

    def delete(self, slot: str) -> bool:
        try:
            with self._conn:
                cur = self._conn.execute(
                    "DELETE FROM slots WHERE name = ?", (slot,)
                )
        except sqlite3.Error as e:
            raise PersistenceError(f"Failed to delete slot {slot!r}: {e}") from e
        return cur.rowcount > 0

    def slots(self) -> list[str]:
        rows = self._conn.execute(
            "SELECT name FROM slots ORDER BY name"
        ).fetchall()
        return [r["name"] for r in rows]

    def close(self) -> None:
        """Close the database connection."""
        self._conn.close()
