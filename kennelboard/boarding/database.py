"""SQLite storage for the kennel tariff tables."""

from __future__ import annotations

import sqlite3
from pathlib import Path


SCHEMA_VERSION = 1


class SchemaVersionError(RuntimeError):
    """Raised when a database was written by a newer schema."""


def row_to_dict(cursor: sqlite3.Cursor, row: tuple) -> dict:
    columns = [column[0] for column in cursor.description]
    return dict(zip(columns, row))


def get_connection(path: str | Path) -> sqlite3.Connection:
    """Open a connection that returns rows as dicts.

    Request threads share the connection; callers serialise access.
    """

    conn = sqlite3.connect(path, check_same_thread=False)
    conn.row_factory = row_to_dict
    conn.execute("PRAGMA journal_mode = WAL")
    conn.execute("PRAGMA busy_timeout = 5000")
    return conn


def initialize_database(conn: sqlite3.Connection) -> None:
    """Create the tariff schema and record its version.

    Refuses to open a database stamped with a newer schema version.
    """

    conn.executescript(
        """
        CREATE TABLE IF NOT EXISTS metadata (
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL
        );

        CREATE TABLE IF NOT EXISTS tariffs (
            name TEXT PRIMARY KEY,
            single_night_rate REAL NOT NULL,
            day_trip_rate REAL NOT NULL,
            standard_night_rate REAL NOT NULL,
            long_stay_night_rate REAL NOT NULL,
            august_night_rate REAL NOT NULL,
            additional_dog_discount_fraction REAL NOT NULL,
            updated_at TEXT DEFAULT CURRENT_TIMESTAMP
        );
        """
    )

    stored = schema_version(conn)
    if stored is not None and stored > SCHEMA_VERSION:
        raise SchemaVersionError(
            f"Database schema version {stored} is newer than supported version {SCHEMA_VERSION}"
        )
    conn.execute(
        "INSERT INTO metadata(key, value) VALUES ('schema_version', ?)\n"
        "         ON CONFLICT(key) DO UPDATE SET value = excluded.value",
        (str(SCHEMA_VERSION),),
    )
    conn.commit()


def schema_version(conn: sqlite3.Connection) -> int | None:
    row = conn.execute("SELECT value FROM metadata WHERE key = 'schema_version'").fetchone()
    return int(row["value"]) if row else None
