"""Persistence of the tariff table."""

from __future__ import annotations

import logging
import sqlite3
import threading
from typing import Any

from .pricing import DEFAULT_TARIFFS, Tariffs

logger = logging.getLogger(__name__)

DEFAULT_TABLE_NAME = "default"


class TariffStore:
    """Reads and writes one named tariff table.

    The connection is shared by request threads, so reads, writes and the
    read-merge-write of :meth:`update` run under one lock.
    """

    def __init__(self, conn: sqlite3.Connection, name: str = DEFAULT_TABLE_NAME) -> None:
        self.conn = conn
        self.name = name
        self._lock = threading.RLock()

    def get(self) -> Tariffs:
        """Return the stored tariffs, writing the defaults first if none exist."""

        with self._lock:
            row = self.conn.execute("SELECT * FROM tariffs WHERE name = ?", (self.name,)).fetchone()
            if row is None:
                logger.info("Tariff table %r not found, creating it with defaults", self.name)
                return self.save(DEFAULT_TARIFFS)
            return Tariffs.from_mapping(row)


    def save(self, tariffs: Tariffs) -> Tariffs:
        values = tariffs.as_dict()
        columns = ", ".join(values)
        placeholders = ", ".join("?" for _ in values)
        updates = ", ".join(f"{column} = excluded.{column}" for column in values)
        with self._lock:
            self.conn.execute(
                f"""
                INSERT INTO tariffs(name, {columns}) VALUES (?, {placeholders})
                ON CONFLICT(name) DO UPDATE SET {updates}, updated_at = CURRENT_TIMESTAMP
                """,
                (self.name, *values.values()),
            )
            self.conn.commit()
        return tariffs

    def update(self, **changes: Any) -> Tariffs:
        with self._lock:
            tariffs = self.get().with_changes(**changes)
            logger.info("Updating tariff table %r: %s", self.name, sorted(changes))
            return self.save(tariffs)

    def reset(self) -> Tariffs:
        logger.info("Resetting tariff table %r to defaults", self.name)
        return self.save(DEFAULT_TARIFFS)
