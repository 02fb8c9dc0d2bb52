from __future__ import annotations

import sqlite3
from collections.abc import Iterable
from contextlib import closing
from pathlib import Path
from typing import Final, Protocol

ADMIN_PASSWORD_KEY: Final[str] = "admin_password"
ADMIN_SESSION_KEY: Final[str] = "admin_session"
CATEGORIES_KEY: Final[str] = "categories"
SITES_KEY: Final[str] = "sites"


class KeyValueStore(Protocol):
    """String key -> string value store. No listing, no cross-key transactions
    beyond `put_many`."""

    def get(self, key: str) -> str | None: ...

    def put(self, key: str, value: str) -> None: ...

    def put_many(self, items: Iterable[tuple[str, str]]) -> None: ...

    def delete(self, key: str) -> None: ...


class SqliteKeyValueStore:
    """Key-value store backed by the `kv` table.

    Each call opens its own connection, so instances are safe to share across
    request handlers. `put_many` writes all items in a single transaction.
    """

    def __init__(self, db_path: Path, *, timeout: float = 5.0) -> None:
        self._db_path = db_path
        self._timeout = timeout

    @property
    def db_path(self) -> Path:
        return self._db_path

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self._db_path, timeout=self._timeout)

    def get(self, key: str) -> str | None:
        with closing(self._connect()) as conn:
            row = conn.execute("SELECT value FROM kv WHERE key = ?;", (key,)).fetchone()
        if row is None:
            return None
        return row[0]

    def put(self, key: str, value: str) -> None:
        self.put_many([(key, value)])

    def put_many(self, items: Iterable[tuple[str, str]]) -> None:
        rows = list(items)
        if not rows:
            return

        with closing(self._connect()) as conn, conn:
            conn.executemany(
                """
                INSERT INTO kv (key, value) VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = strftime('%Y-%m-%dT%H:%M:%fZ', 'now');
                """.strip(),
                rows,
            )

    def delete(self, key: str) -> None:
        # Deleting a missing key is not an error.
        with closing(self._connect()) as conn, conn:
            conn.execute("DELETE FROM kv WHERE key = ?;", (key,))
