from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import pytest

from navpage_core.db.kv import SqliteKeyValueStore
from navpage_core.db.migrate import apply_migrations


class BrokenStore:
    def get(self, key: str) -> str | None:
        raise OSError("store unavailable")

    def put(self, key: str, value: str) -> None:
        raise OSError("store unavailable")

    def put_many(self, items: Iterable[tuple[str, str]]) -> None:
        raise OSError("store unavailable")

    def delete(self, key: str) -> None:
        raise OSError("store unavailable")


@pytest.fixture
def store(tmp_path: Path) -> SqliteKeyValueStore:
    db_path = tmp_path / "db" / "navpage.sqlite3"
    apply_migrations(db_path)
    return SqliteKeyValueStore(db_path)


@pytest.fixture
def broken_store() -> BrokenStore:
    return BrokenStore()
