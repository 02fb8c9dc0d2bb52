from __future__ import annotations

import sqlite3
from pathlib import Path

import pytest

from navpage_core.db.kv import SqliteKeyValueStore
from navpage_core.db.migrate import apply_migrations


def test_apply_migrations_is_idempotent(tmp_path: Path) -> None:
    db_path = tmp_path / "nested" / "navpage.sqlite3"
    assert apply_migrations(db_path) == ["0001_init"]
    assert apply_migrations(db_path) == []

    with sqlite3.connect(db_path) as conn:
        names = [r[0] for r in conn.execute("SELECT name FROM schema_migrations;")]
        tables = {
            r[0] for r in conn.execute("SELECT name FROM sqlite_master WHERE type = 'table';")
        }

    assert names == ["0001_init"]
    assert "kv" in tables


def test_get_missing_key_returns_none(store: SqliteKeyValueStore) -> None:
    assert store.get("categories") is None


def test_put_overwrites_and_get_returns_latest(store: SqliteKeyValueStore) -> None:
    store.put("admin_session", "first")
    store.put("admin_session", "second")
    assert store.get("admin_session") == "second"


def test_values_are_stored_verbatim(store: SqliteKeyValueStore) -> None:
    raw = '["工作", "Work"]'
    store.put("categories", raw)
    assert store.get("categories") == raw


def test_delete_is_idempotent(store: SqliteKeyValueStore) -> None:
    store.put("admin_session", "token")
    store.delete("admin_session")
    store.delete("admin_session")
    assert store.get("admin_session") is None


def test_put_many_is_all_or_nothing(store: SqliteKeyValueStore) -> None:
    store.put("categories", "[]")

    # A NULL value violates the NOT NULL constraint on the second row.
    with pytest.raises(sqlite3.IntegrityError):
        store.put_many([("categories", '["Work"]'), ("sites", None)])  # type: ignore[list-item]

    assert store.get("categories") == "[]"
    assert store.get("sites") is None


def test_put_many_empty_is_noop(store: SqliteKeyValueStore) -> None:
    store.put_many([])
    assert store.get("categories") is None
