from __future__ import annotations

import logging
import sqlite3
from pathlib import Path

from navpage_core.db.migrations import MIGRATIONS

logger = logging.getLogger(__name__)


def apply_migrations(db_path: Path) -> list[str]:
    """Bring the NavPage database up to the latest schema.

    Creates the parent directory and the `kv` table on first run. Names of
    applied migrations are recorded in `schema_migrations`, so startup and the
    admin CLI can both call this on every run. Returns the names applied now.
    """

    db_path.parent.mkdir(parents=True, exist_ok=True)

    newly_applied: list[str] = []
    with sqlite3.connect(db_path) as conn:
        conn.execute(
            "CREATE TABLE IF NOT EXISTS schema_migrations ("
            " name TEXT PRIMARY KEY,"
            " applied_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now'))"
            ");"
        )
        done = {row[0] for row in conn.execute("SELECT name FROM schema_migrations;")}

        for name, sql in MIGRATIONS:
            if name in done:
                continue
            conn.executescript(sql)
            conn.execute("INSERT INTO schema_migrations (name) VALUES (?);", (name,))
            newly_applied.append(name)

    if newly_applied:
        logger.info("Applied migrations to %s: %s", db_path, ", ".join(newly_applied))
    return newly_applied
