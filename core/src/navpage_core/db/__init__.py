from __future__ import annotations

from pathlib import Path

from navpage_core.home import NavPagePaths

DEFAULT_DB_FILENAME = "navpage.sqlite3"


def resolve_db_path(paths: NavPagePaths) -> Path:
    """Resolve the key-value store SQLite database path.

    The directory follows the `db_dir` layout/override.
    """

    return paths.db_dir / DEFAULT_DB_FILENAME
