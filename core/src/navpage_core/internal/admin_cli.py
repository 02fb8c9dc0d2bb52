from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from navpage_core.config import load_core_config, resolve_configured_paths
from navpage_core.db import resolve_db_path
from navpage_core.db.credentials import logout, reset_password
from navpage_core.db.kv import SqliteKeyValueStore
from navpage_core.db.migrate import apply_migrations
from navpage_core.db.navigation import get_navigation, validate_navigation, write_navigation
from navpage_core.home import ensure_navpage_layout, resolve_navpage_home


def export_navigation(store: SqliteKeyValueStore, path: Path) -> None:
    nav = get_navigation(store)
    payload = {"categories": nav.categories, "sites": nav.sites}
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")


def import_navigation(store: SqliteKeyValueStore, path: Path) -> None:
    with path.open("r", encoding="utf-8") as f:
        payload = json.load(f)
    if not isinstance(payload, dict):
        raise ValueError(f"Expected a JSON object with categories and sites in {path}")

    categories = payload.get("categories", [])
    sites = payload.get("sites", [])
    problem = validate_navigation(categories, sites)
    if problem is not None:
        raise ValueError(f"Invalid navigation data in {path}: {problem}")

    write_navigation(store, categories=categories, sites=sites)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="python -m navpage_core.internal.admin_cli",
        description="NavPage out-of-band administration (no HTTP).",
    )
    parser.add_argument("--home", type=Path, default=None, help="Override NAVPAGE_HOME")
    parser.add_argument("--migrate", action="store_true", help="Apply migrations")
    parser.add_argument(
        "--set-password",
        metavar="PASSWORD",
        help="Replace the admin password and end the current session",
    )
    parser.add_argument("--logout", action="store_true", help="End the current admin session")
    parser.add_argument(
        "--export", metavar="PATH", type=Path, help="Write categories and sites to a JSON file"
    )
    parser.add_argument(
        "--import",
        dest="import_path",
        metavar="PATH",
        type=Path,
        help="Replace categories and sites from a JSON file",
    )
    args = parser.parse_args(argv)

    environ = None
    if args.home is not None:
        environ = {"NAVPAGE_HOME": str(args.home)}

    home = resolve_navpage_home(environ)
    paths = ensure_navpage_layout(home)
    config = load_core_config(paths)
    paths = resolve_configured_paths(paths, config)

    db_path = resolve_db_path(paths)
    apply_migrations(db_path)
    store = SqliteKeyValueStore(db_path)

    try:
        if args.set_password is not None:
            reset_password(store, args.set_password)
            print("admin password updated")

        if args.logout:
            logout(store)
            print("admin session cleared")

        if args.import_path is not None:
            import_navigation(store, args.import_path)
            print(f"imported {args.import_path}")

        if args.export is not None:
            export_navigation(store, args.export)
            print(f"exported {args.export}")
    except (OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
