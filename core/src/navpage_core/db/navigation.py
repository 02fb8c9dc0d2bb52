from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Final

from jsonschema import Draft202012Validator

from navpage_core.db.kv import CATEGORIES_KEY, SITES_KEY, KeyValueStore
from navpage_core.db.results import OperationResult, failed, succeeded
from navpage_core.session import AdminSession, session_is_current

logger = logging.getLogger(__name__)

MSG_NOT_LOGGED_IN: Final[str] = "not logged in"
MSG_OPERATION_FAILED: Final[str] = "operation failed"

DEFAULT_SITE_ICON: Final[str] = '<i class="fas fa-globe"></i>'

CATEGORIES_SCHEMA: Final[dict[str, Any]] = {
    "type": "array",
    "items": {"type": "string"},
}

SITES_SCHEMA: Final[dict[str, Any]] = {
    "type": "array",
    "items": {
        "type": "object",
        "required": ["name", "url", "category"],
        "properties": {
            "name": {"type": "string"},
            "url": {"type": "string"},
            "category": {"type": "string"},
            "icon": {"type": ["string", "null"]},
        },
    },
}

_categories_validator = Draft202012Validator(CATEGORIES_SCHEMA)
_sites_validator = Draft202012Validator(SITES_SCHEMA)


@dataclass(frozen=True)
class NavigationData:
    categories: list[str] = field(default_factory=list)
    sites: list[dict[str, Any]] = field(default_factory=list)


def _first_error(validator: Draft202012Validator, value: Any) -> str | None:
    for err in validator.iter_errors(value):
        path = "/".join(str(p) for p in err.path)
        return f"{path or '<root>'}: {err.message}"
    return None


def _load_collection(
    store: KeyValueStore, key: str, validator: Draft202012Validator
) -> list[Any]:
    raw = store.get(key)
    if raw is None:
        return []

    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        logger.warning("Stored %r is not valid JSON; treating as empty", key)
        return []

    problem = _first_error(validator, value)
    if problem is not None:
        logger.warning("Stored %r has an unexpected shape (%s); treating as empty", key, problem)
        return []
    return value


def get_navigation(store: KeyValueStore) -> NavigationData:
    """Read categories and sites.

    Never raises: a missing or malformed key reads as an empty list, and a store
    failure reads as both empty, so the public page always renders.
    """

    try:
        categories = _load_collection(store, CATEGORIES_KEY, _categories_validator)
        sites = _load_collection(store, SITES_KEY, _sites_validator)
    except Exception:
        logger.exception("Failed to read navigation data; serving empty collections")
        return NavigationData()

    return NavigationData(categories=categories, sites=sites)


def validate_navigation(categories: Any, sites: Any) -> str | None:
    """Return a description of the first shape problem, or None if valid."""

    problem = _first_error(_categories_validator, categories)
    if problem is not None:
        return f"categories {problem}"
    problem = _first_error(_sites_validator, sites)
    if problem is not None:
        return f"sites {problem}"
    return None


def write_navigation(
    store: KeyValueStore, *, categories: list[str], sites: list[dict[str, Any]]
) -> None:
    """Replace both collections in one store transaction."""

    store.put_many(
        [
            (CATEGORIES_KEY, json.dumps(categories, ensure_ascii=False)),
            (SITES_KEY, json.dumps(sites, ensure_ascii=False)),
        ]
    )


def save_navigation(
    store: KeyValueStore,
    session: AdminSession | None,
    *,
    categories: list[str],
    sites: list[dict[str, Any]],
) -> OperationResult:
    if not session_is_current(store, session):
        return failed(MSG_NOT_LOGGED_IN)

    problem = validate_navigation(categories, sites)
    if problem is not None:
        logger.warning("Rejected navigation save: %s", problem)
        return failed(MSG_OPERATION_FAILED)

    write_navigation(store, categories=categories, sites=sites)
    logger.info("Navigation saved: %d categories, %d sites", len(categories), len(sites))
    return succeeded()
