from __future__ import annotations

import logging

from fastapi import HTTPException, Request
from starlette.responses import Response

from navpage_core.config import CoreConfig, SessionConfig
from navpage_core.db.kv import KeyValueStore
from navpage_core.session import SESSION_COOKIE, SessionCheck, check_session

logger = logging.getLogger(__name__)


def get_store(request: Request) -> KeyValueStore:
    store = getattr(request.app.state, "kv_store", None)
    if store is None:
        raise HTTPException(status_code=500, detail="Store not initialized")
    return store


def get_core_config(request: Request) -> CoreConfig:
    config = getattr(request.app.state, "navpage_config", None)
    if config is None:
        return CoreConfig()
    return config


def read_session_check(request: Request) -> SessionCheck:
    """Resolve the request's Cookie header to a session check. Store errors
    propagate to the caller."""

    return check_session(get_store(request), request.headers.get("cookie"))


async def get_session_check(request: Request) -> SessionCheck:
    """Page variant of `read_session_check`.

    A store failure here reads as "not authenticated" so pages still render.
    """

    try:
        return read_session_check(request)
    except Exception:
        logger.exception("Session check failed; treating request as unauthenticated")
        return SessionCheck(is_authenticated=False)


def set_session_cookie(response: Response, token: str, settings: SessionConfig) -> None:
    response.set_cookie(
        SESSION_COOKIE,
        token,
        max_age=settings.max_age_seconds,
        path="/",
        httponly=True,
        secure=settings.cookie_secure,
        samesite=settings.samesite,
    )


def clear_session_cookie(response: Response, settings: SessionConfig) -> None:
    response.delete_cookie(
        SESSION_COOKIE,
        path="/",
        httponly=True,
        secure=settings.cookie_secure,
        samesite=settings.samesite,
    )
