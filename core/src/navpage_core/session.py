"""Single global admin session.

Exactly one session token is stored (`admin_session`). A request is
authenticated when its `admin_session` cookie equals that token, so a new
login anywhere invalidates every earlier login. There is no server-side
expiry; the cookie Max-Age is the only lifetime.
"""
from __future__ import annotations

import hmac
from dataclasses import dataclass
from typing import Final

from starlette.requests import cookie_parser

from navpage_core.db.kv import ADMIN_SESSION_KEY, KeyValueStore

SESSION_COOKIE: Final[str] = "admin_session"


@dataclass(frozen=True)
class AdminSession:
    """Proof that a request carried the currently stored session token."""

    token: str


@dataclass(frozen=True)
class SessionCheck:
    is_authenticated: bool
    token: str | None = None

    @property
    def session(self) -> AdminSession | None:
        if not self.is_authenticated or not self.token:
            return None
        return AdminSession(token=self.token)


def parse_session_cookie(cookie_header: str | None) -> str | None:
    """Extract the `admin_session` value from a raw Cookie header."""

    if not cookie_header:
        return None
    return cookie_parser(cookie_header).get(SESSION_COOKIE) or None


def _tokens_match(provided: str, stored: str | None) -> bool:
    if not stored:
        return False
    return hmac.compare_digest(provided.encode("utf-8"), stored.encode("utf-8"))


def check_session(store: KeyValueStore, cookie_header: str | None) -> SessionCheck:
    """Validate a Cookie header against the stored token. Read-only."""

    token = parse_session_cookie(cookie_header)
    if not token:
        return SessionCheck(is_authenticated=False)

    if _tokens_match(token, store.get(ADMIN_SESSION_KEY)):
        return SessionCheck(is_authenticated=True, token=token)
    return SessionCheck(is_authenticated=False)


def session_is_current(store: KeyValueStore, session: AdminSession | None) -> bool:
    """Re-check a session inside a mutating operation (a newer login may have
    replaced it since the request was gated)."""

    if session is None or not session.token:
        return False
    return _tokens_match(session.token, store.get(ADMIN_SESSION_KEY))
