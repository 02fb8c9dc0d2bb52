"""Admin password and session token operations.

The first login on a store without a password claims the admin account
(bootstrap) unless `allow_bootstrap` is False. Every successful login issues a
new token that replaces the previous one.
"""
from __future__ import annotations

import logging
from typing import Final

from navpage_core.db.kv import ADMIN_PASSWORD_KEY, ADMIN_SESSION_KEY, KeyValueStore
from navpage_core.db.results import OperationResult, failed, succeeded
from navpage_core.db.tokens import (
    hash_password,
    is_hashed_password,
    new_session_token,
    verify_password,
)
from navpage_core.session import AdminSession, session_is_current

logger = logging.getLogger(__name__)

MSG_PASSWORD_REQUIRED: Final[str] = "password required"
MSG_INCORRECT_PASSWORD: Final[str] = "incorrect password"
MSG_NOT_CONFIGURED: Final[str] = "admin password not configured"
MSG_NOT_LOGGED_IN: Final[str] = "not logged in"
MSG_CURRENT_INCORRECT: Final[str] = "current password incorrect"
MSG_MISMATCH: Final[str] = "passwords do not match"
MSG_PASSWORD_CHANGED: Final[str] = "password changed"


def login(
    store: KeyValueStore, password: str | None, *, allow_bootstrap: bool = True
) -> OperationResult:
    password = password or ""
    if not password:
        return failed(MSG_PASSWORD_REQUIRED)

    stored = store.get(ADMIN_PASSWORD_KEY)

    if not stored:
        if not allow_bootstrap:
            logger.warning("Login refused: no admin password stored and bootstrap is disabled")
            return failed(MSG_NOT_CONFIGURED)

        token = new_session_token()
        store.put_many(
            [
                (ADMIN_PASSWORD_KEY, hash_password(password)),
                (ADMIN_SESSION_KEY, token),
            ]
        )
        logger.info("Admin password set by first login")
        return succeeded(token=token)

    if not verify_password(password, stored):
        logger.warning("Admin login failed: incorrect password")
        return failed(MSG_INCORRECT_PASSWORD)

    token = new_session_token()
    items = [(ADMIN_SESSION_KEY, token)]
    if not is_hashed_password(stored):
        # Upgrade a legacy plaintext value in the same write.
        items.append((ADMIN_PASSWORD_KEY, hash_password(password)))
    store.put_many(items)
    logger.info("Admin logged in; previous session (if any) replaced")
    return succeeded(token=token)


def change_password(
    store: KeyValueStore,
    session: AdminSession | None,
    *,
    current_password: str | None,
    new_password: str | None,
    confirm_password: str | None,
) -> OperationResult:
    if not session_is_current(store, session):
        return failed(MSG_NOT_LOGGED_IN)

    stored = store.get(ADMIN_PASSWORD_KEY)
    if not stored or not verify_password(current_password or "", stored):
        return failed(MSG_CURRENT_INCORRECT)

    if new_password != confirm_password:
        return failed(MSG_MISMATCH)

    if not new_password:
        return failed(MSG_PASSWORD_REQUIRED)

    # No strength policy here; the admin UI asks for at least 6 characters.
    store.put(ADMIN_PASSWORD_KEY, hash_password(new_password))
    logger.info("Admin password changed")
    return succeeded(MSG_PASSWORD_CHANGED)


def logout(store: KeyValueStore) -> OperationResult:
    store.delete(ADMIN_SESSION_KEY)
    logger.info("Admin session cleared")
    return succeeded()


def ensure_initial_password(store: KeyValueStore, password: str | None) -> bool:
    """Seed the admin password if none is stored yet.

    Returns True if a password was written. The value is hashed exactly as
    configured so it logs in with the same string.
    """

    if not password or not password.strip():
        return False
    if store.get(ADMIN_PASSWORD_KEY):
        return False

    store.put(ADMIN_PASSWORD_KEY, hash_password(password))
    logger.info("Admin password seeded from config")
    return True


def reset_password(store: KeyValueStore, password: str) -> None:
    """Out-of-band password reset. Also ends the current session."""

    if not password:
        raise ValueError("password must not be empty")

    store.put(ADMIN_PASSWORD_KEY, hash_password(password))
    store.delete(ADMIN_SESSION_KEY)
    logger.info("Admin password reset out-of-band")
