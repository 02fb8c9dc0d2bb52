from __future__ import annotations

import base64
import hashlib
import hmac
import secrets

PASSWORD_HASH_ALGORITHM = "pbkdf2_sha256"
PASSWORD_HASH_ITERATIONS = 260_000


def new_session_token() -> str:
    """Generate an opaque session token (URL/cookie safe, 256 bits)."""

    return secrets.token_urlsafe(32)


def _b64(raw: bytes) -> str:
    return base64.b64encode(raw).decode("ascii").strip()


def _pbkdf2(password: str, salt: str, iterations: int) -> str:
    digest = hashlib.pbkdf2_hmac(
        "sha256", password.encode("utf-8"), salt.encode("utf-8"), iterations
    )
    return _b64(digest)


def hash_password(
    password: str, *, salt: str | None = None, iterations: int = PASSWORD_HASH_ITERATIONS
) -> str:
    """Encode a password as `pbkdf2_sha256$<iterations>$<salt>$<hash>`."""

    if salt is None:
        salt = secrets.token_hex(16)
    if "$" in salt:
        raise ValueError("salt must not contain '$'")
    return f"{PASSWORD_HASH_ALGORITHM}${iterations}${salt}${_pbkdf2(password, salt, iterations)}"


def is_hashed_password(encoded: str) -> bool:
    return encoded.startswith(PASSWORD_HASH_ALGORITHM + "$")


def verify_password(password: str, encoded: str) -> bool:
    """Check a submitted password against the stored value.

    Values without the hash prefix are legacy plaintext and are compared as-is.
    Both paths use a constant-time comparison.
    """

    if not is_hashed_password(encoded):
        return hmac.compare_digest(password.encode("utf-8"), encoded.encode("utf-8"))

    parts = encoded.split("$")
    if len(parts) != 4:
        return False
    _, raw_iterations, salt, expected = parts
    try:
        iterations = int(raw_iterations)
    except ValueError:
        return False
    if iterations < 1:
        return False

    actual = _pbkdf2(password, salt, iterations)
    return hmac.compare_digest(actual.encode("ascii"), expected.encode("ascii"))
