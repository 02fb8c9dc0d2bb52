from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field

from navpage_core.home import NavPagePaths


class NetworkConfig(BaseModel):
    bind_host: str = Field(default="127.0.0.1")
    port: int = Field(default=8787, ge=1, le=65535)


class PathOverrides(BaseModel):
    db_dir: str | None = None
    logs_dir: str | None = None


class AuthConfig(BaseModel):
    """Admin password policy.

    The first login claims the admin account unless bootstrap is disabled or an
    initial password is seeded here.
    """

    allow_bootstrap: bool = Field(
        default=True,
        description="Accept the first submitted password as the admin password.",
    )
    initial_password: str | None = Field(
        default=None,
        description="If set and no password is stored yet, seeded at startup.",
    )


class SessionConfig(BaseModel):
    max_age_seconds: int = Field(default=3600, ge=1)
    cookie_secure: bool = Field(
        default=False, description="Add the Secure attribute (requires HTTPS)."
    )
    samesite: Literal["lax", "strict", "none"] = Field(default="lax")


class LoggingConfig(BaseModel):
    max_size_mb: int = Field(
        default=10, ge=1, description="Max size of a log file in MB before rolling."
    )
    backup_count: int = Field(default=5, ge=1, description="Number of log archives to keep.")


class PageConfig(BaseModel):
    title: str = Field(default="My Navigation")
    subtitle: str = Field(default="Quick access to the sites you use most")
    lang: str = Field(default="en")


class CoreConfig(BaseModel):
    version: str = Field(default="1")
    network: NetworkConfig = Field(default_factory=NetworkConfig)
    paths: PathOverrides = Field(default_factory=PathOverrides)
    auth: AuthConfig = Field(default_factory=AuthConfig)
    session: SessionConfig = Field(default_factory=SessionConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    page: PageConfig = Field(default_factory=PageConfig)


def _read_json(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def load_core_config(paths: NavPagePaths) -> CoreConfig:
    """Load config from ${NAVPAGE_HOME}/config/core.json.

    - If missing: returns defaults.
    - Validation is performed by Pydantic.
    """

    config_path = paths.core_config_path
    if not config_path.exists():
        return CoreConfig()

    raw = _read_json(config_path)
    return CoreConfig.model_validate(raw)


def write_core_config(paths: NavPagePaths, config: CoreConfig) -> None:
    """Persist config to ${NAVPAGE_HOME}/config/core.json."""

    payload = config.model_dump(mode="json", exclude_none=True)
    paths.config_dir.mkdir(parents=True, exist_ok=True)
    paths.core_config_path.write_text(
        json.dumps(payload, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
    )


def resolve_configured_paths(paths: NavPagePaths, config: CoreConfig) -> NavPagePaths:
    """Apply user-configurable path overrides from config.

    config/ itself is not configurable.
    """

    def _resolve_dir(raw: str | None, default: Path) -> Path:
        if raw is None or not str(raw).strip():
            return default
        candidate = Path(raw).expanduser()
        if not candidate.is_absolute():
            candidate = (paths.home / candidate).resolve()
        else:
            candidate = candidate.resolve()
        return candidate

    db_dir = _resolve_dir(config.paths.db_dir, paths.db_dir)
    logs_dir = _resolve_dir(config.paths.logs_dir, paths.logs_dir)

    for p in (db_dir, logs_dir):
        p.mkdir(parents=True, exist_ok=True)

    return NavPagePaths(
        home=paths.home,
        db_dir=db_dir,
        logs_dir=logs_dir,
        config_dir=paths.config_dir,
    )
