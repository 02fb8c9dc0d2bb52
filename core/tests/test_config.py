from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from navpage_core.config import (
    CoreConfig,
    load_core_config,
    resolve_configured_paths,
    write_core_config,
)
from navpage_core.home import ensure_navpage_layout


def test_load_core_config_defaults_when_missing(tmp_path: Path) -> None:
    paths = ensure_navpage_layout(tmp_path)
    cfg = load_core_config(paths)
    assert isinstance(cfg, CoreConfig)
    assert cfg.network.bind_host == "127.0.0.1"
    assert cfg.auth.allow_bootstrap is True
    assert cfg.session.max_age_seconds == 3600
    assert cfg.session.cookie_secure is False


def test_load_core_config_validation_error(tmp_path: Path) -> None:
    paths = ensure_navpage_layout(tmp_path)

    paths.core_config_path.write_text(
        json.dumps({"session": {"samesite": "sometimes"}}),
        encoding="utf-8",
    )

    with pytest.raises(ValidationError):
        load_core_config(paths)


def test_write_then_load_core_config(tmp_path: Path) -> None:
    paths = ensure_navpage_layout(tmp_path)

    cfg = CoreConfig.model_validate({"page": {"title": "Bookmarks"}, "network": {"port": 9000}})
    write_core_config(paths, cfg)

    loaded = load_core_config(paths)
    assert loaded.page.title == "Bookmarks"
    assert loaded.network.port == 9000
    # None values are not written out.
    assert "initial_password" not in paths.core_config_path.read_text(encoding="utf-8")


def test_resolve_configured_paths_creates_overrides(tmp_path: Path) -> None:
    paths = ensure_navpage_layout(tmp_path)

    cfg = CoreConfig.model_validate(
        {
            "paths": {
                "db_dir": "custom_db",
                "logs_dir": "custom_logs",
            }
        }
    )

    resolved = resolve_configured_paths(paths, cfg)
    assert resolved.db_dir.is_dir()
    assert resolved.logs_dir.is_dir()

    # Overrides are resolved relative to NAVPAGE_HOME by default.
    assert resolved.db_dir == (tmp_path / "custom_db").resolve()
    assert resolved.logs_dir == (tmp_path / "custom_logs").resolve()

    # Non-configurable dirs remain under home.
    assert resolved.config_dir == paths.config_dir
