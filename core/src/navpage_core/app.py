from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from logging.handlers import RotatingFileHandler

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from navpage_core import __version__
from navpage_core.api.models import fail
from navpage_core.api.router import router as api_router
from navpage_core.config import load_core_config, resolve_configured_paths
from navpage_core.db import resolve_db_path
from navpage_core.db.credentials import ensure_initial_password
from navpage_core.db.kv import ADMIN_PASSWORD_KEY, SqliteKeyValueStore
from navpage_core.db.migrate import apply_migrations
from navpage_core.home import ensure_navpage_layout, resolve_navpage_home
from navpage_core.ui.router import router as ui_router

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        home = resolve_navpage_home()
        paths = ensure_navpage_layout(home)
        config = load_core_config(paths)
        paths = resolve_configured_paths(paths, config)

        # Configure Logging
        log_path = paths.logs_dir / "core.log"
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=config.logging.max_size_mb * 1024 * 1024,
            backupCount=config.logging.backup_count,
            encoding="utf-8",
        )
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        file_handler.setFormatter(formatter)

        root = logging.getLogger()
        root.setLevel(logging.INFO)
        # Avoid adding duplicate handlers if reloaded
        if not any(isinstance(h, RotatingFileHandler) for h in root.handlers):
            root.addHandler(file_handler)

        logger.info("NavPage starting up")
        logger.info(f"Logs directory: {paths.logs_dir}")

        db_path = resolve_db_path(paths)
        apply_migrations(db_path)
        store = SqliteKeyValueStore(db_path)

        ensure_initial_password(store, config.auth.initial_password)
        if config.auth.allow_bootstrap and not store.get(ADMIN_PASSWORD_KEY):
            logger.warning("No admin password set: the first login will claim the admin account")

        app.state.navpage_home = home
        app.state.navpage_paths = paths
        app.state.navpage_config = config
        app.state.db_path = db_path
        app.state.kv_store = store

        yield

    app = FastAPI(
        title="NavPage",
        version=__version__,
        lifespan=_lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        response = await call_next(request)
        logger.info(f"{request.method} {request.url.path} - {response.status_code}")
        return response

    @app.exception_handler(Exception)
    async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content=fail("server error").model_dump(mode="json", exclude_none=True),
        )

    app.include_router(api_router)

    # Catch-all page routes must be registered last.
    app.include_router(ui_router)

    return app
