from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from navpage_core.api.models import ActionResult, SaveRequest, fail, from_operation
from navpage_core.auth import get_store, read_session_check
from navpage_core.db.navigation import MSG_OPERATION_FAILED, get_navigation, save_navigation

logger = logging.getLogger(__name__)

router = APIRouter(tags=["data"])


@router.get("/data")
async def data_get(request: Request) -> JSONResponse:
    try:
        nav = get_navigation(get_store(request))
        content = {"categories": nav.categories, "sites": nav.sites}
    except Exception:
        logger.exception("Navigation read failed; serving empty collections")
        content = {"categories": [], "sites": []}

    return JSONResponse(content=content, headers={"Cache-Control": "no-cache"})


@router.post("/admin/save", response_model=ActionResult, response_model_exclude_none=True)
async def admin_save(request: Request) -> ActionResult:
    try:
        payload = SaveRequest.model_validate(await request.json())
    except ValueError as exc:
        logger.warning("Rejected navigation save: malformed body (%s)", type(exc).__name__)
        return fail(MSG_OPERATION_FAILED)

    try:
        session_check = read_session_check(request)
        result = save_navigation(
            get_store(request),
            session_check.session,
            categories=payload.categories,
            sites=payload.sites,
        )
    except Exception:
        logger.exception("Navigation save failed")
        return fail(MSG_OPERATION_FAILED)

    return from_operation(result)
