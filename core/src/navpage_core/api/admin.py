from __future__ import annotations

import logging
from typing import Final

from fastapi import APIRouter, Request
from starlette.responses import Response

from navpage_core.api.models import (
    ActionResult,
    ChangePasswordRequest,
    fail,
    from_operation,
    ok,
)
from navpage_core.auth import (
    clear_session_cookie,
    get_core_config,
    get_store,
    read_session_check,
    set_session_cookie,
)
from navpage_core.db.credentials import change_password, login, logout

logger = logging.getLogger(__name__)

MSG_SERVER_ERROR: Final[str] = "server error"
MSG_OPERATION_FAILED: Final[str] = "operation failed"

router = APIRouter(prefix="/admin", tags=["admin"])


@router.post("/auth", response_model=ActionResult, response_model_exclude_none=True)
async def admin_auth(request: Request, response: Response) -> ActionResult:
    config = get_core_config(request)
    try:
        form = await request.form()
        password = form.get("password")
        result = login(
            get_store(request),
            password if isinstance(password, str) else None,
            allow_bootstrap=config.auth.allow_bootstrap,
        )
    except Exception:
        logger.exception("Login failed unexpectedly")
        return fail(MSG_SERVER_ERROR)

    if result.success and result.token:
        set_session_cookie(response, result.token, config.session)
    return from_operation(result)


@router.post(
    "/change-password", response_model=ActionResult, response_model_exclude_none=True
)
async def admin_change_password(request: Request) -> ActionResult:
    try:
        payload = ChangePasswordRequest.model_validate(await request.json())
    except ValueError as exc:
        logger.warning("Rejected password change: malformed body (%s)", type(exc).__name__)
        return fail(MSG_OPERATION_FAILED)

    try:
        session_check = read_session_check(request)
        result = change_password(
            get_store(request),
            session_check.session,
            current_password=payload.current_password,
            new_password=payload.new_password,
            confirm_password=payload.confirm_password,
        )
    except Exception:
        logger.exception("Password change failed")
        return fail(MSG_OPERATION_FAILED)

    return from_operation(result)


@router.post("/logout", response_model=ActionResult, response_model_exclude_none=True)
async def admin_logout(request: Request, response: Response) -> ActionResult:
    config = get_core_config(request)
    try:
        logout(get_store(request))
    except Exception:
        # Logout always reports success; the cookie is cleared regardless.
        logger.exception("Failed to delete stored session token")

    clear_session_cookie(response, config.session)
    return ok()
