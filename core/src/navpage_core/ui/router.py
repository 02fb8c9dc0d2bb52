from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from navpage_core.auth import get_core_config, get_session_check, set_session_cookie
from navpage_core.ui.pages import render_admin_page, render_home_page

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

router = APIRouter(tags=["ui"])


def is_admin_path(path: str) -> bool:
    return path.startswith("/admin")


@router.api_route(
    "/{full_path:path}",
    methods=ALL_METHODS,
    response_class=HTMLResponse,
    include_in_schema=False,
)
async def ui_page(request: Request, full_path: str) -> HTMLResponse:
    """Everything the JSON routes do not claim lands here: /admin* gets the
    session-gated admin page, anything else the public home page."""

    config = get_core_config(request)

    if not is_admin_path(request.url.path):
        return HTMLResponse(render_home_page(config.page))

    session_check = await get_session_check(request)
    html = render_admin_page(config.page, is_authenticated=session_check.is_authenticated)
    resp = HTMLResponse(html)
    if session_check.is_authenticated and session_check.token:
        # Sliding expiry: same token, fresh Max-Age.
        set_session_cookie(resp, session_check.token, config.session)
    return resp
