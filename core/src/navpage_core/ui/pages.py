from __future__ import annotations

from pathlib import Path
from typing import Any

from fastapi.templating import Jinja2Templates

from navpage_core.config import PageConfig
from navpage_core.db.navigation import DEFAULT_SITE_ICON

BASE_DIR = Path(__file__).resolve().parent
TEMPLATES_DIR = BASE_DIR / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

# Shown by the home page when /data cannot be reached.
PLACEHOLDER_CATEGORIES: list[str] = ["Favorites", "Learning", "Entertainment"]
PLACEHOLDER_SITES: list[dict[str, str]] = [
    {
        "name": "GitHub",
        "url": "https://github.com",
        "category": "Favorites",
        "icon": '<i class="fab fa-github"></i>',
    },
    {
        "name": "Google",
        "url": "https://google.com",
        "category": "Favorites",
        "icon": '<i class="fab fa-google"></i>',
    },
    {
        "name": "MDN",
        "url": "https://developer.mozilla.org",
        "category": "Learning",
        "icon": '<i class="fas fa-code"></i>',
    },
    {
        "name": "YouTube",
        "url": "https://youtube.com",
        "category": "Entertainment",
        "icon": '<i class="fab fa-youtube"></i>',
    },
]

CATEGORY_ICONS: dict[str, str] = {
    "Favorites": "fas fa-star",
    "Learning": "fas fa-graduation-cap",
    "Entertainment": "fas fa-gamepad",
    "Work": "fas fa-briefcase",
    "Social": "fas fa-users",
    "Tools": "fas fa-tools",
    "Shopping": "fas fa-shopping-bag",
    "News": "fas fa-newspaper",
}


def _render(name: str, context: dict[str, Any]) -> str:
    return templates.get_template(name).render(**context)


def _base_context(page: PageConfig) -> dict[str, Any]:
    return {
        "page": page,
        "default_icon": DEFAULT_SITE_ICON,
    }


def render_home_page(page: PageConfig) -> str:
    context = _base_context(page)
    context.update(
        {
            "placeholder": {"categories": PLACEHOLDER_CATEGORIES, "sites": PLACEHOLDER_SITES},
            "category_icons": CATEGORY_ICONS,
        }
    )
    return _render("home.html", context)


def render_admin_page(page: PageConfig, *, is_authenticated: bool = False) -> str:
    """Login form when unauthenticated, management console otherwise."""

    name = "admin_console.html" if is_authenticated else "admin_login.html"
    return _render(name, _base_context(page))
