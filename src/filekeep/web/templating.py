# Jinja2 template setup and filters.
# Created: 2026-10-19

from __future__ import annotations

from pathlib import Path

from fastapi import Request
from fastapi.templating import Jinja2Templates
from starlette.responses import Response

from filekeep.web.paths import breadcrumbs, display_name, href

TEMPLATES_DIR = Path(__file__).parent / "templates"

THEME_COOKIE = "dark-theme"

_SIZE_UNITS = ("KB", "MB", "GB", "TB", "PB")


def human_size(size: int) -> str:
    """Format a byte count, e.g. ``500000`` -> ``"488.3 KB"``."""
    if size < 1024:
        return f"{size} B"
    value = float(size)
    for unit in _SIZE_UNITS:
        value /= 1024
        if value < 1024:
            break
    return f"{value:.1f} {unit}"


def parse_bool(value: str | None) -> bool:
    return (value or "").strip().lower() in ("1", "t", "true")


def dark_theme(request: Request) -> bool:
    return parse_bool(request.cookies.get(THEME_COOKIE))


templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.filters["href"] = href
templates.env.filters["human_size"] = human_size
templates.env.filters["display_name"] = display_name
templates.env.globals["breadcrumbs"] = breadcrumbs


def render(request: Request, name: str, context: dict | None = None, status_code: int = 200) -> Response:
    """Render *name* with the current theme flag merged into *context*."""
    ctx = {"dark_theme": dark_theme(request)}
    if context:
        ctx.update(context)
    return templates.TemplateResponse(request, name, ctx, status_code=status_code)
