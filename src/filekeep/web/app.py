"""filekeep web server.

Every URL path maps onto the configured root directory:

- directories render an HTML listing
- files are sent as-is
- ``?json`` returns the snapshot as JSON instead

Protected nodes (with a password sidecar) require the password on every
request: ``GET`` shows the form, ``POST`` with a ``password`` field unlocks
that one response. Hidden and missing paths both answer with the same 404.
"""

from __future__ import annotations

import logging
from urllib.parse import unquote, urlsplit

from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import FileResponse, JSONResponse, RedirectResponse, Response
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException

from filekeep import __version__
from filekeep.config import Settings
from filekeep.fs import NotFoundError, ReadReport, SnapshotBuilder, has_password
from filekeep.web.paths import PathResolver
from filekeep.web.schemas import ErrorResponse
from filekeep.web.templating import THEME_COOKIE, dark_theme, render

logger = logging.getLogger(__name__)

THEME_COOKIE_MAX_AGE = 7 * 24 * 3600

router = APIRouter()


def _not_found(request: Request) -> Response:
    return render(request, "404.html", status_code=404)


def _request_path(request: Request, path: str) -> str:
    """Decode the raw URL path so non-UTF-8 filename bytes survive the round trip."""
    raw = request.scope.get("raw_path")
    if not raw:
        return path
    return unquote(raw.decode("latin-1").split("?", 1)[0], errors="surrogateescape")


def _safe_redirect_target(referer: str | None) -> str:
    """Keep only the path and query of the referer so redirects stay on this host."""
    if not referer:
        return "/"
    parts = urlsplit(referer)
    target = parts.path or "/"
    if not target.startswith("/") or target.startswith("//"):
        return "/"
    if parts.query:
        target += "?" + parts.query
    return target


@router.get("/favicon.ico", include_in_schema=False)
async def favicon():
    return Response(status_code=204)


@router.get("/about")
async def about(request: Request):
    return render(request, "about.html", {"version": __version__})


@router.get("/_toggleTheme")
async def toggle_theme(request: Request):
    response = RedirectResponse(_safe_redirect_target(request.headers.get("referer")), status_code=302)
    response.set_cookie(
        THEME_COOKIE,
        "false" if dark_theme(request) else "true",
        max_age=THEME_COOKIE_MAX_AGE,
        path="/",
    )
    return response


@router.api_route("/{path:path}", methods=["GET", "POST"])
async def browse(request: Request, path: str):
    """Serve a directory listing, a file, or a JSON snapshot for *path*."""
    state = request.app.state
    physical = state.resolver.resolve(_request_path(request, path))

    report = ReadReport()
    try:
        node = await run_in_threadpool(state.builder.read, physical, report)
    except NotFoundError:
        return _not_found(request)

    if report.skipped:
        logger.info("partial listing for %r: %d entries skipped", node.path, report.skipped_count)

    if node.protected:
        if request.method != "POST":
            return render(request, "password.html", {"node": node}, status_code=401)
        form = await request.form()
        candidate = form.get("password")
        if not isinstance(candidate, str) or not has_password(node, candidate):
            logger.info("wrong password for %r", node.path)
            return render(request, "password.html", {"node": node, "failed": True}, status_code=401)

    if "json" in request.query_params:
        return Response(node.to_json(), media_type="application/json")

    if node.is_dir:
        return render(
            request,
            "list.html",
            {
                "node": node,
                "dirs": sorted(node.dirs, key=lambda n: n.name.lower()),
                "files": sorted(node.files, key=lambda n: n.name.lower()),
            },
        )

    return FileResponse(physical)


async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> Response:
    if exc.status_code in (404, 405):
        return _not_found(request)
    body = ErrorResponse(message=str(exc.detail))
    return JSONResponse(body.model_dump(), status_code=exc.status_code)


async def _unhandled_exception_handler(request: Request, exc: Exception) -> Response:
    logger.error("caught panic on %s %r: %s", request.method, request.url.path, exc, exc_info=exc)
    body = ErrorResponse(message="caught panic", raw=str(exc))
    return JSONResponse(body.model_dump(), status_code=500)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application for *settings* (defaults when omitted)."""
    settings = settings or Settings()

    app = FastAPI(
        title="filekeep",
        description="Read-only web file browser.",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = settings
    app.state.resolver = PathResolver(settings.root)
    app.state.builder = SnapshotBuilder(settings.root, settings.visibility_policy())

    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _unhandled_exception_handler)
    app.include_router(router)

    logger.debug("serving %s (hide=%s, hide_extensions=%s, hide_dots=%s)",
                 app.state.builder.root, settings.hide, settings.hide_extensions, settings.hide_dots)
    return app
