from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse, Response

from app.core.config import settings
from app.services.html_pages import SITE_PAGES, render_page, resolve_public_file

router = APIRouter()


def _not_found() -> PlainTextResponse:
    return PlainTextResponse("File not found", status_code=404)


def _serve(filename: str) -> Response:
    html = render_page(settings.public_dir, filename)
    if html is None:
        return _not_found()
    return HTMLResponse(html)


def _page_endpoint(filename: str):
    async def serve_page() -> Response:
        return _serve(filename)

    serve_page.__name__ = f"serve_{filename.replace('-', '_').replace('.', '_')}"
    return serve_page


for _route, _filename in SITE_PAGES.items():
    router.add_api_route(
        _route,
        _page_endpoint(_filename),
        methods=["GET"],
        include_in_schema=False,
    )


@router.get("/health")
async def health() -> dict:
    return {"ok": True}


@router.get("/{page_path:path}.html", include_in_schema=False)
async def redirect_html_extension(page_path: str, request: Request) -> Response:
    if resolve_public_file(settings.public_dir, f"{page_path}.html") is None:
        return _not_found()

    # "/index.html" and "/docs/index.html" collapse onto their directory.
    if page_path == "index" or page_path.endswith("/index"):
        page_path = page_path[: -len("index")]
    target = f"/{page_path}"
    query = request.url.query
    if query:
        target = f"{target}?{query}"
    return RedirectResponse(url=target, status_code=301)
