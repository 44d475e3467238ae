"""
ReserBot Backend — Static Frontend Files
==========================================

What:  Serves the booking page (index.html at "/") and its assets from STATIC_DIR.
Why:   The frontend ships as plain files next to the API; one process serves both.
How:   A catch-all GET route registered after the API routers. Any path that is
       not a file inside STATIC_DIR raises RouteNotFoundError, so unknown URLs
       get the same JSON 404 as unknown API routes.

Security:
    Resolved paths must stay inside STATIC_DIR (no ../ traversal).
"""

from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import FileResponse

from reserbot.exceptions import RouteNotFoundError

router = APIRouter(tags=["Frontend"])

INDEX_FILE = "index.html"


def _resolve_static_file(static_dir: str, file_path: str) -> Path:
    root = Path(static_dir).resolve()
    candidate = (root / (file_path or INDEX_FILE)).resolve()

    if candidate != root and root not in candidate.parents:
        raise RouteNotFoundError(path=file_path)
    if candidate.is_dir():
        candidate = candidate / INDEX_FILE
    if not candidate.is_file():
        raise RouteNotFoundError(path=file_path)
    return candidate


@router.get("/", include_in_schema=False)
async def serve_index(request: Request) -> FileResponse:
    return FileResponse(_resolve_static_file(request.app.state.settings.static_dir, ""))


@router.get("/{file_path:path}", include_in_schema=False)
async def serve_static(file_path: str, request: Request) -> FileResponse:
    static_file = _resolve_static_file(request.app.state.settings.static_dir, file_path)
    return FileResponse(static_file)
