"""Serve files from a local directory.

Responses are ``FileResponse`` objects, so the sendfile route class can hand
them to the front-end proxy instead of streaming them from here.
"""

from pathlib import Path

from fastapi import APIRouter, HTTPException
from fastapi.responses import FileResponse

from accelsend.api.routing import SendfileOptions, sendfile_route_class


def resolve_file(root: Path, file_path: str) -> Path:
    """Resolve ``file_path`` below ``root`` or raise 404."""
    target = (root / file_path).resolve()

    # Containment check on resolved paths, not string prefixes
    if not target.is_relative_to(root) or not target.is_file():
        raise HTTPException(status_code=404, detail="file not found")
    return target


def create_files_router(root: Path, options: SendfileOptions) -> APIRouter:
    """Build the router serving files below ``root``."""
    root = root.resolve()
    router = APIRouter(route_class=sendfile_route_class(options), tags=["files"])

    @router.get("/{file_path:path}")
    async def serve_file(file_path: str) -> FileResponse:
        """Serve one file; the proxy delivers it when offload applies."""
        return FileResponse(resolve_file(root, file_path))

    return router
