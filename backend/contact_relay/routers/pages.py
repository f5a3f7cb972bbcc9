# contact_relay/routers/pages.py
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import FileResponse

from contact_relay.core.errors import NotFoundError
from contact_relay.core.settings import Settings
from contact_relay.dependencies import get_settings

router = APIRouter(tags=["pages"])

ENTRY_PAGE = "index.html"
ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def resolve_asset(public_root: Path, path: str) -> Optional[Path]:
    """Map a URL path to a file under public_root, refusing anything that escapes it."""
    if not path:
        return None
    root = public_root.resolve()
    candidate = (root / path).resolve()
    if not candidate.is_relative_to(root) or not candidate.is_file():
        return None
    return candidate


def is_api_path(path: str) -> bool:
    return path == "api" or path.startswith("api/")


@router.api_route("/{full_path:path}", methods=ALL_METHODS, include_in_schema=False)
async def catch_all(full_path: str, request: Request, settings: Settings = Depends(get_settings)):
    if request.method not in ("GET", "HEAD") or is_api_path(full_path):
        raise NotFoundError()

    public_root = settings.public_root
    asset = resolve_asset(public_root, full_path)
    if asset is not None:
        return FileResponse(asset)

    entry = public_root / ENTRY_PAGE
    if not entry.is_file():
        raise NotFoundError()
    return FileResponse(entry)
