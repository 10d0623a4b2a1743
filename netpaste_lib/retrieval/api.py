"""Read-only HTTP retrieval of stored pastes.

`GET /<anything>/<key>` looks up the final path segment and returns the
stored bytes untouched. Everything else about the path is ignored.
"""
import logging
import posixpath

from fastapi import APIRouter, Request, Response

from netpaste_lib.services.resolver import resolve_service

logger = logging.getLogger(__name__)

router = APIRouter()

PASTE_MEDIA_TYPE = "text/plain; charset=utf-8"


def extract_key(path: str) -> str:
    """Return the final segment of `path`, ignoring trailing slashes."""
    return posixpath.basename(path.rstrip('/'))


@router.api_route('/{path:path}', methods=['GET', 'HEAD'])
def get_paste(path: str, request: Request):
    store = resolve_service(request, 'paste_store')
    key = extract_key(path)
    paste = store.get(key) if key else None
    if paste is None:
        logger.debug("No paste for key %r", key)
        return Response(status_code=404)
    return Response(content=paste, media_type=PASTE_MEDIA_TYPE)
