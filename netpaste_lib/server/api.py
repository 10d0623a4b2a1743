from fastapi import APIRouter, Request
from netpaste_lib.services.resolver import resolve_service
from .health import get_health

router = APIRouter()

# Seven characters, so it can never be a paste key.
HEALTH_PATH = '/healthz'


@router.get(HEALTH_PATH)
async def api_health(request: Request):
    return get_health(resolve_service(request, 'paste_store'))
