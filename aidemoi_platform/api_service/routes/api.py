"""Versioned API root: mounts the resource routers under /api/v1."""
from datetime import datetime, timezone

from fastapi import APIRouter, Request

from ..auth import isoformat_z
from . import auth, companies, users

router = APIRouter(prefix="/api/v1")
router.include_router(auth.router)
router.include_router(users.router)
router.include_router(companies.router)


@router.get("", tags=["api"], summary="API root")
def api_root(request: Request):
    return {
        "message": "Welcome to Aide Moi Backend API",
        "version": request.app.state.settings.APP_VERSION,
        "timestamp": isoformat_z(datetime.now(timezone.utc)),
    }
