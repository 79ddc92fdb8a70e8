from __future__ import annotations

import os
from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from invoice_extractor import __version__
from invoice_extractor.core.settings import get_settings


router = APIRouter()


@router.get("/healthz")
def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/readyz")
def readyz() -> JSONResponse:
    """Ready once uploads can be stored and the model has a credential."""
    settings = get_settings()
    checks = {
        "upload_dir_writable": settings.upload_dir.is_dir() and os.access(settings.upload_dir, os.W_OK),
        "model_configured": bool(settings.gemini_api_key),
    }
    ready = all(checks.values())
    return JSONResponse(status_code=200 if ready else 503, content={"ready": ready, "checks": checks})


@router.get("/version")
def version() -> dict[str, str | None]:
    settings = get_settings()
    return {
        "version": settings.build_version or __version__,
        "git_commit": settings.build_git_commit,
        "build_time": settings.build_time or datetime.now(timezone.utc).isoformat(),
        "model": settings.gemini_model,
    }
