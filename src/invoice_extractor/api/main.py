from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from structlog import get_logger

from invoice_extractor import __version__
from invoice_extractor.api.routes.health import router as health_router
from invoice_extractor.api.routes.upload import router as upload_router
from invoice_extractor.core.errors import NoFileUploadedError, UploadTooLargeError
from invoice_extractor.core.logging import setup_structlog
from invoice_extractor.core.metrics import metrics_endpoint, metrics_middleware
from invoice_extractor.core.settings import get_settings


logger = get_logger(__name__)


async def _no_file_handler(_: Request, exc: NoFileUploadedError) -> JSONResponse:
    logger.info("upload_rejected", reason="no_file")
    return JSONResponse(status_code=400, content={"success": False, "message": str(exc)})


async def _too_large_handler(_: Request, exc: UploadTooLargeError) -> JSONResponse:
    logger.info("upload_rejected", reason="too_large", size_bytes=exc.size_bytes, limit_bytes=exc.limit_bytes)
    return JSONResponse(status_code=413, content={"success": False, "message": "File too large."})


def create_app() -> FastAPI:
    settings = get_settings()
    setup_structlog(settings.log_level, json_logs=settings.log_json)

    app = FastAPI(title="Invoice Extractor API", version=__version__)
    app.add_route("/metrics", metrics_endpoint, methods=["GET"])  # Prometheus scrape
    app.middleware("http")(metrics_middleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(NoFileUploadedError, _no_file_handler)  # type: ignore[arg-type]
    app.add_exception_handler(UploadTooLargeError, _too_large_handler)  # type: ignore[arg-type]

    @app.on_event("startup")
    def _on_startup() -> None:  # noqa: D401
        settings.ensure_data_dirs()
        logger.info("app_started", upload_dir=str(settings.upload_dir), port=settings.app_port)

    # Routers
    app.include_router(health_router)
    app.include_router(upload_router)

    return app


app = create_app()
