from __future__ import annotations

from typing import Optional

import structlog
from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import JSONResponse

from invoice_extractor.api.deps import get_pipeline
from invoice_extractor.core.errors import NoFileUploadedError, UploadTooLargeError
from invoice_extractor.core.settings import get_settings
from invoice_extractor.processing.pipeline import Stage, UploadPipeline
from invoice_extractor.storage import files as storage


router = APIRouter()
logger = structlog.get_logger(__name__)

READ_CHUNK_BYTES = 1024 * 1024


async def read_limited(file: UploadFile, limit: int) -> bytes:
    """Read the upload, stopping as soon as it is known to exceed `limit` bytes."""
    if file.size is not None and file.size > limit:
        raise UploadTooLargeError(file.size, limit)
    chunks: list[bytes] = []
    total = 0
    while True:
        chunk = await file.read(READ_CHUNK_BYTES)
        if not chunk:
            break
        total += len(chunk)
        if total > limit:
            raise UploadTooLargeError(total, limit)
        chunks.append(chunk)
    return b"".join(chunks)


@router.post("/upload")
async def upload(
    file: Optional[UploadFile] = File(default=None),
    pipeline: UploadPipeline = Depends(get_pipeline),
) -> JSONResponse:
    if file is None or not file.filename:
        raise NoFileUploadedError()

    structlog.contextvars.bind_contextvars(upload_name=file.filename, mime_type=file.content_type)
    try:
        data = await read_limited(file, get_settings().max_upload_bytes)
        logger.info("pipeline_stage", stage=Stage.RECEIVED.value, size_bytes=len(data))

        try:
            with storage.stored_upload(data, file.filename) as path:
                records = await pipeline.run(path, file.content_type)
            logger.info("pipeline_stage", stage=Stage.CLEANED.value)
            # Rendering happens here, so unserializable values land in the 500 branch
            response = JSONResponse({"success": True, **records.to_dict()})
        except Exception as e:
            logger.exception("upload_processing_failed", error=str(e))
            return JSONResponse(
                status_code=500,
                content={"success": False, "message": "Failed to process the file.", "error": str(e)},
            )

        logger.info("pipeline_stage", stage=Stage.RESPONDED.value)
        return response
    finally:
        structlog.contextvars.unbind_contextvars("upload_name", "mime_type")
