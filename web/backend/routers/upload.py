#!/usr/bin/env python3
"""
Upload endpoint - deduplicating PDF ingestion.
"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from core.app_context import AppContext
from ..dependencies import get_app_context, get_config
from ..models.responses import UploadResponse

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)

router = APIRouter(tags=["upload"])

MESSAGE_UPLOADED = "File uploaded and parsed successfully"
MESSAGE_EXISTS = "File already exists"


def add_rate_limit_handlers(app):
    """Add rate limit exception handlers to the FastAPI app."""
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


async def _rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    return JSONResponse(
        status_code=429,
        content={"detail": str(exc)}
    )


def _upload_rate_limit() -> str:
    return get_config().web.upload_rate_limit


@router.post("/uploadpdf", response_model=UploadResponse, response_model_exclude_none=True)
@limiter.limit(_upload_rate_limit)
async def upload_pdf(
    request: Request,
    file: Optional[UploadFile] = File(None),
    ctx: AppContext = Depends(get_app_context)
):
    """
    Upload a PDF resume.

    The file is hashed and stored under its content hash. A file that was
    uploaded before returns ``uploaded: false`` without being processed
    again. New files are converted to text, turned into a validated profile
    and stored next to the original under ``parsed/``.

    The file is processed in memory - never written to disk.
    """
    if file is None or not file.filename:
        raise HTTPException(status_code=400, detail="No file uploaded")

    accepted = ctx.config.ingestion.accepted_content_type
    if file.content_type != accepted:
        raise HTTPException(status_code=400, detail="Only PDF files are allowed")

    content = await file.read()

    if len(content) == 0:
        raise HTTPException(status_code=400, detail="Empty file")

    max_bytes = ctx.config.web.max_upload_bytes
    if len(content) > max_bytes:
        raise HTTPException(status_code=400, detail=f"File size exceeds {max_bytes // (1024 * 1024)}MB limit")

    result = await run_in_threadpool(ctx.pipeline.submit, content, file.content_type)

    return UploadResponse(
        message=MESSAGE_UPLOADED if result.uploaded else MESSAGE_EXISTS,
        uploaded=result.uploaded,
        file_name=result.raw_key,
        bucket=result.bucket,
        txt_file_name=result.parsed_key,
    )
