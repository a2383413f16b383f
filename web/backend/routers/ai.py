#!/usr/bin/env python3
"""
AI endpoints - profile extraction from plain resume text.
"""

import logging
from fastapi import APIRouter, Depends
from starlette.concurrency import run_in_threadpool

from core.app_context import AppContext
from etl.schema_models import ProfileSchema
from ..dependencies import get_app_context
from ..models.requests import ParseResumeRequest

logger = logging.getLogger(__name__)

router = APIRouter(tags=["ai"])


@router.post("/parseresume", response_model=ProfileSchema)
async def parse_resume(
    body: ParseResumeRequest,
    ctx: AppContext = Depends(get_app_context)
):
    """
    Extract a structured profile from resume text.

    The text is expected to be already extracted from the document. The
    result always conforms to ProfileSchema; anything else is a 500.
    Nothing is persisted.
    """
    logger.info(f"Parsing resume text ({len(body.rawpdf)} chars)")
    return await run_in_threadpool(ctx.profile_extractor.extract, body.rawpdf)
