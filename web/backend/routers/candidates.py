#!/usr/bin/env python3
"""
Candidate endpoints - read access to parsed resumes.
"""

import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException

from core.app_context import AppContext
from core.exceptions import ObjectNotFoundError
from etl.resume.catalog import CandidateRecord
from ..dependencies import get_app_context
from ..models.responses import CandidateResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/candidates", tags=["candidates"])


def _to_response(record: CandidateRecord) -> CandidateResponse:
    return CandidateResponse(
        name=record.name,
        file_name=record.file_name,
        content=record.content,
        status=record.status,
        error=record.error,
    )


@router.get("/all", response_model=List[CandidateResponse])
def list_candidates(ctx: AppContext = Depends(get_app_context)):
    """
    List every parsed resume with its content.

    A record whose content could not be fetched is still listed, with
    empty content and an ``error`` marker.
    """
    records = ctx.catalog.list_all()
    logger.info(f"Listing {len(records)} candidates")
    return [_to_response(record) for record in records]


@router.get("/{file_name:path}", response_model=CandidateResponse)
def get_candidate(file_name: str, ctx: AppContext = Depends(get_app_context)):
    """Get a single parsed resume by its key, e.g. ``parsed/jane_doe-1a2b3c4d.txt``."""
    try:
        record = ctx.catalog.get(file_name)
    except ObjectNotFoundError:
        raise HTTPException(status_code=404, detail="Candidate not found")
    return _to_response(record)
