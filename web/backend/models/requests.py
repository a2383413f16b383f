#!/usr/bin/env python3
"""
Request models for API endpoints.
"""

from pydantic import BaseModel, Field


class ParseResumeRequest(BaseModel):
    """Request to extract a profile from already-extracted resume text."""
    rawpdf: str = Field(..., description="Plain text of the resume")
