#!/usr/bin/env python3
"""
Response models for API endpoints.

Field names are snake_case in Python and camelCase on the wire.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Optional


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UploadResponse(_CamelModel):
    """Result of a PDF upload."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "message": "File uploaded and parsed successfully",
                "uploaded": True,
                "fileName": "9f86d081884c7d659a2feaa0c55ad015a3bf4f1b2b0b822cd15d6c15b0f00a08.pdf",
                "bucket": "nexusblue_resumes",
                "txtFileName": "parsed/jane_q_doe-9f86d081.txt"
            }
        }
    )

    message: str
    uploaded: bool = Field(description="True if newly processed, False if the file already existed")
    file_name: str
    bucket: str
    txt_file_name: Optional[str] = None


class CandidateResponse(_CamelModel):
    """A parsed resume as listed by the catalog."""
    name: str
    file_name: str
    content: str
    status: str = Field(description="'ready', or 'materializing' while an upload is still being stored")
    error: Optional[str] = None


class HealthResponse(BaseModel):
    status: str
    service: str
