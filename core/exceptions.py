"""
Ingestion error taxonomy.

Every failure raised by the ingestion core derives from IngestionError and
records the pipeline stage it happened in, so the web layer can decide how
much to reveal to the caller.
"""
from typing import List, Optional


class IngestionError(Exception):
    """Base exception for ingestion pipeline failures."""

    default_stage = "unknown"

    def __init__(self, message: str, stage: Optional[str] = None):
        super().__init__(message)
        self.stage = stage or self.default_stage

    def __str__(self) -> str:
        return f"[{self.stage}] {super().__str__()}"


class ValidationError(IngestionError):
    """Raised when input or model output does not conform to the expected schema."""
    default_stage = "validate"

    def __init__(self, message: str, stage: Optional[str] = None, errors: Optional[List[str]] = None):
        super().__init__(message, stage=stage)
        self.errors = errors or []


class ExtractionError(IngestionError):
    """Raised when a document cannot be parsed as its declared media type."""
    default_stage = "extract"


class UpstreamServiceError(IngestionError):
    """Raised when the generative backend is unavailable after retries."""
    default_stage = "extract_profile"


class StorageError(IngestionError):
    """Raised when the object store is unreachable or a write fails."""
    default_stage = "persist"


class ObjectNotFoundError(StorageError):
    """Raised when a requested object key does not exist."""

    def __init__(self, key: str, stage: Optional[str] = None):
        super().__init__(f"Object not found: {key}", stage=stage)
        self.key = key
