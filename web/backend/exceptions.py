#!/usr/bin/env python3
"""
Error handlers for the web application.

Domain failures are logged in full and returned to the caller as a generic
message; only request-level problems carry a specific reason.
"""

import logging
from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse

from core.exceptions import IngestionError, ObjectNotFoundError, ValidationError

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Error processing request"


async def ingestion_exception_handler(
    request: Request,
    exc: IngestionError
) -> JSONResponse:
    """
    Handle ingestion pipeline exceptions.

    Args:
        request: The FastAPI request.
        exc: The ingestion exception.

    Returns:
        JSONResponse with a generic error body.
    """
    status_code = 500
    error = GENERIC_ERROR_MESSAGE
    if isinstance(exc, ObjectNotFoundError):
        status_code = 404
        error = "Not found"
    elif isinstance(exc, ValidationError) and exc.stage == "receive":
        status_code = 400
        error = "Only PDF files are allowed"

    if status_code == 500:
        logger.error(f"Ingestion error in {request.url.path} at stage {exc.stage}: {exc}", exc_info=True)
    else:
        logger.info(f"Rejected {request.url.path}: {exc}")

    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": error,
            "type": exc.__class__.__name__
        }
    )


async def http_exception_handler(
    request: Request,
    exc: HTTPException
) -> JSONResponse:
    """
    Handle FastAPI HTTP exceptions with consistent format.

    Args:
        request: The FastAPI request.
        exc: The HTTP exception.

    Returns:
        JSONResponse with error details.
    """
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "error": exc.detail,
            "type": "HTTPException"
        }
    )


async def general_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle unexpected exceptions.

    Args:
        request: The FastAPI request.
        exc: The exception.

    Returns:
        JSONResponse with error details.
    """
    logger.exception(f"Unexpected error in {request.url.path}")

    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "Internal server error",
            "type": "InternalError"
        }
    )


def add_exception_handlers(app) -> None:
    """Register the handlers above on a FastAPI app."""
    app.add_exception_handler(IngestionError, ingestion_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
