#!/usr/bin/env python3
"""
Resume Ingestion Service - FastAPI Application

Accepts PDF resumes, extracts a validated candidate profile with an LLM and
stores both artifacts in a content-addressed object store.

Usage:
    python -m web.backend.app

Then open:
    - http://localhost:8080/docs - API Documentation (Swagger UI)
    - http://localhost:8080/redoc - Alternative API Documentation
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .dependencies import get_config
from .exceptions import add_exception_handlers
from .models.responses import HealthResponse
from .routers import ai_router, upload_router, candidates_router
from .routers.upload import add_rate_limit_handlers

# Load configuration
config = get_config()

# Configure logging
logging.basicConfig(
    level=config.logging.level,
    format=config.logging.format
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Resume Ingestion API",
    description="API for uploading resumes and reading parsed candidate profiles",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.web.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Configure rate limiting
add_rate_limit_handlers(app)

# Register exception handlers
add_exception_handlers(app)

# Include routers
app.include_router(ai_router)
app.include_router(upload_router)
app.include_router(candidates_router)


@app.get("/health", response_model=HealthResponse)
def health_check():
    """Health check endpoint."""
    return HealthResponse(status="healthy", service="resume-ingestion")


def main():
    """Run the web server."""
    import uvicorn

    logger.info(f"Starting Resume Ingestion Server on {config.web.host}:{config.web.port}")
    logger.info(f"API Docs: http://{config.web.host}:{config.web.port}/docs")

    uvicorn.run(
        "web.backend.app:app",
        host=config.web.host,
        port=config.web.port,
        reload=False,
        log_level=config.logging.level.lower()
    )


if __name__ == "__main__":
    main()
