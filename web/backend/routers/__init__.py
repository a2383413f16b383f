"""API route handlers."""

from .ai import router as ai_router
from .upload import router as upload_router
from .candidates import router as candidates_router
