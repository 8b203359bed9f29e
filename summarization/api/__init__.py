"""
Summarization API package initialization.

This package contains FastAPI router modules for the summarization engine:
- summaries: Summary generation and cache invalidation
"""

from fastapi import APIRouter

# Import router modules
from summarization.api.summaries import router as summaries_router

# Create main API router
api_router = APIRouter()

# summaries router has its own /summaries prefix
api_router.include_router(summaries_router)

__all__ = [
    "api_router",
    "summaries_router",
]
