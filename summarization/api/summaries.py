"""
FastAPI router module for summary generation endpoints.

This module implements endpoints for:
- Generating linguistic summaries for a dataset and date range
- Invalidating the engine's result cache

Error mapping:
- ConfigError (unknown dataset, bad kind, malformed config) -> 422
- Any other SummarizationError (non-finite input, cyclic graph) -> 500

Insufficient data never reaches this layer: the affected summarizer returns
its group with no summaries.
"""

import logging

from fastapi import APIRouter, Body, HTTPException

from summarization.core.dependencies import EngineDep
from summarization.core.exceptions import ConfigError, SummarizationError
from summarization.models import (
    CacheResetResponse,
    SummarizationRequest,
    SummarizationResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/summaries", tags=["summaries"])


@router.post("", response_model=SummarizationResponse)
async def create_summaries(
    engine: EngineDep,
    request: SummarizationRequest = Body(...),
) -> SummarizationResponse:
    """
    Generate summary groups for one dataset.

    Args:
        request: Summarization config plus an optional summarizer selection.

    Returns:
        SummarizationResponse with the groups in requested order
    """
    config = request.to_config()

    try:
        groups = await engine.summaries(config, request.kinds)
    except ConfigError as e:
        logger.warning(f"Rejected summarization request for {config.dataset_id!r}: {e}")
        raise HTTPException(status_code=422, detail=str(e))
    except SummarizationError as e:
        logger.exception(f"Error summarizing dataset {config.dataset_id!r}")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to generate summaries: {str(e)}"
        )

    logger.info(
        f"Generated {sum(len(group.summaries) for group in groups)} summaries "
        f"in {len(groups)} groups for dataset {config.dataset_id!r}"
    )
    return SummarizationResponse(dataset_id=config.dataset_id, groups=tuple(groups))


@router.delete("/cache", response_model=CacheResetResponse)
async def reset_cache(engine: EngineDep) -> CacheResetResponse:
    """
    Invalidate every cached property and summary.

    In-flight computations are cancelled; the next request recomputes.
    """
    cancelled = engine.reset()
    return CacheResetResponse(cancelled=cancelled, generation=engine.cache.generation)
