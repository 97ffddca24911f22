import asyncio
import logging
from typing import Dict, Optional

from fastapi import APIRouter, Depends, HTTPException

from simcheck.config import DetectionConfig, EMBEDDING_MODEL_NAME, SEMANTIC_ENABLED, load_config
from simcheck.schemas.comparison_schemas import BatchRequest, BatchResult, CompareRequest, ComparisonReport
from simcheck.utils.batch import run_batch
from simcheck.utils.comparison import compare_submissions
from simcheck.utils.errors import ConfigurationError
from simcheck.utils.semantic_utils import Embedder, SentenceTransformerEmbedder

router = APIRouter(prefix="/similarity", tags=["similarity"])

logger = logging.getLogger("simcheck.api")


def get_embedder() -> Optional[Embedder]:
    if not SEMANTIC_ENABLED:
        return None
    return SentenceTransformerEmbedder(EMBEDDING_MODEL_NAME)


def _config_or_422(overrides: Optional[Dict]) -> DetectionConfig:
    try:
        return load_config(overrides)
    except ConfigurationError as e:
        logger.warning(f"Rejected configuration: {e}")
        raise HTTPException(status_code=422, detail=f"Invalid configuration: {e}")


@router.get("/config", response_model=DetectionConfig)
async def default_config():
    return load_config()


@router.post("/compare", response_model=ComparisonReport)
async def compare(
    request: CompareRequest,
    embedder: Optional[Embedder] = Depends(get_embedder),
):
    config = _config_or_422(request.config)
    return await asyncio.to_thread(
        compare_submissions,
        request.submission_a,
        request.submission_b,
        config,
        embedder=embedder,
    )


@router.post("/batch", response_model=BatchResult)
async def batch(
    request: BatchRequest,
    embedder: Optional[Embedder] = Depends(get_embedder),
):
    if len(request.submissions) < 2:
        raise HTTPException(status_code=400, detail="Provide at least 2 submissions")
    ids = [s.id for s in request.submissions]
    if len(set(ids)) != len(ids):
        raise HTTPException(status_code=400, detail="Submission ids must be unique")

    config = _config_or_422(request.config)
    return await asyncio.to_thread(run_batch, request.submissions, config, embedder=embedder)
