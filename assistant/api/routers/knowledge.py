"""Knowledge base endpoints.

Routes:
- POST /knowledge - Chunk and index plain text
- GET /knowledge/search - Similarity search

Dependencies: assistant.application.services.knowledge_service
System role: Knowledge base HTTP API
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from assistant.api.deps import get_knowledge_service
from assistant.application.services.knowledge_service import KnowledgeService
from assistant.core.exceptions import ValidationError
from assistant.models.knowledge import (
    KnowledgeIngestRequest,
    KnowledgeIngestResponse,
    KnowledgeSearchHit,
    KnowledgeSearchResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/knowledge", tags=["knowledge"])


@router.post("", response_model=KnowledgeIngestResponse, status_code=201)
async def ingest_knowledge(
    request: KnowledgeIngestRequest,
    knowledge_service: KnowledgeService = Depends(get_knowledge_service),
) -> KnowledgeIngestResponse:
    """Add text to the knowledge base.

    Raises:
        HTTPException(400): Blank text
        HTTPException(500): Indexing failed
    """
    try:
        count = await knowledge_service.ingest(request.text, request.source)
        return KnowledgeIngestResponse(chunks_indexed=count, source=request.source)
    except ValidationError as e:
        logger.error(f"{__name__}:ingest_knowledge - ValidationError: {e}")
        raise HTTPException(status_code=400, detail=e.message) from e
    except Exception as e:
        logger.error(f"{__name__}:ingest_knowledge - {type(e).__name__}: {e}")
        raise HTTPException(status_code=500, detail="Failed to index knowledge") from e


@router.get("/search", response_model=KnowledgeSearchResponse)
async def search_knowledge(
    q: str = Query(min_length=1, description="Search text"),
    k: int = Query(default=5, ge=1, le=50, description="Number of results"),
    knowledge_service: KnowledgeService = Depends(get_knowledge_service),
) -> KnowledgeSearchResponse:
    """Search the knowledge base."""
    try:
        results = await knowledge_service.search(q, k)
    except Exception as e:
        logger.error(f"{__name__}:search_knowledge - {type(e).__name__}: {e}")
        raise HTTPException(status_code=500, detail="Knowledge search failed") from e
    return KnowledgeSearchResponse(
        query=q,
        results=[
            KnowledgeSearchHit(
                chunk_id=r.chunk_id,
                content=r.content,
                source=r.metadata.source,
                score=r.similarity_score,
            )
            for r in results
        ],
    )
