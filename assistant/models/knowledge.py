"""
Knowledge base models and schemas.

Request/response schemas for ingesting text into the vector index and
searching it.

Dependencies: pydantic
System role: Knowledge base API contracts
"""

from pydantic import BaseModel, Field


class KnowledgeIngestRequest(BaseModel):
    """Request schema for adding text to the knowledge base."""

    text: str = Field(min_length=1, description="Plain text to chunk and index")
    source: str = Field(default="manual", description="Source label stored with every chunk")


class KnowledgeIngestResponse(BaseModel):
    """Response schema for knowledge ingestion."""

    chunks_indexed: int
    source: str


class KnowledgeSearchHit(BaseModel):
    """Single knowledge base search result."""

    chunk_id: str
    content: str
    source: str
    score: float


class KnowledgeSearchResponse(BaseModel):
    """Response schema for knowledge search."""

    query: str
    results: list[KnowledgeSearchHit]
