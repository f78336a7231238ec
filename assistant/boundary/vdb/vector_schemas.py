"""
Vector database schemas.

Pydantic models for vector search results and chunk metadata.
Used for type-safe vector store interactions.

Dependencies: pydantic
System role: Type definitions for vector operations
"""

from pydantic import BaseModel, Field


class VectorMetadata(BaseModel):
    """Metadata attached to each knowledge chunk."""

    chunk_id: str = Field(description="Deterministic chunk identifier")
    source: str = Field(default="", description="Source label supplied at ingestion")
    start_index: int | None = Field(default=None, description="Character offset in the source text")


class VectorSearchResult(BaseModel):
    """Single result from vector search."""

    chunk_id: str = Field(description="Chunk identifier")
    content: str = Field(description="Chunk text content")
    metadata: VectorMetadata = Field(description="Chunk metadata")
    similarity_score: float = Field(description="Similarity score, higher is closer")
