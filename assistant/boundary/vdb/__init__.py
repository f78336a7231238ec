"""Vector database boundary (FAISS knowledge base)."""

from assistant.boundary.vdb.faiss_store import FAISSKnowledgeStore
from assistant.boundary.vdb.vector_schemas import VectorMetadata, VectorSearchResult

__all__ = ["FAISSKnowledgeStore", "VectorMetadata", "VectorSearchResult"]
