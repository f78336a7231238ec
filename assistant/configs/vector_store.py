"""
Vector store configuration settings.

Manages the local FAISS index used as the assistant knowledge base.
Includes embedding model and chunking settings.

Dependencies: pydantic, pydantic_settings
System role: Vector database configuration for RAG retrieval
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class VectorStoreSettings(BaseSettings):
    """FAISS knowledge base configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="VECTOR_STORE_",
        case_sensitive=False,
        extra="ignore",
    )

    index_dir: str = Field(default=".faiss_index", description="FAISS index persistence directory")
    index_name: str = Field(default="knowledge", description="FAISS index file stem")

    embedding_model: str = Field(
        default="models/gemini-embedding-001",
        description="Google Gemini embedding model ID",
    )

    top_k: int = Field(default=5, description="Number of top results to retrieve")
    chunk_size: int = Field(default=1000, description="Characters per knowledge chunk")
    chunk_overlap: int = Field(default=150, description="Overlap between consecutive chunks")
