"""Knowledge base service layer.

Chunks plain text into the FAISS knowledge base and searches it.

Dependencies: langchain_text_splitters, fastapi.concurrency, FAISS store
System role: Service layer for knowledge ingestion and retrieval
"""

import logging

from fastapi.concurrency import run_in_threadpool
from langchain_core.documents import Document
from langchain_text_splitters import RecursiveCharacterTextSplitter

from assistant.boundary.vdb.faiss_store import FAISSKnowledgeStore
from assistant.boundary.vdb.vector_schemas import VectorSearchResult
from assistant.core.exceptions import ValidationError

logger = logging.getLogger(__name__)


class KnowledgeService:
    """Service for knowledge base ingestion and search."""

    def __init__(
        self,
        store: FAISSKnowledgeStore,
        chunk_size: int = 1000,
        chunk_overlap: int = 150,
        top_k: int = 5,
    ) -> None:
        """
        Initialize service.

        Args:
            store: FAISS knowledge store
            chunk_size: Maximum chunk size in characters
            chunk_overlap: Overlap between consecutive chunks
            top_k: Default number of search results
        """
        self._store = store
        self._top_k = top_k
        self._splitter = RecursiveCharacterTextSplitter(
            chunk_size=chunk_size,
            chunk_overlap=chunk_overlap,
            add_start_index=True,
            length_function=len,
        )

    def chunk(self, text: str, source: str) -> list[Document]:
        """Split text into chunk documents tagged with their source."""
        return self._splitter.split_documents([Document(page_content=text, metadata={"source": source})])

    async def ingest(self, text: str, source: str = "manual") -> int:
        """
        Add text to the knowledge base.

        Args:
            text: Plain text
            source: Source label stored with every chunk

        Returns:
            int: Number of chunks indexed

        Raises:
            ValidationError: If text is blank
        """
        if not text.strip():
            raise ValidationError("text cannot be empty", field="text")

        logger.info(f"{__name__}:ingest - START source={source} text_len={len(text)}")
        chunks = self.chunk(text, source)
        ids = await run_in_threadpool(self._store.add_documents, chunks)
        logger.info(f"{__name__}:ingest - END chunks={len(ids)}")
        return len(ids)

    async def search(self, query: str, k: int | None = None) -> list[VectorSearchResult]:
        """
        Search the knowledge base.

        Args:
            query: Search text
            k: Number of results (defaults to configured top_k)

        Returns:
            list[VectorSearchResult]: Matching chunks
        """
        if not query.strip():
            return []
        return await run_in_threadpool(self._store.similarity_search, query, k or self._top_k)
