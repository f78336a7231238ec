"""
Local FAISS knowledge base.

Wraps LangChain FAISS with Google Gemini embeddings. The index is created on
first insert and persisted to disk after every write.

Dependencies: langchain_community.vectorstores, langchain_google_genai
System role: Vector store for knowledge-base retrieval
"""

import hashlib
import logging
from pathlib import Path

from langchain_community.vectorstores import FAISS
from langchain_core.documents import Document
from langchain_core.embeddings import Embeddings
from langchain_google_genai import GoogleGenerativeAIEmbeddings

from assistant.boundary.vdb.vector_schemas import VectorMetadata, VectorSearchResult
from assistant.core.exceptions import KnowledgeBaseError

logger = logging.getLogger(__name__)


def chunk_id_for(source: str, content: str) -> str:
    """Deterministic chunk ID so re-ingesting the same text is idempotent."""
    return hashlib.sha256(f"{source}\x00{content}".encode("utf-8")).hexdigest()[:32]


class FAISSKnowledgeStore:
    """
    Local FAISS knowledge base.

    Stores chunks with source metadata and returns typed search results.
    """

    def __init__(
        self,
        persist_directory: str = ".faiss_index",
        index_name: str = "knowledge",
        embedding_model: str = "models/gemini-embedding-001",
        google_api_key: str | None = None,
        embeddings: Embeddings | None = None,
    ) -> None:
        """
        Initialize FAISS store with Gemini embeddings.

        Args:
            persist_directory: Directory for FAISS index persistence
            index_name: Index file stem inside the directory
            embedding_model: Google embedding model ID
            google_api_key: Optional API key (falls back to GOOGLE_API_KEY env)
            embeddings: Pre-built embeddings, mainly for tests
        """
        self._persist_dir = Path(persist_directory)
        self._persist_dir.mkdir(parents=True, exist_ok=True)
        self._index_name = index_name

        if embeddings is None:
            kwargs = {"model": embedding_model}
            if google_api_key:
                kwargs["google_api_key"] = google_api_key
            embeddings = GoogleGenerativeAIEmbeddings(**kwargs)
        self._embeddings = embeddings

        self._index: FAISS | None = None
        self._load_index()

    def _load_index(self) -> None:
        """Load existing index if one was persisted."""
        index_path = self._persist_dir / f"{self._index_name}.faiss"
        if not index_path.exists():
            logger.info(f"{__name__}:_load_index - No index at {index_path}, will create on first insert")
            return
        try:
            self._index = FAISS.load_local(
                str(self._persist_dir),
                self._embeddings,
                index_name=self._index_name,
                allow_dangerous_deserialization=True,
            )
            logger.info(f"{__name__}:_load_index - Loaded index from {index_path}")
        except Exception as e:
            logger.error(f"{__name__}:_load_index - {type(e).__name__}: {e}", exc_info=True)
            raise KnowledgeBaseError(f"Failed to load FAISS index: {e}", operation="load") from e

    @property
    def is_empty(self) -> bool:
        return self._index is None

    def add_documents(self, documents: list[Document]) -> list[str]:
        """
        Add chunk documents to the index.

        Args:
            documents: LangChain Documents; ``source`` metadata is preserved

        Returns:
            list[str]: Chunk IDs in input order
        """
        if not documents:
            return []

        ids = []
        unique: dict[str, Document] = {}
        for doc in documents:
            chunk_id = chunk_id_for(doc.metadata.get("source", ""), doc.page_content)
            doc.metadata["chunk_id"] = chunk_id
            ids.append(chunk_id)
            unique.setdefault(chunk_id, doc)

        logger.info(f"{__name__}:add_documents - START count={len(documents)} unique={len(unique)}")
        try:
            if self._index is None:
                self._index = FAISS.from_documents(
                    list(unique.values()), self._embeddings, ids=list(unique)
                )
            else:
                existing = set(self._index.index_to_docstore_id.values())
                fresh = {cid: doc for cid, doc in unique.items() if cid not in existing}
                if fresh:
                    self._index.add_documents(list(fresh.values()), ids=list(fresh))
            self._index.save_local(str(self._persist_dir), index_name=self._index_name)
        except Exception as e:
            logger.error(f"{__name__}:add_documents - {type(e).__name__}: {e}", exc_info=True)
            raise KnowledgeBaseError(f"Failed to index documents: {e}", operation="add") from e

        logger.info(f"{__name__}:add_documents - END ids={len(ids)}")
        return ids

    def similarity_search(self, query: str, k: int = 5) -> list[VectorSearchResult]:
        """
        Search for similar chunks.

        Args:
            query: Search query text
            k: Number of results to return

        Returns:
            list[VectorSearchResult]: Results ordered by similarity
        """
        if self._index is None:
            return []

        try:
            results = self._index.similarity_search_with_score(query, k=k)
        except Exception as e:
            logger.error(f"{__name__}:similarity_search - {type(e).__name__}: {e}", exc_info=True)
            raise KnowledgeBaseError(f"Search failed: {e}", operation="search") from e

        search_results = []
        for doc, distance in results:
            metadata = doc.metadata or {}
            search_results.append(
                VectorSearchResult(
                    chunk_id=metadata.get("chunk_id", ""),
                    content=doc.page_content,
                    metadata=VectorMetadata(
                        chunk_id=metadata.get("chunk_id", ""),
                        source=metadata.get("source", ""),
                        start_index=metadata.get("start_index"),
                    ),
                    # L2 distance -> bounded similarity
                    similarity_score=float(1.0 / (1.0 + distance)),
                )
            )
        return search_results
