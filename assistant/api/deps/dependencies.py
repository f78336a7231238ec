"""
Dependency injection container.

Factory functions for FastAPI dependencies. Expensive clients (LLM models,
FAISS index) are built lazily on first use and shared across requests.

Dependencies: assistant.configs, assistant.application, assistant.boundary
System role: DI container for service injection
"""

from functools import lru_cache

from assistant.configs import Settings, get_settings
from assistant.application.services import (
    ChatService,
    DiagramService,
    KnowledgeService,
    RenderService,
)


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self):
        self._diagram_store = None
        self._knowledge_store = None
        self._extractor = None
        self._chat_agent = None

    @property
    def diagram_store(self):
        """Get cached diagram file store."""
        if self._diagram_store is None:
            from assistant.boundary.storage.diagram_store import DiagramStore
            self._diagram_store = DiagramStore(get_settings().diagram.output_dir)
        return self._diagram_store

    @property
    def knowledge_store(self):
        """Get cached FAISS knowledge store."""
        if self._knowledge_store is None:
            from assistant.boundary.vdb.faiss_store import FAISSKnowledgeStore

            settings = get_settings()
            self._knowledge_store = FAISSKnowledgeStore(
                persist_directory=settings.vector_store.index_dir,
                index_name=settings.vector_store.index_name,
                embedding_model=settings.vector_store.embedding_model,
                google_api_key=settings.llm.google_api_key or None,
            )
        return self._knowledge_store

    @property
    def extractor(self):
        """Get cached diagram component extractor."""
        if self._extractor is None:
            from assistant.core.agentic_system.diagram_agent import ComponentExtractor

            settings = get_settings()
            self._extractor = ComponentExtractor(
                google_api_key=settings.llm.google_api_key or None,
                model_id=settings.llm.model_id,
                enrichment_temperature=settings.llm.enrichment_temperature,
                extraction_temperature=settings.llm.extraction_temperature,
                max_tokens=settings.llm.max_tokens,
                timeout_seconds=settings.llm.timeout_seconds,
                primary_node=settings.diagram.primary_node,
            )
        return self._extractor

    @property
    def chat_agent(self):
        """Get cached chat agent."""
        if self._chat_agent is None:
            from assistant.core.agentic_system.agent import KnowledgeChatAgent

            settings = get_settings()
            self._chat_agent = KnowledgeChatAgent(
                google_api_key=settings.llm.google_api_key or None,
                model_id=settings.llm.model_id,
                temperature=settings.llm.chat_temperature,
                max_tokens=settings.llm.max_tokens,
                timeout_seconds=settings.llm.timeout_seconds,
            )
        return self._chat_agent

    def clear(self) -> None:
        """Clear all cached instances."""
        self._diagram_store = None
        self._knowledge_store = None
        self._extractor = None
        self._chat_agent = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


@lru_cache
def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_render_service() -> RenderService:
    """
    Get render service instance.

    Returns:
        RenderService: Render service with D2 and browser backends
    """
    from assistant.boundary.render import BrowserRasterizer, D2Renderer

    settings = get_settings().diagram
    return RenderService(
        store=get_service_cache().diagram_store,
        d2_renderer=D2Renderer(
            binary=settings.d2_binary,
            theme=settings.d2_theme,
            layout=settings.d2_layout,
            pad=settings.d2_pad,
            timeout_seconds=settings.render_timeout_seconds,
        ),
        rasterizer=BrowserRasterizer(
            scale=settings.screenshot_scale,
            timeout_seconds=settings.render_timeout_seconds,
        ),
    )


def get_diagram_service() -> DiagramService:
    """
    Get diagram generation service instance.

    Returns:
        DiagramService: Service with cached extractor and store
    """
    cache = get_service_cache()
    return DiagramService(
        extractor=cache.extractor,
        store=cache.diagram_store,
        api_prefix=get_settings().api_prefix,
    )


def get_knowledge_service() -> KnowledgeService:
    """
    Get knowledge base service instance.

    Returns:
        KnowledgeService: Service over the cached FAISS store
    """
    settings = get_settings().vector_store
    return KnowledgeService(
        store=get_service_cache().knowledge_store,
        chunk_size=settings.chunk_size,
        chunk_overlap=settings.chunk_overlap,
        top_k=settings.top_k,
    )


def get_chat_service() -> ChatService:
    """
    Get chat service instance.

    Returns:
        ChatService: Chat service with knowledge and diagram pipelines
    """
    return ChatService(
        agent=get_service_cache().chat_agent,
        knowledge_service=get_knowledge_service(),
        diagram_service=get_diagram_service(),
    )
