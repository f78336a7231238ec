"""FastAPI dependency providers."""

from assistant.api.deps.dependencies import (
    get_chat_service,
    get_diagram_service,
    get_knowledge_service,
    get_render_service,
    get_service_cache,
    get_settings_dependency,
)

__all__ = [
    "get_chat_service",
    "get_diagram_service",
    "get_knowledge_service",
    "get_render_service",
    "get_service_cache",
    "get_settings_dependency",
]
