"""Application services."""

from assistant.application.services.chat_service import ChatService
from assistant.application.services.diagram_service import DiagramService
from assistant.application.services.knowledge_service import KnowledgeService
from assistant.application.services.render_service import RenderService

__all__ = ["ChatService", "DiagramService", "KnowledgeService", "RenderService"]
