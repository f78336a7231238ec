"""Chat service layer.

Handles one stateless chat turn: knowledge retrieval, answer generation
and, when the message asks for a visual, the diagram pipeline. A diagram
failure degrades the turn to a text-only answer.

Dependencies: logging, chat agent, knowledge service, diagram service
System role: Service layer for chat
"""

import logging

from assistant.application.services.diagram_service import DiagramService
from assistant.application.services.knowledge_service import KnowledgeService
from assistant.core.agentic_system.agent.chat_agent import KnowledgeChatAgent
from assistant.core.diagram.intent import is_image_generation_request
from assistant.core.exceptions import KnowledgeBaseError
from assistant.models.chat import ChatRequest, ChatResponse, ChatSource

logger = logging.getLogger(__name__)


class ChatService:
    """Service for knowledge-base chat with optional diagrams."""

    def __init__(
        self,
        agent: KnowledgeChatAgent,
        knowledge_service: KnowledgeService,
        diagram_service: DiagramService,
    ) -> None:
        """
        Initialize service with dependencies.

        Args:
            agent: Chat answer agent
            knowledge_service: Knowledge base search
            diagram_service: Diagram synthesis pipeline
        """
        self._agent = agent
        self._knowledge = knowledge_service
        self._diagrams = diagram_service

    async def chat(self, request: ChatRequest) -> ChatResponse:
        """
        Answer a chat message.

        Args:
            request: Message and caller-supplied history

        Returns:
            ChatResponse: Answer, sources and optional diagram reference

        Raises:
            Exception: If the answer itself cannot be generated
        """
        message = request.message
        wants_diagram = is_image_generation_request(message)
        logger.info(
            f"{__name__}:chat - START message_len={len(message)} "
            f"history={len(request.history)} wants_diagram={wants_diagram}"
        )

        try:
            results = await self._knowledge.search(message)
        except KnowledgeBaseError as e:
            logger.error(f"{__name__}:chat - Knowledge search failed, answering without context: {e}")
            results = []

        answer = await self._agent.ainvoke(
            question=message,
            context=results,
            history=request.history,
            with_diagram=wants_diagram,
        )

        diagram = None
        if wants_diagram:
            try:
                generated = await self._diagrams.generate(
                    message,
                    knowledge_context=[r.content for r in results],
                )
                diagram = self._diagrams.reference(generated, message)
            except Exception as e:
                logger.error(
                    f"{__name__}:chat - Diagram generation failed, returning text only - "
                    f"{type(e).__name__}: {e}",
                    exc_info=True,
                )

        logger.info(f"{__name__}:chat - END answer_len={len(answer)} diagram={diagram is not None}")
        return ChatResponse(
            answer=answer,
            sources=[
                ChatSource(source=r.metadata.source, content=r.content, score=r.similarity_score)
                for r in results
            ],
            diagram=diagram,
        )
