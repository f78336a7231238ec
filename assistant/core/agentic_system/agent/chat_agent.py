"""
Knowledge chat agent implementation.

Answers a question from knowledge-base snippets and caller-supplied history
with a single Gemini call.

Dependencies: langchain_google_genai, langchain_core
System role: Chat answer generation
"""

import logging
from typing import TYPE_CHECKING

from langchain_google_genai import ChatGoogleGenerativeAI

from assistant.boundary.vdb.vector_schemas import VectorSearchResult
from assistant.core.agentic_system.agent.chat_agent_prompt import (
    DIAGRAM_INSTRUCTION,
    NO_DIAGRAM_INSTRUCTION,
    get_chat_prompt,
)
from assistant.core.agentic_system.diagram_agent.agent.component_parser import message_text
from assistant.models.chat import ChatMessage

if TYPE_CHECKING:
    from langchain_core.language_models.chat_models import BaseChatModel

logger = logging.getLogger(__name__)


def format_context(results: list[VectorSearchResult]) -> str:
    """Render search results as the prompt's context block."""
    if not results:
        return "(no matching knowledge-base entries)"
    return "\n\n".join(
        f"[{i}] source={r.metadata.source or 'unknown'} relevance={r.similarity_score:.2f}\n{r.content}"
        for i, r in enumerate(results, start=1)
    )


def format_history(history: list[ChatMessage]) -> str:
    if not history:
        return ""
    lines = [f"{'User' if m.role == 'user' else 'Assistant'}: {m.content}" for m in history]
    return "Previous Conversation:\n" + "\n".join(lines) + "\n"


class KnowledgeChatAgent:
    """Single-call knowledge-base answerer."""

    def __init__(
        self,
        google_api_key: str | None = None,
        model_id: str = "gemini-2.5-flash",
        temperature: float = 0.3,
        max_tokens: int = 2048,
        timeout_seconds: float = 60.0,
        model: "BaseChatModel | None" = None,
    ) -> None:
        """
        Initialize chat agent.

        Args:
            google_api_key: Google API key (falls back to GOOGLE_API_KEY env)
            model_id: Gemini model ID
            temperature: Model temperature
            max_tokens: Output token limit
            timeout_seconds: Per-call timeout
            model: Pre-built chat model, mainly for tests
        """
        if model is None:
            kwargs = {
                "model": model_id,
                "temperature": temperature,
                "max_output_tokens": max_tokens,
                "timeout": timeout_seconds,
            }
            if google_api_key:
                kwargs["google_api_key"] = google_api_key
            model = ChatGoogleGenerativeAI(**kwargs)
        self._model = model

    async def ainvoke(
        self,
        question: str,
        context: list[VectorSearchResult],
        history: list[ChatMessage] | None = None,
        with_diagram: bool = False,
    ) -> str:
        """
        Answer a question.

        Args:
            question: User's question
            context: Retrieved knowledge-base chunks
            history: Previous turns, oldest first
            with_diagram: Whether a diagram accompanies the answer

        Returns:
            str: Answer text
        """
        logger.info(
            f"{__name__}:ainvoke - START question_len={len(question)}, "
            f"context={len(context)}, with_diagram={with_diagram}"
        )
        messages = get_chat_prompt().invoke({
            "diagram_instruction": DIAGRAM_INSTRUCTION if with_diagram else NO_DIAGRAM_INSTRUCTION,
            "chat_history": format_history(history or []),
            "context": format_context(context),
            "question": question,
        }).to_messages()

        response = await self._model.ainvoke(messages)
        answer = message_text(response).strip()

        logger.info(f"{__name__}:ainvoke - END answer_len={len(answer)}")
        return answer
