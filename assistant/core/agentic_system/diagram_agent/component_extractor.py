"""Component extractor with LangGraph orchestration.

Main entry point of the first diagram pipeline stage:
1. Skips the LLM for trivially small requests
2. Runs the enrichment -> extraction graph
3. Falls back to a hand-authored template on any failure

``extract`` never raises; the caller always receives valid components.

Dependencies: langchain_google_genai, LangGraph, templates, graph definition
System role: Prompt + knowledge snippets -> DiagramComponents
"""

import logging
import secrets
import time
from typing import TYPE_CHECKING

from langchain_google_genai import ChatGoogleGenerativeAI

from assistant.core.agentic_system.diagram_agent.agent.diagram_schema import ComponentExtractionState
from assistant.core.agentic_system.diagram_agent.graph.diagram_graph import (
    create_component_extraction_graph,
)
from assistant.core.diagram.templates import rotating_template, template_name_for, get_template
from assistant.models.diagram import DiagramComponents

if TYPE_CHECKING:
    from langchain_core.language_models.chat_models import BaseChatModel

logger = logging.getLogger(__name__)

MIN_PROMPT_CHARS = 10
MIN_CONTEXT_CHARS = 20


def uniqueness_token() -> str:
    """``<unix-ms>-<random>`` token embedded in every extraction prompt."""
    return f"{int(time.time() * 1000)}-{secrets.token_hex(4)}"


class ExtractionResult:
    """Components plus how they were obtained."""

    def __init__(self, components: DiagramComponents, used_fallback: bool, template: str | None = None) -> None:
        self.components = components
        self.used_fallback = used_fallback
        self.template = template


class ComponentExtractor:
    """Extract structured diagram components from a request and its context."""

    def __init__(
        self,
        google_api_key: str | None = None,
        model_id: str = "gemini-2.5-flash",
        enrichment_temperature: float = 1.0,
        extraction_temperature: float = 0.9,
        max_tokens: int = 2048,
        timeout_seconds: float = 60.0,
        primary_node: str = "RiverMeadow Platform",
        organization: str = "RiverMeadow",
        enrichment_model: "BaseChatModel | None" = None,
        extraction_model: "BaseChatModel | None" = None,
    ) -> None:
        """Initialize extractor with its two chat models.

        Args:
            google_api_key: Google API key (falls back to GOOGLE_API_KEY env)
            model_id: Gemini model ID for both calls
            enrichment_temperature: Temperature for the explanation call
            extraction_temperature: Temperature for the JSON call
            max_tokens: Output token limit per call
            timeout_seconds: Per-call timeout
            primary_node: Node always present and first
            organization: Organization name used in prompts
            enrichment_model: Pre-built model, mainly for tests
            extraction_model: Pre-built model, mainly for tests
        """
        self._primary_node = primary_node

        common = {"model": model_id, "max_output_tokens": max_tokens, "timeout": timeout_seconds}
        if google_api_key:
            common["google_api_key"] = google_api_key

        if enrichment_model is None:
            enrichment_model = ChatGoogleGenerativeAI(temperature=enrichment_temperature, **common)
        if extraction_model is None:
            extraction_model = ChatGoogleGenerativeAI(
                temperature=extraction_temperature,
                response_mime_type="application/json",
                **common,
            )

        self._graph = create_component_extraction_graph(
            enrichment_model=enrichment_model,
            extraction_model=extraction_model,
            organization=organization,
            primary_node=primary_node,
        )

    def _keyword_fallback(self, prompt: str, reason: str) -> ExtractionResult:
        name = template_name_for(prompt)
        logger.warning(f"{__name__}:extract - FALLBACK template={name} reason={reason}")
        return ExtractionResult(get_template(name), used_fallback=True, template=name)

    async def extract(self, prompt: str, knowledge_context: list[str] | None = None) -> ExtractionResult:
        """Extract diagram components.

        Args:
            prompt: User's diagram request
            knowledge_context: Knowledge-base snippets

        Returns:
            ExtractionResult: Valid components; ``used_fallback`` marks template output
        """
        context = knowledge_context or []
        logger.info(f"{__name__}:extract - START prompt_len={len(prompt)}, context={len(context)}")

        if len(prompt.strip()) < MIN_PROMPT_CHARS and len(" ".join(context)) < MIN_CONTEXT_CHARS:
            return self._keyword_fallback(prompt, "prompt and context too small")

        initial_state: ComponentExtractionState = {
            "prompt": prompt,
            "knowledge_context": context,
            "request_token": uniqueness_token(),
        }

        try:
            final_state = await self._graph.ainvoke(initial_state)
        except Exception as e:
            # Graph itself broke; keyword signal is not trusted, rotate instead
            name, components = rotating_template()
            logger.error(
                f"{__name__}:extract - {type(e).__name__}: {e}, FALLBACK rotating template={name}",
                exc_info=True,
            )
            return ExtractionResult(components, used_fallback=True, template=name)

        if final_state.get("error") or final_state.get("components") is None:
            return self._keyword_fallback(prompt, final_state.get("error") or "no components")

        components = final_state["components"]
        logger.info(
            f"{__name__}:extract - END title='{components.title}' nodes={len(components.nodes)} "
            f"enrichment_failed={final_state.get('enrichment_failed', False)}"
        )
        return ExtractionResult(components, used_fallback=False)
