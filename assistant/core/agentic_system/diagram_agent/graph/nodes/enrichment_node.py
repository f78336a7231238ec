"""Context enrichment node for component extraction.

First LLM call: a broad technical explanation of the requested topic that
the extraction call can mine for components. A failure here is not fatal;
a short default paragraph stands in and the pipeline continues.

Dependencies: logging, diagram_prompt, component_parser
System role: First stage of the component extraction graph
"""

import logging
from typing import TYPE_CHECKING

from assistant.core.agentic_system.diagram_agent.agent.component_parser import message_text
from assistant.core.agentic_system.diagram_agent.agent.diagram_prompt import get_enrichment_prompt
from assistant.core.agentic_system.diagram_agent.agent.diagram_schema import ComponentExtractionState

if TYPE_CHECKING:
    from langchain_core.language_models.chat_models import BaseChatModel

logger = logging.getLogger(__name__)

DEFAULT_ENRICHED_CONTEXT = (
    "RiverMeadow provides cloud migration services with a core platform that connects "
    "source environments to target environments, supporting migration types including "
    "P2V, V2C and C2C across cloud platforms like AWS, Azure and Google Cloud."
)


async def enrichment_node(
    state: ComponentExtractionState,
    model: "BaseChatModel",
    organization: str,
) -> dict:
    """Generate a detailed technical explanation for the request.

    Args:
        state: Graph state with prompt, knowledge_context, request_token
        model: Chat model (high temperature)
        organization: Organization name used in the system prompt

    Returns:
        dict: State update with enriched_context and enrichment_failed
    """
    try:
        logger.info(
            f"{__name__}:enrichment_node - START "
            f"prompt_len={len(state['prompt'])}, context={len(state.get('knowledge_context', []))}"
        )
        messages = get_enrichment_prompt().format_messages(
            organization=organization,
            prompt=state["prompt"],
            context="\n\n".join(state.get("knowledge_context", [])) or "(none)",
            request_token=state["request_token"],
        )
        response = await model.ainvoke(messages)
        text = message_text(response).strip()
        if not text:
            raise ValueError("Empty enrichment response")

        logger.info(f"{__name__}:enrichment_node - END enriched_len={len(text)}")
        return {"enriched_context": text, "enrichment_failed": False}

    except Exception as e:
        logger.error(
            f"{__name__}:enrichment_node - {type(e).__name__}: {e}, using default context",
            exc_info=True,
        )
        return {"enriched_context": DEFAULT_ENRICHED_CONTEXT, "enrichment_failed": True}
