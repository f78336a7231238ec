"""Component extraction node.

Second LLM call: turns the request, knowledge snippets and enriched
context into validated DiagramComponents.

Dependencies: logging, diagram_prompt, component_parser
System role: Second stage of the component extraction graph
"""

import logging
from typing import TYPE_CHECKING

from assistant.core.agentic_system.diagram_agent.agent.component_parser import (
    message_text,
    parse_components,
)
from assistant.core.agentic_system.diagram_agent.agent.diagram_prompt import get_extraction_prompt
from assistant.core.agentic_system.diagram_agent.agent.diagram_schema import ComponentExtractionState

if TYPE_CHECKING:
    from langchain_core.language_models.chat_models import BaseChatModel

logger = logging.getLogger(__name__)


async def extraction_node(
    state: ComponentExtractionState,
    model: "BaseChatModel",
    organization: str,
    primary_node: str,
) -> dict:
    """Extract diagram components as structured JSON.

    Args:
        state: Graph state with prompt, knowledge_context, enriched_context
        model: Chat model configured for JSON output
        organization: Organization name used in the system prompt
        primary_node: Node guaranteed to lead the node list

    Returns:
        dict: State update with components or error
    """
    try:
        context_parts = [*state.get("knowledge_context", []), state.get("enriched_context", "")]
        logger.info(f"{__name__}:extraction_node - START context_parts={len(context_parts)}")

        # Step 1: Format prompt
        try:
            messages = get_extraction_prompt().format_messages(
                organization=organization,
                primary_node=primary_node,
                prompt=state["prompt"],
                context="\n\n".join(part for part in context_parts if part) or "(none)",
                request_token=state["request_token"],
            )
        except Exception as e:
            logger.error(
                f"{__name__}:extraction_node - FAILED at prompt formatting - {type(e).__name__}: {e}",
                exc_info=True,
            )
            raise

        # Step 2: Invoke model
        try:
            response = await model.ainvoke(messages)
        except Exception as e:
            logger.error(
                f"{__name__}:extraction_node - FAILED at model.ainvoke - {type(e).__name__}: {e}",
                exc_info=True,
            )
            raise

        # Step 3: Parse and validate
        components = parse_components(message_text(response), primary_node)

        logger.info(
            f"{__name__}:extraction_node - END title='{components.title}' "
            f"nodes={len(components.nodes)}, connections={len(components.connections)}"
        )
        return {"components": components}

    except Exception as e:
        logger.error(f"{__name__}:extraction_node - {type(e).__name__}: {e}")
        return {"error": str(e)}
