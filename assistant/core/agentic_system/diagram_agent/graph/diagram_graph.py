"""LangGraph definition for component extraction.

Builds and compiles a two-node graph:
1. Context enrichment (LLM, free text)
2. Component extraction (LLM, JSON)

Dependencies: langgraph, node functions, schema
System role: Graph orchestration for the component extractor
"""

import logging
from typing import TYPE_CHECKING

from langgraph.graph import END, StateGraph

from assistant.core.agentic_system.diagram_agent.agent.diagram_schema import ComponentExtractionState
from assistant.core.agentic_system.diagram_agent.graph.nodes import enrichment_node, extraction_node

if TYPE_CHECKING:
    from langchain_core.language_models.chat_models import BaseChatModel

logger = logging.getLogger(__name__)


def create_component_extraction_graph(
    enrichment_model: "BaseChatModel",
    extraction_model: "BaseChatModel",
    organization: str,
    primary_node: str,
):
    """Create LangGraph for component extraction.

    Args:
        enrichment_model: Chat model for the explanation call
        extraction_model: Chat model for the JSON call
        organization: Organization name used in prompts
        primary_node: Node guaranteed to lead the node list

    Returns:
        CompiledGraph: Compiled and runnable graph

    Raises:
        Exception: If graph compilation fails
    """
    try:
        logger.info(f"{__name__}:create_component_extraction_graph - Building graph")

        graph = StateGraph(ComponentExtractionState)

        # Node wrappers with dependency injection
        async def enrichment_wrapper(state):
            return await enrichment_node(state, enrichment_model, organization)

        async def extraction_wrapper(state):
            return await extraction_node(state, extraction_model, organization, primary_node)

        graph.add_node("enrichment", enrichment_wrapper)
        graph.add_node("extraction", extraction_wrapper)

        graph.set_entry_point("enrichment")
        graph.add_edge("enrichment", "extraction")
        graph.add_edge("extraction", END)

        compiled_graph = graph.compile()

        logger.info(f"{__name__}:create_component_extraction_graph - Graph created successfully")
        return compiled_graph

    except Exception as e:
        logger.error(f"{__name__}:create_component_extraction_graph - {type(e).__name__}: {e}")
        raise
