"""LangGraph definition for component extraction."""

from assistant.core.agentic_system.diagram_agent.graph.diagram_graph import (
    create_component_extraction_graph,
)

__all__ = ["create_component_extraction_graph"]
