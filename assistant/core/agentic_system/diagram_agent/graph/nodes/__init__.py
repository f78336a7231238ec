"""Component extraction graph nodes."""

from assistant.core.agentic_system.diagram_agent.graph.nodes.enrichment_node import enrichment_node
from assistant.core.agentic_system.diagram_agent.graph.nodes.extraction_node import extraction_node

__all__ = ["enrichment_node", "extraction_node"]
