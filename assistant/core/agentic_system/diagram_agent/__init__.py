"""Diagram component extraction agent (two chained LLM calls via LangGraph)."""

from assistant.core.agentic_system.diagram_agent.component_extractor import ComponentExtractor

__all__ = ["ComponentExtractor"]
