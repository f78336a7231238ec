"""Component extraction graph state.

Dependencies: typing, assistant.models.diagram
System role: LangGraph state schema for the component extractor
"""

from typing import TypedDict

from assistant.models.diagram import DiagramComponents


class ComponentExtractionState(TypedDict, total=False):
    """State passed between extraction graph nodes."""

    # Inputs
    prompt: str
    knowledge_context: list[str]
    request_token: str

    # Enrichment output
    enriched_context: str
    enrichment_failed: bool

    # Extraction output
    components: DiagramComponents

    # Any node failure
    error: str
