"""Local file storage for generated diagrams."""

from assistant.boundary.storage.diagram_store import DiagramStore

__all__ = ["DiagramStore"]
