"""
Diagram synthesis pipeline.

Intent detection, fallback templates, layout synthesis and deterministic
rendering of draw.io diagram description documents.
"""

from assistant.core.diagram.intent import (
    is_diagram_generation_request,
    is_image_generation_request,
    is_network_diagram_request,
)
from assistant.core.diagram.layout import synthesize_diagram
from assistant.core.diagram.svg_renderer import render_svg
from assistant.core.diagram.templates import rotating_template, select_template

__all__ = [
    "is_diagram_generation_request",
    "is_image_generation_request",
    "is_network_diagram_request",
    "render_svg",
    "rotating_template",
    "select_template",
    "synthesize_diagram",
]
