"""
Diagram domain models and schemas.

Structured diagram description produced by the component extractor, plus
request/response contracts for diagram generation and rendering.

Dependencies: pydantic
System role: Diagram API contracts
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DiagramConnection(BaseModel):
    """Directed edge between two named nodes."""

    model_config = ConfigDict(populate_by_name=True)

    source: str = Field(alias="from", description="Name of the node the edge starts at")
    target: str = Field(alias="to", description="Name of the node the edge points to")
    label: str | None = Field(default=None, description="Optional edge label")


class DiagramComponents(BaseModel):
    """Structured description of an architecture diagram.

    Connection endpoints are free-text names. They are resolved against
    ``nodes`` by the layout synthesizer, which drops what it cannot match.
    """

    title: str = Field(description="Diagram title")
    nodes: list[str] = Field(description="Primary node names; the first is the centre node")
    connections: list[DiagramConnection] = Field(
        default_factory=list,
        description="Labelled edges between primary nodes",
    )
    categories: dict[str, list[str]] = Field(
        default_factory=dict,
        description="Named groups of supporting items rendered as side clusters",
    )

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("title cannot be empty")
        return value.strip()

    @field_validator("nodes")
    @classmethod
    def nodes_not_empty(cls, value: list[str]) -> list[str]:
        cleaned = [node.strip() for node in value if node and node.strip()]
        if not cleaned:
            raise ValueError("nodes cannot be empty")
        return cleaned


class DiagramRequest(BaseModel):
    """Request schema for diagram generation."""

    prompt: str = Field(min_length=1, description="Diagram generation prompt")
    knowledge_context: list[str] = Field(
        default_factory=list,
        description="Knowledge-base snippets used as extraction context",
    )


class DiagramReference(BaseModel):
    """Links to a generated diagram and its rendered forms."""

    title: str = Field(description="Diagram title")
    filename: str = Field(description="Stored diagram description document name")
    svg_url: str = Field(description="Hand-built SVG rendering")
    xml_url: str = Field(description="Raw draw.io XML source")
    png_url: str = Field(description="Full PNG download")
    screenshot_url: str = Field(description="Headless browser PNG screenshot")
    alt_text: str = Field(description="Accessible description, truncated prompt")


class GeneratedDiagram(BaseModel):
    """Result of running the synthesis pipeline once."""

    filename: str
    path: str
    title: str
    components: DiagramComponents
    used_fallback: bool = Field(default=False, description="True when a template replaced LLM output")


class RenderedArtifact(BaseModel):
    """Per-request rendering of a diagram description document."""

    format: Literal["svg", "png", "source"]
    content: bytes
    cache_key: str = Field(description="Fresh random token used for cache busting")
    strategy: str = Field(description="Backend that produced the content (svg, error, d2, browser, placeholder, source)")

    @property
    def media_type(self) -> str:
        return {
            "svg": "image/svg+xml",
            "png": "image/png",
            "source": "application/xml",
        }[self.format]
