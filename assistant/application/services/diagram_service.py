"""Diagram generation service layer.

Runs the synthesis pipeline: component extraction, layout synthesis and
storage of the resulting draw.io document.

Dependencies: logging, component extractor, layout synthesizer, diagram store
System role: Service layer for diagram generation
"""

import logging
import secrets

from fastapi.concurrency import run_in_threadpool

from assistant.boundary.storage.diagram_store import DiagramStore
from assistant.core.agentic_system.diagram_agent.component_extractor import ComponentExtractor
from assistant.core.diagram.intent import is_network_diagram_request
from assistant.core.diagram.layout import synthesize_diagram
from assistant.models.diagram import DiagramReference, GeneratedDiagram

logger = logging.getLogger(__name__)

MAX_ALT_TEXT = 255


class DiagramService:
    """Service for generating and referencing diagrams."""

    def __init__(
        self,
        extractor: ComponentExtractor,
        store: DiagramStore,
        api_prefix: str = "/api",
    ) -> None:
        """Initialize service with dependencies.

        Args:
            extractor: Component extractor (LLM + template fallback)
            store: Generated diagram file store
            api_prefix: URL prefix of the diagram routes
        """
        self._extractor = extractor
        self._store = store
        self._api_prefix = api_prefix

    async def generate(
        self,
        prompt: str,
        knowledge_context: list[str] | None = None,
        seed: int | None = None,
    ) -> GeneratedDiagram:
        """Generate and store a new diagram.

        Args:
            prompt: User's diagram request
            knowledge_context: Knowledge-base snippets for extraction
            seed: Layout seed; None gives a fresh random layout

        Returns:
            GeneratedDiagram: Stored file name, path and the components used

        Raises:
            OSError: If the document cannot be written
        """
        try:
            logger.info(f"{__name__}:generate - START prompt_len={len(prompt)}")

            result = await self._extractor.extract(prompt, knowledge_context or [])
            network = is_network_diagram_request(prompt)
            xml = synthesize_diagram(result.components, seed=seed, network=network)
            filename, path = await run_in_threadpool(self._store.save, xml)

            logger.info(
                f"{__name__}:generate - END filename={filename} "
                f"fallback={result.used_fallback} network={network}"
            )
            return GeneratedDiagram(
                filename=filename,
                path=str(path),
                title=result.components.title,
                components=result.components,
                used_fallback=result.used_fallback,
            )
        except Exception as e:
            logger.error(f"{__name__}:generate - {type(e).__name__}: {e}")
            raise

    def reference(self, diagram: GeneratedDiagram, prompt: str) -> DiagramReference:
        """Build client links for a generated diagram, cache-busted per response."""
        version = secrets.token_hex(4)
        name = diagram.filename
        return DiagramReference(
            title=diagram.title,
            filename=name,
            svg_url=f"{self._api_prefix}/diagram-svg/{name}?v={version}",
            xml_url=f"{self._api_prefix}/diagram-xml/{name}?v={version}",
            png_url=f"{self._api_prefix}/download-full-diagram/{name}?v={version}",
            screenshot_url=f"{self._api_prefix}/screenshot-diagram/{name}?v={version}",
            alt_text=prompt[:MAX_ALT_TEXT],
        )
