"""Diagram render service layer.

Serves stored diagram documents in every supported form. PNG requests walk
an ordered chain (D2 CLI, browser screenshot of the hand-built SVG,
placeholder image) and report which step produced the bytes. Nothing here
raises for a render failure; only lookups of missing or unsafe names do.

Dependencies: logging, fastapi.concurrency, render backends, diagram store
System role: Service layer for diagram rendering
"""

import logging
import secrets

from fastapi.concurrency import run_in_threadpool

from assistant.boundary.render.browser import BrowserRasterizer
from assistant.boundary.render.d2_cli import D2Renderer
from assistant.boundary.storage.diagram_store import DiagramStore
from assistant.core.diagram.d2_script import drawio_to_d2, repair_d2_script
from assistant.core.diagram.drawio import parse_drawio
from assistant.core.diagram.placeholder import D2_ERROR_TITLE, SCREENSHOT_ERROR_TITLE, placeholder_png
from assistant.core.diagram.svg_renderer import is_error_svg, render_svg
from assistant.core.exceptions import RenderError
from assistant.models.diagram import RenderedArtifact

logger = logging.getLogger(__name__)


def _artifact(fmt: str, content: bytes, strategy: str) -> RenderedArtifact:
    return RenderedArtifact(format=fmt, content=content, cache_key=secrets.token_hex(8), strategy=strategy)


class RenderService:
    """Service for rendering stored diagrams."""

    def __init__(
        self,
        store: DiagramStore,
        d2_renderer: D2Renderer,
        rasterizer: BrowserRasterizer,
    ) -> None:
        """Initialize service with dependencies.

        Args:
            store: Generated diagram file store
            d2_renderer: D2 CLI backend
            rasterizer: Headless browser backend
        """
        self._store = store
        self._d2 = d2_renderer
        self._rasterizer = rasterizer

    async def _load(self, filename: str) -> str:
        return await run_in_threadpool(self._store.load, filename)

    async def source(self, filename: str) -> RenderedArtifact:
        """Raw draw.io XML of a stored diagram."""
        xml = await self._load(filename)
        return _artifact("source", xml.encode("utf-8"), "source")

    async def svg(self, filename: str) -> RenderedArtifact:
        """Hand-built SVG of a stored diagram (error SVG for malformed documents)."""
        xml = await self._load(filename)
        svg = render_svg(xml)
        strategy = "error" if is_error_svg(svg) else "svg"
        return _artifact("svg", svg.encode("utf-8"), strategy)

    async def d2_png(self, xml: str) -> RenderedArtifact:
        """PNG via the D2 CLI, or a placeholder titled with the D2 error."""
        try:
            script = repair_d2_script(drawio_to_d2(parse_drawio(xml)))
            content = await self._d2.render(script, "png")
            return _artifact("png", content, "d2")
        except (RenderError, ValueError, OSError) as e:
            logger.error(f"{__name__}:d2_png - {type(e).__name__}: {e}")
            return _artifact("png", placeholder_png(D2_ERROR_TITLE, str(e), xml), "placeholder")

    async def screenshot_png(self, xml: str) -> RenderedArtifact:
        """PNG via headless browser screenshot of the hand-built SVG."""
        try:
            content = await self._rasterizer.rasterize(render_svg(xml))
            return _artifact("png", content, "browser")
        except RenderError as e:
            logger.error(f"{__name__}:screenshot_png - {type(e).__name__}: {e}")
            return _artifact("png", placeholder_png(SCREENSHOT_ERROR_TITLE, str(e), xml), "placeholder")

    async def full_png(self, filename: str) -> RenderedArtifact:
        """PNG download: D2 first, then browser screenshot, then placeholder."""
        xml = await self._load(filename)
        logger.info(f"{__name__}:full_png - START filename={filename}")

        d2_result = await self.d2_png(xml)
        if d2_result.strategy != "placeholder":
            return d2_result

        screenshot = await self.screenshot_png(xml)
        if screenshot.strategy != "placeholder":
            logger.info(f"{__name__}:full_png - END strategy=browser")
            return screenshot

        logger.warning(f"{__name__}:full_png - All PNG backends failed, returning placeholder")
        return d2_result

    async def screenshot(self, filename: str) -> RenderedArtifact:
        """Browser screenshot of a stored diagram."""
        xml = await self._load(filename)
        return await self.screenshot_png(xml)
