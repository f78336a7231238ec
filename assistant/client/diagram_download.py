"""
Diagram download client.

Walks the download fallback chain against the diagram API so a caller
always ends up with something usable:

1. SVG from the server, rasterized locally
2. PNG screenshot rendered by the server
3. Raw draw.io source for opening in draw.io
4. The resource URL, for a manual screenshot

Every step reports its own status; only the last one is a failure.

Dependencies: httpx, assistant.boundary.render
System role: Client side of the diagram rendering fallback chain
"""

from dataclasses import dataclass
import logging
import secrets
from typing import Protocol

import httpx

from assistant.core.diagram.svg_renderer import is_error_svg
from assistant.models.diagram import DiagramReference

logger = logging.getLogger(__name__)

NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache, no-store, must-revalidate",
    "Pragma": "no-cache",
}

STATUS_SVG_RASTERIZED = "svg_rasterized"
STATUS_SERVER_SCREENSHOT = "server_screenshot"
STATUS_SOURCE_DOWNLOAD = "source_download"
STATUS_MANUAL = "manual"


class SvgRasterizer(Protocol):
    async def rasterize(self, svg: str) -> bytes: ...


@dataclass
class DownloadOutcome:
    """Result of one walk through the download chain."""

    ok: bool
    status: str
    message: str
    url: str
    content: bytes | None = None
    media_type: str | None = None


class DiagramDownloadClient:
    """Download a generated diagram, degrading through cheaper strategies."""

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        api_prefix: str = "/api",
        timeout_seconds: float = 10.0,
        rasterizer: SvgRasterizer | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize client.

        Args:
            base_url: Server root URL
            api_prefix: Prefix of the diagram routes
            timeout_seconds: Per-request timeout
            rasterizer: SVG -> PNG rasterizer (headless browser by default)
            transport: Custom httpx transport, mainly for tests
        """
        self._base_url = base_url.rstrip("/")
        self._api_prefix = api_prefix
        self._timeout = timeout_seconds
        self._transport = transport
        if rasterizer is None:
            from assistant.boundary.render.browser import BrowserRasterizer

            rasterizer = BrowserRasterizer(scale=2, timeout_seconds=timeout_seconds)
        self._rasterizer = rasterizer

    def url_for(self, route: str, filename: str) -> str:
        return f"{self._base_url}{self._api_prefix}/{route}/{filename}"

    async def _get(self, client: httpx.AsyncClient, url: str) -> httpx.Response:
        response = await client.get(
            url,
            params={"t": secrets.token_hex(6)},
            headers=NO_CACHE_HEADERS,
        )
        response.raise_for_status()
        return response

    async def _from_svg(self, client: httpx.AsyncClient, filename: str, preferred_format: str) -> DownloadOutcome:
        url = self.url_for("diagram-svg", filename)
        response = await self._get(client, url)
        svg = response.text
        if response.headers.get("X-Diagram-Render") == "error" or is_error_svg(svg):
            raise ValueError("server returned an error SVG")
        if preferred_format == "svg":
            return DownloadOutcome(
                ok=True,
                status=STATUS_SVG_RASTERIZED,
                message="Downloaded diagram as SVG.",
                url=url,
                content=response.content,
                media_type="image/svg+xml",
            )
        png = await self._rasterizer.rasterize(svg)
        return DownloadOutcome(
            ok=True,
            status=STATUS_SVG_RASTERIZED,
            message="Downloaded diagram as PNG.",
            url=url,
            content=png,
            media_type="image/png",
        )

    async def _from_screenshot(self, client: httpx.AsyncClient, filename: str) -> DownloadOutcome:
        url = self.url_for("screenshot-diagram", filename)
        response = await self._get(client, url)
        if response.headers.get("X-Diagram-Render") == "placeholder":
            raise ValueError("server screenshot returned a placeholder image")
        return DownloadOutcome(
            ok=True,
            status=STATUS_SERVER_SCREENSHOT,
            message="Local conversion failed; downloaded a server-rendered screenshot instead.",
            url=url,
            content=response.content,
            media_type="image/png",
        )

    async def _from_source(self, client: httpx.AsyncClient, filename: str) -> DownloadOutcome:
        url = self.url_for("diagram-xml", filename)
        response = await self._get(client, url)
        return DownloadOutcome(
            ok=True,
            status=STATUS_SOURCE_DOWNLOAD,
            message="Image rendering failed; downloaded the draw.io source. Open it in draw.io to view or export.",
            url=url,
            content=response.content,
            media_type="application/xml",
        )

    async def download(
        self,
        reference: DiagramReference | str,
        preferred_format: str = "png",
    ) -> DownloadOutcome:
        """
        Download a diagram through the fallback chain.

        Args:
            reference: Diagram reference or stored filename
            preferred_format: ``png`` (default) or ``svg``

        Returns:
            DownloadOutcome: Artifact and the status of the stage that produced it
        """
        filename = reference.filename if isinstance(reference, DiagramReference) else reference
        logger.info(f"{__name__}:download - START filename={filename} format={preferred_format}")

        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            stages = (
                ("svg", lambda: self._from_svg(client, filename, preferred_format)),
                ("screenshot", lambda: self._from_screenshot(client, filename)),
                ("source", lambda: self._from_source(client, filename)),
            )
            for name, stage in stages:
                try:
                    outcome = await stage()
                except Exception as e:
                    logger.warning(f"{__name__}:download - {name} stage failed - {type(e).__name__}: {e}")
                    continue
                logger.info(f"{__name__}:download - END status={outcome.status}")
                return outcome

        url = self.url_for("diagram-svg", filename)
        logger.error(f"{__name__}:download - All download strategies failed for {filename}")
        return DownloadOutcome(
            ok=False,
            status=STATUS_MANUAL,
            message=f"Automatic download failed. Open {url} in a new tab and take a screenshot manually.",
            url=url,
        )
