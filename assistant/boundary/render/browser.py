"""
Headless browser rasterizer.

Screenshots an SVG document with Playwright Chromium. Handles arbitrary
viewBox geometry by sizing the viewport from the SVG's own width/height
and upsampling with the device scale factor.

Dependencies: playwright
System role: Browser boundary for SVG -> PNG rasterization
"""

import asyncio
import logging
import re

from playwright.async_api import async_playwright

from assistant.core.exceptions import RenderError

logger = logging.getLogger(__name__)

_VIEWBOX_RE = re.compile(r'viewBox="\s*([-\d.]+)[\s,]+([-\d.]+)[\s,]+([\d.]+)[\s,]+([\d.]+)\s*"')

DEFAULT_SIZE = (1200, 900)
MAX_SIDE = 4000

_PAGE_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<style>
  html, body {{ margin: 0; padding: 0; background: #ffffff; }}
  #diagram {{ display: inline-block; }}
  #diagram svg {{ display: block; }}
</style>
</head>
<body><div id="diagram">{svg}</div></body>
</html>"""


def svg_dimensions(svg: str) -> tuple[int, int]:
    """CSS pixel size of an SVG, from its viewBox when present."""
    match = _VIEWBOX_RE.search(svg)
    if not match:
        return DEFAULT_SIZE
    width = float(match.group(3))
    height = float(match.group(4))
    if width <= 0 or height <= 0:
        return DEFAULT_SIZE
    return min(int(round(width)), MAX_SIDE), min(int(round(height)), MAX_SIDE)


class BrowserRasterizer:
    """Rasterize SVG markup to PNG with headless Chromium."""

    def __init__(self, scale: int = 2, timeout_seconds: float = 15.0) -> None:
        """
        Initialize rasterizer.

        Args:
            scale: Device scale factor (2 = double resolution)
            timeout_seconds: Bound for the whole render, browser launch included
        """
        self._scale = scale
        self._timeout = timeout_seconds
        self._timeout_ms = int(timeout_seconds * 1000)

    async def _screenshot(self, svg: str, width: int, height: int) -> bytes:
        async with async_playwright() as p:
            browser = await p.chromium.launch(headless=True, timeout=self._timeout_ms)
            try:
                page = await browser.new_page(
                    viewport={"width": width, "height": height},
                    device_scale_factor=self._scale,
                )
                page.set_default_timeout(self._timeout_ms)
                await page.set_content(_PAGE_TEMPLATE.format(svg=svg), wait_until="load")
                element = await page.query_selector("#diagram svg")
                if element is not None:
                    return await element.screenshot(type="png")
                return await page.screenshot(type="png", full_page=True)
            finally:
                await browser.close()

    async def rasterize(self, svg: str) -> bytes:
        """
        Screenshot an SVG document.

        Args:
            svg: SVG markup

        Returns:
            bytes: PNG image

        Raises:
            RenderError: If Chromium cannot be launched, the screenshot fails
                or the render exceeds the timeout
        """
        width, height = svg_dimensions(svg)
        logger.info(f"{__name__}:rasterize - START size={width}x{height} scale={self._scale}")

        try:
            content = await asyncio.wait_for(self._screenshot(svg, width, height), timeout=self._timeout)
        except asyncio.TimeoutError as e:
            logger.error(f"{__name__}:rasterize - Timed out after {self._timeout}s")
            raise RenderError(f"Browser screenshot timed out after {self._timeout}s", backend="browser") from e
        except Exception as e:
            logger.error(f"{__name__}:rasterize - {type(e).__name__}: {e}")
            raise RenderError(f"Browser screenshot failed: {e}", backend="browser") from e

        logger.info(f"{__name__}:rasterize - END bytes={len(content)}")
        return content
