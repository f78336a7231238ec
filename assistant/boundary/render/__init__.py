"""External render backends (D2 CLI, headless Chromium)."""

from assistant.boundary.render.browser import BrowserRasterizer
from assistant.boundary.render.d2_cli import D2Renderer

__all__ = ["BrowserRasterizer", "D2Renderer"]
