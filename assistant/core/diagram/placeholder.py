"""Placeholder PNG images for failed renders.

When a PNG backend fails, the caller still receives a valid PNG. It shows
the failure title, the error text and the (escaped) diagram source, and
carries the same strings as PNG text metadata so tooling can read them
without OCR.

Dependencies: Pillow
System role: Terminal fallback of every PNG render path
"""

import html
import io
import textwrap

from PIL import Image, ImageDraw, ImageFont
from PIL.PngImagePlugin import PngInfo

D2_ERROR_TITLE = "D2 Diagram Generation Error"
SCREENSHOT_ERROR_TITLE = "Diagram Screenshot Error"

WIDTH = 900
MARGIN = 24
LINE_HEIGHT = 14
MAX_SOURCE_LINES = 40
MAX_METADATA_CHARS = 4000


def _wrap(text: str, width: int) -> list[str]:
    # Default bitmap font only covers latin-1
    text = text.encode("latin-1", "replace").decode("latin-1")
    lines: list[str] = []
    for raw in text.splitlines() or [""]:
        lines.extend(textwrap.wrap(raw, width=width, replace_whitespace=False) or [""])
    return lines


def placeholder_png(title: str, message: str, source: str = "") -> bytes:
    """Render a PNG describing a render failure.

    Args:
        title: Heading, e.g. ``D2_ERROR_TITLE``
        message: Error text from the failed backend
        source: Diagram source that failed to render

    Returns:
        bytes: PNG image
    """
    escaped_source = html.escape(source)
    error_lines = _wrap(message or "Unknown error", 110)[:8]
    source_lines = _wrap(escaped_source, 120)
    if len(source_lines) > MAX_SOURCE_LINES:
        source_lines = source_lines[:MAX_SOURCE_LINES] + ["..."]

    height = MARGIN * 4 + LINE_HEIGHT * (3 + len(error_lines) + len(source_lines))
    image = Image.new("RGB", (WIDTH, max(height, 200)), "#fff5f5")
    draw = ImageDraw.Draw(image)
    font = ImageFont.load_default()

    draw.rectangle([(1, 1), (image.width - 2, image.height - 2)], outline="#cc0000", width=2)
    y = MARGIN
    draw.text((MARGIN, y), title, fill="#cc0000", font=font)
    y += LINE_HEIGHT * 2
    for line in error_lines:
        draw.text((MARGIN, y), line, fill="#333333", font=font)
        y += LINE_HEIGHT
    if source_lines:
        y += MARGIN
        draw.text((MARGIN, y), "Source:", fill="#666666", font=font)
        y += LINE_HEIGHT
        for line in source_lines:
            draw.text((MARGIN, y), line, fill="#555555", font=font)
            y += LINE_HEIGHT

    info = PngInfo()
    info.add_text("Title", title)
    info.add_text("Error", (message or "")[:MAX_METADATA_CHARS])
    if source:
        info.add_text("Source", escaped_source[:MAX_METADATA_CHARS])

    buffer = io.BytesIO()
    image.save(buffer, format="PNG", pnginfo=info)
    return buffer.getvalue()
