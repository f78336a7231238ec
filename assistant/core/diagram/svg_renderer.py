"""Hand-built SVG rendering of draw.io documents.

Pure function of its input: no randomness, no clock, fixed number
formatting, cells emitted in document order. Vertices without geometry are
skipped; unknown style keys fall back to defaults; a document that cannot
be parsed yields a visibly labelled error SVG instead of an exception.

Dependencies: xml.sax.saxutils, textwrap, assistant.core.diagram.drawio
System role: Primary (and only deterministic) render backend
"""

import logging
import math
import re
import textwrap
from xml.sax.saxutils import escape, quoteattr

from assistant.core.diagram.drawio import DrawioGraph, Geometry, Vertex, parse_drawio

logger = logging.getLogger(__name__)

SVG_SCALE = 1.0
VIEWBOX_PADDING = 20
DEFAULT_FILL = "#ffffff"
DEFAULT_STROKE = "#333333"
DEFAULT_FONT_COLOR = "#000000"
DEFAULT_FONT_SIZE = 12.0
FONT_FAMILY = "Helvetica, Arial, sans-serif"
ERROR_TITLE = "Diagram Render Error"
ERROR_ATTRIBUTE = 'data-render-error="true"'

# Root start tag only; labels live in child elements
_ERROR_ROOT_RE = re.compile(r'\s*<svg\b[^>]*\sdata-render-error="true"')


def _fmt(value: float) -> str:
    """Stable number formatting: at most two decimals, no trailing zeros."""
    text = f"{value * SVG_SCALE:.2f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def _color(style: dict[str, str], key: str, default: str) -> str:
    value = style.get(key, default)
    return default if value in ("", "default") else value


def _font_size(style: dict[str, str]) -> float:
    try:
        return float(style.get("fontSize", DEFAULT_FONT_SIZE))
    except ValueError:
        return DEFAULT_FONT_SIZE


def error_svg(message: str) -> str:
    """Standalone SVG that states rendering failed and why."""
    lines = textwrap.wrap(message, width=60)[:6] or ["Unknown error"]
    tspans = "".join(
        f'<tspan x="250" dy="{0 if i == 0 else 18}">{escape(line)}</tspan>'
        for i, line in enumerate(lines)
    )
    return (
        '<svg xmlns="http://www.w3.org/2000/svg" width="500" height="300" viewBox="0 0 500 300" '
        f"{ERROR_ATTRIBUTE}>"
        f"<title>{ERROR_TITLE}</title>"
        '<rect x="0" y="0" width="500" height="300" fill="#fff5f5" stroke="#cc0000" stroke-width="2"/>'
        f'<text x="250" y="60" text-anchor="middle" font-family="{FONT_FAMILY}" '
        f'font-size="20" font-weight="bold" fill="#cc0000">{ERROR_TITLE}</text>'
        f'<text x="250" y="120" text-anchor="middle" font-family="{FONT_FAMILY}" '
        f'font-size="13" fill="#333333">{tspans}</text>'
        "</svg>"
    )


def is_error_svg(svg: str) -> bool:
    """True when ``svg`` is the error SVG rather than a rendered diagram."""
    return _ERROR_ROOT_RE.match(svg) is not None


def _shape_element(vertex: Vertex, geometry: Geometry) -> str:
    style = vertex.style
    shape = style.get("shape", "rectangle")
    x, y, w, h = geometry.x, geometry.y, geometry.width, geometry.height
    paint = (
        f'fill="{escape(_color(style, "fillColor", DEFAULT_FILL))}" '
        f'stroke="{escape(_color(style, "strokeColor", DEFAULT_STROKE))}" stroke-width="1.5"'
    )
    if style.get("dashed") == "1":
        paint += ' stroke-dasharray="6 4"'

    if shape in ("ellipse", "doubleEllipse"):
        return (
            f'<ellipse cx="{_fmt(x + w / 2)}" cy="{_fmt(y + h / 2)}" '
            f'rx="{_fmt(w / 2)}" ry="{_fmt(h / 2)}" {paint}/>'
        )
    if shape == "hexagon":
        inset = w * 0.25
        points = [(x + inset, y), (x + w - inset, y), (x + w, y + h / 2),
                  (x + w - inset, y + h), (x + inset, y + h), (x, y + h / 2)]
        return _polygon(points, paint)
    if shape == "rhombus":
        points = [(x + w / 2, y), (x + w, y + h / 2), (x + w / 2, y + h), (x, y + h / 2)]
        return _polygon(points, paint)
    if shape == "parallelogram":
        inset = w * 0.2
        points = [(x + inset, y), (x + w, y), (x + w - inset, y + h), (x, y + h)]
        return _polygon(points, paint)
    if shape == "step":
        inset = w * 0.15
        points = [(x, y), (x + w - inset, y), (x + w, y + h / 2),
                  (x + w - inset, y + h), (x, y + h), (x + inset, y + h / 2)]
        return _polygon(points, paint)
    if shape == "cylinder":
        ry = min(h * 0.15, 15.0)
        return (
            f'<path d="M {_fmt(x)} {_fmt(y + ry)} '
            f'A {_fmt(w / 2)} {_fmt(ry)} 0 0 1 {_fmt(x + w)} {_fmt(y + ry)} '
            f'L {_fmt(x + w)} {_fmt(y + h - ry)} '
            f'A {_fmt(w / 2)} {_fmt(ry)} 0 0 1 {_fmt(x)} {_fmt(y + h - ry)} Z '
            f'M {_fmt(x)} {_fmt(y + ry)} '
            f'A {_fmt(w / 2)} {_fmt(ry)} 0 0 0 {_fmt(x + w)} {_fmt(y + ry)}" {paint}/>'
        )
    if shape == "cloud":
        return (
            f'<path d="M {_fmt(x + w * 0.25)} {_fmt(y + h * 0.8)} '
            f'C {_fmt(x)} {_fmt(y + h * 0.8)} {_fmt(x)} {_fmt(y + h * 0.35)} {_fmt(x + w * 0.25)} {_fmt(y + h * 0.35)} '
            f'C {_fmt(x + w * 0.3)} {_fmt(y)} {_fmt(x + w * 0.7)} {_fmt(y)} {_fmt(x + w * 0.75)} {_fmt(y + h * 0.3)} '
            f'C {_fmt(x + w)} {_fmt(y + h * 0.3)} {_fmt(x + w)} {_fmt(y + h * 0.8)} {_fmt(x + w * 0.75)} {_fmt(y + h * 0.8)} '
            f'Z" {paint}/>'
        )
    if shape == "document":
        wave = h * 0.1
        return (
            f'<path d="M {_fmt(x)} {_fmt(y)} L {_fmt(x + w)} {_fmt(y)} L {_fmt(x + w)} {_fmt(y + h - wave)} '
            f'Q {_fmt(x + w * 0.75)} {_fmt(y + h - 3 * wave)} {_fmt(x + w / 2)} {_fmt(y + h - wave)} '
            f'Q {_fmt(x + w * 0.25)} {_fmt(y + h + wave)} {_fmt(x)} {_fmt(y + h - wave)} Z" {paint}/>'
        )

    radius = 0.0
    if style.get("rounded", "0") not in ("0", "") or shape.startswith("mxgraph."):
        radius = min(w, h) * 0.15
    rect = (
        f'<rect x="{_fmt(x)}" y="{_fmt(y)}" width="{_fmt(w)}" height="{_fmt(h)}" '
        f'rx="{_fmt(radius)}" {paint}/>'
    )
    if shape == "process":
        inset = w * 0.1
        rect += (
            f'<line x1="{_fmt(x + inset)}" y1="{_fmt(y)}" x2="{_fmt(x + inset)}" y2="{_fmt(y + h)}" {paint}/>'
            f'<line x1="{_fmt(x + w - inset)}" y1="{_fmt(y)}" x2="{_fmt(x + w - inset)}" y2="{_fmt(y + h)}" {paint}/>'
        )
    return rect


def _polygon(points: list[tuple[float, float]], paint: str) -> str:
    joined = " ".join(f"{_fmt(px)},{_fmt(py)}" for px, py in points)
    return f'<polygon points="{joined}" {paint}/>'


def _text_element(label: str, cx: float, cy: float, width: float, style: dict[str, str], bold: bool = False) -> str:
    if not label:
        return ""
    size = _font_size(style)
    chars_per_line = max(int(width / (size * 0.6)), 4)
    lines: list[str] = []
    for paragraph in label.split("\n"):
        lines.extend(textwrap.wrap(paragraph, width=chars_per_line) or [""])
    line_height = size * 1.2
    first_dy = -(len(lines) - 1) * line_height / 2
    tspans = "".join(
        f'<tspan x="{_fmt(cx)}" dy="{_fmt(first_dy if i == 0 else line_height)}">{escape(line)}</tspan>'
        for i, line in enumerate(lines)
    )
    weight = ' font-weight="bold"' if bold or style.get("fontStyle") == "1" else ""
    return (
        f'<text x="{_fmt(cx)}" y="{_fmt(cy)}" text-anchor="middle" dominant-baseline="middle" '
        f'font-family="{FONT_FAMILY}" font-size="{_fmt(size)}"{weight} '
        f'fill="{escape(_color(style, "fontColor", DEFAULT_FONT_COLOR))}">{tspans}</text>'
    )


def _border_point(geometry: Geometry, toward: tuple[float, float]) -> tuple[float, float]:
    """Where the segment from the box centre toward a point leaves the box."""
    cx = geometry.x + geometry.width / 2
    cy = geometry.y + geometry.height / 2
    dx, dy = toward[0] - cx, toward[1] - cy
    if dx == 0 and dy == 0:
        return cx, cy
    scale_x = (geometry.width / 2) / abs(dx) if dx else math.inf
    scale_y = (geometry.height / 2) / abs(dy) if dy else math.inf
    scale = min(scale_x, scale_y, 1.0)
    return cx + dx * scale, cy + dy * scale


def _render_graph(graph: DrawioGraph) -> str:
    placed = [vertex for vertex in graph.vertices if vertex.geometry is not None]
    skipped = len(graph.vertices) - len(placed)
    if skipped:
        logger.warning(f"{__name__}:render_svg - Skipped {skipped} vertices without geometry")

    if placed:
        min_x = min(v.geometry.x for v in placed) - VIEWBOX_PADDING
        min_y = min(v.geometry.y for v in placed) - VIEWBOX_PADDING
        max_x = max(v.geometry.x + v.geometry.width for v in placed) + VIEWBOX_PADDING
        max_y = max(v.geometry.y + v.geometry.height for v in placed) + VIEWBOX_PADDING
    else:
        min_x, min_y, max_x, max_y = 0.0, 0.0, 200.0, 100.0
    width, height = max_x - min_x, max_y - min_y

    parts = [
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{_fmt(width)}" height="{_fmt(height)}" '
        f'viewBox="{_fmt(min_x)} {_fmt(min_y)} {_fmt(width)} {_fmt(height)}">',
        f"<title>{escape(graph.name or 'Diagram')}</title>",
        "<defs>"
        '<marker id="arrow" viewBox="0 0 10 10" refX="10" refY="5" markerWidth="8" markerHeight="8" orient="auto-start-reverse">'
        '<path d="M 0 0 L 10 5 L 0 10 z" fill="#333333"/>'
        "</marker>"
        "</defs>",
        f'<rect x="{_fmt(min_x)}" y="{_fmt(min_y)}" width="{_fmt(width)}" height="{_fmt(height)}" fill="#ffffff"/>',
    ]

    by_id = {vertex.id: vertex for vertex in placed}
    parts.append('<g class="edges">')
    for edge in graph.edges:
        source = by_id.get(edge.source or "")
        target = by_id.get(edge.target or "")
        if source is None or target is None:
            continue
        s_center = (source.geometry.x + source.geometry.width / 2, source.geometry.y + source.geometry.height / 2)
        t_center = (target.geometry.x + target.geometry.width / 2, target.geometry.y + target.geometry.height / 2)
        x1, y1 = _border_point(source.geometry, t_center)
        x2, y2 = _border_point(target.geometry, s_center)
        stroke = escape(_color(edge.style, "strokeColor", DEFAULT_STROKE))
        dash = ' stroke-dasharray="6 4"' if edge.style.get("dashed") == "1" else ""
        parts.append(
            f'<line id={quoteattr("edge-" + edge.id)} x1="{_fmt(x1)}" y1="{_fmt(y1)}" x2="{_fmt(x2)}" y2="{_fmt(y2)}" '
            f'stroke="{stroke}" stroke-width="1.5"{dash} marker-end="url(#arrow)"/>'
        )
        if edge.label:
            parts.append(
                _text_element(edge.label, (x1 + x2) / 2, (y1 + y2) / 2 - 8, 160.0, {"fontSize": "10", "fontColor": "#444444"})
            )
    parts.append("</g>")

    parts.append('<g class="nodes">')
    for vertex in placed:
        geometry = vertex.geometry
        parts.append(f"<g id={quoteattr('node-' + vertex.id)}>")
        parts.append(_shape_element(vertex, geometry))
        parts.append(
            _text_element(
                vertex.label,
                geometry.x + geometry.width / 2,
                geometry.y + geometry.height / 2,
                geometry.width,
                vertex.style,
            )
        )
        parts.append("</g>")
    parts.append("</g>")
    parts.append("</svg>")
    return "".join(parts)


def render_svg(xml: str) -> str:
    """Render a draw.io document to SVG.

    Args:
        xml: Diagram description document

    Returns:
        str: SVG markup; an error SVG when the document cannot be parsed
    """
    try:
        graph = parse_drawio(xml)
    except ValueError as e:
        logger.error(f"{__name__}:render_svg - {type(e).__name__}: {e}")
        return error_svg(str(e))
    return _render_graph(graph)
