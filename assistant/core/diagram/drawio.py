"""draw.io document parsing.

Reads an mxfile / mxGraphModel document into plain vertex and edge records
shared by the SVG renderer and the D2 converter. Handles both the plain
form written by the layout synthesizer and the compressed form draw.io
saves (base64 + raw deflate + URL encoding).

Dependencies: xml.etree.ElementTree, zlib, base64
System role: Input stage for every render backend
"""

import base64
import binascii
import html
import re
import urllib.parse
import xml.etree.ElementTree as ET
import zlib
from dataclasses import dataclass, field

_TAG_RE = re.compile(r"<[^>]+>")
_BREAK_RE = re.compile(r"<br\s*/?>|</div>|</p>", re.IGNORECASE)


@dataclass
class Geometry:
    x: float
    y: float
    width: float
    height: float


@dataclass
class Vertex:
    id: str
    label: str
    style: dict[str, str]
    geometry: Geometry | None


@dataclass
class Edge:
    id: str
    label: str
    style: dict[str, str]
    source: str | None
    target: str | None


@dataclass
class DrawioGraph:
    name: str
    vertices: list[Vertex] = field(default_factory=list)
    edges: list[Edge] = field(default_factory=list)

    def vertex_map(self) -> dict[str, Vertex]:
        return {vertex.id: vertex for vertex in self.vertices}


def parse_style(style: str | None) -> dict[str, str]:
    """Split an mxGraph style string into key/value pairs.

    A bare token without ``=`` (for example ``ellipse;``) is treated as the
    shape name.
    """
    result: dict[str, str] = {}
    for part in (style or "").split(";"):
        part = part.strip()
        if not part:
            continue
        if "=" in part:
            key, value = part.split("=", 1)
            result[key.strip()] = value.strip()
        else:
            result.setdefault("shape", part)
    return result


def plain_label(value: str | None) -> str:
    """Convert an HTML label (``html=1``) into plain text with newlines."""
    if not value:
        return ""
    text = _BREAK_RE.sub("\n", value)
    text = _TAG_RE.sub("", text)
    text = html.unescape(text)
    lines = [" ".join(line.split()) for line in text.splitlines()]
    return "\n".join(line for line in lines if line)


def _decompress(payload: str) -> str:
    raw = base64.b64decode(payload)
    inflated = zlib.decompress(raw, -15).decode("utf-8")
    return urllib.parse.unquote(inflated)


def _find_model(document: ET.Element) -> tuple[str, ET.Element]:
    if document.tag == "mxGraphModel":
        return "", document

    diagram = document if document.tag == "diagram" else document.find("diagram")
    if diagram is None:
        raise ValueError(f"Unsupported root element <{document.tag}>")

    name = diagram.get("name", "")
    model = diagram.find("mxGraphModel")
    if model is not None:
        return name, model

    payload = (diagram.text or "").strip()
    if not payload:
        raise ValueError("Diagram element has no graph model")
    return name, ET.fromstring(_decompress(payload))


def _float(value: str | None) -> float | None:
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        return None


def _geometry(cell: ET.Element) -> Geometry | None:
    element = cell.find("mxGeometry")
    if element is None:
        return None
    width = _float(element.get("width"))
    height = _float(element.get("height"))
    if not width or not height:
        return None
    return Geometry(
        x=_float(element.get("x")) or 0.0,
        y=_float(element.get("y")) or 0.0,
        width=width,
        height=height,
    )


def parse_drawio(xml: str) -> DrawioGraph:
    """Parse a draw.io document.

    Args:
        xml: mxfile, diagram or bare mxGraphModel document

    Returns:
        DrawioGraph: Vertices (geometry may be None) and edges in document order

    Raises:
        ValueError: If the document is not well-formed or has no graph model
    """
    try:
        document = ET.fromstring(xml)
        name, model = _find_model(document)
    except (ET.ParseError, zlib.error, UnicodeDecodeError, binascii.Error) as e:
        raise ValueError(f"Malformed diagram document: {e}") from e

    root = model.find("root")
    if root is None:
        raise ValueError("Graph model has no root element")

    graph = DrawioGraph(name=name)
    for cell in root.iter("mxCell"):
        cell_id = cell.get("id", "")
        style = parse_style(cell.get("style"))
        label = plain_label(cell.get("value"))
        if cell.get("vertex") == "1":
            graph.vertices.append(Vertex(cell_id, label, style, _geometry(cell)))
        elif cell.get("edge") == "1":
            graph.edges.append(Edge(cell_id, label, style, cell.get("source"), cell.get("target")))
    return graph
