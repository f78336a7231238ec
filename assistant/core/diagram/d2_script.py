"""draw.io to D2 conversion and D2 script repair.

The D2 CLI backend renders a D2 script, not mxGraph XML. Conversion keeps
labels, shapes and edges; positions are left to the D2 layout engine.
Scripts are auto-repaired before rendering because unsupported properties
and unbalanced braces are the usual reasons the CLI rejects LLM-written D2.

Dependencies: re, assistant.core.diagram.drawio
System role: Input preparation for the D2 render backend
"""

import re

from assistant.core.diagram.drawio import DrawioGraph

D2_SHAPES = {
    "ellipse": "oval",
    "doubleEllipse": "oval",
    "hexagon": "hexagon",
    "cylinder": "cylinder",
    "cloud": "cloud",
    "document": "document",
    "parallelogram": "parallelogram",
    "step": "step",
    "rhombus": "diamond",
}

_PADDING_LINE = re.compile(r"^\s*[\w.\-]*padding\s*:.*$", re.MULTILINE)


def _quote(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
    return f'"{escaped}"'


def drawio_to_d2(graph: DrawioGraph, direction: str = "right") -> str:
    """Convert a parsed draw.io graph into a D2 script."""
    lines = [f"direction: {direction}", ""]
    ids: dict[str, str] = {}

    for index, vertex in enumerate(graph.vertices, start=1):
        key = f"n{index}"
        ids[vertex.id] = key
        lines.append(f"{key}: {_quote(vertex.label or ' ')}")
        shape = vertex.style.get("shape", "")
        if shape in D2_SHAPES:
            lines.append(f"{key}.shape: {D2_SHAPES[shape]}")
        fill = vertex.style.get("fillColor")
        if fill and fill.startswith("#"):
            lines.append(f"{key}.style.fill: {_quote(fill)}")

    if graph.edges:
        lines.append("")
    for edge in graph.edges:
        source = ids.get(edge.source or "")
        target = ids.get(edge.target or "")
        if source is None or target is None:
            continue
        label = f": {_quote(edge.label)}" if edge.label else ""
        lines.append(f"{source} -> {target}{label}")

    return "\n".join(lines) + "\n"


def repair_d2_script(script: str) -> str:
    """Strip unsupported ``padding`` properties and close unbalanced braces."""
    repaired = _PADDING_LINE.sub("", script)
    repaired = re.sub(r"\n{3,}", "\n\n", repaired)

    depth = 0
    in_string = False
    previous = ""
    for char in repaired:
        if char == '"' and previous != "\\":
            in_string = not in_string
        elif not in_string:
            if char == "{":
                depth += 1
            elif char == "}" and depth > 0:
                depth -= 1
        previous = char

    if not repaired.endswith("\n"):
        repaired += "\n"
    return repaired + "}\n" * depth
