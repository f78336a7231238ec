"""Layout synthesizer for draw.io diagram description documents.

Turns DiagramComponents into mxGraph XML. Layout family, node order, sizes,
positions, styles and category placement are drawn from a seeded random
generator, so repeated requests look different while a pinned seed gives
byte-identical output.

Dependencies: xml.etree.ElementTree, random, assistant.models.diagram
System role: Second stage of the diagram pipeline (components -> XML)
"""

import html
import logging
import math
import random
import xml.etree.ElementTree as ET

from assistant.models.diagram import DiagramComponents

logger = logging.getLogger(__name__)

NODE_STYLES = (
    "shape=ellipse;whiteSpace=wrap;html=1;aspect=fixed;fillColor=#dae8fc;strokeColor=#6c8ebf;fontSize=14;",
    "shape=hexagon;perimeter=hexagonPerimeter2;whiteSpace=wrap;html=1;fillColor=#d5e8d4;strokeColor=#82b366;fontSize=13;",
    "shape=process;whiteSpace=wrap;html=1;backgroundOutline=1;fillColor=#fff2cc;strokeColor=#d6b656;fontSize=13;",
    "shape=cloud;whiteSpace=wrap;html=1;fillColor=#f8cecc;strokeColor=#b85450;fontSize=13;",
    "shape=cylinder;whiteSpace=wrap;html=1;boundedLbl=1;fillColor=#e1d5e7;strokeColor=#9673a6;fontSize=13;",
    "shape=document;whiteSpace=wrap;html=1;boundedLbl=1;fillColor=#ffe6cc;strokeColor=#d79b00;fontSize=13;",
    "shape=parallelogram;perimeter=parallelogramPerimeter;whiteSpace=wrap;html=1;fillColor=#f5f5f5;fontColor=#333333;strokeColor=#666666;fontSize=13;",
    "shape=step;perimeter=stepPerimeter;whiteSpace=wrap;html=1;fixedSize=1;fillColor=#b0e3e6;strokeColor=#0e8088;fontSize=13;",
)

NETWORK_NODE_STYLES = (
    "shape=mxgraph.cisco.servers.fileserver;whiteSpace=wrap;html=1;fillColor=#dae8fc;strokeColor=#6c8ebf;fontSize=13;",
    "shape=mxgraph.cisco.routers.router;whiteSpace=wrap;html=1;fillColor=#d5e8d4;strokeColor=#82b366;fontSize=13;",
    "shape=mxgraph.cisco.security.firewall;whiteSpace=wrap;html=1;fillColor=#f8cecc;strokeColor=#b85450;fontSize=13;",
    "shape=cylinder;whiteSpace=wrap;html=1;boundedLbl=1;fillColor=#e1d5e7;strokeColor=#9673a6;fontSize=13;",
    "shape=mxgraph.cisco.switches.workgroup_switch;whiteSpace=wrap;html=1;fillColor=#fff2cc;strokeColor=#d6b656;fontSize=13;",
)

NETWORK_CENTER_STYLE = "shape=cloud;whiteSpace=wrap;html=1;fillColor=#dae8fc;strokeColor=#6c8ebf;fontSize=14;"

EDGE_STYLES = (
    "edgeStyle=orthogonalEdgeStyle;rounded=0;orthogonalLoop=1;jettySize=auto;html=1;",
    "edgeStyle=entityRelationEdgeStyle;rounded=0;orthogonalLoop=1;jettySize=auto;html=1;",
    "edgeStyle=elbowEdgeStyle;elbow=vertical;endArrow=classic;html=1;curved=0;rounded=0;endSize=8;startSize=8;",
    "edgeStyle=segmentEdgeStyle;endArrow=classic;html=1;curved=0;rounded=0;endSize=8;startSize=8;",
    "edgeStyle=orthogonalEdgeStyle;rounded=1;orthogonalLoop=1;jettySize=auto;html=1;strokeWidth=2;",
    "edgeStyle=entityRelationEdgeStyle;rounded=0;orthogonalLoop=1;jettySize=auto;html=1;strokeWidth=1.5;dashed=1;",
)

CATEGORY_HEADER_STYLES = (
    "fillColor=#f5f5f5;strokeColor=#666666;fontColor=#333333;",
    "fillColor=#dae8fc;strokeColor=#6c8ebf;fontColor=#000000;",
    "fillColor=#d5e8d4;strokeColor=#82b366;fontColor=#000000;",
    "fillColor=#ffe6cc;strokeColor=#d79b00;fontColor=#000000;",
)

CATEGORY_ITEM_STYLE_GROUPS = (
    (
        "fillColor=#dae8fc;strokeColor=#6c8ebf;",
        "fillColor=#d5e8d4;strokeColor=#82b366;",
        "fillColor=#b1ddf0;strokeColor=#10739e;",
    ),
    (
        "fillColor=#ffe6cc;strokeColor=#d79b00;",
        "fillColor=#f8cecc;strokeColor=#b85450;",
        "fillColor=#fad7ac;strokeColor=#b46504;",
    ),
    (
        "fillColor=#e1d5e7;strokeColor=#9673a6;",
        "fillColor=#b0e3e6;strokeColor=#0e8088;",
        "fillColor=#d4e1f5;strokeColor=#56517e;",
    ),
)

LAYOUTS = ("radial", "layered")

NODE_GAP = 30
MARGIN = 40

Box = tuple[int, int, int, int]

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def normalize_name(name: str) -> str:
    """Key used to match connection endpoints to node names."""
    return " ".join(name.split()).casefold()


def _token(rng: random.Random, length: int) -> str:
    return "".join(rng.choice(_BASE36) for _ in range(length))


class _CellIds:
    """Sequential mxCell ids; 0 and 1 are the reserved root cells."""

    def __init__(self) -> None:
        self._next = 2

    def __call__(self) -> str:
        value = str(self._next)
        self._next += 1
        return value


def _vertex(root: ET.Element, cell_id: str, value: str, style: str, x: int, y: int, width: int, height: int) -> None:
    cell = ET.SubElement(
        root,
        "mxCell",
        {"id": cell_id, "value": value, "style": style, "vertex": "1", "parent": "1"},
    )
    ET.SubElement(
        cell,
        "mxGeometry",
        {"x": str(x), "y": str(y), "width": str(width), "height": str(height), "as": "geometry"},
    )


def _primary_boxes(
    rng: random.Random,
    layout: str,
    center_size: int,
    sizes: list[tuple[int, int]],
) -> list[Box]:
    """Boxes for the primary nodes around a centre node at the origin.

    Index 0 is the centre node. Spacing is derived from the drawn sizes so
    no two boxes intersect whatever the jitter.
    """
    half = center_size / 2
    centres: list[tuple[float, float]] = []
    count = len(sizes)

    if count:
        max_width = max(width for width, _ in sizes)
        max_height = max(height for _, height in sizes)
        # Centres this far apart cannot give intersecting boxes
        pair_distance = math.hypot(max_width, max_height) + NODE_GAP
        if layout == "radial":
            step = 2 * math.pi / count
            clearance = math.hypot(half + max_width / 2, half + max_height / 2) + NODE_GAP
            # Jitter keeps neighbouring angles at least 0.7 * step apart
            spread = pair_distance / (2 * math.sin(0.35 * step)) if count > 1 else 0.0
            radius_y = max(150 + rng.randrange(100), clearance, spread)
            radius_x = radius_y + rng.randrange(100)
            offset_angle = rng.random() * math.pi
            for index in range(count):
                angle = offset_angle + (index + rng.uniform(-0.15, 0.15)) * step
                centres.append((radius_x * math.cos(angle), radius_y * math.sin(angle)))
        else:
            top_count = math.ceil(count / 2)
            band_offset = half + max_height / 2 + NODE_GAP
            gap = NODE_GAP + rng.randrange(30)
            for direction, members in ((-1, range(top_count)), (1, range(top_count, count))):
                widths = [sizes[index][0] for index in members]
                cursor = -(sum(widths) + gap * (len(widths) - 1)) / 2
                for width in widths:
                    centres.append((cursor + width / 2, direction * (band_offset + rng.randrange(40))))
                    cursor += width + gap

    boxes = [(-center_size // 2, -center_size // 2, center_size, center_size)]
    for (x, y), (width, height) in zip(centres, sizes):
        boxes.append((round(x - width / 2), round(y - height / 2), width, height))
    return boxes


def _category_cells(rng: random.Random, categories: dict[str, list[str]]) -> list[tuple[str, str, Box]]:
    """Header and item cells for the category clusters, stacked from the origin."""
    cells: list[tuple[str, str, Box]] = []
    item_styles = rng.choice(CATEGORY_ITEM_STYLE_GROUPS)
    category_y = 0

    for category, items in categories.items():
        header_style = rng.choice(CATEGORY_HEADER_STYLES)
        header_width = 180 + rng.randrange(61)
        cells.append(
            (
                f"<b>{html.escape(category)}</b>",
                f"rounded=1;whiteSpace=wrap;html=1;{header_style}fontSize=12;",
                (0, category_y, header_width, 40),
            )
        )

        per_row = 2 + rng.randrange(2)
        item_width = 100 + rng.randrange(41)
        item_height = 35 + rng.randrange(16)
        spacing = 15 + rng.randrange(16)

        for index, item in enumerate(items):
            row, col = divmod(index, per_row)
            jitter_x = rng.randint(-5, 5)
            jitter_y = rng.randint(-5, 5)
            rounded = rng.randint(1, 3)
            cells.append(
                (
                    html.escape(item),
                    f"rounded={rounded};whiteSpace=wrap;html=1;{item_styles[index % len(item_styles)]}",
                    (
                        col * (item_width + spacing) - row * 10 + jitter_x,
                        category_y + 50 + row * (item_height + 15) + jitter_y,
                        item_width,
                        item_height,
                    ),
                )
            )

        category_y += 60 + math.ceil(len(items) / per_row) * (item_height + 15) + 10

    return cells


def _bounds(boxes: list[Box]) -> Box:
    """Bounding box as (min_x, min_y, max_x, max_y)."""
    return (
        min(x for x, _, _, _ in boxes),
        min(y for _, y, _, _ in boxes),
        max(x + width for x, _, width, _ in boxes),
        max(y + height for _, y, _, height in boxes),
    )


def synthesize_diagram(
    components: DiagramComponents,
    *,
    seed: int | None = None,
    network: bool = False,
) -> str:
    """Build a draw.io diagram description document.

    ``components.nodes[0]`` is always placed at the centre; the remaining
    nodes are shuffled around it. Connections whose endpoints do not match a
    node (case and whitespace insensitive) are dropped and logged.

    Args:
        components: Validated diagram components
        seed: Random seed; None draws a fresh one so each call differs
        network: Use the network shape palette for primary nodes

    Returns:
        str: mxfile XML document
    """
    if seed is None:
        seed = random.SystemRandom().randrange(2**32)
    rng = random.Random(seed)

    layout = rng.choice(LAYOUTS)
    logger.info(
        f"{__name__}:synthesize_diagram - START title='{components.title}' "
        f"nodes={len(components.nodes)} layout={layout} network={network}"
    )

    # De-duplicate by normalized name, first spelling wins
    unique_nodes: list[str] = []
    seen: set[str] = set()
    for node in components.nodes:
        key = normalize_name(node)
        if key not in seen:
            seen.add(key)
            unique_nodes.append(node)

    center_node, others = unique_nodes[0], unique_nodes[1:]
    for i in range(len(others) - 1, 0, -1):
        j = rng.randint(0, i)
        others[i], others[j] = others[j], others[i]

    mxfile = ET.Element(
        "mxfile",
        {"host": "app.diagrams.net", "agent": "Knowledge Assistant", "version": "21.2.9"},
    )
    diagram = ET.SubElement(
        mxfile,
        "diagram",
        {"id": f"diagram-{_token(rng, 10)}", "name": components.title},
    )
    model = ET.SubElement(
        diagram,
        "mxGraphModel",
        {
            "dx": "1422",
            "dy": "762",
            "grid": "1",
            "gridSize": "10",
            "guides": "1",
            "tooltips": "1",
            "connect": "1",
            "arrows": "1",
            "fold": "1",
            "page": "1",
            "pageScale": "1",
            "pageWidth": "1100",
            "pageHeight": "850",
            "background": "#ffffff",
            "math": "0",
            "shadow": "0",
        },
    )
    root = ET.SubElement(model, "root")
    ET.SubElement(root, "mxCell", {"id": "0"})
    ET.SubElement(root, "mxCell", {"id": "1", "parent": "0"})

    next_id = _CellIds()
    node_ids: dict[str, str] = {}

    center_size = 120 + rng.randrange(41)
    sizes = [(120 + rng.randrange(41), 50 + rng.randrange(21)) for _ in others]
    primary = _primary_boxes(rng, layout, center_size, sizes)
    categories = _category_cells(rng, components.categories)

    # Category clusters sit on one side of the main diagram, never across it
    primary_min_x, primary_min_y, primary_max_x, _ = _bounds(primary)
    origin_x = MARGIN + rng.randrange(100)
    origin_y = MARGIN + rng.randrange(80)
    cluster_gap = 60 + rng.randrange(40)
    on_left = rng.random() > 0.5
    shift_x, shift_y = origin_x - primary_min_x, origin_y - primary_min_y
    if categories:
        cat_min_x, cat_min_y, cat_max_x, _ = _bounds([box for _, _, box in categories])
        cat_shift_y = origin_y + rng.randrange(50) - cat_min_y
        if on_left:
            cat_shift_x = origin_x - cat_min_x
            shift_x += cat_max_x - cat_min_x + cluster_gap
        else:
            cat_shift_x = shift_x + primary_max_x + cluster_gap - cat_min_x

    # Central node
    center_style = NETWORK_CENTER_STYLE if network else rng.choice(NODE_STYLES[:2])
    center_id = next_id()
    node_ids[normalize_name(center_node)] = center_id
    x, y, width, height = primary[0]
    _vertex(
        root,
        center_id,
        f"<b>{html.escape(center_node)}</b>",
        center_style,
        x + shift_x,
        y + shift_y,
        width,
        height,
    )

    # Remaining primary nodes
    palette = NETWORK_NODE_STYLES if network else NODE_STYLES
    for name, (x, y, width, height) in zip(others, primary[1:]):
        node_id = next_id()
        node_ids[normalize_name(name)] = node_id
        style = rng.choice(palette)
        _vertex(root, node_id, html.escape(name), style, x + shift_x, y + shift_y, width, height)

    # Edges
    dropped = []
    for connection in components.connections:
        source_id = node_ids.get(normalize_name(connection.source))
        target_id = node_ids.get(normalize_name(connection.target))
        if source_id is None or target_id is None:
            dropped.append(f"{connection.source} -> {connection.target}")
            continue
        edge = ET.SubElement(
            root,
            "mxCell",
            {
                "id": next_id(),
                "value": html.escape(connection.label or ""),
                "style": rng.choice(EDGE_STYLES),
                "edge": "1",
                "parent": "1",
                "source": source_id,
                "target": target_id,
            },
        )
        geometry = ET.SubElement(edge, "mxGeometry", {"relative": "1", "as": "geometry"})
        ET.SubElement(
            geometry,
            "mxPoint",
            {"x": str(rng.randint(0, 1)), "y": str(rng.randint(0, 1)), "as": "targetPoint"},
        )
    if dropped:
        logger.warning(
            f"{__name__}:synthesize_diagram - Dropped {len(dropped)} unresolved connections: {dropped}"
        )

    # Category clusters
    for value, style, (x, y, width, height) in categories:
        _vertex(root, next_id(), value, style, x + cat_shift_x, y + cat_shift_y, width, height)

    ET.indent(mxfile, space="  ")
    xml = ET.tostring(mxfile, encoding="unicode")

    logger.info(
        f"{__name__}:synthesize_diagram - END cells={len(root)} dropped_edges={len(dropped)}"
    )
    return xml
