"""
Test suite for the layout synthesizer.

Parses the generated draw.io XML and checks structure: reference
integrity, the centre node, seeded reproducibility, network shapes,
category clusters and handling of unresolved connections.

System role: Verification of components -> draw.io XML synthesis
"""

import logging
import xml.etree.ElementTree as ET

import pytest

from assistant.core.diagram.layout import (
    NETWORK_CENTER_STYLE,
    NETWORK_NODE_STYLES,
    synthesize_diagram,
)
from assistant.core.diagram.templates import TEMPLATE_NAMES, get_template
from assistant.models.diagram import DiagramComponents


def _cells(xml: str) -> tuple[list[ET.Element], list[ET.Element]]:
    root = ET.fromstring(xml)
    cells = list(root.iter("mxCell"))
    vertices = [c for c in cells if c.get("vertex") == "1"]
    edges = [c for c in cells if c.get("edge") == "1"]
    return vertices, edges


# =============================================================================
# Document structure
# =============================================================================


class TestDocumentStructure:
    """Test suite for well-formed output."""

    def test_should_produce_mxfile_with_root_cells(self, sample_components: DiagramComponents) -> None:
        """Test document skeleton: mxfile > diagram > mxGraphModel > root with cells 0 and 1."""
        root = ET.fromstring(synthesize_diagram(sample_components, seed=7))

        assert root.tag == "mxfile"
        diagram = root.find("diagram")
        assert diagram.get("name") == "Sample Migration"
        graph_root = diagram.find("mxGraphModel/root")
        ids = [cell.get("id") for cell in graph_root.findall("mxCell")]
        assert ids[:2] == ["0", "1"]
        assert len(ids) == len(set(ids))

    @pytest.mark.parametrize("seed", range(20))
    def test_edges_should_reference_declared_vertices(
        self, sample_components: DiagramComponents, seed: int
    ) -> None:
        """Test no dangling edge references for any seed."""
        vertices, edges = _cells(synthesize_diagram(sample_components, seed=seed))
        vertex_ids = {v.get("id") for v in vertices}

        assert len(edges) == len(sample_components.connections)
        for edge in edges:
            assert edge.get("source") in vertex_ids
            assert edge.get("target") in vertex_ids

    @pytest.mark.parametrize("name", TEMPLATE_NAMES)
    def test_templates_should_synthesize_without_dangling_edges(self, name: str) -> None:
        """Test every fallback template lays out with all edges resolved."""
        components = get_template(name)
        vertices, edges = _cells(synthesize_diagram(components, seed=1))
        vertex_ids = {v.get("id") for v in vertices}

        assert len(edges) == len(components.connections)
        assert all(e.get("source") in vertex_ids and e.get("target") in vertex_ids for e in edges)

    def test_every_vertex_should_have_geometry(self, sample_components: DiagramComponents) -> None:
        """Test each vertex carries a positive-size mxGeometry."""
        vertices, _ = _cells(synthesize_diagram(sample_components, seed=3))

        for vertex in vertices:
            geometry = vertex.find("mxGeometry")
            assert geometry is not None
            assert float(geometry.get("width")) > 0
            assert float(geometry.get("height")) > 0

    def test_should_emit_category_headers_and_items(self, sample_components: DiagramComponents) -> None:
        """Test one header per category plus one cell per item."""
        vertices, _ = _cells(synthesize_diagram(sample_components, seed=11))
        values = [v.get("value") for v in vertices]

        assert "<b>Targets</b>" in values
        assert "<b>Features</b>" in values
        item_count = sum(len(items) for items in sample_components.categories.values())
        expected = len(sample_components.nodes) + len(sample_components.categories) + item_count
        assert len(vertices) == expected

    def test_labels_should_be_escaped(self) -> None:
        """Test markup in names stays text."""
        components = DiagramComponents(title="T", nodes=["Core <script>", "A & B"], connections=[], categories={})
        vertices, _ = _cells(synthesize_diagram(components, seed=2))
        values = {v.get("value") for v in vertices}

        assert "<b>Core &lt;script&gt;</b>" in values
        assert "A &amp; B" in values


# =============================================================================
# Centre node and randomness
# =============================================================================


class TestCentreAndSeed:
    """Test suite for centre placement and seeded randomness."""

    @pytest.mark.parametrize("seed", range(10))
    def test_first_node_should_be_centre(self, sample_components: DiagramComponents, seed: int) -> None:
        """Test nodes[0] is always the first, bold, largest primary cell."""
        vertices, _ = _cells(synthesize_diagram(sample_components, seed=seed))
        centre = vertices[0]

        assert centre.get("id") == "2"
        assert centre.get("value") == "<b>RiverMeadow Platform</b>"
        centre_width = float(centre.find("mxGeometry").get("width"))
        assert centre_width >= 120

    def test_same_seed_should_give_identical_output(self, sample_components: DiagramComponents) -> None:
        """Test a pinned seed reproduces the document byte for byte."""
        assert synthesize_diagram(sample_components, seed=42) == synthesize_diagram(sample_components, seed=42)

    def test_different_seeds_should_differ(self, sample_components: DiagramComponents) -> None:
        """Test different seeds give different documents."""
        assert synthesize_diagram(sample_components, seed=1) != synthesize_diagram(sample_components, seed=2)

    def test_unseeded_calls_should_differ(self, sample_components: DiagramComponents) -> None:
        """Test repeated unseeded calls do not produce identical diagrams."""
        assert synthesize_diagram(sample_components) != synthesize_diagram(sample_components)

    def test_duplicate_names_should_collapse(self) -> None:
        """Test nodes differing only by case or spacing become one cell."""
        components = DiagramComponents(
            title="Dupes",
            nodes=["Hub", "Edge  Node", "edge node", "Other"],
            connections=[],
            categories={},
        )
        vertices, _ = _cells(synthesize_diagram(components, seed=5))

        assert len(vertices) == 3


# =============================================================================
# Network shapes
# =============================================================================


class TestNetworkShapes:
    """Test suite for the network palette."""

    def test_network_flag_should_use_network_styles(self, sample_components: DiagramComponents) -> None:
        """Test network layout uses a cloud centre and network node shapes."""
        vertices, _ = _cells(synthesize_diagram(sample_components, seed=9, network=True))
        primary = vertices[: len(sample_components.nodes)]

        assert primary[0].get("style") == NETWORK_CENTER_STYLE
        for vertex in primary[1:]:
            assert vertex.get("style") in NETWORK_NODE_STYLES

    def test_default_should_not_use_network_styles(self, sample_components: DiagramComponents) -> None:
        """Test default layout never draws from the network palette."""
        vertices, _ = _cells(synthesize_diagram(sample_components, seed=9))
        primary = vertices[: len(sample_components.nodes)]

        assert primary[0].get("style") != NETWORK_CENTER_STYLE
        assert all("mxgraph.cisco" not in v.get("style") for v in primary)


# =============================================================================
# Connection resolution
# =============================================================================


class TestConnectionResolution:
    """Test suite for connection endpoint matching."""

    def test_unresolved_connection_should_be_dropped_and_logged(
        self, sample_components: DiagramComponents, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test a connection to an unknown node is dropped with a warning."""
        data = sample_components.model_dump(by_alias=True)
        data["connections"].append({"from": "Ghost Service", "to": "RiverMeadow Platform"})
        components = DiagramComponents.model_validate(data)

        with caplog.at_level(logging.WARNING, logger="assistant.core.diagram.layout"):
            _, edges = _cells(synthesize_diagram(components, seed=4))

        assert len(edges) == len(sample_components.connections)
        assert "Ghost Service" in caplog.text

    def test_endpoints_should_match_case_and_space_insensitively(self) -> None:
        """Test 'source  connector' resolves to 'Source Connector'."""
        components = DiagramComponents.model_validate(
            {
                "title": "Matching",
                "nodes": ["Hub", "Source Connector"],
                "connections": [{"from": "source  connector", "to": "HUB", "label": "in"}],
                "categories": {},
            }
        )
        vertices, edges = _cells(synthesize_diagram(components, seed=6))
        ids = {v.get("value"): v.get("id") for v in vertices}

        assert len(edges) == 1
        assert edges[0].get("source") == ids["Source Connector"]
        assert edges[0].get("target") == ids["<b>Hub</b>"]


# =============================================================================
# Non-overlapping placement
# =============================================================================


def _boxes(xml: str) -> list[tuple[float, float, float, float]]:
    vertices, _ = _cells(xml)
    boxes = []
    for vertex in vertices:
        geometry = vertex.find("mxGeometry")
        boxes.append(tuple(float(geometry.get(key)) for key in ("x", "y", "width", "height")))
    return boxes


def _intersections(boxes: list[tuple[float, float, float, float]]) -> list[tuple[int, int]]:
    found = []
    for i, (x1, y1, w1, h1) in enumerate(boxes):
        for j in range(i + 1, len(boxes)):
            x2, y2, w2, h2 = boxes[j]
            if x1 < x2 + w2 and x2 < x1 + w1 and y1 < y2 + h2 and y2 < y1 + h1:
                found.append((i, j))
    return found


class TestPlacement:
    """Test suite for vertex placement."""

    @pytest.mark.parametrize("node_count", [2, 3, 7, 12])
    @pytest.mark.parametrize("with_categories", [False, True])
    def test_vertices_should_not_intersect_for_any_seed(self, node_count: int, with_categories: bool) -> None:
        """Test no two vertex boxes overlap across a seed sweep."""
        # Arrange
        nodes = ["Hub", *[f"Service {chr(65 + i)}" for i in range(node_count - 1)]]
        categories = (
            {"Targets": ["AWS", "Azure", "GCP", "VMware"], "Features": ["Sync"], "Tools": ["CLI", "API"]}
            if with_categories
            else {}
        )
        components = DiagramComponents(title="Spread", nodes=nodes, connections=[], categories=categories)

        for seed in range(50):
            # Act
            boxes = _boxes(synthesize_diagram(components, seed=seed))

            # Assert
            assert _intersections(boxes) == [], f"seed={seed}"

    @pytest.mark.parametrize("seed", range(10))
    def test_vertices_should_stay_on_page(self, sample_components: DiagramComponents, seed: int) -> None:
        """Test every vertex has non-negative coordinates."""
        boxes = _boxes(synthesize_diagram(sample_components, seed=seed, network=True))

        assert all(x >= 0 and y >= 0 for x, y, _, _ in boxes)
