"""
Test suite for draw.io -> D2 conversion and D2 script repair.

System role: Verification of D2 backend input preparation
"""

from assistant.core.diagram.d2_script import drawio_to_d2, repair_d2_script
from assistant.core.diagram.drawio import parse_drawio
from assistant.core.diagram.layout import synthesize_diagram
from assistant.models.diagram import DiagramComponents


class TestDrawioToD2:
    """Test suite for drawio_to_d2."""

    def test_should_emit_nodes_and_edges(self, sample_components: DiagramComponents) -> None:
        """Test each vertex becomes a D2 node and each edge an arrow."""
        graph = parse_drawio(synthesize_diagram(sample_components, seed=3))
        script = drawio_to_d2(graph)

        assert script.startswith("direction: right\n")
        assert 'n1: "RiverMeadow Platform"' in script
        assert script.count(" -> ") == len(sample_components.connections)
        assert ': "Orchestrate"' in script

    def test_should_quote_labels(self) -> None:
        """Test quotes in labels are escaped."""
        components = DiagramComponents(title="T", nodes=['Say "hi"'], connections=[], categories={})
        script = drawio_to_d2(parse_drawio(synthesize_diagram(components, seed=1)))

        assert 'n1: "Say \\"hi\\""' in script


class TestRepairD2Script:
    """Test suite for repair_d2_script."""

    def test_should_append_missing_braces(self) -> None:
        """Test unbalanced blocks are closed."""
        repaired = repair_d2_script("a: {\n  b: {\n    c\n")

        assert repaired.count("{") == repaired.count("}")
        assert repaired.endswith("}\n}\n")

    def test_should_ignore_braces_inside_strings(self) -> None:
        """Test braces in quoted labels do not count."""
        script = 'a: "{not a block"\n'

        assert repair_d2_script(script) == script

    def test_should_strip_padding_properties(self) -> None:
        """Test unsupported padding lines are removed."""
        repaired = repair_d2_script("a: {\n  style.padding: 10\n  label: x\n}\n")

        assert "padding" not in repaired
        assert "label: x" in repaired

    def test_balanced_script_should_be_unchanged(self) -> None:
        """Test a valid script passes through."""
        script = "x -> y\n"

        assert repair_d2_script(script) == script
