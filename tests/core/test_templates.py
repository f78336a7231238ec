"""
Test suite for fallback diagram templates.

System role: Verification of guaranteed-valid fallback components
"""

import pytest

from assistant.core.diagram.layout import normalize_name
from assistant.core.diagram.templates import (
    PRIMARY_NODE,
    ROTATION,
    TEMPLATE_NAMES,
    get_template,
    rotating_template,
    select_template,
    template_name_for,
)


class TestTemplateContents:
    """Test suite for template structure."""

    @pytest.mark.parametrize("name", TEMPLATE_NAMES)
    def test_template_should_be_structurally_valid(self, name: str) -> None:
        """Test every template has a title, nodes and categories, primary node first."""
        components = get_template(name)

        assert components.title
        assert components.nodes[0] == PRIMARY_NODE
        assert components.categories
        assert all(items for items in components.categories.values())

    @pytest.mark.parametrize("name", TEMPLATE_NAMES)
    def test_template_connections_should_reference_nodes(self, name: str) -> None:
        """Test no template connection points at an unknown node."""
        components = get_template(name)
        names = {normalize_name(node) for node in components.nodes}

        for connection in components.connections:
            assert normalize_name(connection.source) in names
            assert normalize_name(connection.target) in names

    def test_get_template_should_return_independent_copies(self) -> None:
        """Test mutating a returned template does not leak into the next call."""
        first = get_template("aws")
        first.nodes.append("Extra")

        assert "Extra" not in get_template("aws").nodes


class TestTemplateSelection:
    """Test suite for keyword and rotation selection."""

    @pytest.mark.parametrize(
        ("prompt", "expected"),
        [
            ("Migrate the Windows OS fleet", "os"),
            ("Operating system upgrade path", "os"),
            ("Move workloads to AWS", "aws"),
            ("Lift and shift into Amazon", "aws"),
            ("Windows hosts moving to Azure", "azure"),
            ("Our approval workflow", "process"),
            ("Tell me something", "generic"),
        ],
    )
    def test_template_name_for_should_match_keywords(self, prompt: str, expected: str) -> None:
        """Test keyword matching, whole words only."""
        assert template_name_for(prompt) == expected

    def test_select_template_should_return_components(self) -> None:
        """Test select_template returns the keyword template."""
        assert select_template("aws landing zone").title == get_template("aws").title

    @pytest.mark.parametrize("timestamp", range(8))
    def test_rotating_template_should_cycle(self, timestamp: int) -> None:
        """Test timestamp modulus picks the rotation entry."""
        name, components = rotating_template(timestamp)

        assert name == ROTATION[timestamp % len(ROTATION)]
        assert components.title == get_template(name).title
