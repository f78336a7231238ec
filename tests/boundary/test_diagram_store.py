"""
Test suite for the generated diagram file store.

System role: Verification of diagram persistence and filename safety
"""

import re

import pytest

from assistant.boundary.storage.diagram_store import DiagramStore
from assistant.core.exceptions import DiagramNotFoundError, InvalidDiagramFilenameError

FILENAME_RE = re.compile(r"^diagram_\d{13}-[0-9a-z]{6}\.drawio$")


class TestFilenames:
    """Test suite for filename generation and validation."""

    def test_new_filename_should_embed_timestamp_and_suffix(self) -> None:
        """Test diagram_<ms>-<base36>.drawio naming."""
        name = DiagramStore.new_filename(1700000000123)

        assert name.startswith("diagram_1700000000123-")
        assert FILENAME_RE.match(name)

    def test_new_filenames_should_not_collide(self) -> None:
        """Test names generated in the same millisecond still differ."""
        names = {DiagramStore.new_filename(1700000000000) for _ in range(200)}

        assert len(names) == 200

    @pytest.mark.parametrize(
        "filename",
        ["", "../secret.drawio", "a/b.drawio", "a\\b.drawio", "..", ".hidden", "x..y.drawio", "name with space"],
    )
    def test_validate_should_reject_unsafe_names(self, filename: str) -> None:
        """Test path separators, parent references and odd characters are rejected."""
        with pytest.raises(InvalidDiagramFilenameError):
            DiagramStore.validate_filename(filename)

    def test_validate_should_accept_stem(self) -> None:
        """Test a bare stem resolves to the .drawio name."""
        assert DiagramStore.validate_filename("diagram_1-abc") == "diagram_1-abc.drawio"
        assert DiagramStore.validate_filename("diagram_1-abc.drawio") == "diagram_1-abc.drawio"


class TestSaveAndLoad:
    """Test suite for save/load."""

    def test_save_should_write_under_generated_dir(self, diagram_store: DiagramStore) -> None:
        """Test documents land in <root>/generated with a fresh name."""
        filename, path = diagram_store.save("<mxfile/>")

        assert FILENAME_RE.match(filename)
        assert path.parent == diagram_store.directory
        assert diagram_store.directory.name == "generated"
        assert diagram_store.load(filename) == "<mxfile/>"

    def test_saves_should_never_overwrite(self, diagram_store: DiagramStore) -> None:
        """Test consecutive saves produce distinct files."""
        first, _ = diagram_store.save("<one/>")
        second, _ = diagram_store.save("<two/>")

        assert first != second
        assert diagram_store.load(first) == "<one/>"

    def test_load_should_accept_stem(self, diagram_store: DiagramStore) -> None:
        """Test a stem loads the stored document."""
        filename, _ = diagram_store.save("<mxfile/>")

        assert diagram_store.load(filename.removesuffix(".drawio")) == "<mxfile/>"

    def test_missing_file_should_raise_not_found(self, diagram_store: DiagramStore) -> None:
        """Test a well-formed but unknown name raises DiagramNotFoundError."""
        with pytest.raises(DiagramNotFoundError):
            diagram_store.load("diagram_1-zzzzzz.drawio")
