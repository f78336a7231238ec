"""
Test suite for placeholder PNG generation.

System role: Verification of the terminal PNG fallback
"""

import io

from PIL import Image

from assistant.core.diagram.placeholder import D2_ERROR_TITLE, placeholder_png


class TestPlaceholderPng:
    """Test suite for placeholder_png."""

    def test_should_produce_valid_png(self) -> None:
        """Test output opens as a PNG image."""
        image = Image.open(io.BytesIO(placeholder_png(D2_ERROR_TITLE, "exit status 1")))

        assert image.format == "PNG"
        assert image.width > 0 and image.height > 0

    def test_should_carry_title_in_bytes_and_metadata(self) -> None:
        """Test the error title is readable without OCR."""
        content = placeholder_png(D2_ERROR_TITLE, "exit status 1", "<mxfile/>")
        image = Image.open(io.BytesIO(content))

        assert b"D2 Diagram Generation Error" in content
        assert image.text["Title"] == D2_ERROR_TITLE
        assert image.text["Error"] == "exit status 1"
        assert image.text["Source"] == "&lt;mxfile/&gt;"

    def test_should_handle_long_and_non_latin_source(self) -> None:
        """Test oversized and non latin-1 source text does not break rendering."""
        source = "\n".join(f"line {i} → 中文" for i in range(200))

        content = placeholder_png("Title", "", source)

        assert Image.open(io.BytesIO(content)).format == "PNG"
