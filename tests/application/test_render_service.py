"""
Test suite for RenderService.

Covers every rendered form and the PNG fallback chain. Backends are
mocked except where the D2 subprocess itself is patched.

System role: Verification of diagram render orchestration
"""

import xml.etree.ElementTree as ET
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from assistant.application.services.render_service import RenderService
from assistant.boundary.render.d2_cli import D2Renderer
from assistant.boundary.storage.diagram_store import DiagramStore
from assistant.core.diagram.layout import synthesize_diagram
from assistant.core.diagram.placeholder import D2_ERROR_TITLE, SCREENSHOT_ERROR_TITLE
from assistant.core.diagram.svg_renderer import ERROR_TITLE
from assistant.core.exceptions import DiagramNotFoundError, InvalidDiagramFilenameError, RenderError
from assistant.models.diagram import DiagramComponents

PNG_D2 = b"\x89PNG\r\n\x1a\nd2"
PNG_BROWSER = b"\x89PNG\r\n\x1a\nbrowser"


@pytest.fixture
def stored(diagram_store: DiagramStore, sample_components: DiagramComponents) -> str:
    """Filename of a stored synthesized diagram."""
    filename, _ = diagram_store.save(synthesize_diagram(sample_components, seed=5))
    return filename


@pytest.fixture
def d2_renderer() -> MagicMock:
    """D2 backend that succeeds."""
    renderer = MagicMock()
    renderer.render = AsyncMock(return_value=PNG_D2)
    return renderer


@pytest.fixture
def rasterizer() -> MagicMock:
    """Browser backend that succeeds."""
    browser = MagicMock()
    browser.rasterize = AsyncMock(return_value=PNG_BROWSER)
    return browser


@pytest.fixture
def service(diagram_store: DiagramStore, d2_renderer: MagicMock, rasterizer: MagicMock) -> RenderService:
    """RenderService with mocked backends."""
    return RenderService(store=diagram_store, d2_renderer=d2_renderer, rasterizer=rasterizer)


# =============================================================================
# Source and SVG
# =============================================================================


class TestSourceAndSvg:
    """Test suite for source and svg rendering."""

    @pytest.mark.asyncio
    async def test_source_should_return_stored_xml(
        self, service: RenderService, diagram_store: DiagramStore, stored: str
    ) -> None:
        """Test the raw document is served unchanged."""
        artifact = await service.source(stored)

        assert artifact.format == "source"
        assert artifact.media_type == "application/xml"
        assert artifact.content.decode("utf-8") == diagram_store.load(stored)

    @pytest.mark.asyncio
    async def test_svg_should_render_stored_document(self, service: RenderService, stored: str) -> None:
        """Test the stored document renders to SVG."""
        artifact = await service.svg(stored)

        assert artifact.media_type == "image/svg+xml"
        assert ET.fromstring(artifact.content).tag.endswith("svg")
        assert artifact.strategy == "svg"

    @pytest.mark.asyncio
    async def test_svg_should_be_identical_but_cache_keys_fresh(self, service: RenderService, stored: str) -> None:
        """Test repeated renders give the same bytes and a new cache key."""
        first = await service.svg(stored)
        second = await service.svg(stored)

        assert first.content == second.content
        assert first.cache_key != second.cache_key

    @pytest.mark.asyncio
    async def test_malformed_document_should_give_error_svg(
        self, service: RenderService, diagram_store: DiagramStore
    ) -> None:
        """Test a corrupt stored document yields the error SVG."""
        filename, _ = diagram_store.save("<mxfile><diagram>")

        artifact = await service.svg(filename)

        assert ERROR_TITLE.encode("utf-8") in artifact.content
        assert artifact.strategy == "error"

    @pytest.mark.asyncio
    async def test_unknown_file_should_raise_not_found(self, service: RenderService) -> None:
        """Test lookups of missing files raise DiagramNotFoundError."""
        with pytest.raises(DiagramNotFoundError):
            await service.svg("diagram_1-nope00.drawio")

    @pytest.mark.asyncio
    async def test_unsafe_name_should_raise_invalid_filename(self, service: RenderService) -> None:
        """Test traversal attempts are rejected before disk access."""
        with pytest.raises(InvalidDiagramFilenameError):
            await service.source("../../etc/passwd")


# =============================================================================
# PNG chain
# =============================================================================


class TestFullPng:
    """Test suite for the PNG fallback chain."""

    @pytest.mark.asyncio
    async def test_d2_success_should_win(
        self, service: RenderService, stored: str, d2_renderer: MagicMock, rasterizer: MagicMock
    ) -> None:
        """Test D2 output is used when the CLI succeeds."""
        artifact = await service.full_png(stored)

        assert artifact.strategy == "d2"
        assert artifact.content == PNG_D2
        script = d2_renderer.render.await_args.args[0]
        assert "RiverMeadow Platform" in script
        rasterizer.rasterize.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_d2_failure_should_fall_back_to_browser(
        self, service: RenderService, stored: str, d2_renderer: MagicMock
    ) -> None:
        """Test the browser screenshot is used when D2 fails."""
        d2_renderer.render.side_effect = RenderError("D2 exited with code 1", backend="d2")

        artifact = await service.full_png(stored)

        assert artifact.strategy == "browser"
        assert artifact.content == PNG_BROWSER

    @pytest.mark.asyncio
    async def test_all_backends_failing_should_give_d2_placeholder(
        self, service: RenderService, stored: str, d2_renderer: MagicMock, rasterizer: MagicMock
    ) -> None:
        """Test exhaustion yields a placeholder PNG naming the D2 error."""
        d2_renderer.render.side_effect = RenderError("D2 exited with code 1", backend="d2")
        rasterizer.rasterize.side_effect = RenderError("chromium missing", backend="browser")

        artifact = await service.full_png(stored)

        assert artifact.strategy == "placeholder"
        assert artifact.media_type == "image/png"
        assert b"D2 Diagram Generation Error" in artifact.content

    @pytest.mark.asyncio
    async def test_nonzero_d2_exit_should_give_placeholder_not_raise(
        self, diagram_store: DiagramStore, stored: str, rasterizer: MagicMock
    ) -> None:
        """Test a real D2Renderer whose subprocess exits nonzero degrades to a placeholder."""
        process = MagicMock(returncode=2)
        process.communicate = AsyncMock(return_value=(b"", b"compile error"))
        service = RenderService(store=diagram_store, d2_renderer=D2Renderer(), rasterizer=rasterizer)

        with patch("assistant.boundary.render.d2_cli.shutil.which", return_value="/usr/bin/d2"), patch(
            "assistant.boundary.render.d2_cli.asyncio.create_subprocess_exec",
            new=AsyncMock(return_value=process),
        ):
            artifact = await service.d2_png(diagram_store.load(stored))

        assert artifact.strategy == "placeholder"
        assert D2_ERROR_TITLE.encode("utf-8") in artifact.content
        assert b"compile error" in artifact.content

    @pytest.mark.asyncio
    async def test_unparseable_document_should_skip_d2(
        self, service: RenderService, d2_renderer: MagicMock
    ) -> None:
        """Test malformed XML goes straight to the placeholder without running D2."""
        artifact = await service.d2_png("<mxfile><diagram>")

        assert artifact.strategy == "placeholder"
        d2_renderer.render.assert_not_awaited()


class TestScreenshot:
    """Test suite for browser screenshots."""

    @pytest.mark.asyncio
    async def test_screenshot_should_rasterize_hand_built_svg(
        self, service: RenderService, stored: str, rasterizer: MagicMock
    ) -> None:
        """Test the browser receives the rendered SVG."""
        artifact = await service.screenshot(stored)

        assert artifact.strategy == "browser"
        assert rasterizer.rasterize.await_args.args[0].startswith("<svg")

    @pytest.mark.asyncio
    async def test_browser_failure_should_give_screenshot_placeholder(
        self, service: RenderService, stored: str, rasterizer: MagicMock
    ) -> None:
        """Test a browser failure yields a placeholder, not an exception."""
        rasterizer.rasterize.side_effect = RenderError("launch failed", backend="browser")

        artifact = await service.screenshot(stored)

        assert artifact.strategy == "placeholder"
        assert SCREENSHOT_ERROR_TITLE.encode("utf-8") in artifact.content
