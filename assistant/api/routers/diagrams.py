"""Diagram generation and rendering endpoints.

Routes:
- POST /generate-diagram - Run the synthesis pipeline for a prompt
- GET /diagram-svg/{filename} - Hand-built SVG
- GET /diagram-xml/{filename} - Raw draw.io source
- GET /download-full-diagram/{filename} - PNG download (D2, browser, placeholder)
- GET /screenshot-diagram/{filename} - PNG via headless browser

Every rendering response is uncacheable and names the backend that
produced it in the ``X-Diagram-Render`` header.

Dependencies: assistant.application.services, assistant.api.deps
System role: Diagram HTTP API
"""

import logging
from pathlib import PurePath

from fastapi import APIRouter, Depends, HTTPException, Response

from assistant.api.deps import get_diagram_service, get_render_service
from assistant.application.services.diagram_service import DiagramService
from assistant.application.services.render_service import RenderService
from assistant.core.diagram.intent import is_diagram_generation_request
from assistant.core.exceptions import DiagramNotFoundError, InvalidDiagramFilenameError
from assistant.models.diagram import DiagramReference, DiagramRequest, RenderedArtifact

logger = logging.getLogger(__name__)

router = APIRouter(tags=["diagrams"])

NO_STORE_HEADERS = {
    "Cache-Control": "no-cache, no-store, must-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}


def _to_response(artifact: RenderedArtifact, download_name: str | None = None) -> Response:
    headers = {
        **NO_STORE_HEADERS,
        "X-Diagram-Render": artifact.strategy,
        "X-Diagram-Cache-Key": artifact.cache_key,
    }
    if download_name:
        headers["Content-Disposition"] = f'attachment; filename="{download_name}"'
    return Response(content=artifact.content, media_type=artifact.media_type, headers=headers)


def _http_error(route: str, e: Exception) -> HTTPException:
    if isinstance(e, InvalidDiagramFilenameError):
        logger.warning(f"{__name__}:{route} - {e}")
        return HTTPException(status_code=400, detail=e.message)
    if isinstance(e, DiagramNotFoundError):
        logger.warning(f"{__name__}:{route} - {e}")
        return HTTPException(status_code=404, detail=e.message)
    logger.error(f"{__name__}:{route} - {type(e).__name__}: {e}", exc_info=True)
    return HTTPException(status_code=500, detail="Failed to render diagram")


@router.post("/generate-diagram", response_model=DiagramReference, status_code=200)
async def generate_diagram(
    request: DiagramRequest,
    diagram_service: DiagramService = Depends(get_diagram_service),
) -> DiagramReference:
    """Generate a new architecture diagram.

    Request body:
    - prompt: Diagram request text; must read as a diagram request
    - knowledge_context: Optional knowledge-base snippets

    Response:
    - filename: Stored draw.io document name
    - svg_url / xml_url / png_url / screenshot_url: Cache-busted render links

    Raises:
        HTTPException(400): Prompt is not a diagram request
        HTTPException(500): Document could not be written
    """
    if not is_diagram_generation_request(request.prompt):
        raise HTTPException(
            status_code=400,
            detail="The prompt does not appear to be requesting a diagram",
        )
    try:
        generated = await diagram_service.generate(request.prompt, request.knowledge_context)
        return diagram_service.reference(generated, request.prompt)
    except Exception as e:
        logger.error(f"{__name__}:generate_diagram - {type(e).__name__}: {e}")
        raise HTTPException(status_code=500, detail="Failed to generate diagram") from e


@router.get("/diagram-svg/{filename}")
async def get_diagram_svg(
    filename: str,
    render_service: RenderService = Depends(get_render_service),
) -> Response:
    """Hand-built SVG rendering; an error SVG for a malformed document."""
    try:
        artifact = await render_service.svg(filename)
    except Exception as e:
        raise _http_error("get_diagram_svg", e) from e
    return _to_response(artifact)


@router.get("/diagram-xml/{filename}")
async def get_diagram_xml(
    filename: str,
    render_service: RenderService = Depends(get_render_service),
) -> Response:
    """Raw draw.io source, for opening in the draw.io editor."""
    try:
        artifact = await render_service.source(filename)
    except Exception as e:
        raise _http_error("get_diagram_xml", e) from e
    return _to_response(artifact)


@router.get("/download-full-diagram/{filename}")
async def download_full_diagram(
    filename: str,
    render_service: RenderService = Depends(get_render_service),
) -> Response:
    """Full PNG as an attachment; a placeholder PNG when every backend fails."""
    try:
        artifact = await render_service.full_png(filename)
    except Exception as e:
        raise _http_error("download_full_diagram", e) from e
    stem = PurePath(filename).name.removesuffix(".drawio")
    return _to_response(artifact, download_name=f"{stem}.png")


@router.get("/screenshot-diagram/{filename}")
async def screenshot_diagram(
    filename: str,
    render_service: RenderService = Depends(get_render_service),
) -> Response:
    """Headless browser screenshot; a placeholder PNG when the browser fails."""
    try:
        artifact = await render_service.screenshot(filename)
    except Exception as e:
        raise _http_error("screenshot_diagram", e) from e
    return _to_response(artifact)
