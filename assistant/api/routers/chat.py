"""Chat endpoint.

Routes:
- POST /chat - Answer a message from the knowledge base, with a diagram when asked

Dependencies: assistant.application.services.chat_service
System role: Chat HTTP API
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from assistant.api.deps import get_chat_service
from assistant.application.services.chat_service import ChatService
from assistant.models.chat import ChatRequest, ChatResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])


@router.post("", response_model=ChatResponse, status_code=200)
async def chat(
    request: ChatRequest,
    chat_service: ChatService = Depends(get_chat_service),
) -> ChatResponse:
    """Answer one chat turn.

    History is supplied by the caller; nothing is persisted. When the message
    asks for a visual, the response carries a diagram reference, or none if
    diagram generation failed.

    Raises:
        HTTPException(500): The answer could not be generated
    """
    try:
        return await chat_service.chat(request)
    except Exception as e:
        logger.error(f"{__name__}:chat - {type(e).__name__}: {e}")
        raise HTTPException(status_code=500, detail="Failed to generate answer") from e
