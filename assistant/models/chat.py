"""
Chat domain models and schemas.

Request/response schemas for stateless chat turns. History is supplied by the
caller on each request.

Dependencies: pydantic
System role: Chat API contracts
"""

from typing import Literal

from pydantic import BaseModel, Field

from assistant.models.diagram import DiagramReference


class ChatMessage(BaseModel):
    """Single chat message in caller-supplied history."""

    role: Literal["user", "assistant"] = Field(description="Message role: 'user' or 'assistant'")
    content: str = Field(description="Message content")


class ChatRequest(BaseModel):
    """Request schema for chat messages."""

    message: str = Field(min_length=1, description="User question or message")
    history: list[ChatMessage] = Field(default_factory=list, description="Previous turns, oldest first")


class ChatSource(BaseModel):
    """Knowledge-base snippet used to ground an answer."""

    source: str
    content: str
    score: float


class ChatResponse(BaseModel):
    """Response schema for chat messages."""

    answer: str
    sources: list[ChatSource] = Field(default_factory=list)
    diagram: DiagramReference | None = None
