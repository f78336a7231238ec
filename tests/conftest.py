"""
Shared test fixtures and configuration for entire test suite.

Provides: Temporary diagram store, sample components, fake chat models
Dependencies: pytest, langchain_core
System role: Test infrastructure and fixture management
"""

import json
from pathlib import Path

import pytest
from langchain_core.messages import AIMessage

from assistant.boundary.storage.diagram_store import DiagramStore
from assistant.models.diagram import DiagramComponents


class FakeChatModel:
    """Chat model stand-in returning queued replies (or raising queued exceptions)."""

    def __init__(self, *replies):
        self._replies = list(replies)
        self.calls = []

    async def ainvoke(self, messages, *args, **kwargs):
        self.calls.append(messages)
        reply = self._replies.pop(0) if len(self._replies) > 1 else self._replies[0]
        if isinstance(reply, BaseException):
            raise reply
        return AIMessage(content=reply)


@pytest.fixture
def diagram_store(tmp_path: Path) -> DiagramStore:
    """Diagram store rooted in a temporary directory."""
    return DiagramStore(tmp_path / "uploads")


@pytest.fixture
def sample_components() -> DiagramComponents:
    """Components with a hub, four spokes and two categories."""
    return DiagramComponents.model_validate(
        {
            "title": "Sample Migration",
            "nodes": [
                "RiverMeadow Platform",
                "Source Connector",
                "Replication Engine",
                "Target Adapter",
                "Audit Service",
            ],
            "connections": [
                {"from": "Source Connector", "to": "RiverMeadow Platform", "label": "Capture"},
                {"from": "RiverMeadow Platform", "to": "Replication Engine", "label": "Orchestrate"},
                {"from": "Replication Engine", "to": "Target Adapter", "label": "Deploy"},
                {"from": "Target Adapter", "to": "Audit Service"},
            ],
            "categories": {
                "Targets": ["AWS", "Azure", "GCP"],
                "Features": ["Incremental Sync", "Cutover"],
            },
        }
    )


@pytest.fixture
def extraction_json() -> str:
    """Well-formed extraction model output."""
    return json.dumps(
        {
            "title": "VPC Migration",
            "nodes": ["Migration Orchestrator", "RiverMeadow Platform", "EC2 Fleet", "RDS Cluster"],
            "connections": [
                {"from": "RiverMeadow Platform", "to": "EC2 Fleet", "label": "Provision"},
                {"from": "EC2 Fleet", "to": "RDS Cluster", "label": "Queries"},
            ],
            "categories": {"Services": ["VPC", "Subnets", "Security Groups"]},
        }
    )


@pytest.fixture
def fake_chat_model():
    """Factory for FakeChatModel."""
    return FakeChatModel
