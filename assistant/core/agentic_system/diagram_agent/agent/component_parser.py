"""Parsing of LLM extraction output into DiagramComponents.

Dependencies: json, pydantic, assistant.models.diagram
System role: Validation gate between the extraction LLM and the layout synthesizer
"""

import json
import re

from pydantic import ValidationError as PydanticValidationError

from assistant.core.exceptions import ExtractionError
from assistant.models.diagram import DiagramComponents

_FENCE_RE = re.compile(r"^\s*```(?:json)?\s*|\s*```\s*$", re.IGNORECASE)


def message_text(message) -> str:
    """Plain text of a chat model reply (string or list of content parts)."""
    content = getattr(message, "content", message)
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type") == "text":
                parts.append(part.get("text", ""))
        return "".join(parts)
    return str(content or "")


def parse_components(text: str, primary_node: str) -> DiagramComponents:
    """
    Parse and validate extraction output.

    Args:
        text: Raw model output, optionally wrapped in a code fence
        primary_node: Node that must be present; prepended when missing

    Returns:
        DiagramComponents: Validated components with ``primary_node`` first

    Raises:
        ExtractionError: On invalid JSON, a structure missing required keys or
            no non-empty category
    """
    cleaned = _FENCE_RE.sub("", text.strip())
    try:
        payload = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise ExtractionError(f"Extraction output is not valid JSON: {e}", stage="extraction") from e

    if not isinstance(payload, dict):
        raise ExtractionError("Extraction output is not a JSON object", stage="extraction")

    missing = [key for key in ("title", "nodes", "connections", "categories") if key not in payload]
    if missing:
        raise ExtractionError(
            f"Extraction output missing keys: {missing}",
            stage="extraction",
            details={"missing": missing},
        )
    if not isinstance(payload["nodes"], list) or not isinstance(payload["connections"], list):
        raise ExtractionError("nodes and connections must be lists", stage="extraction")
    if not isinstance(payload["categories"], dict):
        raise ExtractionError("categories must be an object", stage="extraction")

    try:
        components = DiagramComponents.model_validate(payload)
    except PydanticValidationError as e:
        raise ExtractionError(f"Extraction output failed validation: {e}", stage="extraction") from e

    components.categories = {name: items for name, items in components.categories.items() if items}
    if not components.categories:
        raise ExtractionError("Extraction output has no non-empty categories", stage="extraction")

    # Primary entity leads, whatever position the model put it in
    nodes = [node for node in components.nodes if node.casefold() != primary_node.casefold()]
    components.nodes = [primary_node, *nodes]
    return components
