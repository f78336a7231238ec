"""Keyword intent detection for chat messages.

Three classifiers decide how a chat turn is handled:
- is_image_generation_request: broad check used by the chat flow
- is_diagram_generation_request: stricter check guarding the generate endpoint
- is_network_diagram_request: selects network shapes in the layout synthesizer

Dependencies: re
System role: Request routing for the diagram pipeline
"""

import logging
import re

logger = logging.getLogger(__name__)

IMAGE_KEYWORDS = ("diagram", "chart", "visual", "image", "picture", "draw")
IMAGE_CREATE_SUBJECTS = ("migration", "architecture", "infrastructure")

STRONG_DIAGRAM_KEYWORDS = (
    "generate diagram",
    "create diagram",
    "draw diagram",
    "make diagram",
    "build diagram",
    "produce diagram",
    "design diagram",
    "provide diagram",
    "diagram of",
    "diagram for",
    "diagram about",
)

DIAGRAM_TYPE_KEYWORDS = (
    "flowchart",
    "architecture diagram",
    "visual representation",
    "network diagram",
    "system diagram",
    "structure diagram",
    "organization diagram",
    "process flow",
    "workflow diagram",
    "organizational chart",
    "component diagram",
    "deployment diagram",
    "entity relationship",
    "data flow",
    "sequence diagram",
    "class diagram",
    "uml diagram",
    "migration diagram",
    "migration architecture",
    "cloud migration flow",
)

VISUAL_ACTION_KEYWORDS = (
    "visualize",
    "create a visual",
    "show me a diagram",
    "display diagram",
    "diagram showing",
)

STRUCTURE_TERMS = ("structure", "organization", "hierarchy", "layout", "architecture")
PRIMARY_ENTITY_TERMS = ("structure", "architecture", "application", "system", "software")

# Articles between the verb and "diagram" ("create a diagram") still count.
_ARTICLES = re.compile(r"\b(a|an|the)\s+")

NETWORK_PHRASES = (
    "network diagram",
    "network topology",
    "network architecture",
    "network layout",
    "network map",
)
NETWORK_TERMS = (
    "vpc",
    "vnet",
    "subnet",
    "subnets",
    "firewall",
    "router",
    "routers",
    "switch",
    "lan",
    "wan",
    "vpn",
    "dmz",
    "load balancer",
    "gateway",
)


def _normalize(message: str) -> str:
    return " ".join(message.lower().split())


def _has_word(text: str, term: str) -> bool:
    return re.search(rf"\b{re.escape(term)}\b", text) is not None


def is_image_generation_request(prompt: str) -> bool:
    """Return True when the prompt asks for any kind of visual output."""
    text = _normalize(prompt)
    if any(keyword in text for keyword in IMAGE_KEYWORDS):
        return True
    return _has_word(text, "create") and any(subject in text for subject in IMAGE_CREATE_SUBJECTS)


def is_diagram_generation_request(message: str, primary_entity: str = "rivermeadow") -> bool:
    """Return True when the message explicitly asks for a diagram to be generated.

    Stricter than ``is_image_generation_request``: mentioning a chart in
    passing is not enough, the message must name a diagram action or type.
    """
    text = _normalize(message)
    compact = _ARTICLES.sub("", text)

    for keyword in STRONG_DIAGRAM_KEYWORDS:
        if keyword in compact:
            logger.debug(f"{__name__}:is_diagram_generation_request - strong keyword '{keyword}'")
            return True

    has_diagram_word = any(word in text for word in ("diagram", "chart", "flowchart", "visual"))
    if has_diagram_word:
        for keyword in DIAGRAM_TYPE_KEYWORDS + VISUAL_ACTION_KEYWORDS:
            if keyword in text:
                logger.debug(f"{__name__}:is_diagram_generation_request - keyword '{keyword}'")
                return True

    if text.startswith(("generate", "create")) and any(term in text for term in STRUCTURE_TERMS):
        return True

    if "application" in text and "structure" in text:
        return True

    return primary_entity in text and any(term in text for term in PRIMARY_ENTITY_TERMS)


def is_network_diagram_request(prompt: str) -> bool:
    """Return True when the prompt is about network topology.

    A network request switches the layout synthesizer to the network shape
    palette (servers, routers, firewalls, databases, clouds).
    """
    text = _normalize(prompt)
    if any(phrase in text for phrase in NETWORK_PHRASES):
        return True
    return any(_has_word(text, term) for term in NETWORK_TERMS)
