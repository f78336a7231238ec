"""Diagram component extraction prompt templates.

Two prompts, one per LLM call:
1. Enrichment: broad technical explanation of the requested topic
2. Extraction: strict JSON diagram components built from that explanation

Both carry a per-request uniqueness token so similar requests do not get
cached or repeated answers.

Dependencies: langchain_core.prompts
System role: Prompt templates for the component extractor
"""

from langchain_core.prompts import ChatPromptTemplate

ENRICHMENT_SYSTEM_PROMPT = """You are a senior cloud migration architect at {organization} with expertise in OS migrations, cloud infrastructure, and technical diagrams.

Provide a HIGHLY DETAILED, TECHNICAL explanation of the specific migration topic requested by the user.
Your response should:

1. Be highly specific to the exact type of migration or diagram the user requested
2. Include 8-12 specific technical components, processes, or technologies involved
3. Use precise technical terminology relevant to the specific request
4. Describe relationships and data flows between components
5. Include numerical specifications when relevant (times, sizes, capacities)
6. Mention specific OS or cloud provider details when the request names them
7. Elaborate on implementation details (protocols, services, APIs)
8. Vary your content significantly between requests

This information will be used to generate a visual diagram, so include a wide variety of elements that make an informative visualization."""

ENRICHMENT_PROMPT = ChatPromptTemplate.from_messages([
    ("system", ENRICHMENT_SYSTEM_PROMPT),
    (
        "human",
        """User's diagram request: "{prompt}"

Context information:
{context}

Create a unique technical explanation for request ID {request_token}.
Focus on specific components, processes, and technical implementations.""",
    ),
])

EXTRACTION_SYSTEM_PROMPT = """You are a cloud architecture expert designing a unique diagram about {organization}'s cloud migration services, tailored to the user's request.

Return ONLY a JSON object with exactly this structure:
{{
  "title": "The main title for the diagram",
  "nodes": ["Node1", "Node2", "Node3"],
  "connections": [
    {{"from": "Node1", "to": "Node2", "label": "detailed connection label"}},
    {{"from": "Node2", "to": "Node3", "label": "detailed connection label"}}
  ],
  "categories": {{
    "Category1": ["Item1", "Item2", "Item3"],
    "Category2": ["Item1", "Item2"]
  }}
}}

Guidelines:
1. Use specific, technical terminology that matches the request.
2. For OS migration requests focus on OS-specific components; for cloud requests on cloud architecture; for process requests on workflow steps.
3. Always include "{primary_node}" as the FIRST node.
4. Include 4-7 nodes with specific, technical names.
5. Create 4-8 connections. Every "from" and "to" must be copied exactly from "nodes".
6. Connection labels are 15-25 characters and describe what flows along the edge.
7. Include 2-4 categories with 4-6 items each, specific to this request.
8. Do not use generic names like "Source" or "Target" alone.

Return ONLY the JSON object, no markdown formatting, no extra text."""

EXTRACTION_PROMPT = ChatPromptTemplate.from_messages([
    ("system", EXTRACTION_SYSTEM_PROMPT),
    (
        "human",
        """User's diagram request: "{prompt}"

Context information:
{context}

This is request {request_token}; the diagram must not repeat any previous structure.
Provide the JSON structure for the diagram.""",
    ),
])


def get_enrichment_prompt() -> ChatPromptTemplate:
    """Get the technical enrichment prompt template."""
    return ENRICHMENT_PROMPT


def get_extraction_prompt() -> ChatPromptTemplate:
    """Get the JSON component extraction prompt template."""
    return EXTRACTION_PROMPT
