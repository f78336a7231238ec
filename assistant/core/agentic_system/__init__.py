"""LLM agents: chat answerer and diagram component extraction."""
