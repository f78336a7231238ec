"""Prompts and state schema for the component extraction graph."""
