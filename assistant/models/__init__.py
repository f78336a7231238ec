"""Pydantic domain models and API contracts."""
