"""Core domain layer: diagram synthesis, agents and exceptions."""
