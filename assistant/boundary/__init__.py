"""Boundary layer: vector store, file storage and external render processes."""
