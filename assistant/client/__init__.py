"""HTTP client for downloading rendered diagrams."""

from .diagram_download import DiagramDownloadClient, DownloadOutcome

__all__ = ["DiagramDownloadClient", "DownloadOutcome"]
