"""
Generated diagram file store.

Append-only directory of draw.io documents. Names combine a millisecond
timestamp with a random base-36 suffix, so concurrent writers do not
collide. Every lookup validates the requested name before touching disk.

Dependencies: pathlib, secrets
System role: Persistence boundary for diagram description documents
"""

import logging
import re
import secrets
import string
import time
from pathlib import Path

from assistant.core.exceptions import DiagramNotFoundError, InvalidDiagramFilenameError

logger = logging.getLogger(__name__)

DIAGRAM_SUFFIX = ".drawio"
_ALPHABET = string.digits + string.ascii_lowercase
_SAFE_NAME = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.\-]*$")


class DiagramStore:
    """Store and look up diagram description documents."""

    def __init__(self, root_dir: str | Path = "uploads") -> None:
        """
        Initialize store.

        Args:
            root_dir: Root upload directory; files live in ``<root_dir>/generated``
        """
        self._dir = Path(root_dir) / "generated"
        self._dir.mkdir(parents=True, exist_ok=True)

    @property
    def directory(self) -> Path:
        return self._dir

    @staticmethod
    def new_filename(timestamp_ms: int | None = None) -> str:
        """``diagram_<unix-ms>-<6 random base36>.drawio``"""
        if timestamp_ms is None:
            timestamp_ms = int(time.time() * 1000)
        suffix = "".join(secrets.choice(_ALPHABET) for _ in range(6))
        return f"diagram_{timestamp_ms}-{suffix}{DIAGRAM_SUFFIX}"

    @staticmethod
    def validate_filename(filename: str) -> str:
        """
        Reject names that could escape the generated directory.

        Accepts a stem or a ``.drawio`` name and returns the ``.drawio`` name.

        Raises:
            InvalidDiagramFilenameError: On path separators, ``..`` or other
                unsafe characters
        """
        if (
            not filename
            or "/" in filename
            or "\\" in filename
            or ".." in filename
            or not _SAFE_NAME.match(filename)
        ):
            raise InvalidDiagramFilenameError(filename)
        if not filename.endswith(DIAGRAM_SUFFIX):
            filename = f"{filename}{DIAGRAM_SUFFIX}"
        return filename

    def save(self, xml: str) -> tuple[str, Path]:
        """
        Write a new document under a fresh collision-resistant name.

        Returns:
            tuple[str, Path]: File name and full path
        """
        while True:
            filename = self.new_filename()
            path = self._dir / filename
            try:
                # Exclusive create so an existing document is never overwritten
                with path.open("x", encoding="utf-8") as handle:
                    handle.write(xml)
                break
            except FileExistsError:
                continue
        logger.info(f"{__name__}:save - Wrote {filename} bytes={len(xml)}")
        return filename, path

    def path_for(self, filename: str) -> Path:
        """
        Resolve a requested name to an existing document path.

        Raises:
            InvalidDiagramFilenameError: If the name is unsafe
            DiagramNotFoundError: If no such document exists
        """
        name = self.validate_filename(filename)
        path = self._dir / name
        if not path.is_file():
            raise DiagramNotFoundError(filename)
        return path

    def load(self, filename: str) -> str:
        """Read a stored document."""
        return self.path_for(filename).read_text(encoding="utf-8")
