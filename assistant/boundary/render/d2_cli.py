"""
D2 CLI render backend.

Runs the ``d2`` executable in an isolated child process per render, with
theme, layout and padding flags and a bounded timeout.

Dependencies: asyncio, shutil, tempfile
System role: Subprocess boundary for D2 diagram rendering
"""

import asyncio
import logging
import shutil
import tempfile
from pathlib import Path

from assistant.core.exceptions import RenderError

logger = logging.getLogger(__name__)


class D2Renderer:
    """Render D2 scripts with the D2 command-line tool."""

    def __init__(
        self,
        binary: str = "d2",
        theme: int = 3,
        layout: str = "dagre",
        pad: int = 30,
        timeout_seconds: float = 15.0,
    ) -> None:
        """
        Initialize renderer.

        Args:
            binary: Executable name or path
            theme: D2 theme ID
            layout: D2 layout engine (dagre, elk)
            pad: Padding around the rendered diagram in pixels
            timeout_seconds: Kill the process after this many seconds
        """
        self._binary = binary
        self._theme = theme
        self._layout = layout
        self._pad = pad
        self._timeout = timeout_seconds

    def build_command(self, input_path: Path, output_path: Path) -> list[str]:
        """Command line for one render."""
        return [
            self._binary,
            str(input_path),
            str(output_path),
            f"--theme={self._theme}",
            f"--layout={self._layout}",
            f"--pad={self._pad}",
        ]

    async def render(self, script: str, output_format: str = "png") -> bytes:
        """
        Render a D2 script.

        Args:
            script: D2 source
            output_format: ``png`` or ``svg``

        Returns:
            bytes: Rendered output file contents

        Raises:
            RenderError: If the binary is missing, exits non-zero, times out
                or produces no output
        """
        if output_format not in ("png", "svg"):
            raise RenderError(f"Unsupported D2 output format: {output_format}", backend="d2")

        executable = shutil.which(self._binary)
        if executable is None:
            raise RenderError(f"D2 executable not found: {self._binary}", backend="d2")

        logger.info(f"{__name__}:render - START format={output_format} script_len={len(script)}")

        with tempfile.TemporaryDirectory(prefix="d2-render-") as workdir:
            input_path = Path(workdir) / "diagram.d2"
            output_path = Path(workdir) / f"diagram.{output_format}"
            input_path.write_text(script, encoding="utf-8")

            command = self.build_command(input_path, output_path)
            command[0] = executable
            process = await asyncio.create_subprocess_exec(
                *command,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
            try:
                _, stderr = await asyncio.wait_for(process.communicate(), timeout=self._timeout)
            except asyncio.TimeoutError as e:
                process.kill()
                await process.wait()
                raise RenderError(
                    f"D2 render timed out after {self._timeout}s",
                    backend="d2",
                ) from e

            if process.returncode != 0:
                message = (stderr or b"").decode("utf-8", errors="replace").strip()
                raise RenderError(
                    f"D2 exited with code {process.returncode}: {message or 'no error output'}",
                    backend="d2",
                    details={"returncode": process.returncode},
                )

            if not output_path.exists() or output_path.stat().st_size == 0:
                raise RenderError("D2 produced no output file", backend="d2")

            content = output_path.read_bytes()

        logger.info(f"{__name__}:render - END bytes={len(content)}")
        return content
