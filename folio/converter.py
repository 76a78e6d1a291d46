"""Document body conversion for Folio.

Bodies are converted to HTML by pandoc, run once per document as a blocking
subprocess. The body is written to pandoc's stdin and the complete HTML is
read back from stdout; nothing is streamed and there is no timeout or retry.

Key classes:
- PandocConverter: Runs pandoc for a given source format.
- ConversionError: Raised when pandoc is missing or exits non-zero.
"""

from __future__ import annotations

import subprocess
from pathlib import Path

from .executables import find_executable
from .logging import get_logger

logger = get_logger("converter")


class ConversionError(Exception):
    """Raised when a document body cannot be converted to HTML.

    Attributes:
        stderr: Error output captured from the converter, if any.
    """

    def __init__(self, message: str, stderr: str = ""):
        self.stderr = stderr
        super().__init__(message)


class PandocConverter:
    """Converts document bodies to HTML by invoking pandoc.

    Attributes:
        executable: Name or path of the pandoc binary.
        project_root: Optional project root for local executable lookup.
    """

    def __init__(self, executable: str = "pandoc", project_root: Path | None = None):
        self.executable = executable
        self.project_root = project_root

    def command(self, source_format: str) -> list[str]:
        """Return the pandoc command line for a source format."""
        binary = find_executable(self.executable, self.project_root)
        if binary is None:
            raise ConversionError(
                f"Document converter '{self.executable}' not found on PATH"
            )
        return [binary, f"--from={source_format}", "--to=html"]

    def convert(self, body: str, source_format: str) -> str:
        """Convert a document body to HTML.

        Args:
            body: Document body in the source markup.
            source_format: Pandoc reader name (e.g. 'org', 'markdown').

        Returns:
            The HTML produced by pandoc.

        Raises:
            ConversionError: If pandoc is unavailable or fails.
        """
        cmd = self.command(source_format)
        logger.debug("Running %s", " ".join(cmd))
        result = subprocess.run(
            cmd,
            input=body,
            capture_output=True,
            text=True,
            encoding="utf-8",
        )
        if result.returncode != 0:
            stderr = (result.stderr or "").strip()
            raise ConversionError(
                f"{self.executable} exited with status {result.returncode}: {stderr}",
                stderr,
            )
        return result.stdout
