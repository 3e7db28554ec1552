"""Diagnostic artifact persistence.

Failed comparisons write the actual capture to an artifact directory that
lives outside the source tree, so it can be collected by CI and diffed by a
human against the reference image.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from rich.console import Console

console = Console()


class ArtifactSink:
    """Writes artifact files under *directory*, creating it on first use."""

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    def path_for(self, filename: str) -> Path:
        name = Path(filename).name
        if not name or name != filename:
            raise ValueError(f"Artifact name must be a plain file name: {filename!r}")
        return self.directory / name

    async def persist(self, filename: str, data: bytes) -> Path:
        """Write *data* to ``<directory>/<filename>`` and return the path.

        The write runs in the default executor so the event loop is not
        blocked on disk I/O.
        """
        target = self.path_for(filename)
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._write, target, data)
        console.print(f"[dim]Wrote artifact {target}[/dim]")
        return target

    @staticmethod
    def _write(target: Path, data: bytes) -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)
