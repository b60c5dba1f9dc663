"""Scratch files on local disk for engine input and output.

Every invocation gets its own ScratchFiles; paths are uuid-named so
concurrent requests never share one, and all of them are reaped when the
invocation ends.
"""

import asyncio
import logging
import tempfile
import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from transcoder.errors import FilesystemError

logger = logging.getLogger(__name__)

FILE_PREFIX = "media-gw"


class ScratchFiles:
    """Paths handed out during one invocation."""

    def __init__(self, base: Path):
        self.base = base
        self.paths: list[Path] = []

    def new_path(self, role: str, ext: str) -> Path:
        path = self.base / f"{FILE_PREFIX}-{role}-{uuid.uuid4().hex}.{ext}"
        self.paths.append(path)
        return path

    async def write(self, path: Path, data: bytes) -> None:
        try:
            await asyncio.to_thread(path.write_bytes, data)
        except OSError as exc:
            raise FilesystemError(f"Could not write temp file {path.name}: {exc}") from exc

    async def read(self, path: Path) -> bytes:
        try:
            return await asyncio.to_thread(path.read_bytes)
        except OSError as exc:
            raise FilesystemError(f"Could not read temp file {path.name}: {exc}") from exc

    async def reap(self) -> None:
        """Delete every handed-out path that still exists."""
        for path in self.paths:
            try:
                await asyncio.to_thread(path.unlink, missing_ok=True)
            except OSError as exc:
                logger.warning("Failed to delete temp file %s: %s", path, exc)
        self.paths.clear()


class LocalStorage:
    def __init__(self, base_dir: Path | None = None):
        self.base = base_dir or Path(tempfile.gettempdir())
        self.base.mkdir(parents=True, exist_ok=True)

    @asynccontextmanager
    async def scratch(self) -> AsyncIterator[ScratchFiles]:
        files = ScratchFiles(self.base)
        try:
            yield files
        finally:
            await files.reap()
