"""Async wrapper around the ffmpeg / ffprobe binaries.

One MediaEngine is built at startup from Settings and shared by all requests.
A semaphore bounds how many engine processes run at once, and every run is
killed if it outlives the configured timeout.
"""

import asyncio
import json
import logging
import shutil
from pathlib import Path

from transcoder.config import Settings, TranscodeProfile
from transcoder.errors import EngineInvocationError, EngineTimeout, ProbeError, TranscodeError

logger = logging.getLogger(__name__)

# Lines of stderr kept in error messages
STDERR_TAIL_LINES = 5


def _stderr_tail(stderr: bytes) -> str:
    lines = stderr.decode("utf-8", errors="replace").strip().splitlines()
    return "\n".join(lines[-STDERR_TAIL_LINES:])


class MediaEngine:
    def __init__(
        self,
        ffmpeg_path: str = "ffmpeg",
        ffprobe_path: str = "ffprobe",
        timeout: float = 300.0,
        max_concurrency: int = 4,
    ):
        self.ffmpeg_path = ffmpeg_path
        self.ffprobe_path = ffprobe_path
        self.timeout = timeout
        self._slots = asyncio.Semaphore(max_concurrency)

    @classmethod
    def from_settings(cls, settings: Settings) -> "MediaEngine":
        return cls(
            ffmpeg_path=settings.ffmpeg_path,
            ffprobe_path=settings.ffprobe_path,
            timeout=settings.engine_timeout,
            max_concurrency=settings.engine_concurrency,
        )

    def availability(self) -> dict[str, bool]:
        """Whether each configured binary resolves on this host."""
        return {
            "ffmpeg": shutil.which(self.ffmpeg_path) is not None,
            "ffprobe": shutil.which(self.ffprobe_path) is not None,
        }

    async def _run(self, binary: str, *args: str) -> tuple[int, bytes, bytes]:
        """Run one engine process to completion and return (rc, stdout, stderr)."""
        async with self._slots:
            logger.debug("Running %s %s", binary, " ".join(args))
            try:
                process = await asyncio.create_subprocess_exec(
                    binary,
                    *args,
                    stdout=asyncio.subprocess.PIPE,
                    stderr=asyncio.subprocess.PIPE,
                )
            except FileNotFoundError as exc:
                raise EngineInvocationError(f"{binary} executable not found") from exc
            except OSError as exc:
                raise EngineInvocationError(f"Failed to execute {binary}: {exc}") from exc

            try:
                stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=self.timeout)
            except asyncio.TimeoutError as exc:
                if process.returncode is None:
                    process.kill()
                await process.wait()
                raise EngineTimeout(f"{binary} did not finish within {self.timeout:g}s") from exc
            except asyncio.CancelledError:
                if process.returncode is None:
                    process.kill()
                await asyncio.shield(process.wait())
                raise

        return process.returncode or 0, stdout or b"", stderr or b""

    async def transcode(self, input_path: Path, output_path: Path, profile: TranscodeProfile) -> None:
        """Convert ``input_path`` into ``output_path`` using a fixed profile.

        Raises:
            TranscodeError: ffmpeg exited non-zero.
            EngineTimeout: ffmpeg ran longer than the configured timeout.
        """
        rc, _, stderr = await self._run(
            self.ffmpeg_path,
            "-hide_banner",
            "-loglevel", "error",
            "-y",
            "-i", str(input_path),
            *profile.args,
            str(output_path),
        )
        if rc != 0:
            raise TranscodeError(f"ffmpeg exited with code {rc}: {_stderr_tail(stderr)}")

    async def probe(self, input_path: Path) -> dict:
        """Return ffprobe's JSON description (format + streams) of a file."""
        rc, stdout, stderr = await self._run(
            self.ffprobe_path,
            "-v", "error",
            "-print_format", "json",
            "-show_format",
            "-show_streams",
            str(input_path),
        )
        if rc != 0:
            raise ProbeError(f"ffprobe exited with code {rc}: {_stderr_tail(stderr)}")
        try:
            return json.loads(stdout)
        except json.JSONDecodeError as exc:
            raise ProbeError(f"ffprobe returned invalid JSON: {exc}") from exc
