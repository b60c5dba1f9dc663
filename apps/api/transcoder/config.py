"""Engine profiles, request limits and runtime settings.

Profiles are fixed: callers never choose codecs, channels or sample rates.
Runtime settings come from the environment (optionally a .env file loaded by
main.py) and are threaded into the engine explicitly.
"""

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

MB = 1024 * 1024

# Per-route body ceilings
AUDIO_MAX_BODY = 50 * MB
VIDEO_MAX_BODY = 100 * MB

# Route-scoped body types
WAV_CONTENT_TYPES = ("audio/wav", "audio/x-wav", "audio/wave")
OGG_CONTENT_TYPES = ("audio/ogg", "application/ogg")

# Checked in order, first fragment found in the Content-Type wins
VIDEO_MIME_FRAGMENTS: list[tuple[str, str]] = [
    ("video/mp4", "mp4"),
    ("video/avi", "avi"),
    ("video/x-msvideo", "avi"),
    ("video/quicktime", "mov"),
    ("video/x-matroska", "mkv"),
    ("video/webm", "webm"),
]
DEFAULT_VIDEO_FORMAT = "mp4"

DEFAULT_ENGINE_TIMEOUT = 300.0
DEFAULT_ENGINE_CONCURRENCY = 4
DEFAULT_PORT = 5000


@dataclass(frozen=True)
class TranscodeProfile:
    name: str
    output_ext: str
    media_type: str
    args: tuple[str, ...]


MONO_WAV = TranscodeProfile(
    name="mono_wav",
    output_ext="wav",
    media_type="audio/wav",
    args=("-ac", "1", "-c:a", "pcm_s16le"),
)

OPUS_OGG = TranscodeProfile(
    name="opus_ogg",
    output_ext="ogg",
    media_type="audio/ogg",
    args=("-c:a", "libopus", "-ac", "1", "-ar", "48000", "-f", "ogg"),
)

SPEECH_WAV = TranscodeProfile(
    name="speech_wav",
    output_ext="wav",
    media_type="audio/wav",
    args=("-vn", "-ac", "1", "-c:a", "pcm_s16le", "-ar", "16000"),
)


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    ffmpeg_path: str = "ffmpeg"
    ffprobe_path: str = "ffprobe"
    engine_timeout: float = Field(default=DEFAULT_ENGINE_TIMEOUT, gt=0)
    engine_concurrency: int = Field(default=DEFAULT_ENGINE_CONCURRENCY, ge=1)
    tmp_dir: Path = Field(default_factory=lambda: Path(tempfile.gettempdir()))
    host: str = "0.0.0.0"
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables, skipping unset ones."""
        env_map = {
            "ffmpeg_path": "FFMPEG_PATH",
            "ffprobe_path": "FFPROBE_PATH",
            "engine_timeout": "MEDIA_ENGINE_TIMEOUT",
            "engine_concurrency": "MEDIA_ENGINE_CONCURRENCY",
            "tmp_dir": "MEDIA_TMP_DIR",
            "host": "HOST",
            "port": "PORT",
            "log_level": "LOG_LEVEL",
        }
        values = {
            field: os.environ[var]
            for field, var in env_map.items()
            if os.environ.get(var)
        }
        return cls(**values)
