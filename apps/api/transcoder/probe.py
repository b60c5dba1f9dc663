"""Metadata probing and reduction to VideoInfo."""

from typing import Any

from schemas.media import VideoInfo
from storage.local import LocalStorage
from transcoder.engine import MediaEngine


def _as_float(value: Any) -> float | None:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _as_int(value: Any) -> int | None:
    number = _as_float(value)
    return int(number) if number is not None else None


def summarize_probe(probe: dict) -> VideoInfo:
    """Reduce ffprobe's format/streams JSON to a VideoInfo.

    ffprobe reports numbers as strings and omits ones it cannot determine;
    those come back as None.
    """
    fmt = probe.get("format") or {}
    streams = probe.get("streams") or []
    audio = [s for s in streams if s.get("codec_type") == "audio"]
    video = [s for s in streams if s.get("codec_type") == "video"]
    return VideoInfo(
        duration=_as_float(fmt.get("duration")),
        size=_as_int(fmt.get("size")),
        bitrate=_as_int(fmt.get("bit_rate")),
        has_audio=bool(audio),
        has_video=bool(video),
        audio_streams=audio,
        video_streams=video,
    )


async def probe_buffer(
    engine: MediaEngine, storage: LocalStorage, data: bytes, video_format: str
) -> VideoInfo:
    async with storage.scratch() as files:
        input_path = files.new_path("probe", video_format)
        await files.write(input_path, data)
        probe = await engine.probe(input_path)
    return summarize_probe(probe)
