from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class VideoInfo(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    duration: float | None = None
    size: int | None = None
    bitrate: int | None = None
    has_audio: bool
    has_video: bool
    audio_streams: list[dict[str, Any]] = []
    video_streams: list[dict[str, Any]] = []


class VideoInfoResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = True
    info: VideoInfo


class ErrorEnvelope(BaseModel):
    error: str
    details: str


class StatusResponse(BaseModel):
    message: str
    status: int


class HealthResponse(BaseModel):
    status: str
    ffmpeg: bool
    ffprobe: bool
