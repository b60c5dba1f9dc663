"""Video endpoints: audio extraction and metadata probing.

Both accept any Content-Type; the container is guessed from it and defaults
to mp4.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, Response

from routers.common import error_response, get_engine, get_storage, read_body
from schemas.media import VideoInfoResponse
from storage.local import LocalStorage
from transcoder.config import SPEECH_WAV, VIDEO_MAX_BODY
from transcoder.convert import extract_audio
from transcoder.engine import MediaEngine
from transcoder.formats import detect_video_format
from transcoder.probe import probe_buffer

router = APIRouter(tags=["video"])


@router.post("/extract-audio")
async def extract_audio_track(
    request: Request,
    engine: MediaEngine = Depends(get_engine),
    storage: LocalStorage = Depends(get_storage),
):
    video_format = detect_video_format(request.headers.get("content-type"))
    try:
        data = await read_body(request, VIDEO_MAX_BODY)
        wav = await extract_audio(engine, storage, data, video_format)
    except Exception as exc:
        return error_response("Audio extraction failed", exc)
    return Response(content=wav, media_type=SPEECH_WAV.media_type)


@router.post("/video-info")
async def video_info(
    request: Request,
    engine: MediaEngine = Depends(get_engine),
    storage: LocalStorage = Depends(get_storage),
):
    video_format = detect_video_format(request.headers.get("content-type"))
    try:
        data = await read_body(request, VIDEO_MAX_BODY)
        info = await probe_buffer(engine, storage, data, video_format)
    except Exception as exc:
        return error_response("Failed to get video info", exc)
    return JSONResponse(content=VideoInfoResponse(info=info).model_dump(by_alias=True))
