"""Audio conversion endpoints."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response

from routers.common import error_response, get_engine, get_storage, read_body
from storage.local import LocalStorage
from transcoder.config import AUDIO_MAX_BODY, MONO_WAV, OGG_CONTENT_TYPES, OPUS_OGG, WAV_CONTENT_TYPES
from transcoder.convert import convert_to_mono_wav, convert_to_opus_ogg
from transcoder.engine import MediaEngine

router = APIRouter(tags=["audio"])


@router.post("/convert")
async def convert_wav(
    request: Request,
    engine: MediaEngine = Depends(get_engine),
    storage: LocalStorage = Depends(get_storage),
):
    """WAV in, mono 16-bit PCM WAV out."""
    try:
        data = await read_body(request, AUDIO_MAX_BODY, WAV_CONTENT_TYPES)
        mono = await convert_to_mono_wav(engine, storage, data)
    except Exception as exc:
        return error_response("WAV conversion failed", exc)
    return Response(content=mono, media_type=MONO_WAV.media_type)


@router.post("/convert-to-opus")
async def convert_ogg(
    request: Request,
    engine: MediaEngine = Depends(get_engine),
    storage: LocalStorage = Depends(get_storage),
):
    """OGG/Vorbis in, mono 48 kHz Opus-in-OGG out."""
    try:
        data = await read_body(request, AUDIO_MAX_BODY, OGG_CONTENT_TYPES)
        opus = await convert_to_opus_ogg(engine, storage, data)
    except Exception as exc:
        return error_response("OGG conversion failed", exc)
    return Response(content=opus, media_type=OPUS_OGG.media_type)
