"""Buffer-in, buffer-out conversions through the media engine."""

import logging

from storage.local import LocalStorage
from transcoder.config import MONO_WAV, OPUS_OGG, SPEECH_WAV, TranscodeProfile
from transcoder.engine import MediaEngine

logger = logging.getLogger(__name__)


async def transcode_buffer(
    engine: MediaEngine,
    storage: LocalStorage,
    data: bytes,
    input_ext: str,
    profile: TranscodeProfile,
) -> bytes:
    """Write ``data`` to disk, run ``profile`` on it and return the output bytes.

    Both scratch files are deleted before returning, whether the engine
    succeeded or not.
    """
    async with storage.scratch() as files:
        input_path = files.new_path("input", input_ext)
        output_path = files.new_path("output", profile.output_ext)

        await files.write(input_path, data)
        await engine.transcode(input_path, output_path, profile)
        result = await files.read(output_path)

    logger.info("%s: %d bytes in, %d bytes out", profile.name, len(data), len(result))
    return result


async def convert_to_mono_wav(engine: MediaEngine, storage: LocalStorage, data: bytes) -> bytes:
    return await transcode_buffer(engine, storage, data, "wav", MONO_WAV)


async def convert_to_opus_ogg(engine: MediaEngine, storage: LocalStorage, data: bytes) -> bytes:
    return await transcode_buffer(engine, storage, data, "ogg", OPUS_OGG)


async def extract_audio(
    engine: MediaEngine, storage: LocalStorage, data: bytes, video_format: str
) -> bytes:
    """Pull the audio track out of a video as 16 kHz mono PCM WAV."""
    return await transcode_buffer(engine, storage, data, video_format, SPEECH_WAV)
