"""
Media gateway: FastAPI app that runs raw media uploads through ffmpeg.

  GET  /                 Static status payload
  GET  /health           Whether ffmpeg / ffprobe are available
  POST /convert          WAV → mono PCM16 WAV
  POST /convert-to-opus  OGG/Vorbis → mono 48 kHz Opus-in-OGG
  POST /extract-audio    Video → mono 16 kHz PCM16 WAV
  POST /video-info       Video → duration, size, bitrate and stream summary
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from routers import audio, video
from routers.common import get_engine
from schemas.media import HealthResponse, StatusResponse
from storage.local import LocalStorage
from transcoder.config import Settings
from transcoder.engine import MediaEngine

# Load .env from repo root (two levels up from apps/api/)
_root = Path(__file__).resolve().parent.parent.parent
load_dotenv(_root / ".env")

settings = Settings.from_env()

logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


# ── Lifespan: build the engine and scratch storage ───────────────────────────
@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.engine = MediaEngine.from_settings(settings)
    app.state.storage = LocalStorage(settings.tmp_dir)
    logger.info(
        "Media gateway running at http://%s:%d (ffmpeg=%s, ffprobe=%s, concurrency=%d)",
        settings.host, settings.port, settings.ffmpeg_path, settings.ffprobe_path,
        settings.engine_concurrency,
    )
    missing = [name for name, ok in app.state.engine.availability().items() if not ok]
    if missing:
        logger.warning("Engine binaries not found: %s; media routes will fail", ", ".join(missing))
    yield


app = FastAPI(title="Media Gateway", lifespan=lifespan)

# ── CORS: preflight handling plus headers on every response ──────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)


@app.middleware("http")
async def add_cors_headers(request: Request, call_next):
    response = await call_next(request)
    response.headers.update(CORS_HEADERS)
    return response


app.include_router(audio.router)
app.include_router(video.router)


@app.get("/", response_model=StatusResponse)
async def root():
    return StatusResponse(message="Media gateway is running", status=200)


@app.get("/health", response_model=HealthResponse)
async def health(engine: MediaEngine = Depends(get_engine)):
    available = engine.availability()
    status = "ok" if all(available.values()) else "degraded"
    return HealthResponse(status=status, **available)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)
