"""Shared fixtures for the media gateway tests.

Provides:
- A fake media engine that records calls instead of spawning ffmpeg
- Scratch storage rooted in a per-test temporary directory
- A TestClient wired to both through dependency overrides
"""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from main import app
from routers.common import get_engine, get_storage
from storage.local import LocalStorage
from transcoder.config import TranscodeProfile
from transcoder.errors import ProbeError, TranscodeError

SAMPLE_PROBE = {
    "format": {
        "filename": "probe.mp4",
        "format_name": "mov,mp4,m4a,3gp,3g2,mj2",
        "duration": "12.500000",
        "size": "1048576",
        "bit_rate": "671088",
    },
    "streams": [
        {"index": 0, "codec_type": "video", "codec_name": "h264", "width": 1280, "height": 720},
        {"index": 1, "codec_type": "audio", "codec_name": "aac", "channels": 2, "sample_rate": "44100"},
    ],
}


class FakeEngine:
    """Stands in for MediaEngine; transcodes by prefixing the profile name."""

    def __init__(self):
        self.calls: list[dict] = []
        self.fail_with: Exception | None = None
        self.probe_result: dict = SAMPLE_PROBE

    async def transcode(self, input_path: Path, output_path: Path, profile: TranscodeProfile) -> None:
        self.calls.append({"op": "transcode", "input": input_path, "output": output_path, "profile": profile})
        assert input_path.exists()
        if self.fail_with is not None:
            raise self.fail_with
        output_path.write_bytes(profile.name.encode() + b":" + input_path.read_bytes())

    async def probe(self, input_path: Path) -> dict:
        self.calls.append({"op": "probe", "input": input_path})
        assert input_path.exists()
        if self.fail_with is not None:
            raise self.fail_with
        return self.probe_result

    def availability(self) -> dict[str, bool]:
        return {"ffmpeg": True, "ffprobe": True}


@pytest.fixture
def fake_engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture
def scratch_dir(tmp_path: Path) -> Path:
    return tmp_path / "scratch"


@pytest.fixture
def storage(scratch_dir: Path) -> LocalStorage:
    return LocalStorage(scratch_dir)


@pytest.fixture
def client(fake_engine: FakeEngine, storage: LocalStorage):
    app.dependency_overrides[get_engine] = lambda: fake_engine
    app.dependency_overrides[get_storage] = lambda: storage
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def transcode_failure() -> TranscodeError:
    return TranscodeError("ffmpeg exited with code 1: input.wav: Invalid data found when processing input")


@pytest.fixture
def probe_failure() -> ProbeError:
    return ProbeError("ffprobe exited with code 1: probe.mp4: Invalid data found when processing input")
