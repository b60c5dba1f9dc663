"""Tests for probe reduction and the probe invoker."""

import pytest

from conftest import SAMPLE_PROBE
from transcoder.probe import probe_buffer, summarize_probe


class TestSummarizeProbe:
    def test_audio_and_video(self):
        info = summarize_probe(SAMPLE_PROBE)

        assert info.duration == 12.5
        assert info.size == 1048576
        assert info.bitrate == 671088
        assert info.has_audio is True
        assert info.has_video is True
        assert len(info.audio_streams) == 1
        assert len(info.video_streams) == 1
        assert info.audio_streams[0]["codec_name"] == "aac"

    def test_stream_order_preserved(self):
        probe = {
            "format": {},
            "streams": [
                {"index": 0, "codec_type": "audio", "codec_name": "opus"},
                {"index": 1, "codec_type": "subtitle", "codec_name": "webvtt"},
                {"index": 2, "codec_type": "audio", "codec_name": "aac"},
            ],
        }

        info = summarize_probe(probe)

        assert [s["index"] for s in info.audio_streams] == [0, 2]
        assert info.has_video is False
        assert info.video_streams == []

    def test_missing_format_fields_are_none(self):
        info = summarize_probe({"format": {"duration": "N/A"}, "streams": []})

        assert info.duration is None
        assert info.size is None
        assert info.bitrate is None
        assert info.has_audio is False

    def test_serializes_with_camel_case_keys(self):
        dumped = summarize_probe(SAMPLE_PROBE).model_dump(by_alias=True)

        assert set(dumped) == {
            "duration", "size", "bitrate", "hasAudio", "hasVideo", "audioStreams", "videoStreams",
        }


class TestProbeBuffer:
    @pytest.mark.asyncio
    async def test_probes_temp_file_with_detected_extension(self, fake_engine, storage, scratch_dir):
        info = await probe_buffer(fake_engine, storage, b"\x1aE\xdf\xa3", "mkv")

        assert info.has_video is True
        assert fake_engine.calls[0]["input"].suffix == ".mkv"
        assert list(scratch_dir.iterdir()) == []

    @pytest.mark.asyncio
    async def test_temp_file_removed_when_probe_fails(self, fake_engine, storage, scratch_dir, probe_failure):
        fake_engine.fail_with = probe_failure

        with pytest.raises(type(probe_failure)):
            await probe_buffer(fake_engine, storage, b"garbage", "mp4")

        assert list(scratch_dir.iterdir()) == []
