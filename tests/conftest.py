# tests/conftest.py
from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch, tmp_path):
    """Fresh, env-driven settings for every test; nothing leaks from a local .env or shell."""
    from ffmeta.common import settings as s

    monkeypatch.chdir(tmp_path)
    for name in ("HOST", "PORT", "FFPROBE_BIN", "FFPROBE_PATH", "CACHE_BACKEND", "DATABASE_URL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("APP_ENV", "test")
    monkeypatch.setenv("CACHE_DIR", str(tmp_path / "cache"))
    s.get_settings.cache_clear()
    yield
    s.get_settings.cache_clear()


@pytest.fixture()
def simple_mp4_probe() -> dict:
    """ffprobe JSON for a 2 second 320x240 h264 + aac stereo file."""
    return {
        "format": {"duration": 2.0, "format_name": "mov,mp4"},
        "streams": [
            {"codec_type": "video", "codec_name": "h264", "index": 0, "width": 320, "height": 240},
            {
                "codec_type": "audio",
                "codec_name": "aac",
                "index": 1,
                "sample_rate": "44100",
                "channel_layout": "stereo",
            },
        ],
    }


@pytest.fixture()
def rich_mkv_probe() -> dict:
    """Interleaved categories, sentinels, dispositions, tags and a data stream."""
    return {
        "format": {"duration": "5025.421000", "format_name": "matroska,webm"},
        "streams": [
            {
                "index": 0,
                "codec_type": "video",
                "codec_name": "hevc",
                "width": 3840,
                "height": 2160,
                "bit_rate": "N/A",
                "avg_frame_rate": "24000/1001",
                "disposition": {"default": 1, "forced": 0},
                "tags": {"language": "und", "rotate": "90"},
            },
            {
                "index": 1,
                "codec_type": "audio",
                "codec_name": "eac3",
                "sample_rate": "48000",
                "channel_layout": "5.1(side)",
                "bit_rate": "640000",
                "disposition": {"default": 1, "forced": 0},
                "tags": {"language": "eng", "title": "Surround 5.1"},
            },
            {"index": 2, "codec_type": "data", "codec_name": "bin_data"},
            {
                "index": 3,
                "codec_type": "subtitle",
                "codec_name": "subrip",
                "duration": "N/A",
                "disposition": {"default": 0, "forced": 1},
                "tags": {"language": "ger", "title": "1984"},
            },
            {
                "index": 4,
                "codec_type": "audio",
                "codec_name": "aac",
                "sample_rate": "44100",
                "channel_layout": "stereo",
                "duration": "5025.400000",
                "tags": {"language": "fre"},
            },
            {
                "index": 5,
                "codec_type": "video",
                "codec_name": "mjpeg",
                "width": "N/A",
                "height": 0,
                "avg_frame_rate": "0/0",
                "disposition": {"default": 0, "attached_pic": 1},
            },
        ],
    }
