# ffmeta/services/api/manifest.py
from __future__ import annotations

from ffmeta.domain.policies.projector import DURATION_KEY, FORMAT_NAME_KEY, STREAM_KEY_PREFIX
from ffmeta.services.schemas.plugin import PluginManifest, SchemaField

VERSION = "1.0.0"

MANIFEST = PluginManifest(
    id="ffmpeg",
    name="FFmpeg Metadata",
    version=VERSION,
    description="Extracts video/audio/subtitle stream metadata using FFprobe",
    author="MetaMesh",
    dependencies=["file-info"],
    priority=15,
    color="#4CAF50",
    default_queue="fast",
    timeout=60000,
    schema={
        DURATION_KEY: SchemaField(label="Duration"),
        FORMAT_NAME_KEY: SchemaField(label="Format Name"),
        f"{STREAM_KEY_PREFIX}*": SchemaField(
            label="Streams",
            type="json",
            hint="One record per stream: type, codec, language, resolution, frame rate, sample rate",
        ),
    },
    config={},
)
