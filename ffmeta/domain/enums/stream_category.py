from __future__ import annotations

from enum import StrEnum
from typing import Optional


class StreamCategory(StrEnum):
    video = "video"
    audio = "audio"
    subtitle = "subtitle"
    embeddedimage = "embeddedimage"

    @classmethod
    def from_codec_type(cls, codec_type: object) -> Optional["StreamCategory"]:
        """Map an ffprobe codec_type tag onto a category; None for anything we drop."""
        if not isinstance(codec_type, str) or not codec_type:
            return None
        try:
            return cls(codec_type)
        except ValueError:
            return None
