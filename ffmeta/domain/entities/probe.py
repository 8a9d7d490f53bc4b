# ffmeta/domain/entities/probe.py
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Tuple


@dataclass(frozen=True)
class RawProbeRecord:
    """
    The ffprobe JSON as received: a format block plus the stream records in
    probe order. Nothing is interpreted here; the classifier does that.
    """
    format: Mapping[str, Any] = field(default_factory=dict)
    streams: Tuple[Mapping[str, Any], ...] = ()

    @classmethod
    def from_ffprobe_json(cls, data: Mapping[str, Any] | None) -> "RawProbeRecord":
        data = data or {}
        fmt = data.get("format") or {}
        streams = data.get("streams") or []
        if not isinstance(fmt, Mapping):
            fmt = {}
        if not isinstance(streams, (list, tuple)):
            streams = []
        return cls(
            format=MappingProxyType(dict(fmt)),
            streams=tuple(MappingProxyType(dict(s)) for s in streams if isinstance(s, Mapping)),
        )
