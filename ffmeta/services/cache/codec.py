# ffmeta/services/cache/codec.py
"""
Persisted form of a NormalizedResult.

    {
      "duration": "2.000000",
      "formatName": "mov,mp4,m4a,3gp,3g2,mj2",
      "streamdetails": {
        "video": {"0": {"codec": "h264", "index": "0", "width": "320"}},
        "audio": {"0": {"codec": "aac", "index": "1", "sampleRate": "44100"}}
      },
      "order": ["video/0", "audio/0"]
    }

Field values are stored as text and re-typed on read from the field rules.
``order`` keeps the cross-category probe order; records written without it
are ordered by ffprobe stream index.
"""
from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

from ffmeta.domain.entities.streams import ClassifiedStream, NormalizedResult
from ffmeta.domain.errors import CacheCorruptError
from ffmeta.domain.policies.fields import as_text
from ffmeta.domain.policies.stream_tree import LayoutError, build_streams
from ffmeta.domain.policies.ordering import restore_probe_order


def encode(result: NormalizedResult) -> bytes:
    doc: Dict[str, Any] = {}
    if result.duration is not None:
        doc["duration"] = result.duration
    if result.format_name is not None:
        doc["formatName"] = result.format_name

    details: Dict[str, Dict[str, Dict[str, str]]] = {}
    for stream in result.streams:
        details.setdefault(stream.category.value, {})[str(stream.seq)] = {
            name: as_text(value) for name, value in stream.fields.items()
        }
    doc["streamdetails"] = details
    doc["order"] = [s.slot for s in result.streams]
    return json.dumps(doc, ensure_ascii=False, separators=(",", ":")).encode("utf-8")


def _optional_text(doc: Dict[str, Any], key: str) -> Optional[str]:
    value = doc.get(key)
    if value is None:
        return None
    if isinstance(value, (dict, list)):
        raise CacheCorruptError(f"cache field {key!r} is not a scalar")
    return as_text(value)


def decode(payload: bytes) -> NormalizedResult:
    try:
        doc = json.loads(payload.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise CacheCorruptError(f"cache entry is not valid JSON: {e}") from e
    if not isinstance(doc, dict):
        raise CacheCorruptError("cache entry is not a JSON object")

    details = doc.get("streamdetails")
    if details is None:
        details = {}
    if not isinstance(details, dict):
        raise CacheCorruptError("streamdetails is not an object")
    try:
        by_slot = build_streams(details, strict=True)
    except LayoutError as e:
        raise CacheCorruptError(str(e)) from e

    order = doc.get("order")
    streams: List[ClassifiedStream]
    if order is None:
        streams = restore_probe_order(by_slot.values())
    else:
        if not isinstance(order, list) or sorted(map(str, order)) != sorted(by_slot):
            raise CacheCorruptError("stream order does not match streamdetails")
        streams = [by_slot[str(slot)] for slot in order]

    return NormalizedResult(
        duration=_optional_text(doc, "duration"),
        format_name=_optional_text(doc, "formatName"),
        streams=tuple(streams),
    )
