# ffmeta/domain/policies/projector.py
from __future__ import annotations

import json
from typing import Any, Dict

from ffmeta.domain.entities.streams import ClassifiedStream, FlatMetadataMap, NormalizedResult
from ffmeta.domain.policies.fields import FIELD_RULES, RULES_BY_NAME

DURATION_KEY = "fileinfo/duration"
FORMAT_NAME_KEY = "fileinfo/formatName"
STREAM_KEY_PREFIX = "stream/"

_PROJECTED_ORDER = tuple(r.name for r in FIELD_RULES if r.projected)


def stream_key(position: int) -> str:
    return f"{STREAM_KEY_PREFIX}{position}"


def stream_record(stream: ClassifiedStream) -> Dict[str, Any]:
    """`type` first, then known fields in rule order, then anything unknown by name."""
    record: Dict[str, Any] = {"type": stream.category.value}
    for name in _PROJECTED_ORDER:
        if name in stream.fields:
            record[name] = stream.fields[name]
    for name in sorted(stream.fields):
        if name not in RULES_BY_NAME and name != "type":
            record[name] = stream.fields[name]
    return record


def encode_stream_record(stream: ClassifiedStream) -> str:
    return json.dumps(stream_record(stream), separators=(",", ":"), ensure_ascii=False)


def project(result: NormalizedResult) -> FlatMetadataMap:
    """
    Render a NormalizedResult into the flat map published to the store.

    Streams are numbered by a single running counter across all categories,
    in probe order; each value is one compact JSON object.
    """
    metadata: FlatMetadataMap = {}
    if result.duration is not None:
        metadata[DURATION_KEY] = result.duration
    if result.format_name is not None:
        metadata[FORMAT_NAME_KEY] = result.format_name
    for position, stream in enumerate(result.streams):
        metadata[stream_key(position)] = encode_stream_record(stream)
    return metadata
