# ffmeta/domain/policies/classifier.py
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from ffmeta.domain.entities.probe import RawProbeRecord
from ffmeta.domain.entities.streams import ClassifiedStream, FieldValue, NormalizedResult
from ffmeta.domain.enums.stream_category import StreamCategory
from ffmeta.domain.policies.fields import FIELD_RULES, as_text, coerce, dig, is_present


def _format_text(fmt: Mapping[str, Any], key: str) -> Optional[str]:
    value = fmt.get(key)
    if not is_present(value):
        return None
    return as_text(value)


def normalize_fields(stream: Mapping[str, Any]) -> Dict[str, FieldValue]:
    """Extract every field a rule knows about; absent values are left out entirely."""
    fields: Dict[str, FieldValue] = {}
    for rule in FIELD_RULES:
        raw = dig(stream, rule.source)
        if is_present(raw, rule):
            fields[rule.name] = coerce(rule, raw)
    return fields


def classify(raw: RawProbeRecord) -> NormalizedResult:
    """
    Turn an ffprobe record into the canonical NormalizedResult.

    Streams keep their probe order. Each retained stream gets the next 0-based
    sequence number of its own category; streams with an unknown or missing
    codec_type are dropped without consuming any number.
    """
    counters: Dict[StreamCategory, int] = {}
    streams: List[ClassifiedStream] = []

    for stream in raw.streams:
        category = StreamCategory.from_codec_type(stream.get("codec_type"))
        if category is None:
            continue
        seq = counters.get(category, 0)
        counters[category] = seq + 1
        streams.append(ClassifiedStream(category=category, seq=seq, fields=normalize_fields(stream)))

    return NormalizedResult(
        duration=_format_text(raw.format, "duration"),
        format_name=_format_text(raw.format, "format_name"),
        streams=tuple(streams),
    )
