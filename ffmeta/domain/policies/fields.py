# ffmeta/domain/policies/fields.py
"""
Per-stream field rules.

Each rule says where a field comes from in an ffprobe stream record, which
raw values count as "absent", and what type the normalized value carries.
The same rules drive extraction (classifier), text rendering (cache encode)
and re-typing (cache decode), so the three can never disagree.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, FrozenSet, Iterable, Mapping, Optional, Tuple

from ffmeta.domain.entities.streams import FieldValue

NOT_AVAILABLE = "N/A"
ZERO_RATE = "0/0"


class FieldKind(StrEnum):
    text = "text"
    int = "int"
    bool = "bool"


@dataclass(frozen=True)
class FieldRule:
    name: str
    source: Tuple[str, ...]
    kind: FieldKind = FieldKind.text
    sentinels: FrozenSet[str] = frozenset()
    zero_is_absent: bool = False
    projected: bool = True


# Emission order for the projected stream record.
FIELD_RULES: Tuple[FieldRule, ...] = (
    FieldRule("codec", ("codec_name",)),
    FieldRule("index", ("index",), FieldKind.int),
    FieldRule("duration", ("duration",), sentinels=frozenset({NOT_AVAILABLE})),
    # Redundant with the record's "type"; cached for older readers only.
    FieldRule("codecType", ("codec_type",), projected=False),
    FieldRule("forced", ("disposition", "forced"), FieldKind.bool),
    FieldRule("default", ("disposition", "default"), FieldKind.bool),
    FieldRule("language", ("tags", "language")),
    FieldRule("title", ("tags", "title")),
    FieldRule("width", ("width",), FieldKind.int, frozenset({NOT_AVAILABLE}), zero_is_absent=True),
    FieldRule("height", ("height",), FieldKind.int, frozenset({NOT_AVAILABLE}), zero_is_absent=True),
    FieldRule("bitrate", ("bit_rate",), FieldKind.int, frozenset({NOT_AVAILABLE})),
    FieldRule("frameRate", ("avg_frame_rate",), sentinels=frozenset({ZERO_RATE})),
    FieldRule("rotation", ("tags", "rotate")),
    FieldRule("sampleRate", ("sample_rate",), FieldKind.int, frozenset({NOT_AVAILABLE})),
    FieldRule("channelLayout", ("channel_layout",)),
)

RULES_BY_NAME: Mapping[str, FieldRule] = {r.name: r for r in FIELD_RULES}


def dig(record: Mapping[str, Any], path: Iterable[str]) -> Any:
    cur: Any = record
    for key in path:
        if not isinstance(cur, Mapping):
            return None
        cur = cur.get(key)
    return cur


def is_present(value: Any, rule: Optional[FieldRule] = None) -> bool:
    """The only place that decides whether a raw probe value means "unknown"."""
    if value is None:
        return False
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return False
        if rule is not None and text in rule.sentinels:
            return False
    if rule is not None and rule.zero_is_absent and not isinstance(value, bool):
        if isinstance(value, (int, float)) and value == 0:
            return False
        if isinstance(value, str) and value.strip() in {"0", "0.0"}:
            return False
    return True


def as_text(value: Any) -> str:
    """Render a scalar the way the store expects it (2.0 -> "2", True -> "true")."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    return str(value)


def _parse_int(text: str) -> Optional[int]:
    try:
        return int(text)
    except ValueError:
        return None


def coerce(rule: FieldRule, value: Any) -> FieldValue:
    """Normalize a present raw value to the rule's type."""
    if rule.kind is FieldKind.bool:
        if isinstance(value, str):
            return value.strip().lower() in {"1", "true"}
        return bool(value)
    if rule.kind is FieldKind.int:
        if isinstance(value, bool):
            return int(value)
        if isinstance(value, int):
            return value
        parsed = _parse_int(as_text(value).strip())
        # Anything that is not a whole number stays as text rather than being guessed at
        return parsed if parsed is not None else as_text(value)
    return as_text(value)


def sniff(text: str) -> FieldValue:
    """Best-effort typing for cached fields that have no rule (written by other versions)."""
    if text == "true":
        return True
    if text == "false":
        return False
    parsed = _parse_int(text)
    if parsed is not None:
        return parsed
    try:
        number = float(text)
    except ValueError:
        return text
    return number if math.isfinite(number) else text


def retype(name: str, text: str) -> FieldValue:
    """Inverse of as_text() for a cached field value."""
    rule = RULES_BY_NAME.get(name)
    if rule is None:
        return sniff(text)
    if rule.kind is FieldKind.bool:
        return text == "true"
    return coerce(rule, text)
