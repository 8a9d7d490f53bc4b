# ffmeta/domain/policies/stream_tree.py
"""
Streams nested by category and per-category slot:

    {"video": {"0": {"codec": "h264", "width": "320"}}, "audio": {...}}

Leaf values are text; they are re-typed from the field rules on the way in.
"""
from __future__ import annotations

from typing import Any, Dict, Mapping

from ffmeta.domain.entities.streams import ClassifiedStream, FieldValue
from ffmeta.domain.enums.stream_category import StreamCategory
from ffmeta.domain.policies.fields import as_text, retype


class LayoutError(ValueError):
    """A nested stream tree did not have the expected shape."""


def _seq(value: str) -> int:
    if not value.isdigit():
        raise LayoutError(f"stream slot {value!r} is not a non-negative integer")
    return int(value)


def build_streams(tree: Mapping[str, Any], *, strict: bool = True) -> Dict[str, ClassifiedStream]:
    """
    Convert ``{category: {seq: {field: text}}}`` into ClassifiedStreams keyed by
    slot (``video/0``). In strict mode any unexpected shape raises LayoutError;
    otherwise the offending branch is ignored.
    """
    out: Dict[str, ClassifiedStream] = {}
    for cat_name, slots in tree.items():
        category = StreamCategory.from_codec_type(cat_name)
        if category is None or not isinstance(slots, Mapping):
            if strict:
                raise LayoutError(f"unexpected stream category entry {cat_name!r}")
            continue
        for seq_text, raw_fields in slots.items():
            try:
                seq = _seq(str(seq_text))
                if not isinstance(raw_fields, Mapping):
                    raise LayoutError(f"{cat_name}/{seq_text} is not a field map")
            except LayoutError:
                if strict:
                    raise
                continue
            fields: Dict[str, FieldValue] = {}
            for name, value in raw_fields.items():
                if value is None:
                    continue
                if isinstance(value, (dict, list)):
                    if strict:
                        raise LayoutError(f"{cat_name}/{seq}/{name} is not a scalar")
                    continue
                fields[str(name)] = retype(str(name), as_text(value))
            stream = ClassifiedStream(category=category, seq=seq, fields=fields)
            out[stream.slot] = stream
    return out
