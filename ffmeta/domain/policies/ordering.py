# ffmeta/domain/policies/ordering.py
from __future__ import annotations

from typing import Iterable, List, Tuple

from ffmeta.domain.entities.streams import ClassifiedStream
from ffmeta.domain.enums.stream_category import StreamCategory

_CATEGORY_RANK = {c: i for i, c in enumerate(StreamCategory)}


def _probe_order_key(stream: ClassifiedStream) -> Tuple[int, int, int, int]:
    index = stream.fields.get("index")
    has_index = isinstance(index, int) and not isinstance(index, bool)
    return (
        0 if has_index else 1,
        index if has_index else 0,
        _CATEGORY_RANK[stream.category],
        stream.seq,
    )


def restore_probe_order(streams: Iterable[ClassifiedStream]) -> List[ClassifiedStream]:
    """
    Rebuild the cross-category probe order for records that only kept
    per-category slots. ffprobe's own stream index is authoritative; streams
    without one go last, grouped by category.
    """
    return sorted(streams, key=_probe_order_key)
