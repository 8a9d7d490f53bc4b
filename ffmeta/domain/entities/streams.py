# ffmeta/domain/entities/streams.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple, Union

from ffmeta.domain.enums.stream_category import StreamCategory

# Normalized field values keep their semantic type; the cache stores them as text.
FieldValue = Union[str, int, float, bool]
FlatMetadataMap = Dict[str, str]


@dataclass(frozen=True)
class ClassifiedStream:
    """
    One retained stream: its category, its 0-based position among streams of
    the same category, and the normalized fields that were present.
    """
    category: StreamCategory
    seq: int
    fields: Dict[str, FieldValue] = field(default_factory=dict)

    @property
    def slot(self) -> str:
        """Per-category address, e.g. ``audio/1``."""
        return f"{self.category.value}/{self.seq}"


@dataclass(frozen=True)
class NormalizedResult:
    """Canonical intermediate shared by the projector and the cache codec."""
    duration: Optional[str] = None
    format_name: Optional[str] = None
    streams: Tuple[ClassifiedStream, ...] = ()

    def by_category(self, category: StreamCategory) -> Tuple[ClassifiedStream, ...]:
        return tuple(s for s in self.streams if s.category == category)
