from ffmeta.domain.enums.process_status import ProcessStatus
from ffmeta.domain.enums.stream_category import StreamCategory

__all__ = [
    "ProcessStatus",
    "StreamCategory",
]
