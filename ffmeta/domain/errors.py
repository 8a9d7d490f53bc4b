# ffmeta/domain/errors.py
from __future__ import annotations

from typing import Optional


class FfmetaError(RuntimeError):
    """Base class for errors raised by the metadata pipeline."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ProbeError(FfmetaError):
    """ffprobe could not be run, failed, timed out or printed something unparsable."""

    def __init__(self, message: str, *, stderr: Optional[str] = None, returncode: Optional[int] = None) -> None:
        super().__init__(message)
        self.stderr = stderr
        self.returncode = returncode


class CacheCorruptError(FfmetaError):
    """A cached probe record could not be decoded."""


class PublishError(FfmetaError):
    """The metadata store was unreachable or rejected the merge."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
