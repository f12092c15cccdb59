"""Error types that are allowed to cross component boundaries.

Infrastructure failures (cache I/O, remote fetches) are converted to values
inside the components that own them. Only programmer errors, such as asking
for a lookup kind nobody registered paths for, surface as exceptions.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    UNKNOWN_LOOKUP_KIND = "UNKNOWN_LOOKUP_KIND"


class SvelteDocsError(Exception):
    """Raised for conditions a caller cannot recover from by retrying."""

    def __init__(self, code: ErrorCode, message: str, *, recoverable: bool = False) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.recoverable = recoverable

