"""Store error taxonomy.

Every error carries the backing file path and the lower-level fault that
caused it (also chained via ``raise ... from``).
"""

from __future__ import annotations

from pathlib import Path


class StoreError(Exception):
    """Base class for backing-file failures."""

    action = "accessing"

    def __init__(self, path: str | Path, cause: BaseException | None = None):
        self.path = Path(path)
        self.cause = cause
        message = f"error {self.action} the pet file {self.path}"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)


class ReadError(StoreError):
    """The backing file exists but cannot be read."""

    action = "reading"


class ParseError(StoreError):
    """The backing file is not a well-formed pet document."""

    action = "parsing"


class WriteError(StoreError):
    """Persisting a mutation failed; the in-memory change was rolled back."""

    action = "writing"
