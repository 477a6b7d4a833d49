from __future__ import annotations

from typing import Any


class RinkcalError(Exception):
    pass


class SourceError(RinkcalError):
    """A data file could be located but not read or decoded."""

    def __init__(self, key: Any, cause: BaseException | str) -> None:
        self.key = key
        self.cause = cause
        super().__init__(f"{key}: {cause}")


class RangeLoadError(RinkcalError):
    """Raised when a range load fails as a whole."""
