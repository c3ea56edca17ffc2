from __future__ import annotations

from enum import Enum
from pathlib import Path


class ErrorCategory(str, Enum):
    """Classification for save errors."""

    BASE64 = "base64"
    ENCODING = "encoding"
    FORMAT = "format"
    IO = "io"


class SaveError(Exception):
    """Base exception for save/load errors."""

    category: ErrorCategory = ErrorCategory.IO

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class SaveDecodeError(SaveError):
    """Raised when save contents cannot be turned back into a mapping."""

    def __init__(
        self, message: str, category: ErrorCategory, path: Path | None = None
    ) -> None:
        super().__init__(message, path)
        self.category = category


class SaveIOError(SaveError):
    """Raised when reading or writing the save file fails."""


class SaveFileNotFoundError(SaveIOError):
    """Raised when loading a save file that does not exist."""
