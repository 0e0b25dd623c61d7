"""
Exception hierarchy for contextify.
"""

from __future__ import annotations

from pathlib import Path
from typing import Union


class ContextifyError(Exception):
    """Base exception for contextify errors."""
    pass


class InvalidRootError(ContextifyError):
    """Raised when the provided root directory is invalid."""
    pass


class ConfigFileError(ContextifyError):
    """Raised when an explicitly requested pattern file cannot be used."""
    pass


class TraversalError(ContextifyError):
    """Raised when a directory listing or stat fails during a walk."""

    def __init__(self, path: Union[str, Path], cause: OSError):
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"Could not access '{path}': {cause.strerror or cause}")


class FileReadError(ContextifyError):
    """Raised when a selected file's content cannot be read."""
    pass


class OutputError(ContextifyError):
    """Raised when there are issues writing output files."""
    pass
