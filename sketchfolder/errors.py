"""Exception types raised by the sketch document model."""

from __future__ import annotations

from pathlib import Path


class SketchError(Exception):
    """Base class for sketch model failures."""


class NoValidFilesError(SketchError):
    """Scanning a sketch folder produced no accepted code files."""

    def __init__(self, folder: Path) -> None:
        super().__init__(f"No valid code files found in {folder}")
        self.folder = folder


class ReadError(SketchError):
    """A sketch file could not be read from disk."""

    def __init__(self, path: Path, reason: str = "") -> None:
        message = f"Cannot read {path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.path = path


class WriteError(SketchError):
    """A sketch file could not be written to disk."""

    def __init__(self, path: Path, reason: str = "") -> None:
        message = f"Cannot write {path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.path = path


class DuplicateUnitError(SketchError, ValueError):
    """A unit with the same path is already part of the document."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"{path.name} is already part of the sketch")
        self.path = path


class MissingPrimaryError(NoValidFilesError):
    """The sketch entry file was not among the accepted code files."""

    def __init__(self, folder: Path, entry_path: Path) -> None:
        SketchError.__init__(self, f"Main sketch file {entry_path.name} is missing or has an invalid name")
        self.folder = folder
        self.entry_path = entry_path


class DuplicatePrimaryError(SketchError, ValueError):
    """A second primary unit was added to a sketch that already has one."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Cannot add {path.name} as a second main sketch file")
        self.path = path


__all__ = [
    "SketchError",
    "NoValidFilesError",
    "ReadError",
    "WriteError",
    "DuplicateUnitError",
    "MissingPrimaryError",
    "DuplicatePrimaryError",
]
