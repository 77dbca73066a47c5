"""Recognized sketch extensions and the editable-text storage interface."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

DEFAULT_SKETCH_EXTENSION = "ino"
SKETCH_EXTENSIONS: tuple[str, ...] = (DEFAULT_SKETCH_EXTENSION, "pde")
OTHER_ALLOWED_EXTENSIONS: tuple[str, ...] = ("c", "cpp", "h", "hh", "hpp", "s")
EXTENSIONS: tuple[str, ...] = SKETCH_EXTENSIONS + OTHER_ALLOWED_EXTENSIONS

# Sibling lookup order when resolving an entry file: canonical before legacy.
ENTRY_LOOKUP_ORDER: tuple[str, ...] = (DEFAULT_SKETCH_EXTENSION, "pde")

ASSETS_FOLDER_NAME = "data"
BUILD_SKETCH_SUBFOLDER = "sketch"


@runtime_checkable
class TextStorage(Protocol):
    """In-memory text owned by an editor view and shared with a sketch unit.

    ``is_modified`` reports edits made since the last ``clear_modified`` call.
    """

    def current_text(self) -> str: ...

    def is_modified(self) -> bool: ...

    def clear_modified(self) -> None: ...


class InMemoryTextStorage:
    """Minimal ``TextStorage`` holding a string and a modified flag."""

    def __init__(self, text: str = "", modified: bool = False) -> None:
        self._text = text
        self._modified = modified

    def current_text(self) -> str:
        return self._text

    def set_text(self, text: str) -> None:
        self._text = text
        self._modified = True

    def is_modified(self) -> bool:
        return self._modified

    def clear_modified(self) -> None:
        self._modified = False


def extension_of(name: str) -> str:
    """Return the lowercase extension of ``name`` without the dot."""
    _stem, dot, ext = name.rpartition(".")
    if not dot:
        return ""
    return ext.lower()


__all__ = [
    "DEFAULT_SKETCH_EXTENSION",
    "SKETCH_EXTENSIONS",
    "OTHER_ALLOWED_EXTENSIONS",
    "EXTENSIONS",
    "ENTRY_LOOKUP_ORDER",
    "ASSETS_FOLDER_NAME",
    "BUILD_SKETCH_SUBFOLDER",
    "TextStorage",
    "InMemoryTextStorage",
    "extension_of",
]
