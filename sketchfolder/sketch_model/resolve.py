"""Locate the entry file of the sketch that contains a given file."""

from __future__ import annotations

from pathlib import Path

from .types import ENTRY_LOOKUP_ORDER, SKETCH_EXTENSIONS


def is_entry_file_name(path: Path) -> bool:
    """Return whether ``path`` is named ``<parent folder>.<sketch extension>``."""
    path = Path(path)
    folder_name = path.parent.name
    return any(path.name == f"{folder_name}.{ext}" for ext in SKETCH_EXTENSIONS)


def resolve_entry_file(path: Path) -> Path | None:
    """Return the entry file of the sketch holding ``path``, or ``None``.

    ``path`` itself is returned when it already is the entry file. Otherwise
    siblings named after the folder are tried, canonical extension first.
    """
    path = Path(path)
    if is_entry_file_name(path):
        return path

    folder = path.parent
    for ext in ENTRY_LOOKUP_ORDER:
        candidate = folder / f"{folder.name}.{ext}"
        if candidate.is_file():
            return candidate
    return None


__all__ = ["is_entry_file_name", "resolve_entry_file"]
