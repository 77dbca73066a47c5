"""Domain model for sketch folders: one entry file plus sibling code files.

This package contains the non-UI pieces:
- recognized extensions and the editor text-storage interface
- a file record that loads, saves, renames and deletes one code file
- folder scanning that accepts, orders and deduplicates code files
- entry-file resolution for an arbitrary file inside a sketch
- the sketch document aggregate with reload change detection
"""

from __future__ import annotations

from ..errors import (
    DuplicatePrimaryError,
    DuplicateUnitError,
    MissingPrimaryError,
    NoValidFilesError,
    ReadError,
    SketchError,
    WriteError,
)
from .types import (
    ASSETS_FOLDER_NAME,
    DEFAULT_SKETCH_EXTENSION,
    ENTRY_LOOKUP_ORDER,
    EXTENSIONS,
    OTHER_ALLOWED_EXTENSIONS,
    SKETCH_EXTENSIONS,
    InMemoryTextStorage,
    TextStorage,
)
from .unit import SketchUnit, candidate_build_folders
from .classify import classify_sketch_files, list_candidate_files, sort_units, unit_sort_key
from .resolve import is_entry_file_name, resolve_entry_file
from .document import SketchDocument

__all__ = [
    "SketchError",
    "NoValidFilesError",
    "ReadError",
    "WriteError",
    "DuplicateUnitError",
    "DuplicatePrimaryError",
    "MissingPrimaryError",
    "ASSETS_FOLDER_NAME",
    "DEFAULT_SKETCH_EXTENSION",
    "ENTRY_LOOKUP_ORDER",
    "EXTENSIONS",
    "OTHER_ALLOWED_EXTENSIONS",
    "SKETCH_EXTENSIONS",
    "InMemoryTextStorage",
    "TextStorage",
    "SketchUnit",
    "candidate_build_folders",
    "classify_sketch_files",
    "list_candidate_files",
    "sort_units",
    "unit_sort_key",
    "is_entry_file_name",
    "resolve_entry_file",
    "SketchDocument",
]
