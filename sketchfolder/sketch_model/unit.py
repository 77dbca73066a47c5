"""One file of a sketch plus its optionally attached editor text."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterable
from pathlib import Path

from ..diagnostics import ENCODING, DiagnosticsSink, LoggingDiagnostics
from ..file_io import has_replacement_char, read_text, write_text
from .types import BUILD_SKETCH_SUBFOLDER, DEFAULT_SKETCH_EXTENSION, TextStorage, extension_of

logger = logging.getLogger(__name__)


def candidate_build_folders(build_folder: Path) -> list[Path]:
    """Return build folders that may hold artifacts compiled from a sketch."""
    return [build_folder, build_folder / BUILD_SKETCH_SUBFOLDER]


class SketchUnit:
    """A single code file of a sketch.

    Identity is the file path: two units compare equal when their paths do,
    regardless of role or attached storage. The storage is never created or
    destroyed here, only queried and told to clear its modified flag after a
    successful save.
    """

    def __init__(
        self,
        path: Path,
        is_primary: bool = False,
        *,
        diagnostics: DiagnosticsSink | None = None,
        reader: Callable[[Path], str] = read_text,
        writer: Callable[[str, Path], None] = write_text,
    ) -> None:
        self._path = Path(path)
        self._is_primary = bool(is_primary)
        self._storage: TextStorage | None = None
        self._diagnostics = diagnostics if diagnostics is not None else LoggingDiagnostics()
        self._reader = reader
        self._writer = writer

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SketchUnit):
            return NotImplemented
        return self._path == other._path

    def __hash__(self) -> int:
        return hash(self._path)

    def __repr__(self) -> str:
        role = "primary" if self._is_primary else "secondary"
        return f"SketchUnit({str(self._path)!r}, {role})"

    @property
    def path(self) -> Path:
        return self._path

    @property
    def is_primary(self) -> bool:
        return self._is_primary

    @property
    def storage(self) -> TextStorage | None:
        return self._storage

    @property
    def file_name(self) -> str:
        return self._path.name

    @property
    def pretty_name(self) -> str:
        """File name without its last extension."""
        stem, dot, _ext = self.file_name.rpartition(".")
        return stem if dot else self.file_name

    @property
    def display_name(self) -> str:
        """Tab label: the pretty name for ``.ino`` files, else the full name."""
        if extension_of(self.file_name) == DEFAULT_SKETCH_EXTENSION:
            return self.pretty_name
        return self.file_name

    @property
    def exists(self) -> bool:
        return self._path.exists()

    @property
    def is_read_only(self) -> bool:
        return not os.access(self._path, os.W_OK)

    def has_extension(self, *extensions: str | Iterable[str]) -> bool:
        """Return whether the file extension is one of ``extensions``.

        Accepts names as varargs or a single iterable; comparison ignores case
        and a leading dot.
        """
        wanted: set[str] = set()
        for item in extensions:
            names = [item] if isinstance(item, str) else list(item)
            wanted.update(name.lstrip(".").lower() for name in names)
        return extension_of(self.file_name) in wanted

    def attach_storage(self, storage: TextStorage | None) -> None:
        """Attach editor text, or detach it with ``None``."""
        self._storage = storage

    def current_text(self) -> str | None:
        """Return in-memory editor text, or ``None`` when only disk content exists."""
        if self._storage is None:
            return None
        return self._storage.current_text()

    def is_modified(self) -> bool:
        if self._storage is None:
            return False
        return bool(self._storage.is_modified())

    def load(self) -> str:
        """Read the file from disk, ignoring any attached storage.

        Raises ``ReadError`` when the file cannot be read. Text carrying
        U+FFFD is still returned after an encoding warning.
        """
        text = self._reader(self._path)
        if has_replacement_char(text):
            self._diagnostics.warning(
                ENCODING,
                f'"{self.file_name}" contains unrecognized characters. '
                "It was probably saved in a legacy encoding; convert it to UTF-8 "
                "or delete the bad characters to get rid of this warning.",
                self._path,
            )
        return text

    def save(self) -> None:
        """Write attached storage text to ``path`` and clear its modified flag.

        Without storage there is nothing to write. On ``WriteError`` the
        modified flag is left set.
        """
        if self._storage is None:
            return
        self._writer(self._storage.current_text(), self._path)
        self._storage.clear_modified()
        logger.debug("Saved %s", self._path)

    def save_as(self, new_path: Path) -> None:
        """Write attached storage text to ``new_path``.

        ``path`` and the modified flag are left untouched; callers wanting a
        real "save as" build a new unit for ``new_path``.
        """
        if self._storage is None:
            return
        self._writer(self._storage.current_text(), Path(new_path))
        logger.debug("Saved copy of %s to %s", self._path, new_path)

    def rename_to(self, new_path: Path) -> bool:
        """Rename the file on disk; ``path`` changes only on success."""
        new_path = Path(new_path)
        try:
            self._path.rename(new_path)
        except OSError as exc:
            logger.debug("Rename %s -> %s failed: %s", self._path, new_path, exc)
            return False
        self._path = new_path
        return True

    def delete(self, build_folders: Iterable[Path]) -> bool:
        """Delete the source file, then compiled artifacts derived from it.

        Returns ``False`` without touching build folders when the source file
        cannot be removed. Artifact cleanup stops at the first file it cannot
        delete, so some artifacts may already be gone when ``False`` is
        returned.
        """
        try:
            self._path.unlink()
        except OSError as exc:
            logger.debug("Delete %s failed: %s", self._path, exc)
            return False

        for folder in build_folders:
            folder = Path(folder)
            if not folder.exists():
                continue
            if not self._delete_compiled_files_from(folder):
                return False
        return True

    def _delete_compiled_files_from(self, build_folder: Path) -> bool:
        prefix = self.file_name
        try:
            compiled = [child for child in build_folder.iterdir() if child.name.startswith(prefix)]
        except OSError as exc:
            logger.debug("Cannot list %s: %s", build_folder, exc)
            return False

        for compiled_file in sorted(compiled):
            try:
                compiled_file.unlink()
            except OSError as exc:
                logger.debug("Cannot delete artifact %s: %s", compiled_file, exc)
                return False
        return True


__all__ = ["SketchUnit", "candidate_build_folders"]
