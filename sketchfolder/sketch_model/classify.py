"""Scan a sketch folder and classify which files belong to the sketch."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterable
from pathlib import Path

from ..diagnostics import INVALID_NAME, DiagnosticsSink
from ..errors import NoValidFilesError
from ..file_io import is_sanitary_name as default_is_sanitary_name
from .types import EXTENSIONS, extension_of
from .unit import SketchUnit

logger = logging.getLogger(__name__)


def unit_sort_key(unit: SketchUnit) -> tuple[bool, str]:
    """Order key: primary unit first, then by file name."""
    return (not unit.is_primary, unit.file_name)


def sort_units(units: Iterable[SketchUnit]) -> list[SketchUnit]:
    """Return ``units`` stably sorted by ``unit_sort_key``."""
    return sorted(units, key=unit_sort_key)


def list_candidate_files(folder: Path, extensions: Iterable[str] = EXTENSIONS) -> list[Path]:
    """List regular files directly inside ``folder`` with a recognized extension.

    Subdirectories are not entered. An unreadable folder yields no candidates.
    """
    wanted = {ext.lower() for ext in extensions}
    candidates: list[Path] = []
    try:
        with os.scandir(folder) as entries:
            for child in entries:
                try:
                    is_file = child.is_file()
                except OSError:
                    is_file = False
                if not is_file:
                    continue
                if extension_of(child.name) not in wanted:
                    continue
                candidates.append(Path(child.path))
    except OSError as exc:
        logger.debug("Cannot scan %s: %s", folder, exc)
        return []
    candidates.sort(key=lambda path: path.name)
    return candidates


def classify_sketch_files(
    folder: Path,
    entry_path: Path,
    *,
    is_sanitary_name: Callable[[str], bool] = default_is_sanitary_name,
    diagnostics: DiagnosticsSink | None = None,
    unit_factory: Callable[[Path, bool], SketchUnit] = SketchUnit,
) -> list[SketchUnit]:
    """Build the ordered unit list for the sketch in ``folder``.

    Files whose names fail ``is_sanitary_name`` are skipped, with one
    ``invalid-name`` warning each when ``diagnostics`` is given. Raises
    ``NoValidFilesError`` when nothing is accepted.
    """
    folder = Path(folder)
    entry_path = Path(entry_path)
    accepted: dict[Path, SketchUnit] = {}
    for path in list_candidate_files(folder):
        if not is_sanitary_name(path.name):
            if diagnostics is not None:
                diagnostics.warning(INVALID_NAME, f"File name {path.name} is invalid: ignored", path)
            continue
        if path in accepted:
            continue
        accepted[path] = unit_factory(path, path == entry_path)

    if not accepted:
        raise NoValidFilesError(folder)
    return sort_units(accepted.values())


__all__ = [
    "unit_sort_key",
    "sort_units",
    "list_candidate_files",
    "classify_sketch_files",
]
