"""Sketch document: the ordered set of code files making up one project."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from ..diagnostics import INTERNAL, DiagnosticsSink, LoggingDiagnostics
from ..errors import DuplicatePrimaryError, DuplicateUnitError, MissingPrimaryError
from ..file_io import is_sanitary_name as default_is_sanitary_name
from .classify import classify_sketch_files, sort_units
from .types import ASSETS_FOLDER_NAME
from .unit import SketchUnit

logger = logging.getLogger(__name__)


class SketchDocument:
    """All code files of the sketch whose entry file is ``entry_path``.

    The primary unit is always first, followed by the other units in file
    name order. ``on_change`` is called with the document after any operation
    that altered the unit list.
    """

    def __init__(
        self,
        entry_path: Path,
        *,
        diagnostics: DiagnosticsSink | None = None,
        is_sanitary_name: Callable[[str], bool] = default_is_sanitary_name,
        on_change: Callable[["SketchDocument"], None] | None = None,
    ) -> None:
        self.entry_path = Path(entry_path)
        self.folder = self.entry_path.parent
        self.assets_folder = self.folder / ASSETS_FOLDER_NAME
        self.name = self.entry_path.stem
        self.diagnostics = diagnostics if diagnostics is not None else LoggingDiagnostics()
        self._is_sanitary_name = is_sanitary_name
        self._on_change = on_change
        self._units: list[SketchUnit] = self._scan(report_invalid=True)
        logger.info("Opened sketch %s with %d file(s)", self.name, len(self._units))

    def _new_unit(self, path: Path, is_primary: bool) -> SketchUnit:
        return SketchUnit(path, is_primary, diagnostics=self.diagnostics)

    def _scan(self, report_invalid: bool) -> list[SketchUnit]:
        units = classify_sketch_files(
            self.folder,
            self.entry_path,
            is_sanitary_name=self._is_sanitary_name,
            diagnostics=self.diagnostics if report_invalid else None,
            unit_factory=self._new_unit,
        )
        if not any(unit.is_primary for unit in units):
            raise MissingPrimaryError(self.folder, self.entry_path)
        return units

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change(self)

    def reload(self) -> bool:
        """Rescan the folder and adopt the result if the file set changed.

        Only file identity and order are compared, never content. Returns
        whether the unit list was replaced. Raises ``NoValidFilesError`` when
        the folder no longer holds any code file, or ``MissingPrimaryError``
        when the entry file is gone or was filtered out.
        """
        reloaded = self._scan(report_invalid=False)
        if [unit.path for unit in reloaded] == [unit.path for unit in self._units]:
            return False
        self._units = reloaded
        logger.info("Sketch %s reloaded: %d file(s)", self.name, len(reloaded))
        self._notify()
        return True

    def prepare_assets_folder(self) -> Path:
        """Create the assets folder if needed and return it."""
        self.assets_folder.mkdir(parents=True, exist_ok=True)
        return self.assets_folder

    def save_all(self) -> None:
        """Save every modified unit.

        The first ``WriteError`` propagates; units saved before it stay saved.
        """
        for unit in list(self._units):
            if unit.is_modified():
                unit.save()

    def add_unit(self, unit: SketchUnit) -> None:
        if any(existing == unit for existing in self._units):
            raise DuplicateUnitError(unit.path)
        if unit.is_primary and any(existing.is_primary for existing in self._units):
            raise DuplicatePrimaryError(unit.path)
        self._units.append(unit)
        self._units = sort_units(self._units)
        self._notify()

    def replace_unit(self, new_unit: SketchUnit) -> None:
        """Swap in ``new_unit`` for the unit with the same file name, in place."""
        for index, unit in enumerate(self._units):
            if unit.file_name == new_unit.file_name:
                self._units[index] = new_unit
                self._notify()
                return

    def remove_unit(self, target: SketchUnit) -> None:
        try:
            self._units.remove(target)
        except ValueError:
            self.diagnostics.warning(
                INTERNAL,
                f"remove_unit: internal error, could not find {target.file_name}",
                target.path,
            )
            return
        self._notify()

    @property
    def unit_count(self) -> int:
        return len(self._units)

    def unit_at(self, index: int) -> SketchUnit:
        return self._units[index]

    @property
    def units(self) -> list[SketchUnit]:
        """Copy of the ordered unit list."""
        return list(self._units)

    def find_unit(self, file_name: str) -> SketchUnit | None:
        for unit in self._units:
            if unit.file_name == file_name:
                return unit
        return None

    @property
    def primary_unit(self) -> SketchUnit:
        return next(unit for unit in self._units if unit.is_primary)

    @property
    def primary_path(self) -> Path:
        return self.entry_path

    @property
    def main_file_path(self) -> str:
        return str(self.entry_path.absolute())

    def is_modified(self) -> bool:
        """Return whether any unit holds unsaved editor text."""
        return any(unit.is_modified() for unit in self._units)


__all__ = ["SketchDocument"]
