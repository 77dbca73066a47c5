"""Tests for the sketch document aggregate."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from sketchfolder.diagnostics import INTERNAL, INVALID_NAME, CollectingDiagnostics
from sketchfolder.errors import WriteError
from sketchfolder.sketch_model import (
    DuplicatePrimaryError,
    DuplicateUnitError,
    InMemoryTextStorage,
    MissingPrimaryError,
    NoValidFilesError,
    SketchDocument,
    SketchUnit,
)


def _make_sketch(root: Path, name: str, *extra: str, entry_ext: str = "ino") -> Path:
    folder = root / name
    folder.mkdir()
    entry = folder / f"{name}.{entry_ext}"
    entry.write_text("void setup() {}\nvoid loop() {}\n", encoding="utf-8")
    for file_name in extra:
        (folder / file_name).write_text("", encoding="utf-8")
    return entry


def _names(document: SketchDocument) -> list[str]:
    return [unit.file_name for unit in document.units]


class SketchDocumentConstructionTests(unittest.TestCase):
    def test_construct_orders_primary_then_by_name(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            entry = _make_sketch(Path(tmp), "A", "C.h", "B.cpp")

            document = SketchDocument(entry, diagnostics=CollectingDiagnostics())

            self.assertEqual(_names(document), ["A.ino", "B.cpp", "C.h"])
            self.assertTrue(document.unit_at(0).is_primary)
            self.assertEqual(sum(unit.is_primary for unit in document.units), 1)

    def test_derived_locations_and_name(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            entry = _make_sketch(Path(tmp), "Blink", entry_ext="pde")

            document = SketchDocument(entry, diagnostics=CollectingDiagnostics())

            self.assertEqual(document.name, "Blink")
            self.assertEqual(document.folder, entry.parent)
            self.assertEqual(document.assets_folder, entry.parent / "data")
            self.assertFalse(document.assets_folder.exists())
            self.assertEqual(document.primary_path, entry)
            self.assertEqual(document.primary_unit.path, entry)
            self.assertEqual(document.main_file_path, str(entry.absolute()))
            self.assertEqual(document.unit_count, 1)

    def test_construct_on_folder_without_code_fails(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            folder = Path(tmp) / "Empty"
            folder.mkdir()
            (folder / "notes.txt").write_text("", encoding="utf-8")

            with self.assertRaises(NoValidFilesError):
                SketchDocument(folder / "Empty.ino", diagnostics=CollectingDiagnostics())

    def test_invalid_names_are_reported_on_open(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            entry = _make_sketch(Path(tmp), "A", "bad-name!.cpp", "ok.cpp")
            diagnostics = CollectingDiagnostics()

            document = SketchDocument(entry, diagnostics=diagnostics)

            self.assertEqual(_names(document), ["A.ino", "ok.cpp"])
            self.assertEqual(len(diagnostics.of_kind(INVALID_NAME)), 1)

    def test_entry_file_rejected_by_name_rule_fails_open(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            entry = _make_sketch(Path(tmp), "my sketch", "b.cpp")
            diagnostics = CollectingDiagnostics()

            with self.assertRaises(MissingPrimaryError) as ctx:
                SketchDocument(entry, diagnostics=diagnostics)

            self.assertIsInstance(ctx.exception, NoValidFilesError)
            self.assertEqual(ctx.exception.entry_path, entry)
            self.assertEqual(len(diagnostics.of_kind(INVALID_NAME)), 1)

    def test_missing_entry_file_fails_open_even_with_other_code(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            folder = Path(tmp) / "Blink"
            folder.mkdir()
            (folder / "b.cpp").write_text("", encoding="utf-8")

            with self.assertRaises(MissingPrimaryError):
                SketchDocument(folder / "Blink.ino", diagnostics=CollectingDiagnostics())

    def test_units_property_returns_a_copy(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            entry = _make_sketch(Path(tmp), "A", "B.cpp")
            document = SketchDocument(entry, diagnostics=CollectingDiagnostics())

            snapshot = document.units
            snapshot.clear()

            self.assertEqual(document.unit_count, 2)


class SketchDocumentReloadTests(unittest.TestCase):
    def test_reload_unchanged_folder_keeps_same_units(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            entry = _make_sketch(Path(tmp), "A", "B.cpp", "C.h")
            document = SketchDocument(entry, diagnostics=CollectingDiagnostics())
            before = document.units

            self.assertFalse(document.reload())

            after = document.units
            self.assertEqual(len(before), len(after))
            for old, new in zip(before, after):
                self.assertIs(old, new)

    def test_reload_ignores_content_changes(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            entry = _make_sketch(Path(tmp), "A", "B.cpp")
            document = SketchDocument(entry, diagnostics=CollectingDiagnostics())
            (entry.parent / "B.cpp").write_text("int changed;\n", encoding="utf-8")

            self.assertFalse(document.reload())

    def test_reload_picks_up_added_file_in_sorted_position(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            entry = _make_sketch(Path(tmp), "A", "B.cpp", "E.h")
            document = SketchDocument(entry, diagnostics=CollectingDiagnostics())
            (entry.parent / "D.h").write_text("", encoding="utf-8")

            self.assertTrue(document.reload())

            self.assertEqual(_names(document), ["A.ino", "B.cpp", "D.h", "E.h"])

    def test_reload_notifies_only_on_change(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            entry = _make_sketch(Path(tmp), "A", "B.cpp")
            changes: list[SketchDocument] = []
            document = SketchDocument(entry, diagnostics=CollectingDiagnostics(), on_change=changes.append)

            document.reload()
            self.assertEqual(changes, [])

            (entry.parent / "C.h").write_text("", encoding="utf-8")
            document.reload()
            self.assertEqual(changes, [document])

    def test_reload_detects_removed_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            entry = _make_sketch(Path(tmp), "A", "B.cpp")
            document = SketchDocument(entry, diagnostics=CollectingDiagnostics())
            (entry.parent / "B.cpp").unlink()

            self.assertTrue(document.reload())

            self.assertEqual(_names(document), ["A.ino"])

    def test_reload_does_not_repeat_invalid_name_warnings(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            entry = _make_sketch(Path(tmp), "A", "bad name.cpp")
            diagnostics = CollectingDiagnostics()
            document = SketchDocument(entry, diagnostics=diagnostics)
            diagnostics.clear()

            document.reload()

            self.assertEqual(diagnostics.items, [])

    def test_reload_of_emptied_folder_raises_and_keeps_units(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            entry = _make_sketch(Path(tmp), "A")
            document = SketchDocument(entry, diagnostics=CollectingDiagnostics())
            entry.unlink()

            with self.assertRaises(NoValidFilesError):
                document.reload()

            self.assertEqual(_names(document), ["A.ino"])


    def test_reload_without_entry_file_raises_and_keeps_units(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            entry = _make_sketch(Path(tmp), "A", "B.cpp")
            document = SketchDocument(entry, diagnostics=CollectingDiagnostics())
            entry.unlink()

            with self.assertRaises(MissingPrimaryError):
                document.reload()

            self.assertEqual(_names(document), ["A.ino", "B.cpp"])
            self.assertTrue(document.primary_unit.is_primary)


class SketchDocumentMutationTests(unittest.TestCase):
    def test_add_unit_resorts_and_notifies(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            entry = _make_sketch(Path(tmp), "A", "C.h")
            changes: list[SketchDocument] = []
            document = SketchDocument(entry, diagnostics=CollectingDiagnostics(), on_change=changes.append)

            document.add_unit(SketchUnit(entry.parent / "B.cpp"))

            self.assertEqual(_names(document), ["A.ino", "B.cpp", "C.h"])
            self.assertEqual(changes, [document])

    def test_add_unit_rejects_duplicate_path(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            entry = _make_sketch(Path(tmp), "A", "B.cpp")
            document = SketchDocument(entry, diagnostics=CollectingDiagnostics())

            with self.assertRaises(DuplicateUnitError):
                document.add_unit(SketchUnit(entry.parent / "B.cpp"))

            self.assertEqual(document.unit_count, 2)

    def test_add_unit_rejects_second_primary(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            entry = _make_sketch(Path(tmp), "A", "B.cpp")
            changes: list[SketchDocument] = []
            document = SketchDocument(entry, diagnostics=CollectingDiagnostics(), on_change=changes.append)

            with self.assertRaises(DuplicatePrimaryError):
                document.add_unit(SketchUnit(entry.parent / "0.cpp", is_primary=True))

            self.assertEqual(_names(document), ["A.ino", "B.cpp"])
            self.assertEqual(sum(unit.is_primary for unit in document.units), 1)
            self.assertEqual(document.primary_unit.path, entry)
            self.assertEqual(changes, [])

    def test_primary_unit_stays_primary_after_adding_lower_sorting_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            entry = _make_sketch(Path(tmp), "A", "B.cpp")
            document = SketchDocument(entry, diagnostics=CollectingDiagnostics())

            document.add_unit(SketchUnit(entry.parent / "0.cpp"))

            self.assertEqual(_names(document), ["A.ino", "0.cpp", "B.cpp"])
            self.assertIs(document.primary_unit, document.unit_at(0))
            self.assertTrue(document.primary_unit.is_primary)

    def test_replace_unit_preserves_position(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            entry = _make_sketch(Path(tmp), "A", "B.cpp", "C.h")
            document = SketchDocument(entry, diagnostics=CollectingDiagnostics())
            replacement = SketchUnit(entry.parent / "B.cpp")

            document.replace_unit(replacement)

            self.assertIs(document.unit_at(1), replacement)
            self.assertEqual(_names(document), ["A.ino", "B.cpp", "C.h"])

    def test_replace_unit_without_match_is_noop(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            entry = _make_sketch(Path(tmp), "A", "B.cpp")
            changes: list[SketchDocument] = []
            document = SketchDocument(entry, diagnostics=CollectingDiagnostics(), on_change=changes.append)

            document.replace_unit(SketchUnit(entry.parent / "Z.cpp"))

            self.assertEqual(_names(document), ["A.ino", "B.cpp"])
            self.assertEqual(changes, [])

    def test_remove_unit_by_path(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            entry = _make_sketch(Path(tmp), "A", "B.cpp", "C.h")
            document = SketchDocument(entry, diagnostics=CollectingDiagnostics())

            document.remove_unit(SketchUnit(entry.parent / "B.cpp"))

            self.assertEqual(_names(document), ["A.ino", "C.h"])

    def test_remove_missing_unit_only_warns(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            entry = _make_sketch(Path(tmp), "A", "B.cpp")
            diagnostics = CollectingDiagnostics()
            changes: list[SketchDocument] = []
            document = SketchDocument(entry, diagnostics=diagnostics, on_change=changes.append)

            document.remove_unit(SketchUnit(entry.parent / "nope.cpp"))

            self.assertEqual(_names(document), ["A.ino", "B.cpp"])
            self.assertEqual(len(diagnostics.of_kind(INTERNAL)), 1)
            self.assertEqual(changes, [])

    def test_prepare_assets_folder_is_idempotent(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            entry = _make_sketch(Path(tmp), "A")
            document = SketchDocument(entry, diagnostics=CollectingDiagnostics())

            first = document.prepare_assets_folder()
            second = document.prepare_assets_folder()

            self.assertEqual(first, second)
            self.assertTrue(first.is_dir())


class SketchDocumentSaveTests(unittest.TestCase):
    def test_save_all_writes_only_modified_units(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            entry = _make_sketch(Path(tmp), "A", "B.cpp")
            document = SketchDocument(entry, diagnostics=CollectingDiagnostics())
            primary_storage = InMemoryTextStorage("unsaved but clean")
            helper_storage = InMemoryTextStorage()
            helper_storage.set_text("int helper;\n")
            document.unit_at(0).attach_storage(primary_storage)
            document.unit_at(1).attach_storage(helper_storage)
            self.assertTrue(document.is_modified())

            document.save_all()

            self.assertEqual(entry.read_text(encoding="utf-8"), "void setup() {}\nvoid loop() {}\n")
            self.assertEqual((entry.parent / "B.cpp").read_text(encoding="utf-8"), "int helper;\n")
            self.assertFalse(document.is_modified())

    def test_save_all_stops_at_first_failure_without_rollback(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            entry = _make_sketch(Path(tmp), "A", "B.cpp", "C.h")
            document = SketchDocument(entry, diagnostics=CollectingDiagnostics())

            def failing_writer(text: str, path: Path) -> None:
                raise WriteError(path, "disk full")

            broken = SketchUnit(entry.parent / "C.h", writer=failing_writer)
            document.replace_unit(broken)
            for unit in document.units[1:]:
                storage = InMemoryTextStorage()
                storage.set_text(f"// {unit.file_name}\n")
                unit.attach_storage(storage)

            with self.assertRaises(WriteError):
                document.save_all()

            self.assertEqual((entry.parent / "B.cpp").read_text(encoding="utf-8"), "// B.cpp\n")
            self.assertFalse(document.unit_at(1).is_modified())
            self.assertTrue(broken.is_modified())
            self.assertTrue(document.is_modified())


if __name__ == "__main__":
    unittest.main()
