"""Command-line front door for sketchfolder.

Resolves the sketch containing a path, opens it as a ``SketchDocument``,
and runs one file-set operation: list, show, new, rename or delete.
The ``config`` command edits persisted defaults.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import config
from .diagnostics import CollectingDiagnostics, DiagnosticsSink, LoggingDiagnostics
from .errors import SketchError
from .file_io import is_sanitary_name, write_text
from .highlight import colorize_source
from .logging_config import setup_logging, level_from_name
from .sketch_model import (
    EXTENSIONS,
    SketchDocument,
    SketchUnit,
    candidate_build_folders,
    resolve_entry_file,
)
from .sketch_model.types import extension_of

logger = logging.getLogger(__name__)


def entry_file_for(path: Path) -> Path | None:
    """Resolve the entry file for a sketch file or a sketch folder."""
    path = Path(path)
    if path.is_dir():
        return resolve_entry_file(path / path.name)
    return resolve_entry_file(path)


def open_document(path: Path, diagnostics: DiagnosticsSink | None = None) -> SketchDocument:
    """Open the sketch containing ``path`` or exit with a message.

    Warnings go to the package logger unless ``diagnostics`` is given.
    """
    if not path.exists():
        raise SystemExit(f"Path not found: {path}")
    entry = entry_file_for(path)
    if entry is None:
        raise SystemExit(f"No sketch entry file found for {path}")
    if diagnostics is None:
        diagnostics = LoggingDiagnostics(logger)
    try:
        return SketchDocument(entry, diagnostics=diagnostics)
    except SketchError as exc:
        raise SystemExit(str(exc)) from exc


def _require_unit(document: SketchDocument, file_name: str) -> SketchUnit:
    unit = document.find_unit(file_name)
    if unit is None:
        raise SystemExit(f"{file_name} is not part of sketch {document.name}")
    return unit


def _check_new_name(document: SketchDocument, file_name: str) -> Path:
    """Validate a new secondary file name and return its target path."""
    if not is_sanitary_name(file_name):
        raise SystemExit(f"Invalid file name: {file_name}")
    if extension_of(file_name) not in EXTENSIONS:
        raise SystemExit(f"Unsupported extension for {file_name}; expected one of {', '.join(EXTENSIONS)}")
    target = document.folder / file_name
    if target.exists():
        raise SystemExit(f"{file_name} already exists in {document.folder}")
    return target


def cmd_list(args: argparse.Namespace) -> int:
    diagnostics = CollectingDiagnostics()
    document = open_document(Path(args.path), diagnostics)
    out = sys.stdout
    out.write(f"{document.name} ({document.folder})\n")
    for unit in document.units:
        marker = "*" if unit.is_primary else " "
        suffix = " (read-only)" if unit.is_read_only else ""
        out.write(f"{marker} {unit.file_name}{suffix}\n")

    # Skipped files are reported after the listing, one line each.
    for item in diagnostics.items:
        sys.stderr.write(f"warning: {item.message}\n")
    return 0


def cmd_show(args: argparse.Namespace) -> int:
    document = open_document(Path(args.path))
    unit = _require_unit(document, args.name)
    try:
        text = unit.load()
    except SketchError as exc:
        raise SystemExit(str(exc)) from exc
    if not args.no_color and sys.stdout.isatty():
        text = colorize_source(text, unit.path, args.style)
    sys.stdout.write(text)
    if text and not text.endswith("\n"):
        sys.stdout.write("\n")
    return 0


def cmd_new(args: argparse.Namespace) -> int:
    document = open_document(Path(args.path))
    target = _check_new_name(document, args.name)
    try:
        write_text("", target)
        document.add_unit(SketchUnit(target, diagnostics=document.diagnostics))
    except SketchError as exc:
        raise SystemExit(str(exc)) from exc
    sys.stdout.write(f"Added {target.name}\n")
    return 0


def cmd_rename(args: argparse.Namespace) -> int:
    document = open_document(Path(args.path))
    unit = _require_unit(document, args.old)
    if unit.is_primary:
        raise SystemExit("Renaming the main sketch file is not supported here")
    target = _check_new_name(document, args.new)
    if not unit.rename_to(target):
        raise SystemExit(f"Could not rename {args.old} to {args.new}")
    document.reload()
    sys.stdout.write(f"Renamed {args.old} to {target.name}\n")
    return 0


def cmd_delete(args: argparse.Namespace) -> int:
    document = open_document(Path(args.path))
    unit = _require_unit(document, args.name)
    if unit.is_primary:
        raise SystemExit("The main sketch file cannot be deleted")

    build_folder = Path(args.build_folder) if args.build_folder else config.load_build_folder()
    build_folders = candidate_build_folders(build_folder) if build_folder is not None else []
    deleted = unit.delete(build_folders)
    if not unit.exists:
        document.remove_unit(unit)
    if not deleted:
        raise SystemExit(f"Could not delete {args.name} or its build files")
    sys.stdout.write(f"Deleted {args.name}\n")
    return 0


def cmd_config(args: argparse.Namespace) -> int:
    """Update persisted defaults, then print the effective values."""
    if args.set_style is not None:
        config.save_style(args.set_style)
    if args.clear_build_folder:
        config.save_build_folder(None)
    elif args.set_build_folder is not None:
        config.save_build_folder(Path(args.set_build_folder).expanduser().absolute())
    if args.set_log_level is not None:
        if not isinstance(logging.getLevelName(args.set_log_level.upper()), int):
            raise SystemExit(f"Unknown log level: {args.set_log_level}")
        config.save_log_level(args.set_log_level.lower())

    build_folder = config.load_build_folder()
    out = sys.stdout
    out.write(f"style = {config.load_style()}\n")
    out.write(f"build_folder = {build_folder if build_folder is not None else ''}\n")
    out.write(f"log_level = {config.load_log_level()}\n")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sketchfolder",
        description="Inspect and edit the file set of an Arduino-style sketch folder.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level name (default: from config, else warning).",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Append a timestamped debug log to this file.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_list = sub.add_parser("list", help="List the files of a sketch in tab order.")
    p_list.add_argument("path", help="Sketch folder or any file inside it.")
    p_list.set_defaults(func=cmd_list)

    p_show = sub.add_parser("show", help="Print one sketch file.")
    p_show.add_argument("path", help="Sketch folder or any file inside it.")
    p_show.add_argument("name", help="File name within the sketch.")
    p_show.add_argument("--style", default=None, help="Pygments style name.")
    p_show.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    p_show.set_defaults(func=cmd_show)

    p_new = sub.add_parser("new", help="Create an empty file and add it to the sketch.")
    p_new.add_argument("path", help="Sketch folder or any file inside it.")
    p_new.add_argument("name", help="New file name, e.g. helpers.cpp.")
    p_new.set_defaults(func=cmd_new)

    p_rename = sub.add_parser("rename", help="Rename a secondary sketch file.")
    p_rename.add_argument("path", help="Sketch folder or any file inside it.")
    p_rename.add_argument("old", help="Current file name.")
    p_rename.add_argument("new", help="New file name.")
    p_rename.set_defaults(func=cmd_rename)

    p_delete = sub.add_parser("delete", help="Delete a secondary sketch file and its build outputs.")
    p_delete.add_argument("path", help="Sketch folder or any file inside it.")
    p_delete.add_argument("name", help="File name within the sketch.")
    p_delete.add_argument(
        "--build-folder",
        default=None,
        help="Temporary build folder to clean (default: from config).",
    )
    p_delete.set_defaults(func=cmd_delete)

    p_config = sub.add_parser("config", help="Show or change persisted defaults.")
    p_config.add_argument("--style", dest="set_style", default=None, help="Default Pygments style for show.")
    build_group = p_config.add_mutually_exclusive_group()
    build_group.add_argument(
        "--build-folder",
        dest="set_build_folder",
        default=None,
        help="Default temporary build folder cleaned by delete.",
    )
    build_group.add_argument(
        "--clear-build-folder",
        action="store_true",
        help="Forget the default build folder.",
    )
    p_config.add_argument("--log-level", dest="set_log_level", default=None, help="Default logging level name.")
    p_config.set_defaults(func=cmd_config)
    return parser


def main(argv: list[str] | None = None) -> int:
    """Parse CLI arguments and run the selected sketch command."""
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(level_from_name(args.log_level or config.load_log_level()), log_file=args.log_file)
    if getattr(args, "style", "unset") is None:
        args.style = config.load_style()
    return args.func(args)
