"""Terminal syntax highlighting for sketch source files.

Uses Pygments with a lexer picked from the file name. Sketch files
(``.ino``/``.pde``) are Arduino C++ and get the Arduino lexer.
"""

from __future__ import annotations

import re
from pathlib import Path

from pygments import highlight as pygments_highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import ArduinoLexer, TextLexer, get_lexer_for_filename
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from .sketch_model.types import SKETCH_EXTENSIONS, extension_of

DEFAULT_STYLE = "monokai"

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")

_FORMATTERS: dict[str, TerminalFormatter] = {}
_VALID_STYLES: set[str] = set()
_INVALID_STYLES: set[str] = set()


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source
    return _CONTROL_RE.sub(lambda match: f"\\x{ord(match.group()):02x}", source)


def normalize_style(style: str) -> str:
    """Return ``style`` if Pygments knows it, else the default style."""
    if style in _VALID_STYLES:
        return style
    if style in _INVALID_STYLES:
        return DEFAULT_STYLE
    try:
        get_style_by_name(style)
    except ClassNotFound:
        _INVALID_STYLES.add(style)
        return DEFAULT_STYLE
    _VALID_STYLES.add(style)
    return style


def _formatter_for_style(style: str) -> TerminalFormatter:
    formatter = _FORMATTERS.get(style)
    if formatter is None:
        formatter = TerminalFormatter(style=style)
        _FORMATTERS[style] = formatter
    return formatter


def lexer_for_path(path: Path, source: str = ""):
    """Pick a Pygments lexer for ``path``, falling back to plain text."""
    if extension_of(path.name) in SKETCH_EXTENSIONS:
        return ArduinoLexer()
    try:
        return get_lexer_for_filename(path.name, source)
    except ClassNotFound:
        return TextLexer()


def colorize_source(source: str, path: Path, style: str = DEFAULT_STYLE) -> str:
    """Return ``source`` with ANSI color codes for terminal display."""
    source = sanitize_terminal_text(source)
    formatter = _formatter_for_style(normalize_style(style))
    return pygments_highlight(source, lexer_for_path(path, source), formatter)


__all__ = [
    "DEFAULT_STYLE",
    "sanitize_terminal_text",
    "normalize_style",
    "lexer_for_path",
    "colorize_source",
]
