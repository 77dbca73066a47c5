"""Text file helpers and the file-name sanity rule for sketch folders.

Reads always decode as UTF-8 and substitute U+FFFD for undecodable bytes, so
callers can detect files saved in a legacy encoding. Filesystem failures are
raised as ``ReadError``/``WriteError`` rather than returned.
"""

from __future__ import annotations

import re
from pathlib import Path

from .errors import ReadError, WriteError

MAX_NAME_LENGTH = 63
REPLACEMENT_CHAR = "\ufffd"

_SANITARY_NAME_RE = re.compile(r"[A-Za-z0-9][A-Za-z0-9_.\-]*")


def is_sanitary_name(name: str) -> bool:
    """Return whether ``name`` is a portable sketch file name.

    Accepted names use only ASCII letters, digits, ``_``, ``.`` and ``-``,
    start with a letter or digit, and are at most 63 characters long.
    """
    if not name or len(name) > MAX_NAME_LENGTH:
        return False
    return _SANITARY_NAME_RE.fullmatch(name) is not None


def read_text(path: Path) -> str:
    """Read ``path`` as UTF-8, replacing undecodable bytes with U+FFFD."""
    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise ReadError(path, exc.strerror or str(exc)) from exc
    return raw.decode("utf-8", errors="replace")


def write_text(text: str, path: Path) -> None:
    """Write ``text`` to ``path`` as UTF-8."""
    try:
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise WriteError(path, exc.strerror or str(exc)) from exc


def has_replacement_char(text: str) -> bool:
    """Return whether decoded text carries U+FFFD corruption markers."""
    return REPLACEMENT_CHAR in text


__all__ = [
    "MAX_NAME_LENGTH",
    "REPLACEMENT_CHAR",
    "is_sanitary_name",
    "read_text",
    "write_text",
    "has_replacement_char",
]
