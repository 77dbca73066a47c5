"""Public package surface for sketchfolder.

Exports ``main`` for programmatic CLI invocation.
The sketch document model lives in ``sketchfolder.sketch_model``.
"""

from __future__ import annotations


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)

__all__ = ["main"]
