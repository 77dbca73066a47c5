"""Structured warning channel for non-fatal sketch anomalies.

Model code never prints. It reports skipped file names, suspected encoding
damage, and internal inconsistencies to a sink passed in by the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)

INVALID_NAME = "invalid-name"
ENCODING = "encoding"
INTERNAL = "internal"


@dataclass(frozen=True)
class Diagnostic:
    """One reported anomaly."""

    kind: str
    message: str
    path: Path | None = None


class DiagnosticsSink(Protocol):
    def warning(self, kind: str, message: str, path: Path | None = None) -> None: ...


class LoggingDiagnostics:
    """Default sink forwarding every warning to a logger."""

    def __init__(self, target: logging.Logger | None = None) -> None:
        self._logger = target if target is not None else logger

    def warning(self, kind: str, message: str, path: Path | None = None) -> None:
        self._logger.warning("[%s] %s", kind, message)


class CollectingDiagnostics:
    """Sink that keeps reported warnings in order for later inspection."""

    def __init__(self) -> None:
        self.items: list[Diagnostic] = []

    def warning(self, kind: str, message: str, path: Path | None = None) -> None:
        self.items.append(Diagnostic(kind=kind, message=message, path=path))

    def of_kind(self, kind: str) -> list[Diagnostic]:
        return [item for item in self.items if item.kind == kind]

    def clear(self) -> None:
        self.items.clear()


__all__ = [
    "INVALID_NAME",
    "ENCODING",
    "INTERNAL",
    "Diagnostic",
    "DiagnosticsSink",
    "LoggingDiagnostics",
    "CollectingDiagnostics",
]
