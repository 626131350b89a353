# File: crudgen/errors.py
"""
crudgen - Exception Hierarchy
===============================

Every failure the generator raises derives from ``CrudGenError`` so the CLI
can catch them at a single boundary.  Each class also subclasses the closest
built-in exception, so library callers can keep catching ``ValueError`` or
``FileNotFoundError`` if they prefer.

Skipped artifacts are NOT errors; they are reported as ``EmitResult``
instances with ``status == EmitStatus.SKIPPED``.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Sequence


class CrudGenError(Exception):
    """Base class for all crudgen failures."""


class InvalidInputError(CrudGenError, ValueError):
    """The resource name (or model override) yields no usable identifier."""

    def __init__(self, raw_input: str, message: str = "") -> None:
        self.raw_input: str = raw_input
        super().__init__(message or f"Invalid resource name: {raw_input!r}")


class TemplateNotFoundError(CrudGenError, FileNotFoundError):
    """Neither the project override nor the bundled stub exists."""

    def __init__(self, name: str, searched: Sequence[Path]) -> None:
        self.name: str = name
        self.searched: List[Path] = list(searched)
        locations: str = ", ".join(str(p) for p in self.searched)
        super().__init__(f"Stub '{name}' not found (searched: {locations})")


class MissingRouteFileError(CrudGenError, FileNotFoundError):
    """The routes file is absent even after the bootstrap command ran."""

    def __init__(self, path: Path) -> None:
        self.path: Path = path
        super().__init__(
            f"Route file not found: {path}. "
            "Create it (e.g. `php artisan install:api`) and re-run."
        )


class ConfigError(CrudGenError, ValueError):
    """The crudgen config file is unreadable or fails validation."""


__all__: List[str] = [
    "CrudGenError",
    "InvalidInputError",
    "TemplateNotFoundError",
    "MissingRouteFileError",
    "ConfigError",
]
