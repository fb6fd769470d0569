"""Failure taxonomy for modvendor.

Every error past manifest header skipping aborts the whole run. Core functions
raise these; only the CLI turns them into exit codes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


class ModVendorError(Exception):
    """Base class for failures that abort a vendoring run."""


class PreconditionError(ModVendorError):
    """Raised when the project layout is not ready for vendoring."""


class ManifestFormatError(ModVendorError):
    """Raised when the manifest cannot be read or is structurally broken."""


class ResolutionError(ModVendorError):
    """Raised when a resolved module directory does not exist on disk."""

    def __init__(self, import_path: str, directory: Path) -> None:
        self.import_path = import_path
        self.directory = directory
        super().__init__(
            f"module path {str(directory)!r} does not exist "
            f"(import_path={import_path}), check $GOPATH/pkg/mod"
        )


class GlobError(ModVendorError):
    """Raised when a copy pattern cannot be expanded."""


class EnumerationError(GlobError):
    """Raised when a module directory cannot be listed."""


class CopyError(ModVendorError):
    """Raised when a vendored file or directory cannot be written."""

    def __init__(self, source: str | Path, destination: str | Path, reason: str) -> None:
        self.source = source
        self.destination = destination
        super().__init__(f"unable to copy {source} to {destination}: {reason}")


__all__ = [
    "CopyError",
    "EnumerationError",
    "GlobError",
    "ManifestFormatError",
    "ModVendorError",
    "PreconditionError",
    "ResolutionError",
]
