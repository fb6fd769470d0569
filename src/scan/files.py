"""Candidate file collection for module directories."""

from __future__ import annotations

import glob
import os
from typing import TYPE_CHECKING

from errors import EnumerationError, GlobError, PreconditionError
from manifest.models import VendorSet

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from manifest.models import ModuleRecord


def _list_entries(dirname: str, include_dirs: bool) -> list[str]:
    paths: list[str] = [dirname] if include_dirs else []

    for name in sorted(os.listdir(dirname)):
        path = dirname + os.sep + name
        # os.path.isdir follows symlinks, so linked directories are descended.
        if os.path.isdir(path):
            paths.extend(_list_entries(path, include_dirs))
            continue
        if not os.path.exists(path):
            msg = f"dangling symlink: {path}"
            raise FileNotFoundError(msg)
        paths.append(path)
    return paths


def list_files_recursive(
    directory: Path | str, *, include_dirs: bool = True
) -> list[str]:
    """List every entry below a directory, following symlinks.

    Args:
        directory: Directory to enumerate
        include_dirs: Also return directory paths, starting with ``directory``
            itself

    Returns:
        Absolute path strings, children sorted by name at every level.

    Raises:
        EnumerationError: If any directory cannot be read.
    """
    dirname = str(directory).rstrip(os.sep) or os.sep
    try:
        return _list_entries(dirname, include_dirs)
    except OSError as exc:
        msg = f"unable to list {dirname}: {exc}"
        raise EnumerationError(msg) from exc


def expand_pattern(directory: Path | str, pattern: str) -> list[str]:
    """Expand a glob pattern relative to ``directory``.

    ``**`` matches any number of nested directories, including none, so
    ``**/*.h`` also matches headers at the module root. Dotfiles match like
    any other file, as in the full directory listing.

    Raises:
        GlobError: If the pattern cannot be evaluated or matches a path
            outside ``directory``.
    """
    root = os.path.normpath(str(directory))
    try:
        matches = glob.glob(
            pattern, root_dir=root, recursive=True, include_hidden=True
        )
    except (OSError, ValueError) as exc:
        msg = f"glob match failure for {pattern!r} in {root}: {exc}"
        raise GlobError(msg) from exc

    paths: list[str] = []
    for match in matches:
        path = os.path.normpath(os.path.join(root, match))
        if path != root and not path.startswith(root + os.sep):
            msg = f"pattern {pattern!r} matches {path} outside module directory {root}"
            raise GlobError(msg)
        paths.append(path)
    return sorted(paths)


def collect_candidates(patterns: Sequence[str], module: ModuleRecord) -> VendorSet:
    """Gather every file under ``module.dir`` matched by any pattern.

    An empty pattern is a sentinel meaning "no restriction": the whole
    directory listing, directories included, becomes the candidate set.
    """
    if not patterns:
        msg = "copy argument is empty, nothing to copy."
        raise PreconditionError(msg)

    candidates: set[str] = set()
    for pattern in patterns:
        if pattern:
            candidates.update(expand_pattern(module.dir, pattern))
        else:
            candidates.update(list_files_recursive(module.dir))
    return VendorSet.from_candidates(candidates)


__all__ = ["collect_candidates", "expand_pattern", "list_files_recursive"]
