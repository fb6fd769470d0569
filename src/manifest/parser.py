"""Parser for ``vendor/modules.txt``.

The manifest is a sequence of module headers, each followed by the package
import paths the project uses from that module::

    # github.com/a/b v1.0.0
    ## explicit
    github.com/a/b
    github.com/a/b/sub
    # github.com/c/d v0.2.0 => github.com/fork/d v0.2.1
    # github.com/e/f v0.0.0 => ./third_party/f

Parsing is a fold over lines: each line maps a ``ParseState`` to a new one.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import TYPE_CHECKING

from errors import ManifestFormatError, ResolutionError
from manifest.models import ModuleRecord
from modpath.codec import module_cache_dir

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

logger = logging.getLogger(__name__)

HEADER_MARKER = "#"
REDIRECT_ARROW = "=>"
EXPLICIT_MARKER = "explicit"

PLAIN_HEADER_TOKENS = 3
LOCAL_REDIRECT_TOKENS = 5
MODULE_REDIRECT_TOKENS = 6
_HEADER_TOKEN_COUNTS = frozenset(
    {PLAIN_HEADER_TOKENS, LOCAL_REDIRECT_TOKENS, MODULE_REDIRECT_TOKENS}
)


@dataclass(frozen=True)
class ParseOptions:
    cache_root: Path
    project_root: Path
    full_copy: bool = True
    includes: Sequence[str] = ()


@dataclass(frozen=True)
class ParseState:
    current: ModuleRecord | None = None
    completed: tuple[ModuleRecord, ...] = field(default_factory=tuple)

    def records(self) -> list[ModuleRecord]:
        if self.current is None:
            return list(self.completed)
        return [*self.completed, self.current]


def is_local_target(target: str) -> bool:
    return target.startswith((".", "/"))


def _resolve_header(tokens: list[str], options: ParseOptions) -> ModuleRecord | None:
    """Build a record from a split header, or None for irrelevant headers."""
    if len(tokens) not in _HEADER_TOKEN_COUNTS:
        return None
    if tokens[1] == EXPLICIT_MARKER or tokens[2] == REDIRECT_ARROW:
        return None

    import_path, version = tokens[1], tokens[2]

    if len(tokens) == PLAIN_HEADER_TOKENS:
        directory = module_cache_dir(
            import_path, version, cache_root=options.cache_root
        )
        return ModuleRecord(import_path=import_path, version=version, dir=directory)

    if tokens[3] != REDIRECT_ARROW:
        return None

    target = tokens[4]
    if len(tokens) == LOCAL_REDIRECT_TOKENS:
        if not is_local_target(target):
            return None
        directory = Path(os.path.abspath(options.project_root / target))
        return ModuleRecord(
            import_path=import_path,
            version=version,
            dir=directory,
            source_path=target,
        )

    source_version = tokens[5]
    directory = module_cache_dir(
        target, source_version, cache_root=options.cache_root
    )
    return ModuleRecord(
        import_path=import_path,
        version=version,
        dir=directory,
        source_path=target,
        source_version=source_version,
    )


def _initial_subpaths(import_path: str, options: ParseOptions) -> tuple[str, ...]:
    subpaths = [inc for inc in options.includes if inc.startswith(import_path)]
    if options.full_copy:
        subpaths.append(import_path)
    return tuple(subpaths)


def reduce_line(state: ParseState, line: str, options: ParseOptions) -> ParseState:
    """Advance the parse by one manifest line.

    Raises:
        ResolutionError: If a header resolves to a directory that does not exist.
        ManifestFormatError: If a package line appears before any module header.
    """
    line = line.strip()
    if not line:
        return state

    if line.startswith(HEADER_MARKER):
        tokens = line.split()
        record = _resolve_header(tokens, options)
        if record is None:
            logger.debug("skipping manifest header %r", line)
            return state

        if not record.dir.exists():
            raise ResolutionError(record.import_path, record.dir)

        record = replace(
            record, used_subpaths=_initial_subpaths(record.import_path, options)
        )
        completed = state.completed
        if state.current is not None:
            completed = (*completed, state.current)
        return ParseState(current=record, completed=completed)

    if options.full_copy:
        return state

    if state.current is None:
        msg = f"package line {line!r} appears before any module header"
        raise ManifestFormatError(msg)

    return ParseState(
        current=state.current.with_subpath(line),
        completed=state.completed,
    )


def parse_manifest(lines: Iterable[str], options: ParseOptions) -> list[ModuleRecord]:
    """Parse manifest lines into module records, in manifest order."""
    state = ParseState()
    for line in lines:
        state = reduce_line(state, line, options)
    return state.records()


def read_manifest(path: Path, options: ParseOptions) -> list[ModuleRecord]:
    """Read and parse a manifest file.

    Raises:
        ManifestFormatError: If the file cannot be read or decoded.
        ResolutionError: If any module directory is missing.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        msg = f"Failed to read manifest {path}: {exc}"
        raise ManifestFormatError(msg) from exc

    return parse_manifest(text.splitlines(), options)


__all__ = [
    "ParseOptions",
    "ParseState",
    "is_local_target",
    "parse_manifest",
    "read_manifest",
    "reduce_line",
]
