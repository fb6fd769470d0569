"""Case-escaping for module cache directory names.

The module cache stores ``github.com/BurntSushi/toml@v1.2.0`` as
``github.com/!burnt!sushi/toml@v1.2.0`` so that case-insensitive filesystems
never see two paths that differ only by case.
"""

from __future__ import annotations

import os
from pathlib import Path

ESCAPE_MARKER = "!"


def encode_path(value: str) -> str:
    """Escape every upper-case character as ``!`` plus its lower-case form.

    Examples:
        >>> encode_path("github.com/BurntSushi/toml")
        'github.com/!burnt!sushi/toml'
        >>> encode_path("v1.0.0-RC1")
        'v1.0.0-!r!c1'
    """
    return "".join(
        f"{ESCAPE_MARKER}{char.lower()}" if char.isupper() else char
        for char in value
    )


def default_gopath() -> Path:
    """Return the first ``$GOPATH`` entry, or ``~/go`` when unset."""
    for entry in os.environ.get("GOPATH", "").split(os.pathsep):
        if entry:
            return Path(entry)
    return Path.home() / "go"


def module_cache_root(gopath: str | Path | None = None) -> Path:
    """Locate the module download cache.

    An explicit ``gopath`` wins; otherwise ``$GOMODCACHE`` is honoured before
    falling back to ``<GOPATH>/pkg/mod``.
    """
    if gopath is not None:
        return Path(gopath) / "pkg" / "mod"
    gomodcache = os.environ.get("GOMODCACHE")
    if gomodcache:
        return Path(gomodcache)
    return default_gopath() / "pkg" / "mod"


def module_cache_dir(import_path: str, version: str, *, cache_root: Path) -> Path:
    """Return the absolute, normalised cache directory of a module version."""
    directory = cache_root / f"{encode_path(import_path)}@{encode_path(version)}"
    return Path(os.path.abspath(directory))


__all__ = [
    "ESCAPE_MARKER",
    "default_gopath",
    "encode_path",
    "module_cache_dir",
    "module_cache_root",
]
