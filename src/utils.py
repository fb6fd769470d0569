"""Shared path helpers for modvendor."""

from __future__ import annotations


def import_path_intersect(base_path: str, pkg_path: str) -> str:
    """Return the part of ``pkg_path`` below ``base_path``.

    Args:
        base_path: Module import path (e.g., "github.com/a/b")
        pkg_path: Package import path (e.g., "github.com/a/b/sub")

    Returns:
        The remainder after the module path (e.g., "/sub"), or an empty string
        when ``pkg_path`` does not start with ``base_path``.

    Examples:
        >>> import_path_intersect("github.com/a/b", "github.com/a/b/sub")
        '/sub'
        >>> import_path_intersect("github.com/a/b", "github.com/a/b")
        ''
        >>> import_path_intersect("github.com/a/b", "golang.org/x/sys")
        ''
    """
    if not pkg_path.startswith(base_path):
        return ""
    return pkg_path[len(base_path) :]


def split_copy_patterns(raw: str | None) -> list[str]:
    """Split a space-delimited pattern string.

    An empty or missing string yields the single empty-pattern sentinel,
    which means "every file under the module directory".

    Examples:
        >>> split_copy_patterns("**/*.c **/*.h")
        ['**/*.c', '**/*.h']
        >>> split_copy_patterns("")
        ['']
    """
    patterns = (raw or "").split()
    return patterns or [""]


def split_includes(raw: str | list[str] | None) -> list[str]:
    """Split a comma-separated include list, dropping empty entries."""
    if raw is None:
        return []
    items = raw.split(",") if isinstance(raw, str) else raw
    return [item.strip() for item in items if item.strip()]
