"""Copy confirmed module files into the vendor tree."""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path
from typing import TYPE_CHECKING

from errors import CopyError

if TYPE_CHECKING:
    from collections.abc import Iterator

    from manifest.models import ModuleRecord

logger = logging.getLogger(__name__)

# Normalised so vendored output never depends on the module cache's
# read-only file modes.
VENDOR_FILE_MODE = 0o644
VENDOR_DIR_MODE = 0o755


def vendor_local_path(module: ModuleRecord, file_path: str) -> str:
    """Map an absolute file under ``module.dir`` to its import-path layout.

    Examples:
        ``/cache/github.com/a/b@v1.0.0/sub/x.h`` in module ``github.com/a/b``
        maps to ``github.com/a/b/sub/x.h``.
    """
    module_dir = str(module.dir)
    if not file_path.startswith(module_dir):
        raise CopyError(file_path, module_dir, "vendor file doesn't belong to module")
    return f"{module.import_path}{file_path[len(module_dir):]}"


def vendor_destination(vendor_root: Path, module: ModuleRecord, file_path: str) -> Path:
    return vendor_root / vendor_local_path(module, file_path)


def iter_tree_files(src: Path, dst: Path) -> Iterator[tuple[Path, Path]]:
    """Yield (source, destination) file pairs for a file or a directory tree.

    Directory symlinks are followed. Children are visited in name order.
    """
    if not src.is_dir():
        yield src, dst
        return
    for child in sorted(src.iterdir(), key=lambda p: p.name):
        yield from iter_tree_files(child, dst / child.name)


def _copy_file(src: Path, dst: Path, mode: int) -> None:
    if not src.is_file():
        msg = f"{src} is not a regular file"
        raise CopyError(src, dst, msg)
    try:
        dst.parent.mkdir(mode=VENDOR_DIR_MODE, parents=True, exist_ok=True)
        shutil.copyfile(src, dst)
        os.chmod(dst, mode)
    except OSError as exc:
        raise CopyError(src, dst, str(exc)) from exc


def copy_tree(src: Path, dst: Path, mode: int = VENDOR_FILE_MODE) -> None:
    """Copy a file, or a directory recursively, forcing ``mode`` on every file.

    Raises:
        CopyError: If any directory or file cannot be written.
    """
    if src.is_dir():
        try:
            dst.mkdir(mode=VENDOR_DIR_MODE, parents=True, exist_ok=True)
        except OSError as exc:
            raise CopyError(src, dst, str(exc)) from exc
        for child in sorted(src.iterdir(), key=lambda p: p.name):
            copy_tree(child, dst / child.name, mode)
        return

    _copy_file(src, dst, mode)


def copy_module(module: ModuleRecord, vendor_root: Path) -> list[str]:
    """Copy every confirmed path of a module under ``vendor_root``.

    Returns:
        Vendored local paths (import-path layout), in copy order.
    """
    copied: list[str] = []
    for file_path in module.vendor_set.files():
        local_path = vendor_local_path(module, file_path)
        destination = vendor_root / local_path

        logger.info("vendoring %s", local_path)

        try:
            destination.parent.mkdir(mode=VENDOR_DIR_MODE, parents=True, exist_ok=True)
        except OSError as exc:
            msg = f"unable to create directory {destination.parent}: {exc}"
            raise CopyError(file_path, destination, msg) from exc

        copy_tree(Path(file_path), destination)
        copied.append(local_path)
    return copied


__all__ = [
    "VENDOR_DIR_MODE",
    "VENDOR_FILE_MODE",
    "copy_module",
    "copy_tree",
    "iter_tree_files",
    "vendor_destination",
    "vendor_local_path",
]
