"""Usage filtering: keep only candidates under packages the project imports."""

from __future__ import annotations

import logging
import os
from dataclasses import replace
from typing import TYPE_CHECKING

from utils import import_path_intersect

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from manifest.models import ModuleRecord

logger = logging.getLogger(__name__)


def usage_prefix(module_dir: Path | str, import_path: str, subpath: str) -> str:
    """Return the directory prefix a used subpackage maps to.

    Examples:
        >>> usage_prefix("/cache/a@v1", "a", "a/sub")
        '/cache/a@v1/sub'
        >>> usage_prefix("/cache/a@v1", "a", "a")
        '/cache/a@v1'
    """
    relative = import_path_intersect(import_path, subpath).lstrip("/")
    return os.path.normpath(os.path.join(str(module_dir), relative))


def filter_vendor_set(module: ModuleRecord) -> ModuleRecord:
    """Confirm candidates lying under a used subpackage and drop the rest.

    This is a plain string-prefix test against the module directory, so it
    relies on import paths mirroring the on-disk layout. A module with no
    used subpaths ends up with an empty vendor set.
    """
    prefixes = [
        usage_prefix(module.dir, module.import_path, subpath)
        for subpath in module.used_subpaths
    ]
    confirmed = {
        path
        for path in module.vendor_set.candidates
        if any(path.startswith(prefix) for prefix in prefixes)
    }
    vendor_set = module.vendor_set.confirm(confirmed).pruned()

    logger.debug(
        "%s: %d of %d candidates confirmed",
        module.import_path,
        len(vendor_set),
        len(module.vendor_set.candidates),
    )
    return replace(module, vendor_set=vendor_set)


def filter_modules(modules: Iterable[ModuleRecord]) -> list[ModuleRecord]:
    return [filter_vendor_set(module) for module in modules]


__all__ = ["filter_modules", "filter_vendor_set", "usage_prefix"]
