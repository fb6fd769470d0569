from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from errors import PreconditionError
from manifest.parser import ParseOptions, read_manifest
from modpath.codec import module_cache_root
from rules.config import (
    MANIFEST_FILENAME,
    PROJECT_MARKER,
    VENDOR_DIRNAME,
    load_config,
    manifest_path,
    vendor_root,
)
from rules.usage import filter_vendor_set
from scan.files import collect_candidates
from vendoring.copier import copy_module

if TYPE_CHECKING:
    from pathlib import Path

    from manifest.models import ModuleRecord
    from rules.config import ModVendorConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VendorResult:
    modules: tuple[ModuleRecord, ...] = field(default_factory=tuple)
    copied: tuple[str, ...] = field(default_factory=tuple)

    @property
    def file_count(self) -> int:
        return len(self.copied)


def check_preconditions(root: Path) -> Path:
    """Ensure ``root`` is a module root with a vendored manifest.

    Returns:
        Path to ``vendor/modules.txt``.

    Raises:
        PreconditionError: If ``go.mod`` or the manifest is missing.
    """
    if not (root / PROJECT_MARKER).is_file():
        msg = f"cannot find `{PROJECT_MARKER}` file in {root}"
        raise PreconditionError(msg)

    modules_txt = manifest_path(root)
    if not modules_txt.is_file():
        msg = (
            f"cannot find {VENDOR_DIRNAME}/{MANIFEST_FILENAME}, "
            "first run `go mod vendor` and try again"
        )
        raise PreconditionError(msg)

    return modules_txt


def plan_vendor(*, root: Path, config: ModVendorConfig | None = None) -> list[ModuleRecord]:
    """Resolve every module and compute its confirmed vendor set.

    All modules are resolved before any candidate collection starts, so a
    stale manifest fails the run before any file is touched.

    Args:
        root: Project root containing go.mod
        config: Optional configuration; loaded from modvendor.toml when omitted

    Returns:
        Module records in manifest order, each with a pruned vendor set.
    """
    if config is None:
        config = load_config(root)

    modules_txt = check_preconditions(root)

    options = ParseOptions(
        cache_root=module_cache_root(config.gopath),
        project_root=root,
        full_copy=config.fullcopy,
        includes=tuple(config.include),
    )
    modules = read_manifest(modules_txt, options)

    patterns = config.patterns()
    planned: list[ModuleRecord] = []
    for module in modules:
        candidates = collect_candidates(patterns, module)
        planned.append(filter_vendor_set(replace(module, vendor_set=candidates)))

    return planned


def run_vendor(*, root: Path, config: ModVendorConfig | None = None) -> VendorResult:
    """Copy the planned files of every module into ``<root>/vendor``.

    Returns:
        VendorResult with the planned modules and every vendored local path.
    """
    if config is None:
        config = load_config(root)

    modules = plan_vendor(root=root, config=config)
    destination_root = vendor_root(root)

    copied: list[str] = []
    for module in modules:
        copied.extend(copy_module(module, destination_root))

    logger.debug("vendored %d paths from %d modules", len(copied), len(modules))
    return VendorResult(modules=tuple(modules), copied=tuple(copied))


__all__ = ["VendorResult", "check_preconditions", "plan_vendor", "run_vendor"]
